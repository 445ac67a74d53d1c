"""Coursebook.

Course and enrollment management core: two related collections kept
consistent by validation, referential integrity and per-course uniqueness
rules, persisted through a pluggable key-value gateway.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
