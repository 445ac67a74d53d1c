# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Monotonic id allocation for a single collection."""

from collections.abc import Iterable


class IdAllocator:
    """Hands out increasing integer ids for one collection.

    The next id is one past the larger of the highest id currently present
    and the highest id this allocator has ever issued, so an id freed by a
    deletion is never handed out again during the session.

    Stores call peek before saving and record once the save succeeded, so
    a failed save does not use up an id.

    Attributes:
        high_water: Highest id seen or issued so far (0 when none).
    """

    def __init__(self, existing_ids: Iterable[int] = ()) -> None:
        self.high_water = max(existing_ids, default=0)

    def peek(self, current_ids: Iterable[int]) -> int:
        """Return the id the next allocation would issue, without recording it."""
        return max(self.high_water, max(current_ids, default=0)) + 1

    def record(self, issued_id: int) -> None:
        """Mark an id as issued."""
        self.high_water = max(self.high_water, issued_id)

    def next_id(self, current_ids: Iterable[int]) -> int:
        """Allocate and record the next id given the ids currently in the collection."""
        next_id = self.peek(current_ids)
        self.record(next_id)
        return next_id

    def reset(self, existing_ids: Iterable[int] = ()) -> None:
        """Re-seed the allocator from a freshly loaded snapshot."""
        self.high_water = max(existing_ids, default=0)
