# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""JSON file persistence gateway.

Each collection is kept in ``{directory}/{key}.json``. Saves write a
temporary file in the same directory and move it over the target with
os.replace, so the file on disk is always either the old or the new
snapshot.
"""

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any

from coursebook.infrastructure.persistence.gateway import (
    PersistenceError,
    deserialize_snapshot,
    serialize_snapshot,
)

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


class JsonFileGateway:
    """Gateway storing one JSON file per collection.

    Attributes:
        directory: Directory holding the snapshot files.
    """

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise PersistenceError(f"Invalid snapshot key: {key!r}")
        return self.directory / f"{key}.json"

    def load(self, key: str) -> list[dict[str, Any]]:
        """Read the snapshot for key.

        Raises:
            PersistenceError: If the file cannot be read or parsed.
        """
        path = self._path(key)
        if not path.exists():
            return []
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Cannot read snapshot file: {path}", e) from e
        return deserialize_snapshot(key, raw)

    def save(self, key: str, records: list[dict[str, Any]]) -> None:
        """Atomically replace the snapshot for key.

        Raises:
            PersistenceError: If the file cannot be written.
        """
        path = self._path(key)
        payload = serialize_snapshot(key, records)
        tmp_name = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.directory,
                prefix=f".{key}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceError(f"Cannot write snapshot file: {path}", e) from e

        logger.debug("Saved %d records to %s", len(records), path)
