# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Redis persistence gateway.

Each collection is one Redis string holding the JSON snapshot, stored under
``{key_prefix}:{key}``. A single SET replaces the whole snapshot.

Example:
    from coursebook.core.config import get_settings

    gateway = RedisGateway.from_settings(get_settings())
    gateway.save("courses", records)
"""

import logging
from typing import TYPE_CHECKING, Any

from redis import Redis
from redis.exceptions import RedisError as BaseRedisError

from coursebook.infrastructure.persistence.gateway import (
    PersistenceError,
    deserialize_snapshot,
    serialize_snapshot,
)

if TYPE_CHECKING:
    from coursebook.core.config.settings import Settings

logger = logging.getLogger(__name__)


class RedisGateway:
    """Gateway backed by a synchronous redis-py client.

    Attributes:
        key_prefix: Prefix applied to every collection key.
    """

    def __init__(self, client: Redis, key_prefix: str = "coursebook") -> None:
        """Initialize the gateway.

        Args:
            client: Redis client created with ``decode_responses=True``.
            key_prefix: Prefix applied to every collection key.
        """
        self._redis = client
        self.key_prefix = key_prefix

    @classmethod
    def from_settings(cls, settings: "Settings") -> "RedisGateway":
        """Build a gateway from the application's Redis settings."""
        client = Redis.from_url(settings.redis.url, decode_responses=True)
        return cls(client, key_prefix=settings.redis.key_prefix)

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}:{key}"

    def load(self, key: str) -> list[dict[str, Any]]:
        """Fetch the snapshot for key.

        Raises:
            PersistenceError: If Redis fails or the value is corrupt.
        """
        full_key = self._key(key)
        try:
            raw = self._redis.get(full_key)
        except BaseRedisError as e:
            raise PersistenceError(f"Failed to get key: {full_key}", e) from e
        return deserialize_snapshot(key, raw)

    def save(self, key: str, records: list[dict[str, Any]]) -> None:
        """Replace the snapshot for key.

        Raises:
            PersistenceError: If Redis fails.
        """
        full_key = self._key(key)
        payload = serialize_snapshot(key, records)
        try:
            self._redis.set(full_key, payload)
        except BaseRedisError as e:
            raise PersistenceError(f"Failed to set key: {full_key}", e) from e

        logger.debug("Saved %d records to redis key %s", len(records), full_key)

    def close(self) -> None:
        """Close the underlying client."""
        self._redis.close()
