"""Periodic persistence of the preference store.

The store is snapshotted under its lock, then serialized and written without
holding it. A write only happens when the content changed since the last
successful write and stays under the size ceiling.
"""

import asyncio
import hashlib
import json
import logging

from tram_skill.data.database import SnapshotRepository
from tram_skill.models.preferences import PreferenceSnapshot
from tram_skill.services.preference_store import InMemoryPreferenceStore

logger = logging.getLogger(__name__)

DEFAULT_SYNC_INTERVAL = 180.0
DEFAULT_MAX_SNAPSHOT_BYTES = 50_000_000


def serialize_snapshot(snapshot: PreferenceSnapshot) -> str:
    """Serialize a snapshot deterministically (sorted keys)."""
    return json.dumps(snapshot.model_dump(mode="json"), sort_keys=True, ensure_ascii=False)


def deserialize_snapshot(payload: str) -> PreferenceSnapshot:
    return PreferenceSnapshot.model_validate_json(payload)


def prepare_payload(snapshot: PreferenceSnapshot, max_bytes: int) -> tuple[str, int, str | None]:
    """Serialize and hash a snapshot.

    Returns:
        (payload, size in bytes, sha256 digest). The digest is None when the
        payload exceeds max_bytes.
    """
    payload = serialize_snapshot(snapshot)
    data = payload.encode("utf-8")
    if len(data) > max_bytes:
        return payload, len(data), None
    return payload, len(data), hashlib.sha256(data).hexdigest()


class PersistenceSync:
    """Background task writing the preference store to durable storage."""

    def __init__(
        self,
        store: InMemoryPreferenceStore,
        repository: SnapshotRepository,
        interval: float = DEFAULT_SYNC_INTERVAL,
        max_bytes: int = DEFAULT_MAX_SNAPSHOT_BYTES,
    ):
        self.store = store
        self.repository = repository
        self.interval = interval
        self.max_bytes = max_bytes
        self._last_digest: str | None = None

    async def load(self) -> bool:
        """Restore the stored snapshot into the store.

        Returns:
            True if a snapshot was found and restored.
        """
        payload = await self.repository.read()
        if payload is None:
            logger.info("No stored preferences found")
            return False

        snapshot = await asyncio.to_thread(deserialize_snapshot, payload)
        self.store.restore(snapshot)
        # what was just read is what is on disk
        self._last_digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()
        logger.info(
            f"Restored preferences: {len(snapshot.default_departures)} departures, "
            f"{len(snapshot.default_destinations)} destinations"
        )
        return True

    async def sync_once(self) -> bool:
        """Write the current store content if it changed.

        Only the snapshot runs on the event loop; serializing and hashing
        happen in a worker thread.

        Returns:
            True if a write happened.
        """
        snapshot = self.store.snapshot()
        payload, size, digest = await asyncio.to_thread(
            prepare_payload, snapshot, self.max_bytes
        )

        if digest is None:
            logger.warning(
                f"Preference snapshot is {size:,} bytes (limit {self.max_bytes:,}), not saving"
            )
            return False

        if digest == self._last_digest:
            return False

        await self.repository.write(payload)
        self._last_digest = digest
        logger.debug(f"Saved preference snapshot ({size:,} bytes)")
        return True

    async def run(self) -> None:
        """Sync forever on a fixed interval. Cancel the task to stop."""
        logger.info(f"Preference sync every {self.interval:g}s")
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self.sync_once()
            except Exception as e:
                logger.error(f"Failed to save preferences, retrying next cycle: {e}")
