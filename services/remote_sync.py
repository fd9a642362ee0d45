"""
Remote synchronization of the annotated snapshot.

Everything runs on one asyncio event loop: the debounce timer is a
cancellable loop callback and uploads are tasks on the same loop, so the
annotations map needs no locking.

Known limitations:
    - Uploads overwrite a single blob (last write wins). Only one active
      reviewer session is supported.
    - In-flight uploads are never cancelled. A stale upload that finishes
      after a newer one overwrites it; the last completion wins.
    - A saved or error status always reverts to idle after
      status_reset_seconds. If another upload starts in that window the
      indicator can read idle while that upload is still running.
"""

import asyncio
import json
import logging
from enum import Enum
from typing import Callable, List, Optional, Sequence, Set

import config
from models import Annotations, AnnotationsMap, Sample
from .blob_store import BlobStore
from .export_manager import ExportManager
from utils.performance import monitor_performance

logger = logging.getLogger(__name__)


class SaveStatus(Enum):
    """Remote save indicator: idle -> saving -> saved|error -> idle."""

    IDLE = "idle"
    SAVING = "saving"
    SAVED = "saved"
    ERROR = "error"


def parse_snapshot(payload: bytes) -> AnnotationsMap:
    """
    Rebuild an annotations map from a snapshot.

    Only records whose `annotations` field is not null contribute.

    Raises:
        ValueError: If the payload is not a JSON array of records
    """
    records = json.loads(payload)
    if not isinstance(records, list):
        raise ValueError(f"Snapshot must be a JSON array, got {type(records).__name__}")

    annotations_map = AnnotationsMap()
    for record in records:
        if not isinstance(record, dict) or 'id' not in record:
            raise ValueError("Snapshot record without an id")
        entry = record.get('annotations')
        if entry is None:
            continue
        if not isinstance(entry, dict):
            raise ValueError(f"Malformed annotations for sample {record['id']}")
        annotations_map = annotations_map.set(str(record['id']), Annotations.from_dict(entry))
    return annotations_map


class RemoteSyncManager:
    """
    Debounced autosave, manual save and one-time recovery against a BlobStore.

    Attributes:
        blob_store: Remote store holding the snapshot
        debounce_seconds: Quiet period after the last change before autosave
        status_reset_seconds: How long saved/error stay visible
        status: Current SaveStatus
    """

    def __init__(
        self,
        blob_store: BlobStore,
        debounce_seconds: float = config.AUTOSAVE_DEBOUNCE_SECONDS,
        status_reset_seconds: float = config.SAVE_STATUS_RESET_SECONDS,
    ):
        self.blob_store = blob_store
        self.debounce_seconds = debounce_seconds
        self.status_reset_seconds = status_reset_seconds
        self.status = SaveStatus.IDLE
        self._pending_autosave: Optional[asyncio.TimerHandle] = None
        self._manual_save_in_flight = False
        self._tasks: Set[asyncio.Task] = set()
        self._listeners: List[Callable[[SaveStatus], None]] = []

    @property
    def has_pending_autosave(self) -> bool:
        return self._pending_autosave is not None

    @property
    def manual_save_in_flight(self) -> bool:
        return self._manual_save_in_flight

    def add_listener(self, listener: Callable[[SaveStatus], None]) -> None:
        """Call `listener` with the new status on every status change."""
        self._listeners.append(listener)

    def _set_status(self, status: SaveStatus) -> None:
        self.status = status
        for listener in self._listeners:
            listener(status)

        if status in (SaveStatus.SAVED, SaveStatus.ERROR):
            # Reverts even if another save started in the meantime.
            asyncio.get_running_loop().call_later(
                self.status_reset_seconds, self._set_status, SaveStatus.IDLE
            )

    def cancel_pending(self) -> bool:
        """Cancel the pending autosave timer, if any."""
        if self._pending_autosave is None:
            return False
        self._pending_autosave.cancel()
        self._pending_autosave = None
        return True

    def schedule_autosave(self, samples: Sequence[Sample], annotations_map: AnnotationsMap) -> bool:
        """
        (Re)start the debounce timer for an upload of `annotations_map`.

        Any pending timer is cancelled first. An empty map is never
        uploaded so a blank snapshot cannot mask one already stored.

        Returns:
            True if a timer was started
        """
        self.cancel_pending()

        if annotations_map.is_empty():
            return False

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("Autosave skipped: no running event loop")
            return False

        self._pending_autosave = loop.call_later(
            self.debounce_seconds, self._fire_autosave, samples, annotations_map
        )
        return True

    def _fire_autosave(self, samples: Sequence[Sample], annotations_map: AnnotationsMap) -> None:
        self._pending_autosave = None
        task = asyncio.ensure_future(self.upload(samples, annotations_map))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    @monitor_performance("snapshot_upload")
    async def upload(self, samples: Sequence[Sample], annotations_map: AnnotationsMap) -> bool:
        """
        Upload the merged snapshot, overwriting the remote object.

        Returns:
            True on success; failures only change the status to ERROR
        """
        payload = ExportManager.export_bytes(samples, annotations_map)
        self._set_status(SaveStatus.SAVING)
        try:
            await self.blob_store.upload(payload)
        except Exception as e:
            logger.error(f"Snapshot upload failed: {e}")
            self._set_status(SaveStatus.ERROR)
            return False

        logger.info(f"Uploaded snapshot with {len(annotations_map)} annotated samples")
        self._set_status(SaveStatus.SAVED)
        return True

    async def manual_save(self, samples: Sequence[Sample], annotations_map: AnnotationsMap) -> bool:
        """
        Upload immediately, independent of the debounce timer.

        Returns:
            False if the upload failed or a manual save is already running
        """
        if self._manual_save_in_flight:
            logger.warning("Manual save already in progress")
            return False

        self._manual_save_in_flight = True
        try:
            return await self.upload(samples, annotations_map)
        finally:
            self._manual_save_in_flight = False

    async def recover(self) -> AnnotationsMap:
        """
        Download the remote snapshot and rebuild annotations from it.

        Best effort: any failure returns an empty map and is only logged.
        """
        try:
            payload = await self.blob_store.download()
        except Exception as e:
            logger.warning(f"Recovery download failed: {e}")
            return AnnotationsMap()

        try:
            recovered = parse_snapshot(payload)
        except (ValueError, TypeError, AttributeError, RecursionError) as e:
            logger.warning(f"Remote snapshot is not recoverable: {e}")
            return AnnotationsMap()

        logger.info(f"Recovered {len(recovered)} annotated samples from remote snapshot")
        return recovered

    async def wait_for_uploads(self) -> None:
        """Wait until every autosave upload started so far has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
