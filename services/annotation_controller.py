"""
AnnotationController: the single owner of the annotations map.

UI handlers call the rate/comment methods; each call derives a new entry
from the current one, swaps in a new map version, saves it locally before
returning and restarts the remote autosave timer.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence

from models import (
    Annotations,
    AnnotationsMap,
    AnnotationStatus,
    Rating,
    Sample,
)
from .export_manager import ExportManager
from .local_storage import AnnotationPersistence
from .remote_sync import RemoteSyncManager
from .status_classifier import classify

logger = logging.getLogger(__name__)


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision, e.g. 2024-05-01T12:00:00.000Z"""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


class AnnotationController:
    """
    Owns the annotations map and routes every change through persistence.

    Attributes:
        samples: Samples in display order
        persistence: Local persistence adapter
        remote_sync: Remote sync adapter, or None when sync is disabled
        export_manager: Builds downloadable snapshots
    """

    def __init__(
        self,
        samples: Sequence[Sample],
        persistence: AnnotationPersistence,
        remote_sync: Optional[RemoteSyncManager] = None,
        export_manager: Optional[ExportManager] = None,
        clock: Callable[[], str] = utc_timestamp,
    ):
        self.samples = list(samples)
        self.persistence = persistence
        self.remote_sync = remote_sync
        self.export_manager = export_manager or ExportManager()
        self._clock = clock
        self._annotations = AnnotationsMap()
        self._recovery_attempted = False
        self._by_id: Dict[str, Sample] = {}
        for sample in self.samples:
            # Duplicate ids share one entry; the first sample defines the slots.
            self._by_id.setdefault(sample.id, sample)

    @property
    def annotations(self) -> AnnotationsMap:
        return self._annotations

    def get_annotations(self, sample_id: str) -> Optional[Annotations]:
        return self._annotations.get(sample_id)

    def status_for(self, sample: Sample) -> AnnotationStatus:
        return classify(self._annotations.get(sample.id), sample.standards_count)

    def progress(self) -> Dict[str, int]:
        """Count samples per status."""
        counts = {status.value: 0 for status in AnnotationStatus}
        for sample in self.samples:
            counts[self.status_for(sample).value] += 1
        counts['total'] = len(self.samples)
        return counts

    async def startup(self) -> AnnotationsMap:
        """
        Load local annotations; recover from the remote store at most once.

        Recovery only runs when local storage holds no annotations.
        """
        self._annotations = self._align(self.persistence.load())
        logger.info(f"Loaded {len(self._annotations)} annotated samples from local storage")

        if self._annotations.is_empty() and self.remote_sync is not None and not self._recovery_attempted:
            self._recovery_attempted = True
            recovered = self._align(await self.remote_sync.recover())
            if not recovered.is_empty():
                self._annotations = recovered
                self.persistence.save(recovered)

        return self._annotations

    def _align(self, annotations_map: AnnotationsMap) -> AnnotationsMap:
        """Fit stored entries to the current standard counts of their samples."""
        aligned = annotations_map
        for sample_id, entry in annotations_map.items():
            sample = self._by_id.get(sample_id)
            if sample is None:
                continue
            fitted = entry.aligned_to(sample)
            if fitted is not entry:
                aligned = aligned.set(sample_id, fitted)
        return aligned

    def _sample(self, sample_id: str) -> Sample:
        sample = self._by_id.get(sample_id)
        if sample is None:
            raise ValueError(f"Sample with id {sample_id} not found")
        return sample

    def _current_entry(self, sample: Sample) -> Annotations:
        entry = self._annotations.get(sample.id)
        if entry is None:
            return Annotations.default_for(sample)
        return entry.aligned_to(sample)

    def _commit(self, sample_id: str, entry: Annotations) -> Annotations:
        self._annotations = self._annotations.set(sample_id, entry)
        self.persistence.save(self._annotations)
        if self.remote_sync is not None:
            self.remote_sync.schedule_autosave(self.samples, self._annotations)
        return entry

    def rate_translation(self, sample_id: str, rating: Rating) -> Annotations:
        sample = self._sample(sample_id)
        entry = self._current_entry(sample)
        updated = entry.spanish_translation_quality.with_rating(Rating(rating), self._clock())
        return self._commit(sample_id, entry.with_translation(updated))

    def comment_translation(self, sample_id: str, comment: str) -> Annotations:
        sample = self._sample(sample_id)
        entry = self._current_entry(sample)
        updated = entry.spanish_translation_quality.with_comment(comment or "")
        return self._commit(sample_id, entry.with_translation(updated))

    def rate_standard(self, sample_id: str, index: int, rating: Rating) -> Annotations:
        """
        Rate the standard at `index` of the sample's matched standards.

        Raises:
            ValueError: If the sample is unknown or the rating invalid
            IndexError: If index is outside the matched standards
        """
        sample = self._sample(sample_id)
        entry = self._current_entry(sample)
        slot = entry.standards_alignment[self._check_index(sample, index)]
        updated = slot.with_rating(Rating(rating), self._clock())
        return self._commit(sample_id, entry.with_standard(index, updated))

    def comment_standard(self, sample_id: str, index: int, comment: str) -> Annotations:
        sample = self._sample(sample_id)
        entry = self._current_entry(sample)
        slot = entry.standards_alignment[self._check_index(sample, index)]
        return self._commit(sample_id, entry.with_standard(index, slot.with_comment(comment or "")))

    @staticmethod
    def _check_index(sample: Sample, index: int) -> int:
        if not 0 <= index < sample.standards_count:
            raise IndexError(
                f"Standard index {index} out of range for sample {sample.id} "
                f"({sample.standards_count} standards)"
            )
        return index

    async def manual_save(self) -> bool:
        """Upload the snapshot now. Returns False when sync is disabled or fails."""
        if self.remote_sync is None:
            logger.warning("Manual save requested but remote sync is not configured")
            return False
        return await self.remote_sync.manual_save(self.samples, self._annotations)

    def export(self, output_dir: Path) -> Path:
        """Write the downloadable snapshot and return its path."""
        return self.export_manager.export_to_json(self.samples, self._annotations, output_dir)
