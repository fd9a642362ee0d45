"""
ExportManager for the annotated JSON snapshot.

Merges every sample with its annotations (or null) and serializes the
result. The same bytes are used for the downloadable export and for the
remote snapshot.
"""

import json
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from models import AnnotationsMap, Sample
from utils.performance import monitor_performance


class ExportManager:
    """
    Builds and writes annotated snapshots.

    Attributes:
        dataset_name: Used in the export filename
    """

    def __init__(self, dataset_name: str = "dataset"):
        """
        Initialize ExportManager.

        Args:
            dataset_name: Name of the input dataset

        Raises:
            ValueError: If dataset_name is empty
        """
        if not dataset_name or not dataset_name.strip():
            raise ValueError("dataset_name must not be empty")
        self.dataset_name = dataset_name.strip()

    @staticmethod
    def build_snapshot(samples: Sequence[Sample], annotations_map: AnnotationsMap) -> List[Dict[str, Any]]:
        """
        Merge samples with their annotations.

        Format (one entry per sample, input order):
        {
            "id": "17cbcbbd",
            "english_text": "...",
            ...,
            "matched_standards": [...],
            "annotations": {...} | null
        }

        Args:
            samples: Samples in display order
            annotations_map: Current annotations

        Returns:
            List of merged records
        """
        snapshot = []
        for sample in samples:
            entry = annotations_map.get(sample.id)
            record = sample.to_dict()
            record["annotations"] = entry.to_dict() if entry is not None else None
            snapshot.append(record)
        return snapshot

    @classmethod
    def export_bytes(cls, samples: Sequence[Sample], annotations_map: AnnotationsMap) -> bytes:
        """Serialize the merged snapshot as pretty-printed UTF-8 JSON."""
        data = cls.build_snapshot(samples, annotations_map)
        return json.dumps(data, ensure_ascii=False, indent=2).encode("utf-8")

    def export_filename(self, day: Optional[date] = None) -> str:
        """Filename: annotated_{dataset_name}_{YYYY-MM-DD}.json"""
        day = day or date.today()
        return f"annotated_{self.dataset_name}_{day.isoformat()}.json"

    @monitor_performance("export_to_json")
    def export_to_json(
        self,
        samples: Sequence[Sample],
        annotations_map: AnnotationsMap,
        output_dir: Path,
        day: Optional[date] = None,
    ) -> Path:
        """
        Write the snapshot to a file for download.

        Args:
            samples: Samples in display order
            annotations_map: Current annotations
            output_dir: Directory for the generated file
            day: Date used in the filename (default: today)

        Returns:
            Path to generated JSON file

        Raises:
            PermissionError: If the file cannot be written
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path = output_dir / self.export_filename(day)

        payload = self.export_bytes(samples, annotations_map)
        try:
            output_path.write_bytes(payload)
        except PermissionError:
            raise PermissionError(f"Cannot write export file: {output_path}")

        return output_path
