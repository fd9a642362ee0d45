"""
DataManager for the read-only sample dataset.

Loads the dataset once (JSON array, or CSV with matched_standards as a
JSON column), validates it and keeps the samples sorted by id.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List

import pandas as pd

from models import Sample
from utils.performance import monitor_performance
from utils.validation import validate_sample_fields, validate_sample_record, summarize_errors

logger = logging.getLogger(__name__)


class DataManager:
    """
    Loads and serves the immutable sample dataset.

    Attributes:
        dataset_path: Path to the dataset file
        samples: Samples sorted by id (stable for equal ids)
    """

    def __init__(self, dataset_path: str):
        """
        Initialize DataManager and load the dataset.

        Args:
            dataset_path: Path to a .json or .csv dataset

        Raises:
            FileNotFoundError: If the dataset file doesn't exist
            ValueError: If the file is unreadable or records are invalid
        """
        self.dataset_path = Path(dataset_path)
        self.samples: List[Sample] = []

        if not self.dataset_path.exists():
            raise FileNotFoundError(f"Dataset file not found: {self.dataset_path}")

        self.samples = self._load()
        self._warn_duplicate_ids()

    @monitor_performance("dataset_load")
    def _load(self) -> List[Sample]:
        suffix = self.dataset_path.suffix.lower()
        if suffix == ".json":
            records = self._read_json()
        elif suffix == ".csv":
            records = self._read_csv()
        else:
            raise ValueError(f"Unsupported dataset format: {suffix or 'no extension'}")

        errors: Dict[int, str] = {}
        for position, record in enumerate(records):
            is_valid, error_msg = validate_sample_record(record, position)
            if not is_valid:
                errors[position] = error_msg
        if errors:
            raise ValueError(f"Invalid dataset records: {summarize_errors(errors)}")

        try:
            samples = [Sample.from_dict(record) for record in records]
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid field value in dataset: {e}") from e

        logger.info(f"Loaded {len(samples)} samples from {self.dataset_path.name}")
        return sorted(samples, key=lambda s: s.id)

    def _read_json(self) -> List[dict]:
        try:
            with open(self.dataset_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Dataset is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise ValueError("Dataset must be a JSON array of samples")
        return data

    def _read_csv(self) -> List[dict]:
        try:
            df = pd.read_csv(self.dataset_path, encoding='utf-8', dtype={'id': str})
        except Exception as e:
            raise ValueError(f"Failed to read dataset CSV: {e}") from e

        is_valid, error_msg = validate_sample_fields(list(df.columns))
        if not is_valid:
            raise ValueError(error_msg)

        df = df.astype(object).where(pd.notna(df), None)
        records = df.to_dict(orient='records')
        for record in records:
            raw = record.get('matched_standards')
            if isinstance(raw, str):
                try:
                    record['matched_standards'] = json.loads(raw)
                except json.JSONDecodeError as e:
                    raise ValueError(f"matched_standards of sample {record.get('id')} is not valid JSON") from e
        return records

    def _warn_duplicate_ids(self):
        seen = set()
        duplicates = set()
        for sample in self.samples:
            if sample.id in seen:
                duplicates.add(sample.id)
            seen.add(sample.id)
        if duplicates:
            logger.warning(
                f"Dataset has {len(duplicates)} duplicate sample ids; "
                f"their annotations will be shared: {sorted(duplicates)[:5]}"
            )
