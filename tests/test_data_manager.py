"""
Unit tests for DataManager.

Tests specific examples, edge cases, and error conditions.
"""

import json
import os
import tempfile

import pandas as pd
import pytest

from services import DataManager


STANDARDS = [
    {
        "standard_code": "MS-LS1-2",
        "description": "Develop and use a model to describe the function of a cell as a whole.",
        "academic_subject": "Science",
        "grade_levels": ["6", "7", "8"],
        "jurisdiction": "NGSS",
        "similarity_score": 0.71,
    }
]


def make_record(sample_id: str, **overrides) -> dict:
    record = {
        "id": sample_id,
        "english_text": f"English {sample_id}",
        "spanish_translation": f"Español {sample_id}",
        "target_grade": "5th",
        "matched_standards": STANDARDS,
    }
    record.update(overrides)
    return record


def write_json(records, directory: str, name: str = "samples.json") -> str:
    path = os.path.join(directory, name)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(records, f, ensure_ascii=False)
    return path


def create_test_csv(records, directory: str) -> str:
    """Helper function to create a test CSV file."""
    rows = []
    for record in records:
        row = dict(record)
        row["matched_standards"] = json.dumps(row["matched_standards"])
        rows.append(row)
    path = os.path.join(directory, "samples.csv")
    pd.DataFrame(rows).to_csv(path, index=False, encoding="utf-8")
    return path


class TestDataManagerJSON:
    """Test loading JSON datasets."""

    def test_load_json(self):
        with tempfile.TemporaryDirectory() as tmp:
            manager = DataManager(write_json([make_record("a"), make_record("b")], tmp))

        assert len(manager.samples) == 2
        assert manager.samples[0].matched_standards[0].standard_code == "MS-LS1-2"

    def test_samples_sorted_by_id(self):
        with tempfile.TemporaryDirectory() as tmp:
            manager = DataManager(write_json([make_record("c"), make_record("a"), make_record("b")], tmp))

        assert [s.id for s in manager.samples] == ["a", "b", "c"]

    def test_duplicate_ids_keep_file_order(self):
        """Test the sort is stable and duplicates are kept."""
        records = [
            make_record("17cbcbbd", target_grade="5th"),
            make_record("0001"),
            make_record("17cbcbbd", target_grade="7th-8th"),
        ]
        with tempfile.TemporaryDirectory() as tmp:
            manager = DataManager(write_json(records, tmp))

        assert [s.id for s in manager.samples] == ["0001", "17cbcbbd", "17cbcbbd"]
        assert [s.target_grade for s in manager.samples[1:]] == ["5th", "7th-8th"]

    def test_missing_required_field(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = write_json([make_record("a"), {"id": "b", "english_text": "x"}], tmp)
            with pytest.raises(ValueError, match="spanish_translation"):
                DataManager(path)

    def test_standards_must_be_a_list(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = write_json([make_record("a", matched_standards="MS-LS1-2")], tmp)
            with pytest.raises(ValueError, match="matched_standards must be a list"):
                DataManager(path)

    def test_not_an_array(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = write_json({"id": "a"}, tmp)
            with pytest.raises(ValueError, match="JSON array"):
                DataManager(path)

    def test_invalid_json(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "broken.json")
            with open(path, "w") as f:
                f.write("[{")
            with pytest.raises(ValueError, match="not valid JSON"):
                DataManager(path)

    def test_empty_dataset(self):
        with tempfile.TemporaryDirectory() as tmp:
            manager = DataManager(write_json([], tmp))
        assert manager.samples == []


class TestDataManagerCSV:
    """Test loading CSV datasets."""

    def test_load_csv(self):
        with tempfile.TemporaryDirectory() as tmp:
            manager = DataManager(create_test_csv([make_record("007"), make_record("010")], tmp))

        assert [s.id for s in manager.samples] == ["007", "010"]
        assert manager.samples[0].matched_standards[0].grade_levels == ("6", "7", "8")

    def test_empty_cells(self):
        with tempfile.TemporaryDirectory() as tmp:
            manager = DataManager(create_test_csv([make_record("a", target_grade=None)], tmp))

        assert manager.samples[0].target_grade == ""
        assert manager.samples[0].to_dict()["target_grade"] is None

    def test_missing_column(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "samples.csv")
            pd.DataFrame([{"id": "a", "english_text": "x"}]).to_csv(path, index=False)
            with pytest.raises(ValueError, match="missing required fields"):
                DataManager(path)

    def test_invalid_standards_column(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "samples.csv")
            pd.DataFrame([{
                "id": "a",
                "english_text": "x",
                "spanish_translation": "y",
                "matched_standards": "[not json",
            }]).to_csv(path, index=False)
            with pytest.raises(ValueError, match="not valid JSON"):
                DataManager(path)


class TestDataManagerErrors:
    """Test file-level errors."""

    def test_missing_file(self):
        with pytest.raises(FileNotFoundError):
            DataManager("/nonexistent/samples.json")

    def test_unsupported_format(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "samples.txt")
            with open(path, "w") as f:
                f.write("id")
            with pytest.raises(ValueError, match="Unsupported dataset format"):
                DataManager(path)


class TestBundledDataset:
    """Test the demo dataset shipped with the app."""

    def test_bundled_dataset_loads(self):
        path = os.path.join(os.path.dirname(__file__), "..", "data", "samples.json")
        manager = DataManager(path)

        sample = next(s for s in manager.samples if s.id == "17cbcbbd")
        assert sample.standards_count == 3
        assert [s.standard_code for s in sample.matched_standards] == ["MS-LS1-2", "MS-LS1-3", "6-8.LS1.A"]
