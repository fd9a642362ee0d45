"""
Unit tests for ExportManager.

Tests the merged snapshot, the filename and file output.
"""

import json
import os
import tempfile
from datetime import date

import pytest

from models import Annotations, AnnotationsMap, MatchedStandard, Rating, Sample
from services import ExportManager


def make_samples():
    return [
        Sample(
            id="17cbcbbd",
            english_text="Golgi Apparatus",
            spanish_translation="El aparato de Golgi",
            matched_standards=(MatchedStandard(standard_code="MS-LS1-2", grade_levels=("6", "7", "8")),),
        ),
        Sample(id="5e02a7c4", english_text="Cells", spanish_translation="Células"),
        Sample(id="0a1b2c3d", english_text="Tissues", spanish_translation="Tejidos"),
    ]


def annotate(sample: Sample) -> Annotations:
    entry = Annotations.default_for(sample)
    return entry.with_translation(entry.spanish_translation_quality.with_rating(Rating.MIDDLE, "2024-05-01T12:00:00.000Z"))


class TestExportManagerInitialization:
    """Test ExportManager initialization."""

    def test_dataset_name(self):
        assert ExportManager("samples").dataset_name == "samples"

    def test_default_name(self):
        assert ExportManager().dataset_name == "dataset"

    def test_empty_name(self):
        with pytest.raises(ValueError, match="dataset_name"):
            ExportManager("  ")


class TestBuildSnapshot:
    """Test merging samples with annotations."""

    def test_one_record_per_sample_in_order(self):
        samples = make_samples()
        snapshot = ExportManager.build_snapshot(samples, AnnotationsMap())

        assert [record["id"] for record in snapshot] == ["17cbcbbd", "5e02a7c4", "0a1b2c3d"]
        assert all(record["annotations"] is None for record in snapshot)

    def test_annotated_and_unannotated_samples(self):
        samples = make_samples()
        annotations_map = AnnotationsMap().set("5e02a7c4", annotate(samples[1]))
        snapshot = ExportManager.build_snapshot(samples, annotations_map)

        assert snapshot[0]["annotations"] is None
        assert snapshot[1]["annotations"]["spanish_translation_quality"]["rating"] == "Middle"
        assert snapshot[2]["annotations"] is None

    def test_sample_fields_are_kept(self):
        samples = make_samples()
        record = ExportManager.build_snapshot(samples, AnnotationsMap())[0]

        assert record["spanish_translation"] == "El aparato de Golgi"
        assert record["matched_standards"][0]["standard_code"] == "MS-LS1-2"
        assert record["matched_standards"][0]["grade_levels"] == ["6", "7", "8"]

    def test_annotations_for_unknown_ids_are_left_out(self):
        samples = make_samples()
        annotations_map = AnnotationsMap().set("deleted", Annotations())
        snapshot = ExportManager.build_snapshot(samples, annotations_map)

        assert len(snapshot) == 3
        assert all(record["id"] != "deleted" for record in snapshot)

    def test_source_record_is_exported_unchanged(self):
        """Test null metrics, extra fields and float values keep their loaded form."""
        record = {
            "id": "17cbcbbd",
            "english_text": "Golgi Apparatus",
            "spanish_translation": "El aparato de Golgi",
            "fernandez_huerta_score": None,
            "validation_reason": None,
            "tokens": 8988.5,
            "pipeline_run": {"batch": 3},
            "matched_standards": [{"standard_code": "MS-LS1-2", "similarity_score": None}],
        }
        sample = Sample.from_dict(record)
        annotations_map = AnnotationsMap().set(sample.id, annotate(sample))

        exported = json.loads(ExportManager.export_bytes([sample], annotations_map))[0]
        annotations = exported.pop("annotations")

        assert exported == record
        assert annotations["spanish_translation_quality"]["rating"] == "Middle"

    def test_export_does_not_share_the_source_record(self):
        sample = Sample.from_dict({"id": "a", "english_text": "Hi", "spanish_translation": "Hola", "extra": [1]})
        ExportManager.build_snapshot([sample], AnnotationsMap())[0]["extra"].append(2)

        assert sample.to_dict() == {"id": "a", "english_text": "Hi", "spanish_translation": "Hola", "extra": [1]}

    def test_export_bytes_is_pretty_utf8(self):
        payload = ExportManager.export_bytes(make_samples(), AnnotationsMap())
        text = payload.decode("utf-8")

        assert "Células" in text
        assert '\n  {' in text
        assert len(json.loads(text)) == 3


class TestExportFile:
    """Test writing the download file."""

    def test_filename(self):
        manager = ExportManager("samples")
        assert manager.export_filename(date(2024, 5, 1)) == "annotated_samples_2024-05-01.json"

    def test_filename_defaults_to_today(self):
        manager = ExportManager("samples")
        assert manager.export_filename() == f"annotated_samples_{date.today().isoformat()}.json"

    def test_export_to_json(self):
        samples = make_samples()
        annotations_map = AnnotationsMap().set("17cbcbbd", annotate(samples[0]))

        with tempfile.TemporaryDirectory() as tmp:
            path = ExportManager("samples").export_to_json(samples, annotations_map, tmp, day=date(2024, 5, 1))

            assert os.path.basename(path) == "annotated_samples_2024-05-01.json"
            with open(path, encoding="utf-8") as f:
                data = json.load(f)

        assert data[0]["annotations"]["standards_alignment"][0]["standard_code"] == "MS-LS1-2"
        assert data[1]["annotations"] is None

    def test_export_creates_directory(self):
        with tempfile.TemporaryDirectory() as tmp:
            output_dir = os.path.join(tmp, "exports")
            path = ExportManager().export_to_json(make_samples(), AnnotationsMap(), output_dir)
            assert os.path.exists(path)

    def test_export_matches_export_bytes(self):
        samples = make_samples()
        with tempfile.TemporaryDirectory() as tmp:
            path = ExportManager().export_to_json(samples, AnnotationsMap(), tmp)
            with open(path, "rb") as f:
                assert f.read() == ExportManager.export_bytes(samples, AnnotationsMap())
