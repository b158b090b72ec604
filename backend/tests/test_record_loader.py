"""Tests for the record loader."""
import pytest
from pydantic import ValidationError

from models import UNDEFINED_MODEL_LABEL, Loaded, SourceUnavailable
from parsers import RecordLoader, build_record
from parsers.record_loader import resolve_columns


class TestRecordLoader:
    """Test suite for RecordLoader."""

    def test_load_single_row(self, write_csv):
        """A well-formed row becomes a typed record."""
        path = write_csv("1,2024-01-01,CNN,MNIST,0.9,0.8,0.85,0.2,120")
        outcome = RecordLoader().load(path)

        assert isinstance(outcome, Loaded)
        assert outcome.status == "loaded"
        assert outcome.source == str(path)
        assert outcome.missing_columns == ()
        record = outcome.records[0]
        assert record.id == 1
        assert record.date == "2024-01-01"
        assert record.model == "CNN"
        assert record.dataset == "MNIST"
        assert record.accuracy == 0.9
        assert record.training_time == 120.0
        assert isinstance(record.training_time, float)

    def test_load_sample_file(self, sample_csv_path):
        """The sample file loads six records in file order."""
        outcome = RecordLoader().load(sample_csv_path)

        assert isinstance(outcome, Loaded)
        assert [record.id for record in outcome.records] == [1, 2, 3, 4, 5, 6]
        assert [record.model for record in outcome.records][:3] == ["CNN", "RNN", "CNN"]

    def test_missing_file_is_source_unavailable(self, tmp_path):
        """A missing file is reported distinctly, not as zero records."""
        outcome = RecordLoader().load(tmp_path / "nonexistent.csv")

        assert isinstance(outcome, SourceUnavailable)
        assert outcome.status == "source_unavailable"
        assert "nonexistent.csv" in outcome.source
        assert outcome.reason

    def test_directory_is_source_unavailable(self, tmp_path):
        assert isinstance(RecordLoader().load(tmp_path), SourceUnavailable)

    def test_undecodable_file_is_source_unavailable(self, tmp_path):
        path = tmp_path / "datos.csv"
        path.write_bytes(b"id,modelo\n1,\xff\xfe\xfa\n")
        assert isinstance(RecordLoader().load(path), SourceUnavailable)

    def test_header_only_is_empty_dataset(self, write_csv):
        """A header without rows is a successful, empty load."""
        outcome = RecordLoader().load(write_csv())

        assert isinstance(outcome, Loaded)
        assert outcome.is_empty
        assert outcome.records == ()
        assert outcome.missing_columns == ()

    def test_blank_rows_are_filtered(self, write_csv):
        outcome = RecordLoader().load(
            write_csv("1,2024-01-01,CNN,MNIST,0.9,0.8,0.85,0.2,120", ",,,,,,,,", "", "")
        )
        assert len(outcome.records) == 1

    def test_byte_order_mark_is_stripped(self, tmp_path):
        path = tmp_path / "datos.csv"
        path.write_text(
            "\ufeffid,fecha,modelo,dataset,accuracy,precision,recall,loss,tiempo_entrenamiento\n"
            "1,2024-01-01,CNN,MNIST,0.9,0.8,0.85,0.2,120\n",
            encoding="utf-8",
        )
        outcome = RecordLoader().load(path)
        assert outcome.missing_columns == ()
        assert outcome.records[0].id == 1

    def test_missing_model_becomes_undefined(self, write_csv):
        """Absent and empty model labels both degrade to 'undefined'."""
        outcome = RecordLoader().load(
            write_csv("1,2024-01-01,,MNIST,0.9,0.8,0.85,0.2,120", "2,2024-01-02")
        )
        assert [record.model for record in outcome.records] == [
            UNDEFINED_MODEL_LABEL,
            UNDEFINED_MODEL_LABEL,
        ]

    def test_non_numeric_metric_is_kept_as_text(self, write_csv):
        outcome = RecordLoader().load(write_csv("1,2024-01-01,CNN,MNIST,0.9,0.8,0.85,n/a,120"))
        record = outcome.records[0]
        assert record.loss == "n/a"
        assert record.metric("loss") == 0.0

    def test_english_headers_are_accepted(self, write_csv):
        path = write_csv(
            "3,2024-03-01,RNN,IMDB,0.7,0.6,0.5,0.4,99",
            header="id,date,model,dataset,accuracy,precision,recall,loss,trainingTime",
        )
        outcome = RecordLoader().load(path)
        assert outcome.missing_columns == ()
        assert outcome.records[0].model == "RNN"
        assert outcome.records[0].training_time == 99.0

    def test_missing_and_unknown_columns_are_reported(self, write_csv, caplog):
        """Absent columns are listed and logged; unknown ones are ignored."""
        outcome = RecordLoader().load(write_csv("1,CNN,0.5,hello", header="id,modelo,accuracy,notes"))

        assert outcome.missing_columns == (
            "date",
            "dataset",
            "precision",
            "recall",
            "loss",
            "training_time",
        )
        assert outcome.ignored_columns == ("notes",)
        assert outcome.records[0].accuracy == 0.5
        assert outcome.records[0].loss is None
        assert "lacks columns" in caplog.text

    def test_load_text_is_pure(self):
        text = "modelo,accuracy\nCNN,0.5\n"
        loader = RecordLoader()
        assert loader.load_text(text) == loader.load_text(text)
        assert loader.load_text(text).source == "<memory>"

    def test_records_are_immutable(self, write_csv):
        record = RecordLoader().load(write_csv("1,2024-01-01,CNN,MNIST,0.9,0.8,0.85,0.2,120")).records[0]
        with pytest.raises(ValidationError):
            record.accuracy = 0.1


class TestBuildRecord:
    """Test suite for header resolution and record construction."""

    def test_resolve_columns_matches_case_and_whitespace(self):
        column_map, missing, ignored = resolve_columns([" ID ", "Modelo", "extra"])
        assert column_map == {"id": " ID ", "model": "Modelo"}
        assert "accuracy" in missing
        assert ignored == ("extra",)

    def test_numeric_labels_become_text(self):
        record = build_record({"modelo": 42, "fecha": 20240101}, {"model": "modelo", "date": "fecha"})
        assert record.model == "42"
        assert record.date == "20240101"


class TestOversizedValues:
    """Test suite for metric cells beyond the float range."""

    def test_huge_training_time_loads_as_text(self):
        """An enormous number is kept as text and counts as zero."""
        text = (
            "id,fecha,modelo,dataset,accuracy,precision,recall,loss,tiempo_entrenamiento\n"
            "1,2024-01-01,CNN,MNIST,0.9,0.8,0.85,0.2," + "9" * 400 + "\n"
        )
        outcome = RecordLoader().load_text(text)

        assert isinstance(outcome, Loaded)
        record = outcome.records[0]
        assert record.training_time == "9" * 400
        assert record.metric("training_time") == 0.0
        assert record.accuracy == 0.9

    def test_build_record_drops_unconvertible_integer(self):
        record = build_record({"loss": 10**400}, {"loss": "loss"})
        assert record.loss is None
        assert record.metric("loss") == 0.0
