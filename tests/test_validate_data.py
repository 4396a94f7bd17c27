#!/usr/bin/env python3
"""Tests for validate_data blob validation."""
import json

from validate_data import main, validate_blob_file


class TestValidateBlobFile:
    """Tests for validate_blob_file function."""

    def test_valid_vehicles_returns_no_errors(self, tmp_path):
        path = tmp_path / "vehicles.json"
        path.write_text(json.dumps([{"id": 1, "name": "Kei Car", "type": "kei"}]))
        assert validate_blob_file(path, "vehicles") == []

    def test_valid_reservations_returns_no_errors(self, tmp_path):
        path = tmp_path / "reservations.json"
        path.write_text(json.dumps([{
            "id": 1, "vehicleId": 1, "date": "2024-06-10",
            "startTime": "09:00", "endTime": "11:00",
            "userName": "Sato", "department": "Sales",
        }]))
        assert validate_blob_file(path, "reservations") == []

    def test_missing_field_returns_errors(self, tmp_path):
        path = tmp_path / "reservations.json"
        path.write_text(json.dumps([{"id": 1, "vehicleId": 1, "date": "2024-06-10"}]))
        errors = validate_blob_file(path, "reservations")
        assert any("Schema validation" in e for e in errors)

    def test_bad_path_reported(self, tmp_path):
        path = tmp_path / "vehicles.json"
        path.write_text(json.dumps([{"id": 1, "name": "A", "type": "truck"}]))
        errors = validate_blob_file(path, "vehicles")
        assert any("at path: 0.type" in e for e in errors)

    def test_invalid_json_returns_parse_error(self, tmp_path):
        path = tmp_path / "vehicles.json"
        path.write_text("[{unclosed")
        errors = validate_blob_file(path, "vehicles")
        assert any("JSON" in e for e in errors)

    def test_nonexistent_file_returns_errors(self, tmp_path):
        errors = validate_blob_file(tmp_path / "missing.json", "vehicles")
        assert any("Error" in e for e in errors)


class TestMain:
    """Tests for the data directory check."""

    def test_missing_directory(self, tmp_path, capsys):
        assert main(tmp_path / "nope") == 1
        assert "not found" in capsys.readouterr().out

    def test_unsaved_blobs_skipped(self, tmp_path, capsys):
        assert main(tmp_path) == 0
        assert "SKIP: vehicles.json" in capsys.readouterr().out

    def test_reports_ok_and_fail(self, tmp_path, capsys):
        (tmp_path / "vehicles.json").write_text("[]")
        (tmp_path / "reservations.json").write_text("{}")
        assert main(tmp_path) == 1
        out = capsys.readouterr().out
        assert "OK: vehicles.json" in out
        assert "FAIL: reservations.json" in out

    def test_float_id_reported(self, tmp_path, capsys):
        (tmp_path / "vehicles.json").write_text(
            json.dumps([{"id": 1.0, "name": "A", "type": "van"}])
        )
        assert main(tmp_path) == 1
        assert "FAIL: vehicles.json" in capsys.readouterr().out
