"""
Tests for the audit-report command.
"""

import json
from unittest.mock import patch

import pytest

from audit_toolkit.cli import EXIT_BAD_INPUT, EXIT_EXPORT_FAILED, EXIT_OK, main
from audit_toolkit.report import ErrorKind, ExportError


@pytest.fixture
def audit_file(tmp_path, png_factory):
    (tmp_path / "hero.png").write_bytes(png_factory(300, 200))
    data = {
        "auditData": {"preparedBy": "Jane", "date": "2024-05-01", "websiteUrl": "example.com"},
        "sections": [
            {"id": "home", "title": "Homepage", "items": [
                {"id": "h1", "title": "Hero image", "status": "pass", "image": "hero.png"},
                {"id": "h2", "title": "Broken shot", "status": "fail", "image": "missing.png"},
            ]},
            {"id": "cart", "title": "Cart", "items": [
                {"id": "c1", "title": "Totals visible", "status": "optional"},
            ]},
        ],
    }
    path = tmp_path / "audit.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestMain:
    def test_when_export_succeeds_then_exit_zero(self, audit_file, tmp_path, capsys):
        # Arrange
        out_dir = tmp_path / "out"

        # Act
        code = main([str(audit_file), "-o", str(out_dir)])

        # Assert
        assert code == EXIT_OK
        expected = out_dir / "Audit-Report-example-com-2024-05-01.pdf"
        assert expected.exists()
        output = capsys.readouterr().out
        assert expected.name in output
        assert "4 pages" in output

    def test_pack_sections_flag(self, audit_file, tmp_path, capsys):
        code = main([str(audit_file), "-o", str(tmp_path / "out"), "--pack-sections"])

        assert code == EXIT_OK
        assert "3 pages" in capsys.readouterr().out

    def test_when_input_missing_then_exit_two(self, tmp_path, capsys):
        code = main([str(tmp_path / "missing.json")])

        assert code == EXIT_BAD_INPUT
        assert "not found" in capsys.readouterr().err

    def test_when_field_type_wrong_then_exit_two(self, tmp_path, capsys):
        data = {"sections": [{"id": "s", "title": "S", "items": [
            {"id": "x", "title": 5, "status": "pass"},
        ]}]}
        path = tmp_path / "audit.json"
        path.write_text(json.dumps(data), encoding="utf-8")

        code = main([str(path), "-o", str(tmp_path / "out")])

        assert code == EXIT_BAD_INPUT
        assert "title must be a string" in capsys.readouterr().err
        assert not (tmp_path / "out").exists()

    def test_when_quality_out_of_range_then_exit_two(self, audit_file, capsys):
        code = main([str(audit_file), "--quality", "0"])

        assert code == EXIT_BAD_INPUT
        assert "image_quality" in capsys.readouterr().err

    def test_when_export_fails_then_exit_one_with_generic_message(self, audit_file, tmp_path, capsys):
        error = ExportError("disk full", ErrorKind.SERIALIZATION_FAILED)

        with patch("audit_toolkit.cli.export_report", side_effect=error):
            code = main([str(audit_file), "-o", str(tmp_path / "out")])

        assert code == EXIT_EXPORT_FAILED
        assert "Unable to create the report. Please try again." in capsys.readouterr().err

    def test_warnings_are_printed(self, tmp_path, capsys):
        # Arrange: an image that exists but is not decodable
        (tmp_path / "bad.png").write_bytes(b"not an image")
        data = {"sections": [{"id": "s", "title": "S", "items": [
            {"id": "x", "title": "X", "status": "fail", "image": "bad.png"},
        ]}]}
        path = tmp_path / "audit.json"
        path.write_text(json.dumps(data), encoding="utf-8")

        # Act
        code = main([str(path), "-o", str(tmp_path / "out")])

        # Assert
        assert code == EXIT_OK
        assert "Warning: [DecodeFailed]" in capsys.readouterr().out
