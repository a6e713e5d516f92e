"""Integration tests for CLI commands.

Each test writes a mapping file and a rows file to a temporary directory
and runs the command end to end through click's test runner.
"""

import csv
import io
import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from dataset_mapper.cli import app

MAPPING = {
    "id": "mapping_contacts",
    "name": "Contacts",
    "fields": [
        {"id": "f_email", "name": "email", "label": "Email", "type": "email", "required": True, "order": 1},
        {"id": "f_name", "name": "full_name", "label": "Full Name", "required": True, "order": 0},
        {"id": "f_qty", "name": "qty", "label": "Quantity", "type": "number", "order": 2},
    ],
}


@pytest.fixture
def runner():
    """Create a CLI runner."""
    return CliRunner()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "mapping.json").write_text(json.dumps(MAPPING), encoding="utf-8")
    return tmp_path


def _write_rows(directory: Path, rows, name: str = "leads.json") -> Path:
    path = directory / name
    path.write_text(json.dumps(rows), encoding="utf-8")
    return path


@pytest.mark.integration
class TestFieldsCommand:
    def test_fields_help(self, runner):
        result = runner.invoke(app, ["fields", "--help"])
        assert result.exit_code == 0
        assert "MAPPING_FILE" in result.output

    def test_lists_fields(self, runner, workdir):
        result = runner.invoke(app, ["fields", "mapping.json"])
        assert result.exit_code == 0, result.output
        assert "Contacts" in result.output
        assert result.output.index("full_name") < result.output.index("qty")

    def test_malformed_mapping(self, runner, workdir):
        (workdir / "broken.json").write_text('{"name": "no id"}', encoding="utf-8")
        result = runner.invoke(app, ["fields", "broken.json"])
        assert result.exit_code == 1
        assert "Failed to load mapping" in result.output

    def test_invalid_json(self, runner, workdir):
        (workdir / "broken.json").write_text("{", encoding="utf-8")
        result = runner.invoke(app, ["fields", "broken.json"])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output


@pytest.mark.integration
class TestValidateCommand:
    def test_valid_rows(self, runner, workdir):
        _write_rows(workdir, [{"full_name": "Ada", "email": "ada@example.com", "qty": "3"}])
        result = runner.invoke(app, ["validate", "mapping.json", "leads.json"])
        assert result.exit_code == 0, result.output
        assert "all 1 rows valid" in result.output

    def test_invalid_rows_exit_non_zero(self, runner, workdir):
        _write_rows(
            workdir,
            [
                {"full_name": "Ada", "email": "ada@example.com"},
                {"full_name": "", "email": "nope", "qty": "many"},
            ],
        )
        result = runner.invoke(app, ["validate", "mapping.json", "leads.json"])
        assert result.exit_code == 1
        assert "Validation Errors" in result.output
        assert "1 of 2 rows failed validation" in result.output

    def test_csv_rows_with_label_headers(self, runner, workdir):
        (workdir / "leads.csv").write_text(
            'Full Name,Email,Quantity\n"Smith, Ann",ann@example.com,2\n', encoding="utf-8"
        )
        result = runner.invoke(app, ["validate", "mapping.json", "leads.csv"])
        assert result.exit_code == 0, result.output

    def test_verbose_prints_statistics(self, runner, workdir):
        _write_rows(workdir, [{"full_name": "Ada", "email": "ada@example.com"}])
        result = runner.invoke(app, ["validate", "mapping.json", "leads.json", "-v"])
        assert result.exit_code == 0, result.output
        assert "Session Statistics:" in result.output


@pytest.mark.integration
class TestExportCommand:
    def test_csv_export(self, runner, workdir):
        _write_rows(
            workdir,
            [
                {"email": "ada@example.com", "full_name": "Lovelace, Ada", "qty": 2},
                {"email": "bob@example.com", "note": "dropped"},
            ],
        )
        result = runner.invoke(
            app, ["export", "mapping.json", "leads.json", "--output", "out"]
        )
        assert result.exit_code == 0, result.output

        content = (workdir / "out" / "leads.csv").read_text(encoding="utf-8")
        assert content.startswith("Full Name,Email,Quantity\n")
        assert list(csv.reader(io.StringIO(content, newline=""))) == [
            ["Full Name", "Email", "Quantity"],
            ["Lovelace, Ada", "ada@example.com", "2"],
            ["", "bob@example.com", ""],
        ]

    def test_default_export_dir_and_name(self, runner, workdir):
        _write_rows(workdir, [{"email": "ada@example.com"}])
        result = runner.invoke(
            app, ["export", "mapping.json", "leads.json", "--name", "Q1 Leads", "--format", "json"]
        )
        assert result.exit_code == 0, result.output
        records = json.loads((workdir / "exports" / "Q1 Leads.json").read_text(encoding="utf-8"))
        assert records == [{"full_name": None, "email": "ada@example.com", "qty": None}]

    def test_bundle_export(self, runner, workdir):
        _write_rows(workdir, [{"full_name": "Ada", "email": "nope"}])
        result = runner.invoke(
            app, ["export", "mapping.json", "leads.json", "--format", "bundle", "--output", "out"]
        )
        assert result.exit_code == 0, result.output
        document = json.loads((workdir / "out" / "leads.json").read_text(encoding="utf-8"))
        assert document["mapping"] == "Contacts"
        assert document["rows"][0]["is_valid"] is False
        assert document["rows"][0]["errors"] == {"email": ["Email must be a valid email address"]}

    def test_config_file_sets_delimiter(self, runner, workdir):
        (workdir / "dataset_mapper.toml").write_text('[export]\ncsv_delimiter = ";"\n', encoding="utf-8")
        _write_rows(workdir, [{"full_name": "Ada", "email": "ada@example.com", "qty": 1.5}])
        result = runner.invoke(app, ["export", "mapping.json", "leads.json"])
        assert result.exit_code == 0, result.output
        content = (workdir / "exports" / "leads.csv").read_text(encoding="utf-8")
        assert content == "Full Name;Email;Quantity\nAda;ada@example.com;1.5\n"

    def test_missing_rows_file(self, runner, workdir):
        result = runner.invoke(app, ["export", "mapping.json", "missing.json"])
        assert result.exit_code == 2
