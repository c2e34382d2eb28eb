"""
Tests for the command line interface.
"""

import json
import logging

import pytest

from bookmark_interchange import __version__
from bookmark_interchange.cli import CLIInterface, ImportProgressBar, main
from bookmark_interchange.core.database import BookmarkDatabase


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def imported_db(in_tmp_cwd, sample_html_file, temp_db_path):
    """Database populated from the sample file through the CLI."""
    assert main(["import", str(sample_html_file), "--db", str(temp_db_path), "--no-progress"]) == 0
    return temp_db_path


class TestArgumentParsing:
    """Test argument parsing."""

    def setup_method(self):
        self.cli = CLIInterface()

    def test_import_arguments(self):
        args = self.cli.parse_args(
            ["import", "file.html", "--db", "x.db", "--duplicates", "replace", "-v"]
        )

        assert args.command == "import"
        assert args.file == "file.html"
        assert args.db == "x.db"
        assert args.duplicates == "replace"
        assert args.verbose is True

    def test_export_requires_output(self):
        with pytest.raises(SystemExit):
            self.cli.parse_args(["export", "--format", "csv"])

    def test_invalid_duplicate_mode(self):
        with pytest.raises(SystemExit):
            self.cli.parse_args(["import", "file.html", "--duplicates", "merge"])

    def test_command_required(self):
        with pytest.raises(SystemExit):
            self.cli.parse_args([])

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestValidateCommand:
    """Test the validate subcommand."""

    def test_valid_file(self, in_tmp_cwd, sample_html_file, capsys):
        assert main(["validate", str(sample_html_file)]) == 0

        out = capsys.readouterr().out
        assert "Folders:   3" in out
        assert "Bookmarks: 4" in out

    def test_invalid_file(self, in_tmp_cwd, tmp_path, capsys):
        path = tmp_path / "notes.txt"
        path.write_text("just text", encoding="utf-8")

        assert main(["validate", str(path)]) == 1
        assert "Invalid: File does not appear" in capsys.readouterr().out

    def test_missing_file(self, in_tmp_cwd, tmp_path, capsys):
        assert main(["validate", str(tmp_path / "missing.html")]) == 1
        assert "Error:" in capsys.readouterr().err


class TestImportCommand:
    """Test the import subcommand."""

    def test_import(self, in_tmp_cwd, sample_html_file, temp_db_path, capsys):
        code = main(
            ["import", str(sample_html_file), "--db", str(temp_db_path), "--no-progress"]
        )

        out = capsys.readouterr().out
        assert code == 0
        assert "Folders imported:    3" in out
        assert "Bookmarks imported:  4" in out
        assert "Bookmarks skipped:   0" in out
        assert BookmarkDatabase(temp_db_path).get_statistics()["bookmarks"] == 4

    def test_reimport_with_replace(self, imported_db, sample_html_file, capsys):
        capsys.readouterr()

        code = main(
            [
                "import",
                str(sample_html_file),
                "--db",
                str(imported_db),
                "--duplicates",
                "replace",
                "--no-progress",
            ]
        )

        assert code == 0
        assert "Bookmarks replaced:  4" in capsys.readouterr().out
        assert BookmarkDatabase(imported_db).bookmarks.count() == 4

    def test_nothing_imported_with_errors(self, in_tmp_cwd, tmp_path, temp_db_path, capsys):
        path = tmp_path / "empty.html"
        path.write_text("", encoding="utf-8")

        code = main(["import", str(path), "--db", str(temp_db_path), "--no-progress"])

        assert code == 1
        assert "File is empty" in capsys.readouterr().out

    def test_database_from_environment(self, in_tmp_cwd, sample_html_file, tmp_path, monkeypatch):
        db_path = tmp_path / "env.db"
        monkeypatch.setenv("BOOKMARK_INTERCHANGE_DB", str(db_path))

        assert main(["import", str(sample_html_file), "--no-progress"]) == 0
        assert BookmarkDatabase(db_path).bookmarks.count() == 4

    def test_duplicates_from_config_file(self, imported_db, sample_html_file, tmp_path, capsys):
        config = tmp_path / "settings.toml"
        config.write_text('[import]\nduplicate_handling = "keep"\n', encoding="utf-8")
        capsys.readouterr()

        code = main(
            [
                "import",
                str(sample_html_file),
                "--db",
                str(imported_db),
                "--config",
                str(config),
                "--no-progress",
            ]
        )

        assert code == 0
        assert BookmarkDatabase(imported_db).bookmarks.count() == 8

    def test_bad_config_file(self, in_tmp_cwd, sample_html_file, tmp_path, capsys):
        code = main(
            ["import", str(sample_html_file), "--config", str(tmp_path / "missing.toml")]
        )

        assert code == 1
        assert "Configuration file not found" in capsys.readouterr().err


class TestExportCommand:
    """Test the export subcommand."""

    def test_export_csv(self, imported_db, tmp_path):
        output = tmp_path / "out.csv"

        code = main(
            ["export", "--format", "csv", "--output", str(output), "--db", str(imported_db)]
        )

        assert code == 0
        lines = output.read_text(encoding="utf-8").split("\n")
        assert lines[0] == "URL,Title,Folder,Tags,Description,Notes,Created At"
        assert any(",MDN,Programming/JavaScript," in line for line in lines)

    def test_export_json(self, imported_db, tmp_path):
        output = tmp_path / "out.json"

        main(["export", "-f", "json", "-o", str(output), "--db", str(imported_db)])

        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["version"] == "1.0"
        assert len(data["bookmarks"]) == 4
        assert len(data["folders"]) == 3

    def test_export_html_defaults(self, imported_db, tmp_path, capsys):
        output = tmp_path / "out.html"

        code = main(["export", "--output", str(output), "--db", str(imported_db)])

        html = output.read_text(encoding="utf-8")
        assert code == 0
        assert html.startswith("<!DOCTYPE NETSCAPE-Bookmark-file-1>")
        assert ">Programming</H3>" in html
        assert "(HTML)" in capsys.readouterr().out

    def test_export_html_flat_with_title(self, imported_db, tmp_path):
        output = tmp_path / "flat.html"

        main(
            [
                "export",
                "--format",
                "html",
                "--output",
                str(output),
                "--db",
                str(imported_db),
                "--title",
                "Shared",
                "--flat",
            ]
        )

        html = output.read_text(encoding="utf-8")
        assert "<TITLE>Shared</TITLE>" in html
        assert "<H3" not in html
        assert html.count("<DT><A ") == 4


class TestCreateConfigCommand:
    """Test the create-config subcommand."""

    def test_create_config(self, tmp_path, capsys):
        path = tmp_path / "bookmark_interchange.toml"

        assert main(["create-config", str(path)]) == 0
        assert "[import]" in path.read_text(encoding="utf-8")

    def test_refuses_to_overwrite(self, tmp_path, capsys):
        path = tmp_path / "existing.json"
        path.write_text("{}", encoding="utf-8")

        assert main(["create-config", str(path), "--format", "json"]) == 1
        assert path.read_text(encoding="utf-8") == "{}"


class TestImportProgressBar:
    """Test the tqdm progress callback."""

    def test_tracks_current_position(self):
        progress = ImportProgressBar(enabled=True)

        for current in range(1, 4):
            progress(current, 3)

        assert progress._bar.total == 3
        assert progress._bar.n == 3
        progress.close()

    def test_close_before_first_update(self):
        ImportProgressBar().close()
