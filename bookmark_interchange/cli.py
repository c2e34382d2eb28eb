"""
Command-line interface for Bookmark Interchange.

This module provides the CLI for checking Netscape bookmark files, importing
them into a local SQLite bookmark database, and exporting that database as
Netscape HTML, JSON, or CSV.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from tqdm import tqdm

from bookmark_interchange import __version__
from bookmark_interchange.config import ConfigurationManager, InterchangeConfig
from bookmark_interchange.core.database import BookmarkDatabase
from bookmark_interchange.core.exporters import (
    CSVExporter,
    HTMLExporter,
    JSONExporter,
    get_exporter,
)
from bookmark_interchange.core.format_validator import validate_bookmark_html
from bookmark_interchange.core.import_module import BookmarkImporter, ImportOptions
from bookmark_interchange.core.netscape_parser import (
    NetscapeBookmarkParser,
    read_bookmark_source,
)
from bookmark_interchange.utils.error_handler import InterchangeError
from bookmark_interchange.utils.logging_setup import setup_logging


class ImportProgressBar:
    """Progress callback that drives a tqdm bar."""

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._bar: Optional[tqdm] = None

    def __call__(self, current: int, total: int) -> None:
        if self._bar is None:
            self._bar = tqdm(
                total=total,
                desc="Importing",
                unit="item",
                disable=not self.enabled,
            )
        self._bar.update(current - self._bar.n)

    def close(self) -> None:
        if self._bar is not None:
            self._bar.close()


class CLIInterface:
    """Command line interface for bookmark import and export."""

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create argument parser with one subcommand per operation."""
        common = argparse.ArgumentParser(add_help=False)
        common.add_argument(
            "--config",
            "-c",
            help="Configuration file path (TOML or JSON format). If not "
            "specified, looks for bookmark_interchange.toml/.json in the "
            "current directory.",
        )
        common.add_argument(
            "--verbose",
            "-v",
            action="store_true",
            help="Enable debug logging",
        )

        parser = argparse.ArgumentParser(
            prog="bookmark-interchange",
            description=(
                "Bookmark Interchange - import Netscape bookmark files and "
                "export them as HTML, JSON or CSV"
            ),
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  bookmark-interchange validate chrome_bookmarks.html
  bookmark-interchange import chrome_bookmarks.html --db bookmarks.db
  bookmark-interchange import firefox.html --duplicates replace
  bookmark-interchange export --format csv --output bookmarks.csv
  bookmark-interchange export --format html --output flat.html --flat
  bookmark-interchange create-config bookmark_interchange.toml
            """,
        )
        parser.add_argument(
            "--version", "-V", action="version", version=f"%(prog)s {__version__}"
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        validate = subparsers.add_parser(
            "validate", parents=[common], help="Check a bookmark file without importing"
        )
        validate.add_argument("file", help="Netscape bookmark HTML file")

        import_cmd = subparsers.add_parser(
            "import", parents=[common], help="Import a bookmark file into the database"
        )
        import_cmd.add_argument("file", help="Netscape bookmark HTML file")
        import_cmd.add_argument("--db", help="SQLite database path")
        import_cmd.add_argument(
            "--duplicates",
            choices=["skip", "replace", "keep"],
            help="How to handle bookmarks whose URL already exists "
            "(default from configuration: skip)",
        )
        import_cmd.add_argument(
            "--no-progress", action="store_true", help="Hide the progress bar"
        )

        export = subparsers.add_parser(
            "export", parents=[common], help="Export the database to a file"
        )
        export.add_argument(
            "--format", "-f", choices=["html", "json", "csv"], help="Output format"
        )
        export.add_argument("--output", "-o", required=True, help="Output file")
        export.add_argument("--db", help="SQLite database path")
        export.add_argument("--title", help="Title for HTML exports")
        export.add_argument(
            "--flat",
            action="store_true",
            help="Write all bookmarks at the top level of HTML exports",
        )

        create_config = subparsers.add_parser(
            "create-config", help="Write a sample configuration file"
        )
        create_config.add_argument("path", help="Output path")
        create_config.add_argument(
            "--format", choices=["toml", "json"], default="toml", help="File format"
        )

        return parser

    def parse_args(self, args=None) -> argparse.Namespace:
        """Parse command line arguments."""
        return self.parser.parse_args(args)

    def load_config(self, parsed_args: argparse.Namespace) -> InterchangeConfig:
        """Load configuration and apply command line overrides."""
        manager = ConfigurationManager(getattr(parsed_args, "config", None))
        manager.update(
            {
                "import": {"duplicate_handling": getattr(parsed_args, "duplicates", None)},
                "storage": {"database_path": getattr(parsed_args, "db", None)},
                "export": {
                    "html_title": getattr(parsed_args, "title", None),
                    "default_format": getattr(parsed_args, "format", None),
                },
                "logging": {"level": "DEBUG" if parsed_args.verbose else None},
            }
        )
        return manager.config

    def run(self, args=None) -> int:
        """Execute CLI interface."""
        parsed_args = self.parse_args(args)

        if parsed_args.command == "create-config":
            return self._handle_create_config(parsed_args)

        try:
            config = self.load_config(parsed_args)
            setup_logging(
                level=config.logging.level,
                log_file=config.logging.log_file,
                console_output=config.logging.console_output and parsed_args.verbose,
            )

            logger = logging.getLogger(__name__)
            logger.info(f"Bookmark Interchange CLI starting: {parsed_args.command}")

            if parsed_args.command == "validate":
                return self._handle_validate(parsed_args)
            if parsed_args.command == "import":
                return self._handle_import(parsed_args, config)
            return self._handle_export(parsed_args, config)

        except InterchangeError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            logging.getLogger(__name__).exception("Unexpected error in CLI")
            return 1

    def _handle_create_config(self, parsed_args: argparse.Namespace) -> int:
        output_path = Path(parsed_args.path)
        if output_path.exists():
            print(f"Configuration file already exists: {output_path}", file=sys.stderr)
            return 1

        ConfigurationManager.create_sample_config(
            output_path, parsed_args.format
        )
        print(f"Created configuration file: {output_path}")
        return 0

    def _handle_validate(self, parsed_args: argparse.Namespace) -> int:
        html = read_bookmark_source(Path(parsed_args.file))

        validation = validate_bookmark_html(html)
        if not validation.is_valid:
            print(f"Invalid: {validation.error}")
            return 1

        result = NetscapeBookmarkParser().parse(html)
        print(f"Folders:   {len(result.folders)}")
        print(f"Bookmarks: {len(result.bookmarks)}")
        for error in result.errors:
            print(f"  - {error}")

        return 1 if result.is_empty else 0

    def _handle_import(
        self, parsed_args: argparse.Namespace, config: InterchangeConfig
    ) -> int:
        database = BookmarkDatabase(config.storage.database_path)
        progress = ImportProgressBar(enabled=not parsed_args.no_progress)

        importer = BookmarkImporter(
            database.folders,
            database.bookmarks,
            ImportOptions(
                duplicate_handling=config.import_settings.duplicate_handling,
                on_progress=progress,
            ),
        )

        try:
            result = importer.import_file(Path(parsed_args.file))
        finally:
            progress.close()

        print(f"Folders imported:    {result.folders_imported}")
        print(f"Bookmarks imported:  {result.bookmarks_imported}")
        print(f"Bookmarks skipped:   {result.bookmarks_skipped}")
        print(f"Bookmarks replaced:  {result.bookmarks_replaced}")
        if result.errors:
            print(f"Errors ({len(result.errors)}):")
            for error in result.errors:
                print(f"  - {error}")

        nothing_imported = result.folders_imported == 0 and result.total_processed == 0
        return 1 if nothing_imported and result.has_errors else 0

    def _handle_export(
        self, parsed_args: argparse.Namespace, config: InterchangeConfig
    ) -> int:
        database = BookmarkDatabase(config.storage.database_path)
        format_name = config.export.default_format
        exporter_class = get_exporter(format_name)

        if exporter_class is HTMLExporter:
            exporter = HTMLExporter(
                title=config.export.html_title,
                include_folders=config.export.include_folders and not parsed_args.flat,
            )
        elif exporter_class is JSONExporter:
            exporter = JSONExporter(indent=config.export.json_indent or None)
        else:
            exporter = CSVExporter(tags=database.tags.get_all())

        result = exporter.export(
            database.bookmarks.get_all(),
            database.folders.get_all(),
            parsed_args.output,
        )
        print(f"Exported {result.bookmark_count} bookmarks to {result.path} ({result.format_name})")
        return 0


def main(args=None):
    """Main entry point for the CLI."""
    cli = CLIInterface()
    return cli.run(args)


if __name__ == "__main__":
    sys.exit(main())
