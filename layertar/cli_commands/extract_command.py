"""Extract command handling for the layer-tar CLI."""

from layertar.cli_helpers import fail_command, open_archive
from layertar.common.config import ExtractionSettings, get_extraction_settings, parse_read_limit
from layertar.core.extract import untar_to_directory


class ExtractCommand:
    """Safely unpacks regular files and directories of an archive."""

    @staticmethod
    def add_parser(subparsers) -> None:
        parser = subparsers.add_parser(
            'extract',
            help='Extract regular files and directories (links and special files are skipped)',
        )
        parser.add_argument('archive', help="Path to the tar archive ('-' for stdin)")
        parser.add_argument('destination', help='Directory to extract into')
        parser.add_argument(
            '--read-limit',
            dest='read_limit',
            help='Per-file read limit in bytes (overrides LAYERTAR_PER_FILE_READ_LIMIT)',
        )
        parser.set_defaults(func=ExtractCommand.execute)

    @staticmethod
    def execute(args) -> None:
        settings = get_extraction_settings()
        if args.read_limit is not None:
            settings = ExtractionSettings(
                per_file_read_limit=parse_read_limit(args.read_limit, settings.per_file_read_limit),
            )
        try:
            with open_archive(args.archive) as stream:
                untar_to_directory(stream, args.destination, settings=settings)
        except Exception as exc:
            fail_command("Extract", exc)
            return
        print(f"Extracted {args.archive} to {args.destination}")
