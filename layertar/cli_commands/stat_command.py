"""Stat command handling for the layer-tar CLI."""

import json

from layertar.cli_helpers import fail_command, open_archive
from layertar.core.lookup import metadata_from_tar


class StatCommand:
    """Prints the metadata of one archive entry as JSON."""

    @staticmethod
    def add_parser(subparsers) -> None:
        parser = subparsers.add_parser('stat', help='Show the metadata of one entry as JSON')
        parser.add_argument('archive', help="Path to the tar archive ('-' for stdin)")
        parser.add_argument('path', help='Entry path inside the archive')
        parser.set_defaults(func=StatCommand.execute)

    @staticmethod
    def execute(args) -> None:
        try:
            with open_archive(args.archive) as stream:
                metadata = metadata_from_tar(stream, args.path)
        except Exception as exc:
            fail_command("Stat", exc)
            return
        print(json.dumps(metadata.to_dict(), indent=2))
