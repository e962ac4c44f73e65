"""Cat command handling for the layer-tar CLI."""

import shutil
import sys

from layertar.cli_helpers import fail_command, open_archive_stream
from layertar.core.lookup import reader_from_tar


class CatCommand:
    """Writes the content of one archive entry to stdout."""

    @staticmethod
    def add_parser(subparsers) -> None:
        parser = subparsers.add_parser('cat', help='Print the content of one entry')
        parser.add_argument('archive', help="Path to the tar archive ('-' for stdin)")
        parser.add_argument('path', help='Entry path inside the archive')
        parser.set_defaults(func=CatCommand.execute)

    @staticmethod
    def execute(args) -> None:
        try:
            stream = open_archive_stream(args.archive)
            try:
                reader = reader_from_tar(stream, args.path)
            except Exception:
                stream.close()
                raise

            # the member reader owns the archive stream and closes it
            with reader:
                out = sys.stdout.buffer
                shutil.copyfileobj(reader, out)
                out.flush()
        except Exception as exc:
            fail_command("Cat", exc)
