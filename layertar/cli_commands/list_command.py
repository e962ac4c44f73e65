"""List command handling for the layer-tar CLI."""

from layertar.cli_helpers import fail_command, open_archive
from layertar.core.decoder import TarEntry
from layertar.core.iterate import VisitResult, iterate_tar
from layertar.core.metadata import FileType


class ListCommand:
    """Prints one line per archive entry."""

    @staticmethod
    def add_parser(subparsers) -> None:
        parser = subparsers.add_parser('list', help='List the entries of a tar archive')
        parser.add_argument('archive', help="Path to the tar archive ('-' for stdin)")
        parser.set_defaults(func=ListCommand.execute)

    @staticmethod
    def execute(args) -> None:
        try:
            with open_archive(args.archive) as stream:
                iterate_tar(stream, ListCommand._print_entry)
        except Exception as exc:
            fail_command("List", exc)

    @staticmethod
    def _print_entry(entry: TarEntry) -> VisitResult:
        header = entry.header
        file_type = FileType.from_header(header)
        line = f"{entry.sequence:>5}  {file_type.value:<12}  {header.size:>12}  {entry.name}"
        if file_type in (FileType.SYMLINK, FileType.HARD_LINK):
            line += f" -> {header.linkname}"
        print(line)
        return VisitResult.CONTINUE
