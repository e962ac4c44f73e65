"""Registry for CLI subcommands."""

from .cat_command import CatCommand
from .extract_command import ExtractCommand
from .list_command import ListCommand
from .stat_command import StatCommand

COMMANDS = (
    ListCommand,
    CatCommand,
    StatCommand,
    ExtractCommand,
)

__all__ = ["COMMANDS", "ListCommand", "CatCommand", "StatCommand", "ExtractCommand"]
