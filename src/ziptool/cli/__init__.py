"""Command-line entry point: ``ziptool {-cf|-xf} ARCHIVE DIRECTORY``."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final, NoReturn

import typer
from rich.markup import escape

from ..errors import ZipToolError
from ..logging_utils import configure_logging
from ..packer import pack
from ..settings import get_settings
from ..unpacker import unpack
from .common import console, err_console, handle_cli_errors

logger = logging.getLogger(__name__)

EXPECTED_NUM_ARGS: Final[int] = 3
CREATE_COMMAND: Final[str] = "-cf"
EXTRACT_COMMAND: Final[str] = "-xf"

ERROR_WRONG_NUMBER_OF_ARGUMENTS: Final[str] = "ziptool requires {count} arguments."
ERROR_UNKNOWN_COMMAND: Final[str] = "{command} is an unknown command."
ERROR_NOT_DIRECTORY: Final[str] = (
    "The last argument MUST specify a valid directory when creating ZIP files."
)
ERROR_COULD_NOT_ZIP: Final[str] = "Failed to zip {archive}: {message}"
ERROR_COULD_NOT_UNZIP: Final[str] = "Failed to unzip {archive}: {message}"

USAGE: Final[str] = """\
Usage: ziptool {-cf | -xf} ARCHIVE DIRECTORY
  -cf  create a new ZIP file from the contents of DIRECTORY
  -xf  extract the contents of ARCHIVE into DIRECTORY

This tool does not keep special attributes such as permissions
and forks. When creating a ZIP file, links are converted into
files and directories, but each directory is included only once.
Links that point to parent directories are still traversed, which
can produce unexpectedly large ZIP files.
"""

ARGUMENTS_ARGUMENT = typer.Argument(
    None,
    metavar="{-cf|-xf} ARCHIVE DIRECTORY",
    help="Mode flag, archive path and directory path",
    show_default=False,
)
VERBOSE_OPTION = typer.Option(
    False, "--verbose", help="Log every entry as it is written or extracted"
)

app = typer.Typer(
    help="Create and extract ZIP archives of directory trees.",
    add_completion=False,
    context_settings={"ignore_unknown_options": True},
)


def verify_arguments(arguments: list[str]) -> str | None:
    """Return an error message for invalid ``arguments`` or ``None`` when they are usable."""

    if len(arguments) != EXPECTED_NUM_ARGS:
        return ERROR_WRONG_NUMBER_OF_ARGUMENTS.format(count=EXPECTED_NUM_ARGS)

    command, _, directory = arguments
    if command not in (CREATE_COMMAND, EXTRACT_COMMAND):
        return ERROR_UNKNOWN_COMMAND.format(command=command)
    if command == CREATE_COMMAND and not Path(directory).is_dir():
        return ERROR_NOT_DIRECTORY
    return None


def _usage_error(message: str) -> NoReturn:
    err_console.print(USAGE, markup=False, highlight=False)
    err_console.print(message, markup=False, highlight=False)
    raise typer.Exit(2)


@app.command(context_settings={"ignore_unknown_options": True})
@handle_cli_errors
def main(
    arguments: list[str] | None = ARGUMENTS_ARGUMENT,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Create (-cf) or extract (-xf) a ZIP archive.

    Links are dereferenced when packing and every directory is packed once.
    Entries whose names are absolute or contain ``..`` abort extraction.
    """

    settings = get_settings()
    configure_logging("DEBUG" if verbose else settings.log_level)

    tokens = list(arguments or [])
    error = verify_arguments(tokens)
    if error:
        _usage_error(error)

    command, archive, directory = tokens
    try:
        if command == CREATE_COMMAND:
            report = pack(directory, archive, buffer_size=settings.buffer_size)
            console.print(
                f"Packed {report.entry_count} entries into {escape(archive)}", highlight=False
            )
        else:
            report = unpack(archive, directory, buffer_size=settings.buffer_size)
            console.print(
                f"Extracted {report.entry_count} entries into {escape(directory)}",
                highlight=False,
            )
    except ZipToolError as exc:
        template = ERROR_COULD_NOT_ZIP if command == CREATE_COMMAND else ERROR_COULD_NOT_UNZIP
        logger.debug("%s failed", command, exc_info=True)
        err_console.print(
            template.format(archive=archive, message=exc), markup=False, highlight=False
        )
        raise typer.Exit(1) from None


__all__ = [
    "CREATE_COMMAND",
    "EXTRACT_COMMAND",
    "USAGE",
    "app",
    "main",
    "verify_arguments",
]
