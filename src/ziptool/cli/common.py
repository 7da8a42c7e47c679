from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import ParamSpec, TypeVar

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from ..settings import get_settings

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

CommandParams = ParamSpec("CommandParams")
CommandReturn = TypeVar("CommandReturn")


def _debug_enabled() -> bool:
    try:
        return get_settings().debug
    except ValidationError:
        return False


def handle_cli_errors(
    func: Callable[CommandParams, CommandReturn],
) -> Callable[CommandParams, CommandReturn]:
    @wraps(func)
    def wrapper(*args: CommandParams.args, **kwargs: CommandParams.kwargs) -> CommandReturn:
        try:
            return func(*args, **kwargs)
        except typer.BadParameter:
            raise
        except typer.Exit:
            raise
        except ValidationError as exc:
            err_console.print("[red]Error:[/red] Invalid ZIPTOOL_* environment setting.")
            err_console.print(escape(str(exc)))
            raise typer.Exit(1) from None
        except Exception as exc:
            if _debug_enabled():
                raise
            err_console.print(f"[red]Error:[/red] Unexpected failure: {escape(str(exc))}")
            err_console.print("Set ZIPTOOL_DEBUG=1 for a stack trace.")
            raise typer.Exit(1) from exc

    return wrapper


__all__ = ["console", "err_console", "handle_cli_errors"]
