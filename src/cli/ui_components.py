"""Rich output helpers for the CLI.

Keeps command logic free of presentation details. Result text is printed
verbatim (no markup, no highlighting, no wrapping) because listings rely on
exact column alignment.
"""

from __future__ import annotations

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from core.domain.results import Failure, Result, RunCompleted


def build_log_handler(console: Console) -> RichHandler:
    return RichHandler(console=console, show_path=False, show_time=False)


def print_result(result: Result, *, out: Console, err: Console) -> None:
    if isinstance(result, Failure):
        err.print(Text(result.text, style="red"), soft_wrap=True)
        return
    out.print(result.text, markup=False, highlight=False, soft_wrap=True)


def print_completion(completed: RunCompleted, *, out: Console, err: Console) -> None:
    """`OK` when every operation succeeded, a short tally otherwise."""

    if completed.ok:
        out.print("OK", highlight=False)
        return
    detail = f"{completed.failed} of {completed.total} operations failed"
    if completed.cancelled:
        detail += " (cancelled)"
    err.print(Text(detail, style="bold red"))


def print_error(message: str, *, err: Console) -> None:
    err.print(Text(message, style="red"), soft_wrap=True)
