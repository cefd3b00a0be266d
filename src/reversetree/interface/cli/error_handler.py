"""CLI error handler.

Renders ReverseTreeError (or any other exception) for humans or as JSON and
exits with status 1.
"""

import json
import sys
from typing import NoReturn

from rich.console import Console
from rich.text import Text

from reversetree.foundation.errors import ReverseTreeError


def handle_error(error: Exception, json_output: bool = False) -> NoReturn:
    """Report ``error`` and exit.

    Raises:
        SystemExit: Always exits with code 1
    """
    if json_output:
        if isinstance(error, ReverseTreeError):
            error_dict = error.to_dict()
            if error.cause:
                error_dict["cause"] = str(error.cause)
        else:
            error_dict = {"message": str(error), "type": type(error).__name__}
        print(json.dumps(error_dict), file=sys.stderr)
        sys.exit(1)

    _print_human_error(error)
    sys.exit(1)


def _print_human_error(error: Exception) -> None:
    console = Console(stderr=True)

    header = Text()
    if isinstance(error, ReverseTreeError):
        header.append(error.error_id, style="bold red")
        header.append(f" {error.message}")
        hints = error.recovery_hints
    else:
        header.append("Error", style="bold red")
        header.append(f" {error}")
        hints = []

    console.print(header)
    if hints:
        console.print("\n[bold]What you can do:[/]")
        for i, hint in enumerate(hints, 1):
            console.print(f"  {i}. {hint}", markup=False)
