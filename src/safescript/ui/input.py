from __future__ import annotations
from typing import List, Sequence, TextIO

from rich.console import Console
from rich.prompt import Confirm, Prompt


def get_input(prompt: str = "> ", stream: TextIO | None = None,
              console: Console | None = None) -> str:
    """Read one free-form line. No validation and no default: blocks until a line arrives."""
    return Prompt.ask(prompt, console=console, stream=stream)


def read_values(prompts: Sequence[str], stream: TextIO | None = None,
                console: Console | None = None) -> List[str]:
    """Ask each prompt in order and return the answers."""
    return [get_input(p, stream=stream, console=console) for p in prompts]


def confirm(prompt: str, default: bool = False, stream: TextIO | None = None,
            console: Console | None = None) -> bool:
    """Get yes/no confirmation from user"""
    return Confirm.ask(prompt, default=default, console=console, stream=stream)
