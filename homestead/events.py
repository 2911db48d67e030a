"""Messages and commands exchanged between the terminal UI and its screens.

A screen's ``update`` receives a message and may return a command. A command
is a callable producing a message, or one of :class:`Quit`, :class:`Tick`,
:class:`Batch` and :class:`Sequence`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator


@dataclass(frozen=True)
class WindowSize:
    """The terminal was resized."""

    width: int
    height: int


@dataclass(frozen=True)
class KeyPress:
    """A key was pressed; ``key`` is its name, such as ``"enter"`` or ``"q"``."""

    key: str


@dataclass(frozen=True)
class Quit:
    """Command asking the program to stop."""


@dataclass(frozen=True)
class Tick:
    """Command that delivers a message after ``delay`` seconds."""

    delay: float
    produce: Callable[[], Any]

    def __post_init__(self) -> None:
        if self.delay < 0:
            raise ValueError(f"tick delay must not be negative: {self.delay}")

    def message(self) -> Any:
        """Build the message this tick delivers."""
        return self.produce()


@dataclass(frozen=True)
class Batch:
    """Commands that run concurrently, in no particular order."""

    commands: tuple

    def __iter__(self) -> Iterator[Any]:
        return iter(self.commands)

    def __len__(self) -> int:
        return len(self.commands)


@dataclass(frozen=True)
class Sequence:
    """Commands that run one after another, in order."""

    commands: tuple

    def __iter__(self) -> Iterator[Any]:
        return iter(self.commands)

    def __len__(self) -> int:
        return len(self.commands)


def _present(commands: tuple) -> tuple:
    return tuple(command for command in commands if command is not None)


def batch(*args: Any) -> Any:
    """Combine commands to run concurrently; ``None`` entries are dropped."""
    commands = _present(args)
    if not commands:
        return None
    if len(commands) == 1:
        return commands[0]
    return Batch(commands)


def sequence(*args: Any) -> Any:
    """Combine commands to run in order; ``None`` entries are dropped."""
    commands = _present(args)
    if not commands:
        return None
    if len(commands) == 1:
        return commands[0]
    return Sequence(commands)


def is_quit(command: Any) -> bool:
    """Tell whether ``command`` is, or contains, a request to quit."""
    if isinstance(command, Quit):
        return True
    if isinstance(command, (Batch, Sequence)):
        return any(is_quit(inner) for inner in command)
    return False