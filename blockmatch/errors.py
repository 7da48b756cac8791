"""Exceptions raised while matching blocks or reading block definitions."""

from __future__ import annotations

from typing import Iterable, Optional, Tuple


class MatchError(Exception):
    """Base class for malformed program errors reported by the scanner."""


class EmptyProgram(MatchError):
    def __init__(self) -> None:
        super().__init__("input program should contain at least one block")


class UnopenedClose(MatchError):
    """An ``end`` instruction was found while no block was open."""

    def __init__(self, position: int) -> None:
        self.position = position
        super().__init__(f"attempt to close a non-existent block at position {position}")


class UnclosedBlocks(MatchError):
    """The scan finished with blocks still open.

    ``positions`` holds every pending start index in the order the blocks
    were opened, so the outermost block comes first.
    """

    def __init__(self, positions: Iterable[int]) -> None:
        self.positions: Tuple[int, ...] = tuple(positions)
        listing = ", ".join(str(position) for position in self.positions)
        super().__init__(f"blocks were never closed, start positions: [{listing}]")


class AssemblyError(ValueError):
    """Raised when textual instructions or registry files cannot be read."""

    def __init__(self, message: str, *, token: Optional[str] = None, position: Optional[int] = None) -> None:
        self.token = token
        self.position = position
        details = []
        if position is not None:
            details.append(f"token {position}")
        if token is not None:
            details.append(repr(token))
        if details:
            message = f"{message} ({' '.join(details)})"
        super().__init__(message)
