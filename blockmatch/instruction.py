"""Representation utilities for VM instructions.

The scanner only cares about the structural role of an instruction: whether
it opens a block, closes one, or is plain payload.  Roles are declared in an
explicit table keyed by :class:`Opcode` rather than derived from a fallback
branch, so a new opcode cannot silently slip through the scanner as payload.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional, Tuple


class Opcode(Enum):
    PUSH = "push"
    OR = "or"
    AND = "and"
    NOT = "not"
    IF = "if"
    BEGIN = "begin"
    END = "end"


class Role(Enum):
    """Structural role of an opcode inside a block."""

    OPEN = "open"
    CLOSE = "close"
    PAYLOAD = "payload"


OPCODE_ROLES: Dict[Opcode, Role] = {
    Opcode.PUSH: Role.PAYLOAD,
    Opcode.OR: Role.PAYLOAD,
    Opcode.AND: Role.PAYLOAD,
    Opcode.NOT: Role.PAYLOAD,
    Opcode.IF: Role.OPEN,
    Opcode.BEGIN: Role.OPEN,
    Opcode.END: Role.CLOSE,
}

_unclassified = [opcode.name for opcode in Opcode if opcode not in OPCODE_ROLES]
if _unclassified:
    raise RuntimeError(f"opcodes without a structural role: {', '.join(_unclassified)}")
del _unclassified


@dataclass(frozen=True)
class Instruction:
    opcode: Opcode
    value: Optional[int] = None

    def __post_init__(self) -> None:
        if self.opcode is Opcode.PUSH:
            if not isinstance(self.value, int) or isinstance(self.value, bool):
                raise ValueError("push requires an integer value")
            if self.value < 0:
                raise ValueError(f"push value must be unsigned, got {self.value}")
        elif self.value is not None:
            raise ValueError(f"{self.opcode.value} does not take a value")

    @property
    def role(self) -> Role:
        return OPCODE_ROLES[self.opcode]

    def opens_block(self) -> bool:
        return self.role is Role.OPEN

    def closes_block(self) -> bool:
        return self.role is Role.CLOSE

    def format(self) -> str:
        if self.opcode is Opcode.PUSH:
            return f"push {self.value}"
        return self.opcode.value

    def __repr__(self) -> str:
        if self.opcode is Opcode.PUSH:
            return f"Push({self.value})"
        return self.opcode.name.capitalize()


def Push(value: int) -> Instruction:
    """Return a ``push`` instruction carrying ``value``."""

    return Instruction(Opcode.PUSH, value)


Or = Instruction(Opcode.OR)
And = Instruction(Opcode.AND)
Not = Instruction(Opcode.NOT)
If = Instruction(Opcode.IF)
Begin = Instruction(Opcode.BEGIN)
End = Instruction(Opcode.END)


Shape = Tuple[Instruction, ...]


def as_shape(instructions: Iterable[Instruction]) -> Shape:
    """Freeze ``instructions`` into a hashable shape."""

    return tuple(instructions)


def format_shape(instructions: Iterable[Instruction]) -> str:
    return ", ".join(instruction.format() for instruction in instructions)
