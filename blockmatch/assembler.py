"""Tiny textual assembler for block programs.

Programs are written as mnemonics separated by commas, semicolons or line
breaks, for example ``begin, if, push 2, push 3, end, end``.  ``#`` starts a
comment that runs to the end of the line.  ``push`` accepts its operand either
separated by whitespace or in call form (``push(2)``) and understands decimal
and ``0x`` prefixed hexadecimal values.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from .errors import AssemblyError
from .instruction import Instruction, Opcode, Push, format_shape


_SEPARATORS = re.compile(r"[,;\n]")
_CALL_FORM = re.compile(r"^(?P<name>[A-Za-z]+)\s*\(\s*(?P<operand>[^)]*)\)$")

_OPERAND = re.compile(r"0[xX][0-9a-fA-F]+|[0-9]+", re.ASCII)

_MNEMONICS = {opcode.value: opcode for opcode in Opcode}


def _parse_operand(token: str) -> int:
    text = token.strip()
    if not text:
        raise ValueError("empty operand")
    if not _OPERAND.fullmatch(text):
        raise ValueError(f"malformed operand {text!r}")
    if text.lower().startswith("0x"):
        return int(text, 16)
    return int(text, 10)


def parse_instruction(token: str, position: Optional[int] = None) -> Instruction:
    """Convert a single mnemonic such as ``push 3`` or ``End`` into an instruction."""

    text = token.strip()
    match = _CALL_FORM.match(text)
    if match is not None:
        name, operand = match.group("name"), match.group("operand")
    else:
        parts = text.split()
        if not parts:
            raise AssemblyError("empty instruction", position=position)
        name = parts[0]
        operand = " ".join(parts[1:]) or None
        if len(parts) > 2:
            raise AssemblyError("too many operands", token=token, position=position)

    opcode = _MNEMONICS.get(name.lower())
    if opcode is None:
        raise AssemblyError("unknown mnemonic", token=token, position=position)

    if opcode is Opcode.PUSH:
        if operand is None:
            raise AssemblyError("push requires an operand", token=token, position=position)
        try:
            return Push(_parse_operand(operand))
        except ValueError as exc:
            raise AssemblyError(f"invalid push operand: {exc}", token=token, position=position) from exc

    if operand:
        raise AssemblyError(f"{opcode.value} does not take an operand", token=token, position=position)
    return Instruction(opcode)


def _strip_comments(text: str) -> str:
    return "\n".join(line.split("#", 1)[0] for line in text.splitlines())


def assemble(text: str) -> List[Instruction]:
    """Assemble ``text`` into a list of instructions."""

    program: List[Instruction] = []
    tokens = [token.strip() for token in _SEPARATORS.split(_strip_comments(text)) if token.strip()]
    for position, token in enumerate(tokens):
        program.append(parse_instruction(token, position))
    return program


def assemble_tokens(tokens: Iterable[str]) -> List[Instruction]:
    """Assemble a pre-split sequence of mnemonics."""

    program: List[Instruction] = []
    for position, token in enumerate(tokens):
        if not isinstance(token, str):
            raise AssemblyError("instruction tokens must be strings", token=repr(token), position=position)
        program.append(parse_instruction(token, position))
    return program


def disassemble(program: Iterable[Instruction]) -> str:
    return format_shape(program)
