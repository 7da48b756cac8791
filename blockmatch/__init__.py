"""Public package exports for the block matcher."""

from .assembler import assemble, disassemble, parse_instruction
from .errors import AssemblyError, EmptyProgram, MatchError, UnclosedBlocks, UnopenedClose
from .instruction import And, Begin, End, If, Instruction, Not, Opcode, Or, Push, Role
from .registry import BlockRegistry
from .report import MatchSummary, describe_matches, serialize_matches
from .scanner import BlockInfo, BlockScanner, find_matches

__all__ = [
    "Instruction",
    "Opcode",
    "Role",
    "Push",
    "Or",
    "And",
    "Not",
    "If",
    "Begin",
    "End",
    "BlockRegistry",
    "BlockScanner",
    "BlockInfo",
    "find_matches",
    "MatchError",
    "EmptyProgram",
    "UnopenedClose",
    "UnclosedBlocks",
    "AssemblyError",
    "assemble",
    "disassemble",
    "parse_instruction",
    "MatchSummary",
    "describe_matches",
    "serialize_matches",
]
