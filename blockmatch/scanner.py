"""Stack based block scanner.

:class:`BlockScanner` walks a program once from left to right.  Opening
instructions push their index onto a stack, every ``end`` pops the most
recent opener and the inclusive slice between both positions is looked up in
the :class:`~blockmatch.registry.BlockRegistry`.  Results are therefore
ordered by the position of the closing instruction: inner blocks are reported
before the blocks that contain them.

Malformed nesting is fatal.  An ``end`` without an open block stops the scan
immediately, while blocks that are still open are only known once the whole
program has been consumed and are reported together.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Union

from .errors import EmptyProgram, UnclosedBlocks, UnopenedClose
from .instruction import Instruction, Role
from .registry import BlockRegistry


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlockInfo:
    """Outcome for a single closed block."""

    block_start_idx: int
    block_end_idx: int
    registry_idx: Optional[int] = None

    @property
    def matched(self) -> bool:
        return self.registry_idx is not None

    def span(self) -> range:
        return range(self.block_start_idx, self.block_end_idx + 1)

    def describe(self) -> str:
        status = f"matched #{self.registry_idx}" if self.matched else "not matched"
        return f"block @{self.block_start_idx}..{self.block_end_idx}: {status}"


class BlockScanner:
    """Match the blocks of a program against a shared registry."""

    def __init__(self, registry: BlockRegistry) -> None:
        self.registry = registry

    def scan(self, program: Sequence[Instruction]) -> List[BlockInfo]:
        """Return one :class:`BlockInfo` per closed block in close order."""

        if not program:
            raise EmptyProgram()

        pending: List[int] = []
        results: List[BlockInfo] = []
        for index, instruction in enumerate(program):
            role = instruction.role
            if role is Role.OPEN:
                pending.append(index)
            elif role is Role.CLOSE:
                if not pending:
                    raise UnopenedClose(index)
                start = pending.pop()
                results.append(self._close_block(program, start, index))
            elif role is Role.PAYLOAD:
                continue
            else:  # pragma: no cover - guarded by OPCODE_ROLES
                raise AssertionError(f"unhandled instruction role {role!r}")

        if pending:
            raise UnclosedBlocks(pending)

        logger.debug(
            "scanned %d instructions: %d blocks, %d matched",
            len(program),
            len(results),
            sum(1 for info in results if info.matched),
        )
        return results

    def _close_block(self, program: Sequence[Instruction], start: int, end: int) -> BlockInfo:
        registry_idx = self.registry.lookup(program[start : end + 1])
        logger.debug("block %d..%d closed, registry entry %s", start, end, registry_idx)
        return BlockInfo(block_start_idx=start, block_end_idx=end, registry_idx=registry_idx)


KnownBlocks = Union[BlockRegistry, Iterable[Sequence[Instruction]]]


def find_matches(known_blocks: KnownBlocks, program: Sequence[Instruction]) -> List[BlockInfo]:
    """Find the blocks of ``program`` and match them against ``known_blocks``.

    ``known_blocks`` is either a prepared :class:`BlockRegistry` or any
    iterable of shapes, in which case identifiers are the shape positions.
    The returned list follows the order of the ``end`` instructions, so the
    first entry is the first block to be closed rather than the first to be
    opened.

    Raises :class:`~blockmatch.errors.EmptyProgram`,
    :class:`~blockmatch.errors.UnopenedClose` or
    :class:`~blockmatch.errors.UnclosedBlocks` for malformed programs.
    """

    registry = known_blocks if isinstance(known_blocks, BlockRegistry) else BlockRegistry(known_blocks)
    return BlockScanner(registry).scan(program)
