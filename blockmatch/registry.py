"""Registry of known block shapes."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence

from .assembler import assemble, assemble_tokens
from .errors import AssemblyError
from .instruction import Instruction, Shape, as_shape, format_shape


logger = logging.getLogger(__name__)


class BlockRegistry:
    """Resolve block shapes to their identifier in the registry.

    Identifiers are the positions of the shapes in the iterable used to build
    the registry.  Shapes are frozen into tuples of instructions and used
    directly as dictionary keys, so two blocks with the same content compare
    equal regardless of where they were found.  Lookups are exact: a shape
    that is a prefix, suffix or near miss of a known entry does not match.

    The registry never validates the nesting of its shapes and is never
    mutated after construction, which makes a single instance safe to share
    between scans.
    """

    def __init__(self, shapes: Iterable[Sequence[Instruction]] = ()) -> None:
        self._shapes: List[Shape] = [as_shape(shape) for shape in shapes]
        self._index: Dict[Shape, int] = {}
        for identifier, shape in enumerate(self._shapes):
            previous = self._index.get(shape)
            if previous is not None:
                logger.warning(
                    "duplicate block shape [%s]: entry %d replaces entry %d",
                    format_shape(shape),
                    identifier,
                    previous,
                )
            self._index[shape] = identifier
        logger.debug("block registry built with %d shapes", len(self._shapes))

    @classmethod
    def load(cls, path: Path) -> "BlockRegistry":
        """Load a registry from a JSON block definition file.

        The document is either a list of shapes or an object with a
        ``blocks`` list.  Each shape is an assembler string such as
        ``"if, push 2, end"`` or a list of mnemonic strings.  A directory is
        resolved to its ``known_blocks.json`` and a missing file yields an
        empty registry.
        """

        if path.is_dir():
            path = path / "known_blocks.json"

        if not path.exists():
            logger.warning("block registry %s not found, using an empty registry", path)
            return cls()

        try:
            data = json.loads(path.read_text("utf-8"))
        except UnicodeDecodeError as exc:
            raise AssemblyError(f"block registry {path} is not valid UTF-8: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise AssemblyError(f"block registry {path} is not valid JSON: {exc}") from exc

        return cls.from_json(data)

    @classmethod
    def from_json(cls, data: Any) -> "BlockRegistry":
        if isinstance(data, Mapping):
            entries = data.get("blocks")
            if entries is None:
                raise AssemblyError("block registry object must contain a 'blocks' list")
        else:
            entries = data
        if not isinstance(entries, list):
            raise AssemblyError("block registry entries must be a list")

        shapes: List[List[Instruction]] = []
        for index, entry in enumerate(entries):
            if isinstance(entry, str):
                shape = assemble(entry)
            elif isinstance(entry, list):
                shape = assemble_tokens(entry)
            else:
                raise AssemblyError(f"block registry entry {index} must be a string or a list")
            if not shape:
                raise AssemblyError(f"block registry entry {index} is empty")
            shapes.append(shape)
        return cls(shapes)

    def lookup(self, shape: Sequence[Instruction]) -> Optional[int]:
        """Return the identifier of the entry equal to ``shape``."""

        return self._index.get(as_shape(shape))

    def shape(self, identifier: int) -> Shape:
        return self._shapes[identifier]

    def __contains__(self, shape: object) -> bool:
        if not isinstance(shape, (tuple, list)):
            return False
        return as_shape(shape) in self._index

    def __iter__(self) -> Iterator[Shape]:
        return iter(self._shapes)

    def __len__(self) -> int:
        return len(self._shapes)

    def __repr__(self) -> str:
        return f"BlockRegistry({len(self._shapes)} shapes)"
