"""Outline node definitions for Karel programs.

The interpreter never builds a tree: it finds blocks by scanning forward
from the program counter. These classes are produced only by the static
checker in `karel.parser.parse_outline`, which describes the block
structure of a whole program. Every position is an index into the
normalized instruction sequence.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .types import BlockKind, Command


@dataclass
class Node:
    """Base class for all outline nodes."""
    pass


@dataclass
class Instruction(Node):
    command: Command
    argument: Optional[str]  # procedure name for `call`
    position: int


@dataclass
class Block(Node):
    kind: BlockKind
    argument: Optional[str]  # predicate for if/while, count for repeat
    position: int  # opener line
    end: int  # matching terminator line
    body: List[Node] = field(default_factory=list)


@dataclass
class Procedure(Node):
    name: str
    position: int
    end: int
    body: List[Node] = field(default_factory=list)


@dataclass
class Outline(Node):
    procedures: List[Procedure]

    def find(self, name: str) -> Optional[Procedure]:
        """Return the last top-level procedure with the given name."""
        found = None
        for procedure in self.procedures:
            if procedure.name == name:
                found = procedure
        return found
