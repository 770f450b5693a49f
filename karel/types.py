"""Type definitions and helpers for Karel.

This module defines the vocabulary shared by the parser, the interpreter
and environments: the actions and queries an environment understands,
the closed set of commands a source line can start with, the block kinds
with their terminators, and the normalized program representation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class Action(Enum):
    """State-changing requests sent to an environment."""
    TURN_LEFT = 'TurnLeft'
    MOVE = 'Move'
    REMOVE_ITEM = 'RemoveItem'
    PLACE_ITEM = 'PlaceItem'


class Direction(Enum):
    NORTH = 'north'
    EAST = 'east'
    SOUTH = 'south'
    WEST = 'west'

    def left(self) -> 'Direction':
        """Return the direction after a counter-clockwise quarter turn."""
        order = [Direction.NORTH, Direction.WEST, Direction.SOUTH, Direction.EAST]
        return order[(order.index(self) + 1) % 4]

    def opposite(self) -> 'Direction':
        return self.left().left()


@dataclass(frozen=True)
class Query:
    """Represents an observation requested from an environment.

    A query is described by its `kind` (one of 'WallInFrontOfMe',
    'ItemHere' or 'Direction') and, for facing checks, the direction
    asked about. For example, "am I facing north" becomes
    `Query(kind='Direction', direction=Direction.NORTH)`.
    """
    kind: str
    direction: Optional[Direction] = None

    def __repr__(self) -> str:
        if self.direction is None:
            return self.kind
        return f"{self.kind}({self.direction.name.title()})"

    # Convenience constructors
    @staticmethod
    def wall_in_front() -> 'Query':
        return Query('WallInFrontOfMe')

    @staticmethod
    def item_here() -> 'Query':
        return Query('ItemHere')

    @staticmethod
    def facing(direction: Direction) -> 'Query':
        return Query('Direction', direction)


class Command(Enum):
    """Every keyword a normalized line may start with."""
    MOVE = 'move'
    TURN_LEFT = 'turn-left'
    TAKE = 'take'
    PUT = 'put'
    DIE = 'die'
    IF = 'if'
    WHILE = 'while'
    REPEAT = 'repeat'
    CALL = 'call'
    DEF = 'def'
    ENDIF = 'endif'
    ENDWHILE = 'endwhile'
    ENDREPEAT = 'endrepeat'
    ENDDEF = 'enddef'


class BlockKind(Enum):
    IF = 'if'
    DEF = 'def'
    REPEAT = 'repeat'
    WHILE = 'while'

    @property
    def terminator(self) -> Command:
        return BLOCK_ENDS[self]


COMMANDS: Dict[str, Command] = {command.value: command for command in Command}

BLOCK_KINDS: Dict[Command, BlockKind] = {
    Command.IF: BlockKind.IF,
    Command.DEF: BlockKind.DEF,
    Command.REPEAT: BlockKind.REPEAT,
    Command.WHILE: BlockKind.WHILE,
}

BLOCK_ENDS: Dict[BlockKind, Command] = {
    BlockKind.IF: Command.ENDIF,
    BlockKind.DEF: Command.ENDDEF,
    BlockKind.REPEAT: Command.ENDREPEAT,
    BlockKind.WHILE: Command.ENDWHILE,
}

TERMINATORS = frozenset(BLOCK_ENDS.values())

PRIMITIVE_ACTIONS: Dict[Command, Action] = {
    Command.MOVE: Action.MOVE,
    Command.TURN_LEFT: Action.TURN_LEFT,
    Command.TAKE: Action.REMOVE_ITEM,
    Command.PUT: Action.PLACE_ITEM,
}

PREDICATES: Dict[str, Query] = {
    'wall': Query.wall_in_front(),
    'beeper': Query.item_here(),
    'north': Query.facing(Direction.NORTH),
    'south': Query.facing(Direction.SOUTH),
    'east': Query.facing(Direction.EAST),
    'west': Query.facing(Direction.WEST),
}


@dataclass(frozen=True)
class InstructionLine:
    """A normalized source line and its position in the whole program."""
    text: str
    position: int

    @property
    def tokens(self) -> List[str]:
        return self.text.split()

    @property
    def command(self) -> Optional[Command]:
        """Resolve the leading token, or None when it is not a keyword."""
        tokens = self.tokens
        if not tokens:
            return None
        return COMMANDS.get(tokens[0])

    @property
    def argument(self) -> Optional[str]:
        tokens = self.tokens
        return tokens[1] if len(tokens) > 1 else None


@dataclass
class Program:
    """Normalized lines plus the procedure index built over them."""
    lines: List[InstructionLine]
    methods: Dict[str, int] = field(default_factory=dict)

    @property
    def entry_point(self) -> Optional[int]:
        return self.methods.get('main')

    def __len__(self) -> int:
        return len(self.lines)

    def __getitem__(self, position: int) -> InstructionLine:
        return self.lines[position]

    def text(self) -> str:
        """Return the normalized program as newline separated text."""
        return ''.join(line.text + '\n' for line in self.lines)


def direction_from_name(name: str) -> Direction:
    """Parse a direction name such as 'north' or 'N' (case-insensitive)."""
    lowered = name.strip().lower()
    for direction in Direction:
        if lowered in (direction.value, direction.value[0]):
            return direction
    raise ValueError(f'unknown direction {name!r}')


def step(x: int, y: int, direction: Direction) -> Tuple[int, int]:
    """Return the cell next to (x, y) in the given direction."""
    if direction is Direction.NORTH:
        return x, y + 1
    if direction is Direction.SOUTH:
        return x, y - 1
    if direction is Direction.EAST:
        return x + 1, y
    return x - 1, y
