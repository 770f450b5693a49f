"""A grid world for running Karel programs.

Coordinates are 1-based with (1, 1) in the bottom-left corner; north is
+y and east is +x. The border of the grid is always walled.
"""

import json
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from karel.environment import Environment
from karel.errors import ActionError, QueryError
from karel.types import Action, Direction, Query, direction_from_name, step

Cell = Tuple[int, int]

ROBOT_GLYPHS = {
    Direction.NORTH: '^',
    Direction.EAST: '>',
    Direction.SOUTH: 'v',
    Direction.WEST: '<',
}


class World(Environment):
    def __init__(self, width: int, height: int, x: int = 1, y: int = 1,
                 facing: Direction = Direction.EAST,
                 beepers: Optional[Dict[Cell, int]] = None,
                 walls: Iterable[Tuple[int, int, Direction]] = (),
                 bag: Optional[int] = None):
        if width < 1 or height < 1:
            raise ValueError('world must be at least 1x1')
        self.width = width
        self.height = height
        if not self.contains((x, y)):
            raise ValueError(f'robot position {(x, y)} is outside the world')
        self.x = x
        self.y = y
        self.facing = facing
        self.beepers: Dict[Cell, int] = {}
        for cell, count in (beepers or {}).items():
            if not self.contains(cell):
                raise ValueError(f'beeper position {cell} is outside the world')
            if count > 0:
                self.beepers[cell] = count
        self.walls: Set[Tuple[int, int, Direction]] = set()
        for wx, wy, side in walls:
            self.add_wall(wx, wy, side)
        self.bag = bag  # None means unlimited
        self.history: List[Action] = []

    @property
    def position(self) -> Cell:
        return self.x, self.y

    def contains(self, cell: Cell) -> bool:
        return 1 <= cell[0] <= self.width and 1 <= cell[1] <= self.height

    def add_wall(self, x: int, y: int, side: Direction):
        if not self.contains((x, y)):
            raise ValueError(f'wall position {(x, y)} is outside the world')
        self.walls.add((x, y, side))
        nx, ny = step(x, y, side)
        if self.contains((nx, ny)):
            self.walls.add((nx, ny, side.opposite()))

    def wall_ahead(self) -> bool:
        if (self.x, self.y, self.facing) in self.walls:
            return True
        return not self.contains(step(self.x, self.y, self.facing))

    def beepers_here(self) -> int:
        return self.beepers.get(self.position, 0)

    # Environment interface
    def action(self, kind: Action) -> None:
        if kind is Action.MOVE:
            if self.wall_ahead():
                raise ActionError(f'wall in front of robot at {self.position}')
            self.x, self.y = step(self.x, self.y, self.facing)
        elif kind is Action.TURN_LEFT:
            self.facing = self.facing.left()
        elif kind is Action.REMOVE_ITEM:
            count = self.beepers_here()
            if count == 0:
                raise ActionError(f'no beeper at {self.position}')
            if count == 1:
                del self.beepers[self.position]
            else:
                self.beepers[self.position] = count - 1
            if self.bag is not None:
                self.bag += 1
        elif kind is Action.PLACE_ITEM:
            if self.bag is not None:
                if self.bag == 0:
                    raise ActionError('beeper bag is empty')
                self.bag -= 1
            self.beepers[self.position] = self.beepers_here() + 1
        else:
            raise ActionError(f'unknown action {kind!r}')
        self.history.append(kind)

    def query(self, kind: Query) -> bool:
        if kind.kind == 'WallInFrontOfMe':
            return self.wall_ahead()
        if kind.kind == 'ItemHere':
            return self.beepers_here() > 0
        if kind.kind == 'Direction' and kind.direction is not None:
            return self.facing is kind.direction
        raise QueryError(f'unknown query {kind!r}')

    def render(self) -> str:
        """Draw the world, north at the top. Beeper counts above 9 show as '*'."""
        rows = []
        for y in range(self.height, 0, -1):
            cells = []
            for x in range(1, self.width + 1):
                if (x, y) == self.position:
                    cells.append(ROBOT_GLYPHS[self.facing])
                    continue
                count = self.beepers.get((x, y), 0)
                if count == 0:
                    cells.append('.')
                elif count > 9:
                    cells.append('*')
                else:
                    cells.append(str(count))
            rows.append(' '.join(cells))
        return '\n'.join(rows)

    @staticmethod
    def from_obj(obj: Dict[str, Any]) -> 'World':
        """Build a world from a decoded JSON description."""
        try:
            robot = obj.get('robot', {})
            beepers = {}
            for entry in obj.get('beepers', []):
                cell = (int(entry['x']), int(entry['y']))
                beepers[cell] = beepers.get(cell, 0) + int(entry.get('count', 1))
            walls = [
                (int(entry['x']), int(entry['y']), direction_from_name(entry['side']))
                for entry in obj.get('walls', [])
            ]
            bag = robot.get('bag')
            return World(
                int(obj['width']),
                int(obj['height']),
                x=int(robot.get('x', 1)),
                y=int(robot.get('y', 1)),
                facing=direction_from_name(robot.get('facing', 'east')),
                beepers=beepers,
                walls=walls,
                bag=None if bag is None else int(bag),
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f'invalid world description: {e}') from e

    @staticmethod
    def load(path: str) -> 'World':
        with open(path, 'r', encoding='utf-8') as f:
            return World.from_obj(json.load(f))
