from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set, Tuple

Coord = Tuple[int, int]

BOARD_SIZE = 10
TARGET_SUM = 11
EVEN_FACES = (2, 4, 6, 8, 10)
ODD_FACES = (1, 3, 5, 7, 9)


@dataclass
class BoardState:
    """Mutable 10x10 grid of double-sided tiles.

    Tile data lives in flat lists indexed by ``row * size + col``. A face value of 0
    means that face has been eliminated; it stays 0 for the rest of the round.
    """
    a_sides: List[int]
    b_sides: List[int]
    a_up: List[bool] = field(default_factory=list)
    selected: List[bool] = field(default_factory=list)
    a_side_up: bool = True  # board-wide side last commanded by a flip
    size: int = BOARD_SIZE

    def __post_init__(self) -> None:
        total = self.size * self.size
        if len(self.a_sides) != total or len(self.b_sides) != total:
            raise ValueError(f'Board needs exactly {total} tiles')
        if not self.a_up:
            self.a_up = [True] * total
        if not self.selected:
            self.selected = [False] * total

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[int, int]], size: int = BOARD_SIZE) -> 'BoardState':
        """Builds a board from (a_side, b_side) pairs given in row-major order."""
        items = list(pairs)
        return cls(a_sides=[a for a, _ in items], b_sides=[b for _, b in items], size=size)

    def index(self, r: int, c: int) -> int:
        return r * self.size + c

    def in_bounds(self, coord: Coord) -> bool:
        r, c = coord
        return 0 <= r < self.size and 0 <= c < self.size

    def coords(self) -> Iterable[Coord]:
        """Iterates over all interior coordinates in row-major order."""
        for r in range(self.size):
            for c in range(self.size):
                yield (r, c)

    def faces(self, coord: Coord) -> Tuple[int, int]:
        i = self.index(*coord)
        return self.a_sides[i], self.b_sides[i]

    def pairs(self) -> List[Tuple[int, int]]:
        return list(zip(self.a_sides, self.b_sides))

    def shows_a_side(self, coord: Coord) -> bool:
        return self.a_up[self.index(*coord)]

    def upward_value(self, coord: Coord) -> int:
        """Value on the face currently shown; 0 when eliminated or off the board."""
        if not self.in_bounds(coord):
            return 0
        i = self.index(*coord)
        return self.a_sides[i] if self.a_up[i] else self.b_sides[i]

    def is_eliminated(self, coord: Coord) -> bool:
        return self.upward_value(coord) == 0

    def eliminate_upward(self, coord: Coord) -> None:
        i = self.index(*coord)
        if self.a_up[i]:
            self.a_sides[i] = 0
        else:
            self.b_sides[i] = 0

    def is_selected(self, coord: Coord) -> bool:
        return self.in_bounds(coord) and self.selected[self.index(*coord)]

    def set_selected(self, coord: Coord, value: bool) -> None:
        self.selected[self.index(*coord)] = value

    def set_orientation(self, coord: Coord, show_a_side: bool) -> bool:
        """Sets the shown face unless the tile is selected. Returns whether it applied."""
        i = self.index(*coord)
        if self.selected[i]:
            return False
        self.a_up[i] = show_a_side
        return True

    def is_cleared(self) -> bool:
        return not any(self.a_sides) and not any(self.b_sides)

    def remaining_faces(self) -> int:
        return sum(1 for v in self.a_sides if v) + sum(1 for v in self.b_sides if v)

    def pretty(self, highlight: Optional[Set[Coord]] = None) -> str:
        """Generates a human-readable view of the shown faces."""
        lines: List[str] = []
        marks = highlight or set()
        for r in range(self.size):
            row: List[str] = []
            for c in range(self.size):
                value = self.upward_value((r, c))
                cell = ' .' if value == 0 else f'{value:2d}'
                if self.is_selected((r, c)):
                    cell += '*'
                elif (r, c) in marks:
                    cell += '+'
                else:
                    cell += ' '
                row.append(cell)
            lines.append(''.join(row).rstrip())
        return '\n'.join(lines)
