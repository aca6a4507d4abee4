from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

EMPTY = "_"
BLOCKED = "#"


class Direction(str, Enum):
    HORIZONTAL = "H"
    VERTICAL = "V"

    @property
    def perpendicular(self) -> Direction:
        return Direction.VERTICAL if self is Direction.HORIZONTAL else Direction.HORIZONTAL

    @property
    def step(self) -> tuple[int, int]:
        return (1, 0) if self is Direction.HORIZONTAL else (0, 1)


@dataclass
class Placement:
    """A word laid on the grid: its direction and the cells it occupies, in order."""

    word: str
    direction: Direction
    cells: list[tuple[int, int]] = field(default_factory=list)

    @classmethod
    def span(cls, word: str, direction: Direction, x: int, y: int) -> Placement:
        dx, dy = direction.step
        cells = [(x + k * dx, y + k * dy) for k in range(len(word))]
        return cls(word, direction, cells)

    @property
    def start(self) -> tuple[int, int]:
        return self.cells[0]

    @property
    def signature(self) -> tuple[str, Direction, tuple[int, int]]:
        return (self.word, self.direction, self.start)

    def cell_set(self) -> set[tuple[int, int]]:
        return set(self.cells)

    def shifted(self, dx: int, dy: int) -> Placement:
        return Placement(self.word, self.direction, [(x + dx, y + dy) for x, y in self.cells])

    def to_dict(self) -> dict:
        return {
            "word": self.word,
            "direction": self.direction.value,
            "cells": [[x, y] for x, y in self.cells],
        }
