from __future__ import annotations

import logging
import random

import numpy as np

from wordgrid.models import BLOCKED, EMPTY, Direction, Placement
from wordgrid.search import find_placements

logger = logging.getLogger("wordgrid")


class Grid:
    """A fixed-size crossword grid filled greedily from a pool of words.

    Cells live in a (height, width) array of single characters: ``EMPTY``,
    ``BLOCKED`` or a letter. Reads outside the grid see ``BLOCKED`` and writes
    outside it are ignored, so the border behaves like a wall of blocked cells.
    """

    def __init__(self, width: int, height: int, rng: random.Random | None = None):
        self.cells = np.full((max(height, 0), max(width, 0)), EMPTY, dtype="<U1")
        self.rng = rng if rng is not None else random.Random()
        self.placements: list[Placement] = []
        self.used_words: set[str] = set()

    @property
    def width(self) -> int:
        return self.cells.shape[1]

    @property
    def height(self) -> int:
        return self.cells.shape[0]

    @property
    def placed_count(self) -> int:
        return len(self.placements)

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_cell_letter(self, x: int, y: int) -> str:
        if not self._in_bounds(x, y):
            return BLOCKED
        return str(self.cells[y, x])

    def set_cell_letter(self, x: int, y: int, ch: str):
        if self._in_bounds(x, y):
            self.cells[y, x] = ch

    def block(self, x: int, y: int):
        self.set_cell_letter(x, y, BLOCKED)

    def clear_grid(self):
        self.cells[self.cells != BLOCKED] = EMPTY
        self.placements = []
        self.used_words.clear()

    def place(self, placement: Placement):
        """Commit a placement: write its letters and record it."""
        for (x, y), ch in zip(placement.cells, placement.word):
            self.set_cell_letter(x, y, ch)
        self.placements.append(placement)
        self.used_words.add(placement.word)
        logger.debug("Placed %s", placement.signature)

    # Fill

    def fill(self, word_pool: list[str]) -> list[Placement]:
        self.clear_grid()
        word_pool = [w for w in word_pool if w]
        if not word_pool:
            return self.placements

        first_word, remaining = self._choose_first_word(word_pool)
        self._place_first_word(first_word)

        for word in remaining:
            if word in self.used_words:
                continue
            candidates = find_placements(self, word, self.placements)
            if not candidates:
                logger.debug("No slot for %s", word)
                continue
            self.place(candidates[0])

        logger.debug("Placed %d of %d words", len(self.placements), len(word_pool))
        return self.placements

    def _choose_first_word(self, word_pool: list[str]) -> tuple[str, list[str]]:
        # sorted() is stable, so ties keep pool order
        first_word = sorted(word_pool, key=len, reverse=True)[0]
        remaining = [w for w in word_pool if w != first_word]
        return first_word, remaining

    def _place_first_word(self, word: str) -> Placement:
        if self.rng.random() < 0.5:
            direction = Direction.HORIZONTAL
            x, y = (self.width - len(word)) // 2, self.height // 2
        else:
            direction = Direction.VERTICAL
            x, y = self.width // 2, (self.height - len(word)) // 2

        placement = Placement.span(word, direction, x, y)
        self.place(placement)
        return placement

    # Output

    def crop(self) -> list[Placement]:
        """Shrink the grid to the bounding box of its non-empty cells.

        Blocked cells count as content. An entirely empty grid keeps a single
        cell at the origin. Placement coordinates move with the box.
        """
        occupied = self.cells != EMPTY
        rows = np.flatnonzero(occupied.any(axis=1))
        cols = np.flatnonzero(occupied.any(axis=0))
        if rows.size == 0:
            top = bottom = left = right = 0
        else:
            top, bottom = int(rows[0]), int(rows[-1])
            left, right = int(cols[0]), int(cols[-1])

        self.cells = self.cells[top:bottom + 1, left:right + 1].copy()
        logger.debug("Cropped to %dx%d at offset (%d, %d)", self.width, self.height, left, top)

        if left or top:
            for placement in self.placements:
                placement.cells = placement.shifted(-left, -top).cells
        return self.placements

    def render(self) -> str:
        return "\n".join(" ".join(row) for row in self.cells.tolist())

    def __str__(self) -> str:
        return self.render()

    def clue_numbers(self) -> dict[tuple[int, int], int]:
        """Number the start cells in placement order; shared starts share a number."""
        numbers: dict[tuple[int, int], int] = {}
        for placement in self.placements:
            if placement.start not in numbers:
                numbers[placement.start] = len(numbers) + 1
        return numbers

    def to_dict(self) -> dict:
        return {
            "width": self.width,
            "height": self.height,
            "placements": [p.to_dict() for p in self.placements],
            "text": self.render(),
        }
