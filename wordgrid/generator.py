from __future__ import annotations

import logging
import random
from collections.abc import Iterable
from dataclasses import dataclass, field

from wordgrid.grid import Grid
from wordgrid.metrics import StageTimer
from wordgrid.trie import Trie, build_trie, load_trie

logger = logging.getLogger("wordgrid")


@dataclass
class GenerationResult:
    """One generation attempt: the candidate pool and the cropped grid built from it."""

    letters: str
    candidates: list[str]
    grid: Grid = field(repr=False)

    @property
    def placed_count(self) -> int:
        return self.grid.placed_count

    @property
    def requested_count(self) -> int:
        return len(self.candidates)

    @property
    def complete(self) -> bool:
        return self.placed_count == self.requested_count

    @property
    def key(self) -> str:
        return self.grid.render()

    def to_dict(self) -> dict:
        return {
            "letters": self.letters,
            "candidates": self.candidates,
            "requested_count": self.requested_count,
            "placed_count": self.placed_count,
            "complete": self.complete,
            **self.grid.to_dict(),
        }


class CrosswordGenerator:
    """Owns a dictionary trie and produces independent grids from letter bags."""

    def __init__(self, trie: Trie, rng: random.Random | None = None, size_factor: int = 2, max_words: int = 0):
        self.trie = trie
        self.rng = rng if rng is not None else random.Random()
        self.size_factor = size_factor
        self.max_words = max_words

    @classmethod
    def from_words(cls, words: Iterable[str], **kwargs) -> CrosswordGenerator:
        return cls(build_trie(words), **kwargs)

    @classmethod
    def from_file(cls, path: str, min_length: int = 2, **kwargs) -> CrosswordGenerator:
        trie = load_trie(path, min_length)
        logger.info("Loaded %d words from %s", len(trie), path)
        return cls(trie, **kwargs)

    def candidate_words(self, letters: str, shuffle: bool = True) -> list[str]:
        words = self.trie.make_words(letters, shuffle=shuffle, rng=self.rng)
        if self.max_words > 0:
            words = words[:self.max_words]
        return words

    def new_grid(self, letters: str) -> Grid:
        # No candidate is longer than the bag, so the first word always fits
        size = max(len(letters) * self.size_factor, len(letters), 1)
        return Grid(size, size, rng=self.rng)

    def generate(self, letters: str, shuffle: bool = True, timer: StageTimer | None = None) -> GenerationResult:
        """Run one attempt: enumerate candidates, fill a fresh grid, crop it.

        Pass a ``timer`` to collect per-stage timings and word counts.
        """
        if timer is None:
            timer = StageTimer()
        letters = letters.upper()

        with timer.stage("candidates"):
            candidates = self.candidate_words(letters, shuffle)
        timer.count("candidate_count", len(candidates))

        with timer.stage("fill"):
            grid = self.new_grid(letters)
            grid.fill(candidates)
        timer.count("placed_count", grid.placed_count)

        with timer.stage("crop"):
            grid.crop()

        logger.debug("Generated %dx%d grid from %s: %d/%d words placed",
                     grid.width, grid.height, letters, grid.placed_count, len(candidates))
        return GenerationResult(letters, candidates, grid)
