import random
from pathlib import Path

import pytest

from wordgrid.grid import Grid
from wordgrid.models import BLOCKED, EMPTY, Direction, Placement
from wordgrid.trie import load_trie

DICTIONARY = Path(__file__).resolve().parent.parent / "dictionary.txt"

H = Direction.HORIZONTAL
V = Direction.VERTICAL


class _FixedRandom:
    """Stand-in random source: fixed draw, no-op shuffle."""

    def __init__(self, value: float):
        self.value = value

    def random(self) -> float:
        return self.value

    def shuffle(self, items):
        pass


def test_out_of_bounds_reads_blocked_and_writes_ignored():
    grid = Grid(3, 2)
    assert grid.get_cell_letter(-1, 0) == BLOCKED
    assert grid.get_cell_letter(3, 0) == BLOCKED
    assert grid.get_cell_letter(0, 2) == BLOCKED
    grid.set_cell_letter(5, 5, "X")
    grid.set_cell_letter(-1, -1, "X")
    assert grid.render() == "_ _ _\n_ _ _"


def test_set_and_get_cell():
    grid = Grid(3, 2)
    grid.set_cell_letter(2, 1, "Q")
    assert grid.get_cell_letter(2, 1) == "Q"
    assert grid.get_cell_letter(1, 2) == BLOCKED


def test_clear_grid_keeps_blocked_cells():
    grid = Grid(3, 3)
    grid.block(1, 1)
    grid.place(Placement.span("CAT", H, 0, 0))
    grid.clear_grid()
    assert grid.get_cell_letter(1, 1) == BLOCKED
    assert grid.get_cell_letter(0, 0) == EMPTY
    assert grid.placements == []
    assert grid.used_words == set()


def test_fill_empty_pool():
    grid = Grid(4, 4)
    grid.place(Placement.span("CAT", H, 0, 0))
    assert grid.fill([]) == []
    assert grid.placements == []
    assert grid.get_cell_letter(0, 0) == EMPTY


def test_fill_cats_then_cat():
    grid = Grid(8, 8, rng=_FixedRandom(0.0))
    placements = grid.fill(["CATS", "CAT"])

    assert [p.word for p in placements] == ["CATS", "CAT"]
    assert placements[0].direction is H
    assert placements[0].cells == [(2, 4), (3, 4), (4, 4), (5, 4)]
    # CAT can only cross CATS, never lie along it
    assert placements[1].direction is V
    assert placements[1].cells == [(2, 4), (2, 5), (2, 6)]
    assert grid.placed_count == 2


def test_first_word_vertical_is_centred():
    grid = Grid(8, 8, rng=_FixedRandom(0.9))
    placements = grid.fill(["CATS"])
    assert placements[0].direction is V
    assert placements[0].cells == [(4, 2), (4, 3), (4, 4), (4, 5)]


def test_first_word_is_longest_with_stable_ties():
    grid = Grid(10, 10, rng=_FixedRandom(0.0))
    placements = grid.fill(["AT", "TEA", "SEA", "EAT"])
    assert placements[0].word == "TEA"


def test_remaining_words_keep_pool_order():
    grid = Grid(10, 10, rng=_FixedRandom(0.0))
    placements = grid.fill(["AT", "CATS", "SAT"])
    assert [p.word for p in placements] == ["CATS", "AT", "SAT"]


def test_duplicate_words_placed_once():
    grid = Grid(8, 8, rng=_FixedRandom(0.0))
    placements = grid.fill(["CAT", "CATS", "CAT", "CATS"])
    assert [p.word for p in placements] == ["CATS", "CAT"]


def test_unplaceable_word_is_skipped():
    grid = Grid(8, 8, rng=_FixedRandom(0.0))
    placements = grid.fill(["CATS", "DOG", "SAT"])
    assert [p.word for p in placements] == ["CATS", "SAT"]


def test_fill_resets_previous_solution():
    grid = Grid(8, 8, rng=_FixedRandom(0.0))
    grid.fill(["CATS", "CAT"])
    placements = grid.fill(["DOG"])
    assert [p.word for p in placements] == ["DOG"]
    assert grid.get_cell_letter(2, 5) == EMPTY


def test_crop_example():
    grid = Grid(8, 8, rng=_FixedRandom(0.0))
    grid.fill(["CATS", "CAT"])
    first = grid.placements[0]
    grid.crop()

    assert (grid.width, grid.height) == (4, 3)
    assert grid.render() == "C A T S\nA _ _ _\nT _ _ _"
    # Placements are translated in place
    assert first.cells == [(0, 0), (1, 0), (2, 0), (3, 0)]
    assert grid.placements[1].cells == [(0, 0), (0, 1), (0, 2)]
    assert first.signature == ("CATS", H, (0, 0))


def test_crop_is_idempotent():
    grid = Grid(8, 8, rng=_FixedRandom(0.9))
    grid.fill(["CATS", "CAT", "SAT"])
    grid.crop()
    text, cells = grid.render(), [list(p.cells) for p in grid.placements]
    grid.crop()
    assert grid.render() == text
    assert [p.cells for p in grid.placements] == cells


def test_crop_empty_grid_keeps_one_cell():
    grid = Grid(6, 4)
    grid.crop()
    assert (grid.width, grid.height) == (1, 1)
    assert grid.render() == EMPTY
    grid.crop()
    assert (grid.width, grid.height) == (1, 1)


def test_crop_counts_blocked_cells():
    grid = Grid(6, 6)
    grid.block(1, 1)
    grid.set_cell_letter(4, 3, "A")
    grid.crop()
    assert (grid.width, grid.height) == (4, 3)
    assert grid.render() == "# _ _ _\n_ _ _ _\n_ _ _ A"


def test_clue_numbers_share_start_cells():
    grid = Grid(8, 8, rng=_FixedRandom(0.0))
    grid.fill(["CATS", "CAT", "SAT"])
    numbers = grid.clue_numbers()
    assert numbers[(2, 4)] == 1
    assert sorted(numbers.values()) == list(range(1, len(numbers) + 1))
    assert len(numbers) == len({p.start for p in grid.placements})


def test_to_dict():
    grid = Grid(8, 8, rng=_FixedRandom(0.0))
    grid.fill(["CATS", "CAT"])
    grid.crop()
    data = grid.to_dict()
    assert data["width"] == 4
    assert data["height"] == 3
    assert data["placements"][1] == {"word": "CAT", "direction": "V", "cells": [[0, 0], [0, 1], [0, 2]]}
    assert data["text"] == str(grid)


@pytest.mark.parametrize("seed", range(12))
def test_fill_invariants(seed):
    trie = load_trie(str(DICTIONARY))
    rng = random.Random(seed)
    letters = ["PLANETS", "STREAM", "SEAT", "TONES"][seed % 4]
    pool = trie.make_words(letters, shuffle=True, rng=rng)

    grid = Grid(len(letters) * 2, len(letters) * 2, rng=rng)
    placements = grid.fill(pool)
    assert placements
    assert len(placements[0].word) == max(len(w) for w in pool)

    seen: dict[tuple[int, int], str] = {}
    for p in placements:
        assert len(p.cells) == len(p.word)
        dx, dy = p.direction.step
        for (x0, y0), (x1, y1) in zip(p.cells, p.cells[1:]):
            assert (x1 - x0, y1 - y0) == (dx, dy)
        for (x, y), ch in zip(p.cells, p.word):
            assert seen.setdefault((x, y), ch) == ch
            assert grid.get_cell_letter(x, y) == ch

    for a in placements:
        for b in placements:
            if a is b or a.direction is not b.direction:
                continue
            assert not a.cell_set() <= b.cell_set()

    assert len({p.word for p in placements}) == len(placements)

    width, height = grid.width, grid.height
    grid.crop()
    assert grid.width <= width and grid.height <= height
    lines = grid.render().split("\n")
    assert len(lines) == grid.height
    assert all(len(line.split(" ")) == grid.width for line in lines)
    for p in grid.placements:
        for (x, y), ch in zip(p.cells, p.word):
            assert grid.get_cell_letter(x, y) == ch
