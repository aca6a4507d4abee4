from __future__ import annotations

from wordgrid.models import BLOCKED, EMPTY, Direction, Placement


def _within_bounds(grid, candidate: Placement) -> bool:
    return all(0 <= x < grid.width and 0 <= y < grid.height for x, y in candidate.cells)


def _is_compatible(grid, candidate: Placement) -> bool:
    """Every cell is either empty or already holds the letter we would write."""
    for (x, y), ch in zip(candidate.cells, candidate.word):
        cell = grid.get_cell_letter(x, y)
        if cell != EMPTY and cell != ch:
            return False
    return True


def _has_no_side_contact(grid, candidate: Placement) -> bool:
    """Newly written cells must not touch letters on either side across the word."""
    px, py = candidate.direction.perpendicular.step
    for x, y in candidate.cells:
        if grid.get_cell_letter(x, y) != EMPTY:
            continue
        for nx, ny in ((x - px, y - py), (x + px, y + py)):
            if grid.get_cell_letter(nx, ny) not in (EMPTY, BLOCKED):
                return False
    return True


def _has_clear_ends(grid, candidate: Placement) -> bool:
    dx, dy = candidate.direction.step
    (sx, sy), (ex, ey) = candidate.cells[0], candidate.cells[-1]
    before = grid.get_cell_letter(sx - dx, sy - dy)
    after = grid.get_cell_letter(ex + dx, ey + dy)
    return before in (EMPTY, BLOCKED) and after in (EMPTY, BLOCKED)


def _is_nested(candidate: Placement, placements: list[Placement]) -> bool:
    cells = candidate.cell_set()
    for placed in placements:
        if placed.direction is not candidate.direction:
            continue
        other = placed.cell_set()
        if cells <= other or other <= cells:
            return True
    return False


def find_placements(grid, word: str, placements: list[Placement] | None = None) -> list[Placement]:
    """List every legal way to cross ``word`` through an already placed word.

    Candidates come out in a fixed order: existing placements in list order,
    then the placed word's letter index, then ``word``'s letter index. Each
    candidate runs perpendicular to the word it crosses and must fit the grid,
    agree with letters already there, leave no side contact on new cells, have
    open ends and not nest inside (or around) a collinear placement.
    """
    if placements is None:
        placements = grid.placements
    if not word:
        return []

    candidates: list[Placement] = []
    for placed in placements:
        direction: Direction = placed.direction.perpendicular
        dx, dy = direction.step
        for i, placed_ch in enumerate(placed.word):
            px, py = placed.cells[i]
            for j, ch in enumerate(word):
                if placed_ch != ch:
                    continue

                candidate = Placement.span(word, direction, px - j * dx, py - j * dy)
                if not _within_bounds(grid, candidate):
                    continue
                if not _is_compatible(grid, candidate):
                    continue
                if not _has_no_side_contact(grid, candidate):
                    continue
                if not _has_clear_ends(grid, candidate):
                    continue
                if _is_nested(candidate, placements):
                    continue

                candidates.append(candidate)

    return candidates
