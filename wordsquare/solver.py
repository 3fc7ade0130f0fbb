from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor
from typing import Iterator, Optional

from wordsquare.trie import END_OF_WORD, PrefixDictionary

logger = logging.getLogger("wordsquare")

Coord = tuple[int, int]  # (column, row)
Grid = tuple[tuple[Optional[str], ...], ...]


class InvalidGridSize(ValueError):
    """Raised when the grid size is not a positive integer."""


class DictionaryLengthMismatch(ValueError):
    """Raised when the dictionary holds words of a length other than the grid size."""


def next_coord(coord: Coord, grid_size: int) -> Coord | None:
    """Successor of ``coord`` in traversal order, or None after the last cell.

    Cells are visited by ascending column + row, then ascending column, so
    every cell to the left and every cell above is filled before a cell is
    reached.
    """
    col, row = coord
    if not (0 <= col < grid_size and 0 <= row < grid_size):
        raise ValueError(f"coordinate {coord} is outside a {grid_size}x{grid_size} grid")

    if row > 0 and col + 1 < grid_size:
        # Same anti-diagonal, one column right
        return col + 1, row - 1
    s = col + row + 1
    if s > 2 * (grid_size - 1):
        return None
    # Start of the next anti-diagonal
    first_col = max(0, s - (grid_size - 1))
    return first_col, s - first_col


def traversal_order(grid_size: int) -> Iterator[Coord]:
    coord = (0, 0) if grid_size > 0 else None
    while coord is not None:
        yield coord
        coord = next_coord(coord, grid_size)


def empty_grid(grid_size: int) -> Grid:
    return tuple((None,) * grid_size for _ in range(grid_size))


def _place(grid: Grid, coord: Coord, symbol: str) -> Grid:
    col, row = coord
    cells = grid[row]
    new_row = cells[:col] + (symbol,) + cells[col + 1:]
    return grid[:row] + (new_row,) + grid[row + 1:]


def candidates(grid: Grid, coord: Coord, dictionary: PrefixDictionary) -> list[str]:
    """Symbols that can extend both the row word and the column word at ``coord``."""
    col, row = coord
    row_prefix = grid[row][:col]
    col_prefix = [grid[r][col] for r in range(row)]

    row_poss = dictionary.continuations(row_prefix)
    if row_poss is None:
        return []
    col_poss = dictionary.continuations(col_prefix)
    if col_poss is None:
        return []

    # END_OF_WORD never helps fill a cell: every stored word is grid-length
    common = set(col_poss)
    return [s for s in row_poss if s is not END_OF_WORD and s in common]


def _search(grid: Grid, coord: Coord, dictionary: PrefixDictionary, solutions: list):
    following = next_coord(coord, len(grid))
    for symbol in candidates(grid, coord, dictionary):
        placed = _place(grid, coord, symbol)
        if following is None:
            solutions.append(tuple("".join(cells) for cells in placed))
        else:
            _search(placed, following, dictionary, solutions)


def _solve_branch(grid: Grid, coord: Coord, dictionary: PrefixDictionary) -> list:
    solutions: list = []
    _search(grid, coord, dictionary, solutions)
    return solutions


def _check_inputs(grid_size, dictionary):
    if isinstance(grid_size, bool) or not isinstance(grid_size, int) or grid_size <= 0:
        raise InvalidGridSize(f"grid size must be a positive integer, got {grid_size!r}")
    if not isinstance(dictionary, PrefixDictionary):
        raise TypeError(f"expected a PrefixDictionary, got {type(dictionary).__name__}")
    other = sorted(n for n in dictionary.lengths if n != grid_size)
    if other:
        raise DictionaryLengthMismatch(
            f"dictionary must only hold {grid_size}-letter words, also found lengths {other}"
        )


def solve(grid_size: int, dictionary: PrefixDictionary, workers: int = 1) -> list[tuple[str, ...]]:
    """Enumerate every word square of side ``grid_size``.

    ``dictionary`` must contain only words of length ``grid_size`` (see
    PrefixDictionary.restricted_to_length). Each solution is a tuple of row
    strings. With ``workers > 1`` the first cell's candidates are explored in
    separate processes; the result order is the same either way.
    """
    _check_inputs(grid_size, dictionary)

    grid = empty_grid(grid_size)
    start = (0, 0)
    logger.debug("Solving %dx%d with %d words", grid_size, grid_size, len(dictionary))

    if workers <= 1 or grid_size == 1:
        solutions = _solve_branch(grid, start, dictionary)
    else:
        following = next_coord(start, grid_size)
        branches = [_place(grid, start, symbol) for symbol in candidates(grid, start, dictionary)]
        solutions = []
        with ProcessPoolExecutor(max_workers=workers) as executor:
            for found in executor.map(
                _solve_branch,
                branches,
                [following] * len(branches),
                [dictionary] * len(branches),
            ):
                solutions.extend(found)

    logger.debug("Found %d solutions for %dx%d", len(solutions), grid_size, grid_size)
    return solutions


def is_word_square(grid, dictionary: PrefixDictionary) -> bool:
    """True if every row and column of a filled square grid is a stored word."""
    rows = ["".join(cells) for cells in grid]
    size = len(rows)
    if any(len(r) != size for r in rows):
        return False
    columns = ["".join(r[c] for r in rows) for c in range(size)]
    return all(word in dictionary for word in rows + columns)
