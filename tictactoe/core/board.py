"""N x N tic-tac-toe board: move rules, heuristic score and result detection."""

import math
from enum import Enum, IntEnum
from functools import lru_cache
from typing import Iterator, List, NamedTuple, Sequence, Tuple

from tictactoe.errors import ConfigurationError, InvalidMoveError

MIN_DIMENSION = 3
MAX_DIMENSION = 10

# A complete line latches the total at +/- MAX_SCORE.
MAX_SCORE = math.inf
SCORE_PER_MARK = 1.0


class Mark(IntEnum):
    """Cell contents. X and O negate into each other."""

    EMPTY = 0
    X = 1
    O = -1

    def __str__(self) -> str:
        return _MARK_SYMBOLS[self]

    @classmethod
    def from_symbol(cls, symbol: str) -> "Mark":
        for mark, sym in _MARK_SYMBOLS.items():
            if sym == symbol.upper() or (mark is cls.EMPTY and symbol in (".", "_")):
                return mark
        raise ValueError(f"Unknown mark symbol: {symbol!r}")


_MARK_SYMBOLS = {Mark.EMPTY: " ", Mark.X: "X", Mark.O: "O"}


class GameResult(Enum):
    ONGOING = "Ongoing"
    DRAW = "Draw"
    X_WIN = "X wins"
    O_WIN = "O wins"

    @property
    def is_terminal(self) -> bool:
        return self is not GameResult.ONGOING

    def __str__(self) -> str:
        return self.value


class Move(NamedTuple):
    row: int
    col: int


def saturating_add(total: float, contribution: float) -> float:
    """Add two scores, latching at +/- MAX_SCORE.

    Once ``total`` has saturated it is returned unchanged, so a later
    opposing complete line cannot cancel it out (inf + -inf is NaN).
    """
    if abs(total) >= MAX_SCORE:
        return total
    total += contribution
    if total >= MAX_SCORE:
        return MAX_SCORE
    if total <= -MAX_SCORE:
        return -MAX_SCORE
    return total


@lru_cache(maxsize=None)
def _lines_for(dimension: int) -> Tuple[Tuple[int, ...], ...]:
    """Flat row-major indices of every row, column and both diagonals."""
    n = dimension
    rows = [tuple(r * n + c for c in range(n)) for r in range(n)]
    cols = [tuple(r * n + c for r in range(n)) for c in range(n)]
    diag = tuple(i * n + i for i in range(n))
    anti = tuple(i * n + (n - 1 - i) for i in range(n))
    return tuple(rows + cols + [diag, anti])


class Board:
    def __init__(self, dimension: int = 3, score_per_mark: float = SCORE_PER_MARK):
        """Create an empty ``dimension`` x ``dimension`` board."""
        if not isinstance(dimension, int) or not MIN_DIMENSION <= dimension <= MAX_DIMENSION:
            raise ConfigurationError(
                f"Dimension outside of range [{MIN_DIMENSION}, {MAX_DIMENSION}]: {dimension!r}"
            )
        self.dimension = dimension
        self.score_per_mark = score_per_mark
        # Row-major; plain ints keep the hot loops free of enum lookups.
        self.squares: List[int] = [Mark.EMPTY.value] * (dimension * dimension)
        self.move_count = 0

    @classmethod
    def from_rows(cls, rows: Sequence[str], score_per_mark: float = SCORE_PER_MARK) -> "Board":
        """Build a board from strings such as ``["XO ", " X ", "  O"]``.

        ``rows[0]`` is row 0. Spaces, dots and underscores are empty cells.
        """
        board = cls(len(rows), score_per_mark)
        for r, line in enumerate(rows):
            if len(line) != board.dimension:
                raise ValueError(f"Row {r} has {len(line)} cells, expected {board.dimension}")
            for c, symbol in enumerate(line):
                mark = Mark.from_symbol(symbol)
                if mark is not Mark.EMPTY:
                    board.apply_move(Move(r, c), mark)
        return board

    def copy(self) -> "Board":
        clone = Board(self.dimension, self.score_per_mark)
        clone.squares = list(self.squares)
        clone.move_count = self.move_count
        return clone

    def _index(self, move: Tuple[int, int]) -> int:
        row, col = move
        return row * self.dimension + col

    def __getitem__(self, move: Tuple[int, int]) -> Mark:
        if not self.is_in_bounds(move):
            raise IndexError(f"Move out of bounds: {tuple(move)}")
        return Mark(self.squares[self._index(move)])

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.dimension == other.dimension and self.squares == other.squares

    # ── Move rules ────────────────────────────────────────────────────────

    def is_in_bounds(self, move: Tuple[int, int]) -> bool:
        row, col = move
        return 0 <= row < self.dimension and 0 <= col < self.dimension

    def is_valid_move(self, move: Tuple[int, int]) -> bool:
        """True if ``move`` is on the board and its cell is empty."""
        if not self.is_in_bounds(move):
            return False
        return self.squares[self._index(move)] == Mark.EMPTY

    def apply_move(self, move: Tuple[int, int], mark: Mark) -> None:
        if not self.is_in_bounds(move):
            raise InvalidMoveError(f"Board.apply_move: out of bounds move {tuple(move)}")
        if mark == Mark.EMPTY:
            raise InvalidMoveError("Board.apply_move: cannot place an empty mark")
        idx = self._index(move)
        if self.squares[idx] != Mark.EMPTY:
            raise InvalidMoveError(f"Board.apply_move: square {tuple(move)} already occupied")
        self.squares[idx] = int(mark)
        self.move_count += 1

    def undo_move(self, move: Tuple[int, int]) -> None:
        """Clear the cell set by the matching ``apply_move``."""
        if not self.is_in_bounds(move):
            raise InvalidMoveError(f"Board.undo_move: out of bounds move {tuple(move)}")
        idx = self._index(move)
        if self.squares[idx] == Mark.EMPTY:
            raise InvalidMoveError(f"Board.undo_move: square {tuple(move)} already empty")
        self.squares[idx] = Mark.EMPTY.value
        self.move_count -= 1

    def is_any_tile_empty(self) -> bool:
        return Mark.EMPTY.value in self.squares

    def empty_moves(self) -> Iterator[Move]:
        """Empty cells in row-major order."""
        n = self.dimension
        for idx, value in enumerate(self.squares):
            if value == Mark.EMPTY:
                yield Move(idx // n, idx % n)

    # ── Scoring & results ─────────────────────────────────────────────────

    def lines(self) -> Tuple[Tuple[int, ...], ...]:
        return _lines_for(self.dimension)

    def line_score(self, line: Sequence[int]) -> float:
        """Score of one line, positive when it favours X."""
        values = [self.squares[i] for i in line]
        x_count = values.count(Mark.X.value)
        o_count = values.count(Mark.O.value)
        if x_count and o_count:
            return 0.0
        if x_count == self.dimension:
            return MAX_SCORE
        if o_count == self.dimension:
            return -MAX_SCORE
        return (x_count - o_count) * self.score_per_mark

    def heuristic_score(self) -> float:
        """Saturating sum of every row, column and diagonal score.

        Positive favours X. A complete line yields +/- MAX_SCORE; lines holding
        both marks are dead and contribute 0.
        """
        total = 0.0
        for line in self.lines():
            total = saturating_add(total, self.line_score(line))
            if abs(total) >= MAX_SCORE:
                break
        return total

    def has_won(self, mark: Mark) -> bool:
        """Direct line-equality win check."""
        value = int(mark)
        return any(all(self.squares[i] == value for i in line) for line in self.lines())

    def check_results(self) -> GameResult:
        score = self.heuristic_score()
        if score >= MAX_SCORE:
            return GameResult.X_WIN
        if score <= -MAX_SCORE:
            return GameResult.O_WIN
        if not self.is_any_tile_empty():
            return GameResult.DRAW
        return GameResult.ONGOING

    # ── Display ───────────────────────────────────────────────────────────

    def render(self) -> str:
        """Text grid, highest row first, with row and column labels."""
        n = self.dimension
        out = []
        for row in range(n - 1, -1, -1):
            cells = "".join(
                f"| {_MARK_SYMBOLS[Mark(self.squares[row * n + col])]} " for col in range(n)
            )
            out.append(f"{row} {cells}|")
        out.append("    " + "   ".join(str(col) for col in range(n)))
        return "\n".join(out) + "\n"

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (f"Board(dimension={getattr(self, 'dimension', None)}, "
                f"move_count={getattr(self, 'move_count', 0)})")
