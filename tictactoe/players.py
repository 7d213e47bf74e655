"""Move sources: a console human and the negamax-driven computer."""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

from tictactoe.core.board import Board, Mark, Move
from tictactoe.core.search import SearchEngine
from tictactoe.errors import SearchInvariantError

logger = logging.getLogger(__name__)


class Player(ABC):
    """Anything that can choose a move for ``mark`` on ``board``."""

    @abstractmethod
    def get_move(self, board: Board, mark: Mark) -> Move:
        pass


class HumanPlayer(Player):
    """Reads a row and a column from the console until they form a legal move."""

    def __init__(self, input_fn: Callable[[str], str] = input,
                 output_fn: Callable[[str], None] = print):
        self.input_fn = input_fn
        self.output_fn = output_fn

    def read_int_with_prompt(self, prompt: str) -> int:
        # Malformed input is discarded and the same prompt repeated.
        while True:
            text = self.input_fn(prompt)
            try:
                return int(text.strip())
            except ValueError:
                continue

    def get_move(self, board: Board, mark: Mark) -> Move:
        while True:
            move = Move(self.read_int_with_prompt("Row: "), self.read_int_with_prompt("Col: "))
            if board.is_valid_move(move):
                return move
            self.output_fn("Invalid move")


class ComputerPlayer(Player):
    """Plays the negamax engine's choice, searched on a private copy of the board."""

    def __init__(self, engine: Optional[SearchEngine] = None,
                 trace: Optional[logging.Logger] = None):
        self.engine = engine or SearchEngine()
        self.trace = trace

    def get_move(self, board: Board, mark: Mark) -> Move:
        scratch = board.copy()
        result = self.engine.search(scratch, mark, trace=self.trace)
        if result.move is None:
            raise SearchInvariantError(
                f"Search for {mark!s} finished without a move on a board with "
                f"{board.dimension ** 2 - board.move_count} empty cells"
            )
        logger.debug("%s plays %s (score %s, %d nodes)", mark, tuple(result.move), result.score, result.nodes)
        return result.move
