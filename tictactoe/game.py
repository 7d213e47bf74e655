import logging
from typing import Callable, Optional

from tictactoe.core.board import Board, GameResult, Mark
from tictactoe.errors import GameOverError
from tictactoe.players import Player

logger = logging.getLogger(__name__)


class Game:
    """Alternates two players over one authoritative board.

    X moves on even plies, O on odd plies.
    """

    def __init__(self, x_player: Player, o_player: Player, dimension: int = 3,
                 board: Optional[Board] = None):
        self.board = board if board is not None else Board(dimension)
        self.players = (x_player, o_player)
        self.ply_number = self.board.move_count
        self.result = self.board.check_results()

    @staticmethod
    def mark_for_ply(ply: int) -> Mark:
        return Mark.X if ply % 2 == 0 else Mark.O

    @property
    def current_mark(self) -> Mark:
        return self.mark_for_ply(self.ply_number)

    @property
    def current_player(self) -> Player:
        return self.players[self.ply_number % 2]

    def execute_ply(self) -> GameResult:
        if self.result.is_terminal:
            raise GameOverError(f"Game already finished: {self.result}")

        mark = self.current_mark
        move = self.current_player.get_move(self.board, mark)
        self.board.apply_move(move, mark)

        self.result = self.board.check_results()
        logger.info("ply %d: %s -> %d,%d (%s)", self.ply_number, mark, move.row, move.col, self.result)
        self.ply_number += 1
        return self.result

    def play(self, display: Optional[Callable[[Board], None]] = None) -> GameResult:
        """Run plies until the game ends, showing the board before each one and at the end."""
        while not self.result.is_terminal:
            if display is not None:
                display(self.board)
            self.execute_ply()
        if display is not None:
            display(self.board)
        return self.result

    def display(self) -> None:
        print(self.board)
