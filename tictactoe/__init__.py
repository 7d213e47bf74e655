"""N-dimensional tic-tac-toe with a negamax computer opponent."""

from tictactoe.core import Board, GameResult, Mark, Move, MAX_SCORE, SearchEngine, SearchResult
from tictactoe.game import Game
from tictactoe.players import ComputerPlayer, HumanPlayer, Player

__version__ = "1.0.0"
