"""Exception hierarchy shared by the board, search engine, players and CLI."""


class TicTacToeError(Exception):
    """Base class for every error raised by the game."""


class ConfigurationError(TicTacToeError, ValueError):
    """Bad dimension, player selector or search setting.

    Raised before any game state exists; the CLI reports it and exits.
    """


class InvalidMoveError(TicTacToeError, ValueError):
    """A move was applied to (or undone from) an unusable cell.

    The search and the game loop only apply moves that passed
    ``Board.is_valid_move``, so seeing this means a logic defect.
    """


class SearchInvariantError(TicTacToeError, RuntimeError):
    """The search explored legal moves but never recorded a best move."""


class GameOverError(TicTacToeError):
    """A ply was requested after the game already reached a terminal result."""
