"""Core game components: board and negamax search."""

from .board import Board, GameResult, Mark, Move, MAX_SCORE
from .search import SearchEngine, SearchResult
