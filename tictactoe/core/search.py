import logging
import time
from concurrent.futures import ProcessPoolExecutor
from typing import List, NamedTuple, Optional, Tuple

from tictactoe.core.board import MAX_SCORE, Board, Mark, Move
from tictactoe.core.utils import format_info, format_trace
from tictactoe.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_DEPTH_LIMIT = 5


class SearchResult(NamedTuple):
    move: Optional[Move]
    score: float
    nodes: int


def _search_branch(depth_limit: Optional[int], board: Board, mark: Mark) -> Tuple[float, int]:
    """Worker entry point: value of a root child, from ``mark``'s point of view."""
    engine = SearchEngine(depth_limit=depth_limit)
    value = engine.negamax(board, mark, depth=1)
    return value, engine.nodes


class SearchEngine:
    def __init__(self, depth_limit: Optional[int] = DEFAULT_DEPTH_LIMIT, workers: int = 1):
        """
        depth_limit = plies searched below the root before the heuristic score
        stands in for a terminal evaluation; None searches to the end of the game.
        workers > 1 splits the root moves across processes.
        """
        if depth_limit is not None and depth_limit < 1:
            raise ConfigurationError(f"Depth limit must be at least 1: {depth_limit}")
        if workers < 1:
            raise ConfigurationError(f"Worker count must be at least 1: {workers}")
        self.depth_limit = depth_limit
        self.workers = workers
        self.best_move: Optional[Move] = None
        self.nodes = 0

    # Public API
    def search(self, board: Board, mark: Mark, trace: Optional[logging.Logger] = None) -> SearchResult:
        """
        Returns (best_move, score, nodes) for ``mark`` to move.
        The board is mutated during the search and restored before returning;
        callers that own an authoritative board should pass a copy.
        """
        self.best_move = None
        self.nodes = 0
        start_time = time.time()

        if self.workers > 1:
            score = self._search_parallel(board, Mark(mark), trace)
        else:
            score = self.negamax(board, Mark(mark), 0, trace)

        elapsed = time.time() - start_time
        logger.info(format_info(self.depth_limit, score, self.nodes, elapsed, self.best_move))
        return SearchResult(self.best_move, score, self.nodes)

    # -------------------------
    # Core negamax
    # -------------------------
    def _leaf_score(self, board: Board, mark: Mark, depth: int) -> Optional[float]:
        """Score for ``mark`` if this node is not expanded, else None."""
        score = board.heuristic_score() * mark
        if self.depth_limit is not None and depth >= self.depth_limit:
            return score
        if abs(score) >= MAX_SCORE:
            return score
        if not board.is_any_tile_empty():
            return score
        return None

    def negamax(self, board: Board, mark: Mark, depth: int = 0,
                trace: Optional[logging.Logger] = None) -> float:
        """
        Value of ``board`` from ``mark``'s point of view. At depth 0 the move
        achieving it is stored in ``self.best_move``; ties keep the first move
        in row-major order.
        """
        self.nodes += 1
        leaf = self._leaf_score(board, mark, depth)
        if leaf is not None:
            if trace is not None:
                trace.debug(format_trace(depth, mark, None, leaf))
            return leaf

        opponent = Mark(-mark)
        best_value = None

        for move in list(board.empty_moves()):
            board.apply_move(move, mark)
            try:
                value = -self.negamax(board, opponent, depth + 1, trace)
            finally:
                board.undo_move(move)

            if trace is not None:
                trace.debug(format_trace(depth, mark, move, value))

            if best_value is None or value > best_value:
                best_value = value
                if depth == 0:
                    self.best_move = move

        return best_value

    def _search_parallel(self, board: Board, mark: Mark, trace: Optional[logging.Logger]) -> float:
        """Root-split negamax. Every branch runs on its own cloned board."""
        self.nodes += 1
        leaf = self._leaf_score(board, mark, 0)
        if leaf is not None:
            return leaf

        moves: List[Move] = list(board.empty_moves())
        opponent = Mark(-mark)
        best_value = None

        with ProcessPoolExecutor(max_workers=self.workers) as pool:
            futures = []
            for move in moves:
                child = board.copy()
                child.apply_move(move, mark)
                futures.append(pool.submit(_search_branch, self.depth_limit, child, opponent))

            # collected in enumeration order so ties resolve like the sequential search
            for move, future in zip(moves, futures):
                child_value, child_nodes = future.result()
                value = -child_value
                self.nodes += child_nodes
                if trace is not None:
                    trace.debug(format_trace(0, mark, move, value))
                if best_value is None or value > best_value:
                    best_value = value
                    self.best_move = move

        return best_value
