"""Console front end: parse the command line and play one game in the terminal."""

import argparse
import logging
import sys
from typing import Callable, List, Optional, Tuple

from tictactoe.config import Config, load_config
from tictactoe.core.board import MAX_DIMENSION, MIN_DIMENSION, Board
from tictactoe.core.search import SearchEngine
from tictactoe.errors import ConfigurationError
from tictactoe.game import Game
from tictactoe.players import ComputerPlayer, HumanPlayer, Player

logger = logging.getLogger(__name__)

USAGE = (
    "Usage: tictactoe [X] [X] [N]\n"
    " where X is one of {h, H, c, C} (human or computer, default human)\n"
    " and N is the board dimension (default 3, range [3, 10])"
)

HUMAN_TOKENS = ("h", "H")
COMPUTER_TOKENS = ("c", "C")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="tictactoe", usage=USAGE, add_help=True)
    ap.add_argument("tokens", nargs="*", help="player selectors (h/c) and board dimension")
    ap.add_argument("--depth", type=int, default=None, help="search depth limit in plies (0 = unlimited)")
    ap.add_argument("--workers", type=int, default=None, help="processes used to split the root search")
    ap.add_argument("--config", type=str, default=None, help="TOML config file")
    ap.add_argument("--log-level", type=str, default=None, help="DEBUG, INFO, WARNING, ...")
    ap.add_argument("--trace", action="store_true", help="log every search node at DEBUG level")
    return ap


def parse_tokens(tokens: List[str], cfg: Config) -> Tuple[List[str], int]:
    """Split positional tokens into player selectors and a dimension.

    Tokens may appear in any order; the first selector is X, the second O.
    """
    selectors: List[str] = []
    dimension = cfg.board.dimension
    for token in tokens:
        if token in HUMAN_TOKENS or token in COMPUTER_TOKENS:
            if len(selectors) == 2:
                raise ConfigurationError(f"Too many player selectors: {token!r}")
            selectors.append(token.lower())
            continue
        try:
            dimension = int(token)
        except ValueError:
            raise ConfigurationError(f"Unrecognized argument: {token!r}") from None
        if not MIN_DIMENSION <= dimension <= MAX_DIMENSION:
            raise ConfigurationError(
                f"Dimension outside of range [{MIN_DIMENSION}, {MAX_DIMENSION}]: {dimension}"
            )
    defaults = [cfg.ui.x_player, cfg.ui.o_player]
    while len(selectors) < 2:
        selectors.append(defaults[len(selectors)].lower())
    return selectors, dimension


def make_player(selector: str, engine: SearchEngine, trace: Optional[logging.Logger],
                input_fn: Callable[[str], str], output_fn: Callable[[str], None]) -> Player:
    if selector in HUMAN_TOKENS:
        return HumanPlayer(input_fn=input_fn, output_fn=output_fn)
    if selector in COMPUTER_TOKENS:
        return ComputerPlayer(engine, trace=trace)
    raise ConfigurationError(f"Unknown player selector: {selector!r}")


def configure_logging(level_name: str) -> None:
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown log level: {level_name!r}")
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def main(argv: Optional[List[str]] = None,
         input_fn: Callable[[str], str] = input,
         output_fn: Callable[[str], None] = print) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = load_config(args.config)
        if args.depth is not None:
            cfg.search.depth_limit = args.depth or None
        if args.workers is not None:
            cfg.search.workers = args.workers
        configure_logging(args.log_level or cfg.log_level)
        selectors, dimension = parse_tokens(args.tokens, cfg)
        cfg.board.dimension = dimension
        cfg.validate()

        engine = SearchEngine(depth_limit=cfg.search.depth_limit, workers=cfg.search.workers)
        trace = logging.getLogger("tictactoe.trace") if args.trace else None
        players = [make_player(s, engine, trace, input_fn, output_fn) for s in selectors]
        board = Board(dimension, score_per_mark=cfg.board.score_per_mark)
    except ConfigurationError as e:
        output_fn(str(e))
        output_fn(USAGE)
        return 1

    game = Game(players[0], players[1], board=board)
    logger.info("starting %dx%d game: X=%s O=%s depth=%s", dimension, dimension,
                selectors[0], selectors[1], cfg.search.depth_limit)

    result = game.play(display=lambda b: output_fn(b.render()))
    output_fn(str(result))
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
