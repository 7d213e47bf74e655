"""
Integration tests for the command-line front end and configuration loading.
"""

import pytest

from interface.cli import USAGE, main, parse_tokens
from tictactoe.config import Config, apply_env_overrides, load_config
from tictactoe.errors import ConfigurationError


class Console:
    def __init__(self, answers=()):
        self.answers = list(answers)
        self.lines = []

    def input(self, prompt):
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)

    def print(self, text=""):
        self.lines.append(str(text))


# ════════════════════════════════════════════════════════════════════════════
#  ARGUMENT PARSING
# ════════════════════════════════════════════════════════════════════════════

class TestParseTokens:
    def setup_method(self):
        self.cfg = Config()

    def test_defaults(self):
        assert parse_tokens([], self.cfg) == (["h", "h"], 3)

    def test_players_and_dimension(self):
        assert parse_tokens(["c", "H", "4"], self.cfg) == (["c", "h"], 4)

    def test_any_order(self):
        assert parse_tokens(["5", "C"], self.cfg) == (["c", "h"], 5)

    def test_config_selectors_fill_missing(self):
        self.cfg.ui.o_player = "c"
        assert parse_tokens(["h"], self.cfg) == (["h", "c"], 3)

    @pytest.mark.parametrize("tokens", [["2"], ["11"], ["-3"], ["x"], ["h", "h", "c"], ["3.5"]])
    def test_configuration_errors(self, tokens):
        with pytest.raises(ConfigurationError):
            parse_tokens(tokens, self.cfg)


# ════════════════════════════════════════════════════════════════════════════
#  CONFIG
# ════════════════════════════════════════════════════════════════════════════

class TestConfig:
    def test_defaults(self):
        cfg = Config()
        assert cfg.board.dimension == 3
        assert cfg.search.depth_limit == 5
        assert cfg.search.workers == 1
        cfg.validate()

    def test_missing_file_gives_defaults(self, tmp_path):
        cfg = Config.load_from_toml(str(tmp_path / "nope.toml"))
        assert cfg == Config()

    def test_load_from_toml(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            'log_level = "DEBUG"\n'
            "[board]\ndimension = 4\nscore_per_mark = 2.5\nunknown = 1\n"
            "[search]\ndepth_limit = 0\n"
            '[ui]\nx_player = "c"\n'
        )
        cfg = Config.load_from_toml(str(path))
        assert cfg.board.dimension == 4
        assert cfg.board.score_per_mark == 2.5
        assert cfg.search.depth_limit is None
        assert cfg.ui.x_player == "c"
        assert cfg.log_level == "DEBUG"
        assert not hasattr(cfg.board, "unknown")

    def test_range_keys_in_file_are_ignored(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[board]\nmin_dimension = 1\nmax_dimension = 12\ndimension = 12\n")
        cfg = Config.load_from_toml(str(path))
        assert cfg.board.dimension == 12
        with pytest.raises(ConfigurationError):
            cfg.validate()

    @pytest.mark.parametrize("body", [
        '[board]\ndimension = "4"\n',
        "[board]\ndimension = true\n",
        "[board]\ndimension = 4.0\n",
        '[board]\nscore_per_mark = "1"\n',
        '[search]\ndepth_limit = "3"\n',
        "[search]\nworkers = 2.5\n",
        "[ui]\nx_player = 1\n",
        "log_level = 10\n",
        "board = 4\n",
        "[board\n",
    ])
    def test_load_rejects_bad_values(self, tmp_path, body):
        path = tmp_path / "config.toml"
        path.write_text(body)
        with pytest.raises(ConfigurationError):
            Config.load_from_toml(str(path))

    def test_integer_score_per_mark_becomes_float(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[board]\nscore_per_mark = 2\n")
        cfg = Config.load_from_toml(str(path))
        assert cfg.board.score_per_mark == 2.0
        assert isinstance(cfg.board.score_per_mark, float)

    def test_env_depth_override(self):
        cfg = apply_env_overrides(Config(), {"TICTACTOE_SEARCH_DEPTH": "3"})
        assert cfg.search.depth_limit == 3
        cfg = apply_env_overrides(Config(), {"TICTACTOE_SEARCH_DEPTH": "0"})
        assert cfg.search.depth_limit is None
        cfg = apply_env_overrides(Config(), {})
        assert cfg.search.depth_limit == 5

    def test_env_depth_must_be_int(self):
        with pytest.raises(ConfigurationError):
            apply_env_overrides(Config(), {"TICTACTOE_SEARCH_DEPTH": "deep"})

    def test_load_config_reads_env_path(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text("[board]\ndimension = 5\n")
        cfg = load_config(environ={"TICTACTOE_CONFIG_TOML": str(path), "TICTACTOE_SEARCH_DEPTH": "2"})
        assert cfg.board.dimension == 5
        assert cfg.search.depth_limit == 2

    def test_validate_rejects_bad_values(self):
        cfg = Config()
        cfg.board.dimension = 12
        with pytest.raises(ConfigurationError):
            cfg.validate()
        cfg = Config()
        cfg.search.depth_limit = -1
        with pytest.raises(ConfigurationError):
            cfg.validate()
        cfg = Config()
        cfg.search.workers = 0
        with pytest.raises(ConfigurationError):
            cfg.validate()


# ════════════════════════════════════════════════════════════════════════════
#  MAIN
# ════════════════════════════════════════════════════════════════════════════

class TestMain:
    def test_bad_dimension_prints_usage(self):
        console = Console()
        assert main(["h", "c", "42"], console.input, console.print) == 1
        assert console.lines[-1] == USAGE

    def test_bad_selector_prints_usage(self):
        console = Console()
        assert main(["q"], console.input, console.print) == 1
        assert USAGE in console.lines

    def test_bad_depth_prints_usage(self):
        console = Console()
        assert main(["--depth", "-2"], console.input, console.print) == 1
        assert USAGE in console.lines

    def test_bad_log_level(self):
        console = Console()
        assert main(["--log-level", "chatty"], console.input, console.print) == 1

    def test_config_dimension_out_of_range_prints_usage(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[board]\nmax_dimension = 12\ndimension = 12\n")
        console = Console()
        assert main(["--config", str(path), "--depth", "1"], console.input, console.print) == 1
        assert console.lines[-1] == USAGE

    def test_config_wrong_type_prints_usage(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[board]\ndimension = "4"\n')
        console = Console()
        assert main(["--config", str(path)], console.input, console.print) == 1
        assert console.lines[-1] == USAGE

    def test_config_unknown_player_prints_usage(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[ui]\no_player = "q"\n')
        console = Console()
        assert main(["--config", str(path)], console.input, console.print) == 1
        assert console.lines[-1] == USAGE

    def test_bad_env_depth_prints_usage(self, monkeypatch):
        monkeypatch.setenv("TICTACTOE_SEARCH_DEPTH", "deep")
        console = Console()
        assert main([], console.input, console.print) == 1
        assert console.lines[-1] == USAGE

    def test_human_game(self):
        # X: (0,0) (0,1) (0,2)   O: (1,0) (1,1)
        console = Console(["0", "0", "1", "0", "0", "1", "1", "1", "0", "2"])
        assert main(["h", "h"], console.input, console.print) == 0
        assert console.lines[-1] == "X wins"
        boards = [line for line in console.lines if line.startswith("2 |")]
        assert len(boards) == 6

    def test_human_game_with_typos(self):
        console = Console(["zero", "0", "0", "0", "0", "1", "0", "0", "1", "1", "1", "0", "2"])
        assert main([], console.input, console.print) == 0
        assert "Invalid move" in console.lines
        assert console.lines[-1] == "X wins"

    def test_computer_game(self):
        console = Console()
        assert main(["c", "c", "4", "--depth", "2"], console.input, console.print) == 0
        assert console.lines[-1] in ("X wins", "O wins", "Draw")

    def test_human_against_computer(self):
        # human X keeps pushing along row 0 and column 0 while the full-depth engine punishes it
        console = Console(["0", "0", "0", "1", "0", "2", "1", "0", "2", "0", "2", "1", "2", "2", "1", "2"])
        assert main(["h", "c", "--depth", "0"], console.input, console.print) == 0
        assert console.lines[-1] in ("O wins", "Draw")

    def test_trace_flag(self):
        console = Console()
        assert main(["c", "c", "3", "--depth", "1", "--trace"], console.input, console.print) == 0
