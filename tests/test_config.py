import pytest

from tileslide import cli
from tileslide.config import GameConfig, parse_size
from tileslide.logging_config import setup_logging


@pytest.mark.parametrize("text, size", [
    ("4x4", (4, 4)),
    ("3X5", (3, 5)),
    ("6", (6, 6)),
    ("1x1", (1, 1)),
])
def test_parse_size(text, size):
    assert parse_size(text) == size


@pytest.mark.parametrize("text", ["", "4x", "x4", "0x4", "4x-1", "2x2x2", "four"])
def test_parse_size_rejects(text):
    with pytest.raises(ValueError):
        parse_size(text)


@pytest.mark.parametrize("kwargs", [
    {"height": 0},
    {"width": 0},
    {"chance_for_2": -0.1},
    {"chance_for_2": 1.1},
    {"initial_tiles": -1},
    {"color_classes": 0},
])
def test_config_validation(kwargs):
    with pytest.raises(ValueError):
        GameConfig(**kwargs)


def test_config_builds_seeded_boards():
    config = GameConfig(height=3, width=5, seed=42)
    a = config.new_board(config.make_rng())
    b = config.new_board(config.make_rng())
    a.spawn()
    b.spawn()
    assert (a.height, a.width) == (3, 5)
    assert a.to_list() == b.to_list()


def test_cli_builds_config():
    parser = cli.build_parser()
    args = parser.parse_args(["--size", "3x5", "--seed", "7", "--chance-for-2", "0.5",
                              "--initial-tiles", "2", "--strict"])
    config = cli.config_from_args(parser, args)
    assert config == GameConfig(height=3, width=5, chance_for_2=0.5, initial_tiles=2, seed=7, strict=True)
    assert args.gui is False


def test_cli_rejects_bad_size():
    parser = cli.build_parser()
    args = parser.parse_args(["--size", "0x3"])
    with pytest.raises(SystemExit) as exc:
        cli.config_from_args(parser, args)
    assert exc.value.code == 2


def test_cli_runs_selected_frontend(monkeypatch, tmp_path):
    import tileslide.terminal

    seen = {}

    def fake_main(config):
        seen["config"] = config
        return 0

    monkeypatch.setattr(tileslide.terminal, "main", fake_main)
    log_file = tmp_path / "game.log"

    assert cli.main(["--size", "2x3", "--log-level", "DEBUG", "--log-file", str(log_file)]) == 0
    assert (seen["config"].height, seen["config"].width) == (2, 3)

    assert "starting curses frontend" in log_file.read_text()
    setup_logging()
