import json
from pathlib import Path

import pytest

from poisonbar.core import Direction, GameState, Move, encode_move
from poisonbar.search import TranspositionTable

from scripts.play_vs_ai import (
    load_yaml_config,
    parse_human_move,
    prompt_human_move,
    replay_logged_game,
    select_ai_move,
)


def create_sample_log(path: Path) -> None:
    rows, columns = 3, 3
    human = Move(Direction.HORIZONTAL, 1)
    ai = Move(Direction.VERTICAL, 1)
    moves = [
        {
            "move_index": 0,
            "actor": "human",
            "direction": human.direction.value,
            "location": human.location,
            "action_index": encode_move(human, rows, columns),
        },
        {
            "move_index": 1,
            "actor": "ai",
            "direction": ai.direction.value,
            "location": ai.location,
            "action_index": encode_move(ai, rows, columns),
        },
    ]
    metadata = {"rows": rows, "columns": columns, "poison_row": 0, "poison_column": 0}
    path.write_text(json.dumps({"metadata": metadata, "moves": moves}))


def test_replay_logged_game(tmp_path):
    log_path = tmp_path / "game.json"
    create_sample_log(log_path)
    summary = replay_logged_game(log_path, verbose=False)
    assert summary["moves"] == 2
    assert summary["winner"] == "ai"
    assert summary["bar"] == [1, 1, 0, 0]


def test_parse_human_move():
    assert parse_human_move("v", "2") == Move(Direction.VERTICAL, 2)
    assert parse_human_move(" H ", " 1 ") == Move(Direction.HORIZONTAL, 1)
    assert parse_human_move("x", "1") is None
    assert parse_human_move("v", "abc") is None


def test_prompt_reprompts_until_valid(capsys):
    answers = iter(["x", "v", "9", "v", "1"])
    move = prompt_human_move(GameState(1, 3, 0, 0), input_fn=lambda _prompt: next(answers))
    assert move == Move(Direction.VERTICAL, 1)
    out = capsys.readouterr().out
    assert "Invalid direction" in out
    assert "Invalid move!" in out


def test_prompt_quit_exits():
    with pytest.raises(SystemExit):
        prompt_human_move(GameState(2, 2, 0, 0), input_fn=lambda _prompt: "q")


def test_select_ai_move_takes_winning_split(capsys):
    table = TranspositionTable(256)
    table.insert(12345, 1.0)
    move = select_ai_move(GameState(1, 3, 0, 0), table)
    assert move == Move(Direction.VERTICAL, 1)
    assert "Searched" in capsys.readouterr().out


def test_load_yaml_config(tmp_path):
    path = tmp_path / "search.yaml"
    path.write_text("search:\n  table_capacity: 10\n")
    assert load_yaml_config(str(path)) == {"search": {"table_capacity": 10}}
    assert load_yaml_config(str(tmp_path / "missing.yaml")) == {}
    assert load_yaml_config(None) == {}
