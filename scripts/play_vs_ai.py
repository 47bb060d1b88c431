#!/usr/bin/env python3
"""Play the poison bar game against the exhaustive solver, with optional logging & replay."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional

import yaml

from poisonbar import PoisonBarEnv
from poisonbar.core import Direction, GameState, Move, encode_move, is_terminal, is_valid_move
from poisonbar.search import (
    MoveOrder,
    SearchConfig,
    TranspositionTable,
    determine_move_order_advantage,
    select_best_move,
)

DIRECTIONS = {"h": Direction.HORIZONTAL, "v": Direction.VERTICAL}


def load_yaml_config(path_str: Optional[str]) -> Dict:
    if not path_str:
        return {}
    path = Path(path_str)
    if not path.exists():
        return {}
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}


def format_board(env: PoisonBarEnv) -> str:
    return env.render() + "\n<-- END -->"


def parse_human_move(raw_direction: str, raw_location: str) -> Optional[Move]:
    direction = DIRECTIONS.get(raw_direction.strip().lower())
    if direction is None:
        return None
    raw_location = raw_location.strip()
    if not raw_location.isdigit():
        return None
    return Move(direction, int(raw_location))


def prompt_human_move(state: GameState, input_fn: Callable[[str], str] = input) -> Move:
    while True:
        raw_direction = input_fn("What direction would you like to split in? (v/h, q to quit) ")
        if raw_direction.strip().lower() in {"q", "quit", "exit"}:
            print("Quitting.")
            sys.exit(0)
        if raw_direction.strip().lower() not in DIRECTIONS:
            print("Invalid direction")
            continue
        raw_location = input_fn("What location would you like to split at? ")
        move = parse_human_move(raw_direction, raw_location)
        if move is not None and is_valid_move(state, move):
            return move
        print("Invalid move!")


def select_ai_move(state: GameState, table: TranspositionTable) -> Move:
    # Each AI turn is its own search session.
    table.reset()
    result = select_best_move(state, table)
    print(
        f"Searched {result.stats.positions_searched} positions in {result.stats.elapsed_ms:.3f}ms"
    )
    if result.move is None:
        raise RuntimeError(f"No AI move found for {state!r}")
    return result.move


def save_log(log: Dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(log, indent=2))
    print(f"Saved game log to {path}.")


def replay_logged_game(log_path: Path, *, verbose: bool = True) -> Dict[str, object]:
    data = json.loads(log_path.read_text())
    metadata = data.get("metadata", {})
    moves = data.get("moves", [])
    env = PoisonBarEnv(
        metadata["rows"],
        metadata["columns"],
        metadata["poison_row"],
        metadata["poison_column"],
        render_mode="ansi",
    )
    env.reset()
    if verbose:
        print("Replaying logged game.")
        print(format_board(env))

    winner = None
    for entry in moves:
        _, reward, terminated, _, _ = env.step(entry["action_index"])
        if verbose:
            print(f"{entry.get('actor', 'unknown')}: {entry['direction']} split at {entry['location']}")
            print(format_board(env))
        if terminated and reward > 0:
            winner = entry.get("actor")

    summary = {
        "winner": winner,
        "moves": len(moves),
        "bar": list(env.state.as_tuple()),
    }
    if verbose:
        print("Replay finished.")
        print(f"Winner: {winner}")
    return summary


def play_interactive(args: argparse.Namespace, cfg: Dict) -> None:
    game_cfg = cfg.get("game", {})
    rows = args.rows if args.rows is not None else game_cfg.get("rows", 6)
    columns = args.columns if args.columns is not None else game_cfg.get("columns", 6)
    poison_row = args.poison_row if args.poison_row is not None else game_cfg.get("poison_row", 2)
    poison_column = args.poison_column if args.poison_column is not None else game_cfg.get("poison_column", 0)

    search_cfg = dict(cfg.get("search", {}))
    if args.table_capacity is not None:
        search_cfg["table_capacity"] = args.table_capacity
    search = SearchConfig(**search_cfg)
    table = search.make_table()

    env = PoisonBarEnv(rows, columns, poison_row, poison_column, render_mode="ansi")
    env.reset()

    if args.ai_order == "auto":
        ai_order = determine_move_order_advantage(
            env.state, search.table_capacity, max_probes=search.max_probes
        )
        print(f"AI chooses to move {ai_order.name.lower()}.")
    else:
        ai_order = MoveOrder.FIRST if args.ai_order == "first" else MoveOrder.SECOND
    ai_seat = 0 if ai_order == MoveOrder.FIRST else 1

    log_records: List[Dict] = []
    winner = None
    terminated = is_terminal(env.state)
    while not terminated:
        state = env.state
        if env.current_player == ai_seat:
            print("AI's turn!")
            print(format_board(env))
            move = select_ai_move(state, table)
            actor = "ai"
        else:
            print("Human's turn!")
            print(format_board(env))
            move = prompt_human_move(state)
            actor = "human"
        print(move.describe())

        action_index = encode_move(move, rows, columns)
        log_records.append(
            {
                "move_index": len(log_records),
                "actor": actor,
                "direction": move.direction.value,
                "location": move.location,
                "action_index": action_index,
            }
        )
        _, reward, terminated, _, _ = env.step(action_index)
        if terminated and reward > 0:
            winner = actor

    if winner is None:
        print("Only the poison square is left; nothing to play.")
    else:
        print("AI lost!" if winner == "human" else "Player lost!")

    if args.log_file:
        metadata = {
            "rows": rows,
            "columns": columns,
            "poison_row": poison_row,
            "poison_column": poison_column,
            "ai_order": ai_order.name.lower(),
            "table_capacity": search.table_capacity,
            "winner": winner,
        }
        save_log({"metadata": metadata, "moves": log_records}, Path(args.log_file))


def main() -> None:
    parser = argparse.ArgumentParser(description="Play the poison bar game in the console against the solver.")
    parser.add_argument("--config", type=str, default="configs/search.yaml")
    parser.add_argument("--rows", type=int)
    parser.add_argument("--columns", type=int)
    parser.add_argument("--poison-row", type=int)
    parser.add_argument("--poison-column", type=int)
    parser.add_argument("--table-capacity", type=int)
    parser.add_argument("--ai-order", choices=["first", "second", "auto"], default="second")
    parser.add_argument("--log-file", type=str)
    parser.add_argument("--log-level", default="WARNING")
    parser.add_argument("--replay-log", type=str, help="Replay a logged game and exit")
    parser.add_argument("--replay-quiet", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    if args.replay_log:
        replay_logged_game(Path(args.replay_log), verbose=not args.replay_quiet)
        return

    play_interactive(args, load_yaml_config(args.config))


if __name__ == "__main__":
    main()
