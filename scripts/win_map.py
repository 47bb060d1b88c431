#!/usr/bin/env python3
"""Print which seat wins for every poison location of a bar size."""

import argparse
import json
import logging
from pathlib import Path
from typing import Dict

import yaml

from poisonbar.evaluation import build_win_map, format_win_map, summarize_win_map, sweep_win_maps
from poisonbar.search import SearchConfig


def load_yaml_config(path_str: str) -> Dict:
    path = Path(path_str)
    if not path.exists():
        return {}
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", type=str, default="configs/search.yaml")
    parser.add_argument("--rows", type=int)
    parser.add_argument("--columns", type=int)
    parser.add_argument("--table-capacity", type=int)
    parser.add_argument("--sweep-max-rows", type=int)
    parser.add_argument("--sweep-max-columns", type=int)
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    cfg = load_yaml_config(args.config) if args.config else {}
    win_map_cfg = cfg.get("win_map", {})
    rows = args.rows if args.rows is not None else win_map_cfg.get("rows", 6)
    columns = args.columns if args.columns is not None else win_map_cfg.get("columns", 6)
    sweep_rows = args.sweep_max_rows if args.sweep_max_rows is not None else win_map_cfg.get("sweep_max_rows", 0)
    sweep_columns = (
        args.sweep_max_columns if args.sweep_max_columns is not None else win_map_cfg.get("sweep_max_columns", 0)
    )

    search_cfg = dict(cfg.get("search", {}))
    if args.table_capacity is not None:
        search_cfg["table_capacity"] = args.table_capacity
    search = SearchConfig(**search_cfg)

    grid = build_win_map(rows, columns, search.table_capacity, max_probes=search.max_probes)
    print(format_win_map(grid))
    summary = summarize_win_map(grid)
    output = {
        "rows": summary.rows,
        "columns": summary.columns,
        "first": summary.first,
        "second": summary.second,
        "first_rate": summary.first_rate(),
    }
    print(json.dumps(output, indent=2))

    if sweep_rows > 0 and sweep_columns > 0:
        summaries = sweep_win_maps(sweep_rows, sweep_columns, search.table_capacity, max_probes=search.max_probes)
        sweep_output = [
            {"rows": r, "columns": c, "first": s.first, "second": s.second}
            for (r, c), s in sorted(summaries.items())
        ]
        print(json.dumps(sweep_output, indent=2))


if __name__ == "__main__":
    main()
