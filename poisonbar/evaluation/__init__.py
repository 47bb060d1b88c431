"""Batch exploration helpers over many starting bars."""

from .win_map import (
    WinMapSummary,
    build_win_map,
    format_win_map,
    summarize_win_map,
    sweep_win_maps,
)

__all__ = ["WinMapSummary", "build_win_map", "format_win_map", "summarize_win_map", "sweep_win_maps"]
