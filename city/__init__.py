"""Tile-grid city simulation used as the per-participant world state."""

from city.tools import TOOL_SPECS, EditingTool, ToolSpec
from city.world import WORLD_H, WORLD_W, City, ToolResult

__all__ = [
    "City",
    "EditingTool",
    "TOOL_SPECS",
    "ToolResult",
    "ToolSpec",
    "WORLD_H",
    "WORLD_W",
]
