from __future__ import annotations

from enum import Enum
from typing import Tuple

import numpy as np

from city.tools import DIRT, TOOL_SPECS, EditingTool

WORLD_W = 120
WORLD_H = 100


class ToolResult(Enum):
    OK = "ok"
    NO_OP = "no_op"
    OUT_OF_BOUNDS = "out_of_bounds"
    BLOCKED = "blocked"


class City:
    """A city map of ``WORLD_W x WORLD_H`` tile ids indexed ``[x, y]``."""

    def __init__(self, shape: Tuple[int, int] = (WORLD_W, WORLD_H)):
        self.shape = shape
        self.map: np.ndarray = np.full(shape, DIRT, dtype=np.uint16)

    def __getitem__(self, key: Tuple[int, int]) -> int:
        return int(self.map[key])

    def create(self) -> None:
        """Reset the map to empty terrain."""
        self.map.fill(DIRT)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.shape[0] and 0 <= y < self.shape[1]

    def apply_tool(self, tool: EditingTool, x: int, y: int) -> ToolResult:
        spec = TOOL_SPECS[tool]
        if spec.base_tile is None:
            return ToolResult.NO_OP

        # multi-tile zones are anchored one tile up-left of the cursor
        offset = 1 if spec.size > 1 else 0
        x0, y0 = x - offset, y - offset
        x1, y1 = x0 + spec.size, y0 + spec.size
        if not (self.in_bounds(x0, y0) and self.in_bounds(x1 - 1, y1 - 1)):
            return ToolResult.OUT_OF_BOUNDS

        footprint = self.map[x0:x1, y0:y1]
        if not spec.overwrite and np.any(footprint != DIRT):
            return ToolResult.BLOCKED

        # zone tiles are numbered row by row from the base tile
        tiles = spec.base_tile + np.arange(spec.size * spec.size, dtype=np.uint16)
        footprint[:, :] = tiles.reshape(spec.size, spec.size).T
        return ToolResult.OK

    def snapshot_grid(self) -> np.ndarray:
        """Flat copy of the map, x-major then y."""
        return self.map.ravel().copy()
