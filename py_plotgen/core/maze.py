"""
Perfect maze generation and solving.

The grid is stored arena-style in NumPy arrays indexed by (row, col): wall
flags, carve-visited flags, solve-visited flags and a flat parent index
(-1 for none). Cells are addressed externally as (x, y) = (col, row).
"""

from collections import deque
from enum import IntEnum
from typing import List, Tuple

import numpy as np
import structlog

from .alea_prng import AleaPRNG

logger = structlog.get_logger()

Cell = Tuple[int, int]
Segment = Tuple[float, float, float, float]


class Wall(IntEnum):
    TOP = 0
    RIGHT = 1
    BOTTOM = 2
    LEFT = 3


# Neighbour order used by both carving and solving: up, right, down, left.
DIRECTIONS = (
    (Wall.TOP, 0, -1),
    (Wall.RIGHT, 1, 0),
    (Wall.BOTTOM, 0, 1),
    (Wall.LEFT, -1, 0),
)

OPPOSITE = {
    Wall.TOP: Wall.BOTTOM,
    Wall.RIGHT: Wall.LEFT,
    Wall.BOTTOM: Wall.TOP,
    Wall.LEFT: Wall.RIGHT,
}


class Maze:
    """Square maze of ``size`` x ``size`` cells."""

    def __init__(self, size: int):
        if size < 1:
            raise ValueError(f"Maze size must be at least 1, got {size}")
        self.size = size
        self.walls = np.ones((size, size, 4), dtype=bool)
        self.visited = np.zeros((size, size), dtype=bool)
        self.solve_visited = np.zeros((size, size), dtype=bool)
        self.parent = np.full(size * size, -1, dtype=np.int64)

    def reset(self) -> None:
        """Restore every wall and clear all traversal state."""
        self.walls[:] = True
        self.visited[:] = False
        self.reset_solver()

    def reset_solver(self) -> None:
        self.solve_visited[:] = False
        self.parent[:] = -1

    def index(self, cell: Cell) -> int:
        x, y = cell
        return y * self.size + x

    def cell(self, index: int) -> Cell:
        return int(index % self.size), int(index // self.size)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def unvisited_neighbors(self, cell: Cell) -> List[Tuple[Wall, Cell]]:
        x, y = cell
        result = []
        for wall, dx, dy in DIRECTIONS:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny) and not self.visited[ny, nx]:
                result.append((wall, (nx, ny)))
        return result

    def open_neighbors(self, cell: Cell) -> List[Cell]:
        """Neighbours reachable from ``cell`` through an open wall."""
        x, y = cell
        result = []
        for wall, dx, dy in DIRECTIONS:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny) and not self.walls[y, x, wall]:
                result.append((nx, ny))
        return result

    def remove_wall(self, cell: Cell, wall: Wall) -> None:
        """Open ``wall`` on ``cell`` and the matching wall on its neighbour."""
        x, y = cell
        _, dx, dy = DIRECTIONS[wall]
        self.walls[y, x, wall] = False
        self.walls[y + dy, x + dx, OPPOSITE[wall]] = False

    def has_wall(self, cell: Cell, wall: Wall) -> bool:
        x, y = cell
        return bool(self.walls[y, x, wall])

    def carve(self, rng: AleaPRNG) -> None:
        """
        Carve a perfect maze with a randomized depth-first backtracker.

        Starts at (0, 0). At each step a uniformly chosen unvisited
        neighbour is opened and entered; dead ends pop the stack. When the
        loop ends every cell has been visited once and exactly
        ``size**2 - 1`` wall pairs are open.
        """
        self.reset()
        current = (0, 0)
        self.visited[0, 0] = True
        stack: List[Cell] = []

        while True:
            neighbors = self.unvisited_neighbors(current)
            if neighbors:
                wall, nxt = neighbors[rng.randint(len(neighbors))]
                stack.append(current)
                self.remove_wall(current, wall)
                current = nxt
                self.visited[current[1], current[0]] = True
            elif stack:
                current = stack.pop()
            else:
                break

        logger.debug("Maze carved", size=self.size, open_passages=self.open_passages())

    def open_passages(self) -> int:
        """Number of open wall pairs between adjacent cells."""
        horizontal = np.count_nonzero(~self.walls[:, :-1, Wall.RIGHT])
        vertical = np.count_nonzero(~self.walls[:-1, :, Wall.BOTTOM])
        return int(horizontal + vertical)

    def find_solution_path(self, start: Cell = None, end: Cell = None) -> List[Cell]:
        """
        Shortest path from ``start`` to ``end`` by breadth-first search.

        Args:
            start: Entry cell, defaults to the top-left corner
            end: Exit cell, defaults to the bottom-right corner

        Returns:
            Cells from start to end inclusive, or an empty list when the end
            is unreachable
        """
        if start is None:
            start = (0, 0)
        if end is None:
            end = (self.size - 1, self.size - 1)

        self.reset_solver()
        self.solve_visited[start[1], start[0]] = True
        queue = deque([start])
        found = False

        while queue:
            current = queue.popleft()
            if current == end:
                found = True
                break
            for nxt in self.open_neighbors(current):
                nx, ny = nxt
                if self.solve_visited[ny, nx]:
                    continue
                self.solve_visited[ny, nx] = True
                self.parent[self.index(nxt)] = self.index(current)
                queue.append(nxt)

        if not found:
            logger.warning("Maze end unreachable", start=start, end=end)
            return []

        path = [end]
        idx = self.index(end)
        while self.parent[idx] != -1:
            idx = int(self.parent[idx])
            path.append(self.cell(idx))
        path.reverse()
        return path

    def wall_segments(self, width: float, height: float) -> List[Segment]:
        """
        Closed walls as axis-aligned segments in a ``width`` x ``height`` box.

        Interior walls shared by two cells are emitted once (from the cell
        below or to the right), followed by the four outer edges.
        """
        cell_w = width / self.size
        cell_h = height / self.size
        segments: List[Segment] = []
        for y in range(self.size):
            for x in range(self.size):
                x0, y0 = x * cell_w, y * cell_h
                if y > 0 and self.walls[y, x, Wall.TOP]:
                    segments.append((x0, y0, x0 + cell_w, y0))
                if x > 0 and self.walls[y, x, Wall.LEFT]:
                    segments.append((x0, y0, x0, y0 + cell_h))

        segments.extend([
            (0.0, 0.0, width, 0.0),
            (width, 0.0, width, height),
            (width, height, 0.0, height),
            (0.0, height, 0.0, 0.0),
        ])
        return segments

    def cell_center(self, cell: Cell, width: float, height: float) -> Tuple[float, float]:
        x, y = cell
        cell_w = width / self.size
        cell_h = height / self.size
        return x * cell_w + cell_w / 2, y * cell_h + cell_h / 2


def generate_maze(size: int, rng: AleaPRNG) -> Maze:
    maze = Maze(size)
    maze.carve(rng)
    return maze
