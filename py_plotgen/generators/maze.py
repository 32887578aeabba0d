"""Perfect maze with an optional solution overlay."""

from typing import List, NamedTuple

from ..config.parameters import MazeParameters
from ..core.maze import Cell, Maze, generate_maze
from ..export.frame import MARKERS, SOLUTION, WALLS, Circle, Frame, Layer, Line, Polyline
from ..utils.random import GenerationContext
from .base import PatternGenerator

MARKER_RATIO = 0.25
WALL_RATIO = 1 / 10
SOLUTION_RATIO = 1 / 15


class MazeResult(NamedTuple):
    maze: Maze
    path: List[Cell]


class MazeGenerator(PatternGenerator):
    """
    Square N x N maze stretched over a canvas of the chosen aspect ratio.

    The canvas size follows the parameters rather than the settings.
    """

    name = "maze"
    parameters_model = MazeParameters

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.width, self.height = self.params.display_size()

    def build(self, context: GenerationContext) -> MazeResult:
        self.width, self.height = self.params.display_size()
        maze = generate_maze(self.params.density, context.random)
        path = maze.find_solution_path()
        return MazeResult(maze, path)

    def cache_size(self) -> int:
        return self._cache.maze.size ** 2 if self._cache is not None else 0

    def default_filename(self) -> str:
        return f"maze_D{self.params.density}_{self.width:g}x{self.height:g}-{self.seed}.svg"

    def draw(self, cache: MazeResult) -> Frame:
        maze, path = cache
        cell_w = self.width / maze.size
        cell_h = self.height / maze.size
        shorter = min(cell_w, cell_h)
        frame = self.new_frame()

        walls = frame.add_layer(Layer(
            WALLS, stroke="black", stroke_width=max(1.0, shorter * WALL_RATIO),
            attributes={"stroke_linecap": "square"},
        ))
        for segment in maze.wall_segments(self.width, self.height):
            walls.add(Line(*segment))

        markers = frame.add_layer(Layer(MARKERS, stroke="none", fill="black"))
        radius = shorter * MARKER_RATIO
        for cell in ((0, 0), (maze.size - 1, maze.size - 1)):
            cx, cy = maze.cell_center(cell, self.width, self.height)
            markers.add(Circle(cx, cy, radius))

        if self.params.show_solution and path:
            solution = frame.add_layer(Layer(
                SOLUTION, stroke="red", stroke_width=shorter * SOLUTION_RATIO,
                attributes={"stroke_linecap": "round", "stroke_linejoin": "round"},
            ))
            solution.add(Polyline([maze.cell_center(c, self.width, self.height) for c in path]))

        return frame
