"""Text and image renderers for maze grids.

Renderers only read the grid and the path; they never modify either.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from PIL import Image, ImageDraw

from .grid import DIRECTIONS, Coord, Direction, Grid

WALL_CHAR = "█"
PATH_CHAR = "·"

WALL_COLOR = (0, 0, 0)
FLOOR_COLOR = (255, 255, 255)
START_COLOR = (40, 90, 220)
GOAL_COLOR = (40, 180, 80)
LINE_COLOR = (220, 0, 0)
BACKGROUND_COLOR = (0, 0, 0)

BBox = Tuple[int, int, int, int]


def render_text(
    grid: Grid,
    *,
    path: Optional[Sequence[Coord]] = None,
    marks: Optional[Mapping[Coord, str]] = None,
) -> List[str]:
    """Draw the maze with block characters, two text cells per maze cell plus one."""

    out_h = 2 * grid.height + 1
    out_w = 2 * grid.width + 1
    canvas = [[WALL_CHAR for _ in range(out_w)] for _ in range(out_h)]

    overlay: Dict[Coord, str] = {}
    for coord in path or ():
        overlay[(int(coord[0]), int(coord[1]))] = PATH_CHAR
    for coord, mark in (marks or {}).items():
        if len(mark) == 1:
            overlay[coord] = mark

    for cell in grid.cells():
        cx = 2 * cell.x + 1
        cy = 2 * cell.y + 1
        canvas[cy][cx] = overlay.get((cell.x, cell.y), " ")
        for direction in DIRECTIONS:
            if cell.is_open(direction):
                canvas[cy + direction.dy][cx + direction.dx] = " "

    return ["".join(row) for row in canvas]


@dataclass(frozen=True)
class CanvasLayout:
    """Pixel geometry of a rendered maze."""

    grid_size: Tuple[int, int]
    cell_size: int
    wall_width: int
    padding: Tuple[int, int, int, int]
    canvas_dimensions: Tuple[int, int]

    @property
    def origin(self) -> Tuple[int, int]:
        pad_left, pad_top, _, _ = self.padding
        return pad_left + self.wall_width, pad_top + self.wall_width

    def cell_bbox(self, x: int, y: int) -> BBox:
        ox, oy = self.origin
        left = ox + x * self.cell_size
        top = oy + y * self.cell_size
        return left, top, left + self.cell_size, top + self.cell_size

    def cell_center(self, x: int, y: int) -> Tuple[float, float]:
        left, top, right, bottom = self.cell_bbox(x, y)
        return (left + right) / 2, (top + bottom) / 2

    def cell_bboxes(self) -> List[List[BBox]]:
        width, height = self.grid_size
        return [[self.cell_bbox(x, y) for x in range(width)] for y in range(height)]

    def interior_margin(self) -> int:
        return max(self.wall_width + 1, self.cell_size // 6)

    def wall_strip(self, x: int, y: int, direction: Direction) -> BBox:
        """Thin box over the middle part of one wall of cell ``(x, y)``, corners excluded."""

        left, top, right, bottom = self.cell_bbox(x, y)
        margin = self.interior_margin()
        half = max(1, self.wall_width)
        if direction is Direction.NORTH:
            return left + margin, top - half, right - margin, top + half
        if direction is Direction.SOUTH:
            return left + margin, bottom - half, right - margin, bottom + half
        if direction is Direction.WEST:
            return left - half, top + margin, left + half, bottom - margin
        return right - half, top + margin, right + half, bottom - margin


def compute_layout(
    width: int,
    height: int,
    *,
    cell_size: int = 32,
    wall_width: int = 2,
    aspect_ratio: Optional[float] = None,
) -> CanvasLayout:
    """Size the canvas, padding the outer edges when an aspect ratio is requested."""

    if cell_size < 8:
        raise ValueError("cell_size must be at least 8 pixels")
    if wall_width < 1 or wall_width * 4 > cell_size:
        raise ValueError("wall_width must be between 1 and a quarter of cell_size")
    base_width = width * cell_size + 2 * wall_width
    base_height = height * cell_size + 2 * wall_width
    if aspect_ratio is None:
        pad_left = pad_top = pad_right = pad_bottom = 0
    else:
        ratio = float(aspect_ratio)
        if ratio <= 0:
            raise ValueError("aspect_ratio must be positive")
        base_ratio = base_width / base_height
        if ratio >= base_ratio:
            final_width = max(base_width, int(round(base_height * ratio)))
            extra = final_width - base_width
            pad_left = extra // 2
            pad_right = extra - pad_left
            pad_top = pad_bottom = 0
        else:
            final_height = max(base_height, int(round(base_width / ratio)))
            extra = final_height - base_height
            pad_top = extra // 2
            pad_bottom = extra - pad_top
            pad_left = pad_right = 0
    return CanvasLayout(
        grid_size=(width, height),
        cell_size=cell_size,
        wall_width=wall_width,
        padding=(pad_left, pad_top, pad_right, pad_bottom),
        canvas_dimensions=(
            base_width + pad_left + pad_right,
            base_height + pad_top + pad_bottom,
        ),
    )


def render_image(
    grid: Grid,
    layout: CanvasLayout,
    *,
    start: Optional[Coord] = None,
    goal: Optional[Coord] = None,
    path: Optional[Sequence[Coord]] = None,
) -> Image.Image:
    canvas = Image.new("RGB", layout.canvas_dimensions, BACKGROUND_COLOR)
    draw = ImageDraw.Draw(canvas)

    for cell in grid.cells():
        if (cell.x, cell.y) == start:
            fill = START_COLOR
        elif (cell.x, cell.y) == goal:
            fill = GOAL_COLOR
        else:
            fill = FLOOR_COLOR
        left, top, right, bottom = layout.cell_bbox(cell.x, cell.y)
        draw.rectangle((left, top, right - 1, bottom - 1), fill=fill)

    for cell in grid.cells():
        left, top, right, bottom = layout.cell_bbox(cell.x, cell.y)
        segments = {
            Direction.NORTH: (left, top, right, top),
            Direction.SOUTH: (left, bottom, right, bottom),
            Direction.WEST: (left, top, left, bottom),
            Direction.EAST: (right, top, right, bottom),
        }
        for direction, segment in segments.items():
            if not cell.is_open(direction):
                draw.line(segment, fill=WALL_COLOR, width=layout.wall_width)

    if path:
        _draw_path(draw, layout, path)
    return canvas


def _draw_path(draw: ImageDraw.ImageDraw, layout: CanvasLayout, path: Sequence[Coord]) -> None:
    thickness = max(2, layout.cell_size // 3)
    points = [layout.cell_center(int(x), int(y)) for x, y in path]
    if len(points) >= 2:
        draw.line(points, fill=LINE_COLOR, width=thickness, joint="curve")
    else:
        cx, cy = points[0]
        draw.ellipse(
            (cx - thickness / 2, cy - thickness / 2, cx + thickness / 2, cy + thickness / 2),
            fill=LINE_COLOR,
        )


__all__ = [
    "BBox",
    "CanvasLayout",
    "GOAL_COLOR",
    "LINE_COLOR",
    "START_COLOR",
    "compute_layout",
    "render_image",
    "render_text",
]
