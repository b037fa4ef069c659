"""Fit grid dimensions and tile size to a target cell count, image and viewport.

All board measurements here are in tile-size units ("s"): a hex is
sqrt(3)*s wide and rows advance by 1.5*s. Padding is added on every side.
"""

from __future__ import annotations

import logging
import math

from hexturn.engine.errors import UnresolvableGridShapeError
from hexturn.engine.models import GridShape, Rect, TileSizeResult
from hexturn.puzzle.coords import SQRT3

logger = logging.getLogger(__name__)

DEFAULT_H_RANGE = (3, 35)
DEFAULT_W_RANGE = (1, 50)


def cells_for_shape(grid_w: int, grid_h: int) -> int:
    """Cell count of a W x H board (H odd, odd rows one cell longer)."""
    return grid_w * grid_h + (grid_h - 1) // 2


def padded_width(grid_w: float, padding: float) -> float:
    return SQRT3 * (grid_w + 1) + 2 * padding


def padded_height(grid_h: float, padding: float) -> float:
    return 1.5 * grid_h + 0.5 + 2 * padding


def board_aspect(grid_w: float, grid_h: float, padding: float) -> float:
    return padded_width(grid_w, padding) / padded_height(grid_h, padding)


def solve_continuous_shape(
    target_cell_count: float,
    image_aspect: float,
    padding: float,
) -> tuple[float, float]:
    """Real-valued (W, H) hitting both the cell count and the aspect exactly.

    Substituting W = (n - (H - 1)/2) / H into board_aspect(W, H) = ar gives
    A*H^2 + B*H + C = 0. C < 0 < A, so exactly one root is positive.
    """
    n = target_cell_count
    ar = image_aspect
    a = 1.5 * ar
    b = ar * (0.5 + 2 * padding) - 2 * padding - SQRT3 / 2
    c = -(SQRT3 / 2) * (2 * n + 1)

    h = (-b + math.sqrt(b * b - 4 * a * c)) / (2 * a)
    w = (n - (h - 1) / 2) / h
    return w, h


def derive_grid_shape(
    target_cell_count: int,
    image_aspect: float,
    padding: float,
    h_range: tuple[int, int] = DEFAULT_H_RANGE,
    w_range: tuple[int, int] = DEFAULT_W_RANGE,
) -> GridShape:
    """Pick the integer (W, H), H odd, closest to the target cell count.

    Candidates are ranked by |cells - n| and then by |aspect - ar|. The
    continuous solution is reported alongside for diagnostics.
    """
    h_min, h_max = h_range
    w_min, w_max = w_range
    if h_min % 2 == 0:
        h_min += 1

    best: tuple[int, float, int, int] | None = None
    for grid_h in range(h_min, h_max + 1, 2):
        for grid_w in range(w_min, w_max + 1):
            cell_delta = abs(cells_for_shape(grid_w, grid_h) - target_cell_count)
            aspect_delta = abs(board_aspect(grid_w, grid_h, padding) - image_aspect)
            if best is None or (cell_delta, aspect_delta) < (best[0], best[1]):
                best = (cell_delta, aspect_delta, grid_w, grid_h)

    if best is None:
        raise UnresolvableGridShapeError(
            f"Could not derive grid dimensions for H in {h_range}, W in {w_range}"
        )

    _, _, grid_w, grid_h = best
    continuous_w, continuous_h = solve_continuous_shape(target_cell_count, image_aspect, padding)
    shape = GridShape(
        grid_w=grid_w,
        grid_h=grid_h,
        cell_count=cells_for_shape(grid_w, grid_h),
        board_aspect=board_aspect(grid_w, grid_h, padding),
        continuous_w=continuous_w,
        continuous_h=continuous_h,
    )
    logger.info(
        f"Derived grid {grid_w}x{grid_h} ({shape.cell_count} cells, aspect {shape.board_aspect:.3f}) "
        f"for target {target_cell_count} @ {image_aspect:.3f}; "
        f"continuous estimate {continuous_w:.2f}x{continuous_h:.2f}"
    )
    return shape


def get_contain_rect(
    source_width: float,
    source_height: float,
    target_width: float,
    target_height: float,
) -> Rect:
    """Largest aspect-preserving fit of the source, centered in the target."""
    scale = min(target_width / source_width, target_height / source_height)
    fit_w = source_width * scale
    fit_h = source_height * scale
    return Rect(
        x=(target_width - fit_w) / 2,
        y=(target_height - fit_h) / 2,
        width=fit_w,
        height=fit_h,
    )


def derive_tile_size(
    viewport_width: float,
    viewport_height: float,
    grid_w: int,
    grid_h: int,
    padding: float,
    viewport_margin_px: float = 0.0,
    image_width: float | None = None,
    image_height: float | None = None,
) -> TileSizeResult:
    """Largest tile size that fits the padded board in the viewport.

    When image dimensions are given, the board must also fit inside the
    image's contain-fit rectangle; the returned image_rect is in viewport
    coordinates (margin included). The result never drops below 1.
    """
    usable_w = max(1.0, viewport_width - 2 * viewport_margin_px)
    usable_h = max(1.0, viewport_height - 2 * viewport_margin_px)
    board_w = padded_width(grid_w, padding)
    board_h = padded_height(grid_h, padding)

    tile_size = min(usable_w / board_w, usable_h / board_h)
    logger.debug(f"Tile size from viewport: {tile_size:.3f}")

    image_rect: Rect | None = None
    if image_width is not None and image_height is not None:
        fit = get_contain_rect(image_width, image_height, usable_w, usable_h)
        image_rect = Rect(
            x=fit.x + viewport_margin_px,
            y=fit.y + viewport_margin_px,
            width=fit.width,
            height=fit.height,
        )
        from_image = min(image_rect.width / board_w, image_rect.height / board_h)
        logger.debug(f"Tile size from image: {from_image:.3f}")
        tile_size = min(tile_size, from_image)

    return TileSizeResult(tile_size_px=max(1.0, tile_size), image_rect=image_rect)
