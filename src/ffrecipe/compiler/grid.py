"""Grid composition shared by montage, collage, tile and multi-camera layouts.

Cells are stacked row by row with ``hstack``, short rows are padded to the
full grid width, rows are stacked with ``vstack`` and the frame is scaled
to ``cols * CELL_WIDTH`` with an even height so 4:2:0 encoders accept it.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from ffrecipe.compiler.graph import FilterGraph
from ffrecipe.exceptions import PreconditionError
from ffrecipe.values.geometry import GridLayout

CELL_WIDTH = 320
CELL_HEIGHT = 240

OUTPUT_LABEL = "v"


def letterbox(width: int = CELL_WIDTH, height: int = CELL_HEIGHT) -> str:
    """Scale to fit inside ``width x height`` and pad the remainder."""
    return (
        f"scale={width}:{height}:force_original_aspect_ratio=decrease,"
        f"pad={width}:{height}:(ow-iw)/2:(oh-ih)/2"
    )


def cell_labels(count: int) -> list[str]:
    return [f"v{i}" for i in range(count)]


def check_capacity(count: int, layout: GridLayout) -> None:
    """Require between one cell and the full capacity of ``layout``.

    Raises:
        PreconditionError: If there are no inputs or more than fit.
    """
    capacity = layout.total_cells
    if count < 1:
        raise PreconditionError(f"Layout {layout} needs at least 1 video")
    if count > capacity:
        raise PreconditionError(
            f"Layout {layout} holds {capacity} videos but {count} were given"
        )


def auto_layout(count: int) -> GridLayout:
    """Near-square layout: ``ceil(sqrt(n))`` columns, enough rows for n."""
    if count < 1:
        raise PreconditionError("A grid needs at least one video")
    cols = math.ceil(math.sqrt(count))
    rows = math.ceil(count / cols)
    return GridLayout(cols, rows)


def row_filters(cell_count: int, cols: int) -> list[str]:
    """Filters turning ``cell_count`` cells into one row ``cols`` cells wide.

    A short row is padded with black, centred, so every row has the same
    width when rows are stacked.
    """
    filters = []
    if cell_count > 1:
        filters.append(f"hstack=inputs={cell_count}")
    if cell_count < cols:
        filters.append(f"pad={cols * CELL_WIDTH}:{CELL_HEIGHT}:(ow-iw)/2:0")
    return filters


def compose(graph: FilterGraph, cells: Sequence[str], layout: GridLayout) -> int:
    """Append row, column and final scale chains for ``cells`` to ``graph``.

    The cells must already exist as pads in the graph, in row-major order.
    Rows without cells are left out. The final stream is written to the
    ``[v]`` pad.

    Returns:
        The output frame width, always even and a multiple of ``cols``.
    """
    check_capacity(len(cells), layout)

    rows: list[str] = []
    for row in range(layout.rows):
        row_cells = list(cells[row * layout.cols : (row + 1) * layout.cols])
        if not row_cells:
            continue
        filters = row_filters(len(row_cells), layout.cols)
        if not filters:
            # single-column layout: the cell is already a full row
            rows.append(row_cells[0])
            continue
        label = f"row{row}"
        graph.chain(filters, inputs=row_cells, outputs=[label])
        rows.append(label)

    width = layout.cols * CELL_WIDTH
    if len(rows) > 1:
        graph.chain(f"vstack=inputs={len(rows)}", inputs=rows, outputs=["vstack"])
        graph.chain(f"scale={width}:-2", inputs=["vstack"], outputs=[OUTPUT_LABEL])
    else:
        graph.chain(f"scale={width}:-2", inputs=rows, outputs=[OUTPUT_LABEL])
    return width
