"""Box completion detection.

Two strategies that must agree:

- `find_newly_completed_boxes` rescans every box on the grid after a move.
- `find_boxes_completed_by` only re-tests the (at most two) boxes bordering the
  edge that was just drawn.

Boxes are addressed by their top-left dot (x, y), 0 <= x < cols-1, 0 <= y < rows-1.
"""

from typing import Collection, Iterable

from .edges import Edge, box_edges

Box = tuple[int, int]


def total_boxes(rows: int, cols: int) -> int:
    return (rows - 1) * (cols - 1)


def is_box_complete(box: Box, drawn_edges: Collection[Edge]) -> bool:
    return all(edge in drawn_edges for edge in box_edges(*box))


def find_newly_completed_boxes(
    drawn_edges: Collection[Edge],
    rows: int,
    cols: int,
    owned_boxes: Collection[Box],
) -> list[Box]:
    """Full O(rows*cols) scan for bordered boxes that have no owner yet."""
    completed: list[Box] = []
    for x in range(cols - 1):
        for y in range(rows - 1):
            if (x, y) in owned_boxes:
                continue
            if is_box_complete((x, y), drawn_edges):
                completed.append((x, y))
    return completed


def boxes_bordering(edge: Edge, rows: int, cols: int) -> list[Box]:
    """The boxes on either side of `edge` that lie inside the grid."""
    (x, y) = edge.start
    if edge.is_horizontal:
        candidates: Iterable[Box] = ((x, y - 1), (x, y))
    else:
        candidates = ((x - 1, y), (x, y))
    return [(bx, by) for bx, by in candidates if 0 <= bx < cols - 1 and 0 <= by < rows - 1]


def find_boxes_completed_by(
    edge: Edge,
    drawn_edges: Collection[Edge],
    rows: int,
    cols: int,
    owned_boxes: Collection[Box],
) -> list[Box]:
    """Incremental check: only the boxes `edge` borders can have just closed."""
    return sorted(
        box
        for box in boxes_bordering(edge, rows, cols)
        if box not in owned_boxes and is_box_complete(box, drawn_edges)
    )
