"""Edge identity on the dot grid.

Dots are addressed as (x, y) with x the column and y the row. An edge joins two
dots that differ by exactly one step on one axis; its canonical form puts the
lexicographically smaller dot first so (a, b) and (b, a) compare equal.
"""

from typing import NamedTuple

from dotbox.errors import InvalidEdgeError

Dot = tuple[int, int]


class Edge(NamedTuple):
    start: Dot
    end: Dot

    @property
    def key(self) -> str:
        """Wire form, e.g. ``"0,0-1,0"``."""
        (x1, y1), (x2, y2) = self.start, self.end
        return f"{x1},{y1}-{x2},{y2}"

    @property
    def is_horizontal(self) -> bool:
        return self.start[1] == self.end[1]

    def to_dict(self) -> dict:
        (x1, y1), (x2, y2) = self.start, self.end
        return {'x1': x1, 'y1': y1, 'x2': x2, 'y2': y2}


def make_edge(a: Dot, b: Dot) -> Edge:
    """Canonicalize the segment between dots `a` and `b`.

    Raises InvalidEdgeError unless the dots are axis-adjacent.
    """
    a = (int(a[0]), int(a[1]))
    b = (int(b[0]), int(b[1]))
    if abs(a[0] - b[0]) + abs(a[1] - b[1]) != 1:
        raise InvalidEdgeError(f"Dots {a} and {b} are not adjacent")
    return Edge(a, b) if a <= b else Edge(b, a)


def parse_edge_key(key: str) -> Edge:
    """Inverse of `Edge.key`; accepts either endpoint order."""
    try:
        left, right = key.split('-')
        x1, y1 = (int(v) for v in left.split(','))
        x2, y2 = (int(v) for v in right.split(','))
    except ValueError as exc:
        raise InvalidEdgeError(f"Malformed edge key {key!r}") from exc
    return make_edge((x1, y1), (x2, y2))


def edge_in_grid(edge: Edge, rows: int, cols: int) -> bool:
    return all(0 <= x < cols and 0 <= y < rows for x, y in edge)


def box_edges(x: int, y: int) -> tuple[Edge, Edge, Edge, Edge]:
    """Top, right, bottom and left edges of the box whose top-left dot is (x, y)."""
    return (
        Edge((x, y), (x + 1, y)),
        Edge((x + 1, y), (x + 1, y + 1)),
        Edge((x, y + 1), (x + 1, y + 1)),
        Edge((x, y), (x, y + 1)),
    )
