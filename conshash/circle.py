from bisect import bisect_left
from typing import Iterable, Iterator, List, Tuple

from .errors import RingEmpty


class Circle:
    """
    Ascending sequence of 64-bit virtual-point hashes read as a circle.

    The successor of the last point is the first point. The sequence is
    replaced wholesale by rebuild(); callers serialize access.
    """

    def __init__(self):
        self._points: List[int] = []

    def rebuild(self, points: Iterable[int]):
        """Replace the circle with a fresh sort of the given points."""
        self._points = sorted(points)

    def _index(self, target: int) -> int:
        if not self._points:
            raise RingEmpty()

        idx = bisect_left(self._points, target)
        if idx == len(self._points):
            idx = 0  # wrap around
        return idx

    def locate(self, target: int) -> int:
        """
        Return the first point >= target, wrapping to the first point.

        Raises:
            RingEmpty: if the circle holds no points
        """
        return self._points[self._index(target)]

    def successors(self, target: int) -> Iterator[int]:
        """Yield every point once, clockwise from the point owning target."""
        start = self._index(target)
        size = len(self._points)
        for offset in range(size):
            yield self._points[(start + offset) % size]

    def points(self) -> Tuple[int, ...]:
        return tuple(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[int]:
        return iter(self.points())
