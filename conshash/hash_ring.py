import logging
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel

from .circle import Circle
from .config import resolve_config
from .errors import RingEmpty
from .hashing import hash64
from .rwlock import ReadWriteLock

logger = logging.getLogger(__name__)


class RingStats(BaseModel):
    node_count: int
    vnode_count: int
    point_count: int
    collision_count: int


def _vnode_key(key: str, index: int) -> str:
    return f"{key}_{index}"


class ConsistentHashRing:
    """
    Thread-safe consistent hashing ring with virtual nodes.

    Every node owns exactly `vnode_count` virtual points derived from
    hash64(f"{key}_{i}"). Lookups take a shared lock; insert and remove take
    the exclusive lock for the whole check-and-mutate sequence.

    Membership changes rebuild the sorted circle from scratch, which costs
    O(T log T) for T total points, while lookups stay O(log T). This suits
    rings whose membership changes far less often than they are queried.

    Registry:
        _nodes:        node key -> opaque value
        _node_points:  node key -> its virtual points
        _point_owners: point -> claiming node keys, sorted; the first
                       claimant owns the point
    """

    def __init__(self, vnode_count: Optional[int] = None):
        self.config = resolve_config(vnode_count)
        self.vnode_count = self.config.vnode_count
        self._nodes: Dict[str, Any] = {}
        self._node_points: Dict[str, List[int]] = {}
        self._point_owners: Dict[int, List[str]] = {}
        self._circle = Circle()
        self._lock = ReadWriteLock()

    # ------------------------------------------------------------------
    # membership
    # ------------------------------------------------------------------

    def insert(self, key: str, value: Any) -> "ConsistentHashRing":
        """
        Add a node and its virtual points.

        Inserting a key that is already registered is a no-op: the value
        from the first insert is kept.

        Returns:
            The ring itself
        """
        with self._lock.write_locked():
            if key in self._nodes:
                logger.debug(f"Node {key} already in ring, insert ignored")
                return self

            points = [hash64(_vnode_key(key, i)) for i in range(self.vnode_count)]
            for point in points:
                self._claim(point, key)

            self._nodes[key] = value
            self._node_points[key] = points
            self._rebuild()

        logger.info(f"Added node {key} with {self.vnode_count} virtual points")
        return self

    def remove(self, key: str, default: Any = None) -> Any:
        """
        Remove a node and all its virtual points.

        Returns:
            The value stored for the node, or `default` if the key was
            never registered
        """
        with self._lock.write_locked():
            if key not in self._nodes:
                logger.debug(f"Node {key} not in ring, nothing to remove")
                return default

            for point in self._node_points.pop(key):
                self._release(point, key)

            value = self._nodes.pop(key)
            self._rebuild()

        logger.info(f"Removed node {key}")
        return value

    def _claim(self, point: int, key: str):
        claimants = self._point_owners.setdefault(point, [])
        if claimants:
            logger.warning(
                f"Virtual point {point:#018x} of {key} collides with {claimants[0]}"
            )
        claimants.append(key)
        claimants.sort()

    def _release(self, point: int, key: str):
        claimants = self._point_owners[point]
        claimants.remove(key)
        if not claimants:
            del self._point_owners[point]

    def _rebuild(self):
        """Sort circle after changes"""
        self._circle.rebuild(self._point_owners.keys())

    # ------------------------------------------------------------------
    # lookup
    # ------------------------------------------------------------------

    def lookup(self, key: str) -> Tuple[str, Any]:
        """
        Return (owner key, owner value) for any key.

        The key does not need to match a node key.

        Raises:
            RingEmpty: if no nodes are registered
        """
        target = hash64(key)
        with self._lock.read_locked():
            point = self._circle.locate(target)
            owner = self._point_owners[point][0]
            return owner, self._nodes[owner]

    def lookup_many(self, key: str, count: int) -> List[Tuple[str, Any]]:
        """
        Return up to `count` distinct owners, walking clockwise from the
        key's position. The first entry is the same as lookup(key).
        """
        if count < 1:
            raise ValueError("count must be >= 1")

        target = hash64(key)
        result: List[Tuple[str, Any]] = []
        seen = set()
        with self._lock.read_locked():
            for point in self._circle.successors(target):
                owner = self._point_owners[point][0]
                if owner in seen:
                    continue
                seen.add(owner)
                result.append((owner, self._nodes[owner]))
                if len(result) >= count:
                    break
        return result

    # ------------------------------------------------------------------
    # snapshots
    # ------------------------------------------------------------------

    def entries(self) -> Dict[str, Any]:
        with self._lock.read_locked():
            return dict(self._nodes)

    def keys(self) -> List[str]:
        with self._lock.read_locked():
            return list(self._nodes)

    def values(self) -> List[Any]:
        with self._lock.read_locked():
            return list(self._nodes.values())

    def collect_keys(self, destination: List[str]) -> int:
        """Append every node key to destination; return the node count."""
        with self._lock.read_locked():
            destination.extend(self._nodes)
            return len(self._nodes)

    def collect_values(self, destination: List[Any]) -> int:
        """Append every node value to destination; return the node count."""
        with self._lock.read_locked():
            destination.extend(self._nodes.values())
            return len(self._nodes)

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock.read_locked():
            return self._nodes.get(key, default)

    def node_points(self, key: str) -> Tuple[int, ...]:
        with self._lock.read_locked():
            return tuple(self._node_points[key])

    def points(self) -> Tuple[int, ...]:
        with self._lock.read_locked():
            return self._circle.points()

    def count(self) -> int:
        with self._lock.read_locked():
            return len(self._nodes)

    def stats(self) -> RingStats:
        with self._lock.read_locked():
            collisions = sum(
                len(claimants) - 1 for claimants in self._point_owners.values()
            )
            return RingStats(
                node_count=len(self._nodes),
                vnode_count=self.vnode_count,
                point_count=len(self._circle),
                collision_count=collisions,
            )

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, key: str) -> bool:
        with self._lock.read_locked():
            return key in self._nodes

    def __repr__(self) -> str:
        return f"ConsistentHashRing(vnode_count={self.vnode_count}, nodes={len(self)})"


def create_ring(vnode_count: Optional[int] = None) -> ConsistentHashRing:
    """Construct an empty ring; vnode_count is fixed for its lifetime."""
    return ConsistentHashRing(vnode_count)
