"""
Shared helpers for ring tests.
"""

import os
from typing import List

from conshash import ConsistentHashRing

# Reference scenario: 100 servers, 20 virtual points each, 1,000,000 clients
SERVER_COUNT = 100
VNODE_COUNT = 20
CLIENT_COUNT = int(os.environ.get("CONSHASH_SAMPLE_KEYS", "1000000"))


def server_keys(count: int, prefix: str = "server") -> List[str]:
    return [f"{prefix}{i}" for i in range(count)]


def client_keys(count: int, prefix: str = "clientid") -> List[str]:
    return [f"{prefix}{i}" for i in range(count)]


def build_ring(
    node_count: int, vnode_count: int = VNODE_COUNT, prefix: str = "server"
) -> ConsistentHashRing:
    """Create a ring whose nodes use their own key as value."""
    ring = ConsistentHashRing(vnode_count)
    for key in server_keys(node_count, prefix):
        ring.insert(key, key)
    return ring


def assert_ring_consistent(ring: ConsistentHashRing):
    """Check that every live node owns vnode_count points and the circle
    holds exactly the union of them, in ascending order."""
    points = ring.points()
    assert list(points) == sorted(points), "circle is not sorted"

    union = set()
    for key in ring.keys():
        node_points = ring.node_points(key)
        assert len(node_points) == ring.vnode_count
        union.update(node_points)

    assert set(points) == union, "circle points differ from node points"
    assert len(points) == len(union), "duplicate point on circle"
