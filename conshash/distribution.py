"""
Load-balance and remapping statistics for a ring.

Used to check how evenly lookup keys spread across nodes and how many keys
move when membership changes.
"""

import logging
from collections import Counter
from typing import Dict, Iterable, List

from pydantic import BaseModel

from .hash_ring import ConsistentHashRing

logger = logging.getLogger(__name__)


class DistributionReport(BaseModel):
    counts: Dict[str, int]
    total_keys: int
    node_count: int
    expected: int
    variance: float
    min_count: int
    max_count: int

    def log_summary(self):
        """Log per-node counts and the variance at INFO."""
        for node_key, count in sorted(self.counts.items()):
            logger.info(f"Node: {node_key} count: {count}")
        logger.info(
            f"{self.total_keys} keys over {self.node_count} nodes, "
            f"expected {self.expected}, variance {self.variance:.2f}"
        )


def owners(ring: ConsistentHashRing, keys: Iterable[str]) -> Dict[str, str]:
    """Map each key to the node key that currently owns it."""
    return {key: ring.lookup(key)[0] for key in keys}


def measure_distribution(
    ring: ConsistentHashRing, keys: Iterable[str]
) -> DistributionReport:
    """
    Count how many keys each node receives.

    Variance is sum((count - expected)^2) / total_keys, where expected is
    total_keys // node_count. Nodes that receive no keys count as 0.

    Raises:
        RingEmpty: if the ring has no nodes
    """
    counts: Counter = Counter({node_key: 0 for node_key in ring.keys()})
    total = 0
    for key in keys:
        counts[ring.lookup(key)[0]] += 1
        total += 1

    node_count = len(counts)
    expected = total // node_count if node_count else 0
    spread = sum((c - expected) * (c - expected) for c in counts.values())

    return DistributionReport(
        counts=dict(counts),
        total_keys=total,
        node_count=node_count,
        expected=expected,
        variance=spread / total if total else 0.0,
        min_count=min(counts.values(), default=0),
        max_count=max(counts.values(), default=0),
    )


def remapped_keys(before: Dict[str, str], after: Dict[str, str]) -> List[str]:
    """Return keys whose owner differs between two owners() snapshots."""
    return [key for key, owner in before.items() if after.get(key) != owner]
