from .circle import Circle
from .config import RingConfig, configure_logging
from .distribution import (
    DistributionReport,
    measure_distribution,
    owners,
    remapped_keys,
)
from .errors import ConsHashError, RingEmpty
from .hash_ring import ConsistentHashRing, RingStats, create_ring
from .hashing import hash64
from .rwlock import ReadWriteLock

__all__ = [
    "Circle",
    "ConsHashError",
    "ConsistentHashRing",
    "DistributionReport",
    "ReadWriteLock",
    "RingConfig",
    "RingEmpty",
    "RingStats",
    "configure_logging",
    "create_ring",
    "hash64",
    "measure_distribution",
    "owners",
    "remapped_keys",
]
