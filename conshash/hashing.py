import hashlib
from typing import Union


def hash64(data: Union[bytes, str]) -> int:
    """Return a consistent 64-bit hash.

    A new blake2b context is created on every call, so concurrent callers
    never share hashing state.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    digest = hashlib.blake2b(data, digest_size=8).digest()
    return int.from_bytes(digest, "big")
