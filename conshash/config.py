import logging
import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# configuration via env vars
DEFAULT_VNODE_COUNT = int(os.environ.get("CONSHASH_VNODE_COUNT", "20"))
LOG_LEVEL = os.environ.get("CONSHASH_LOG_LEVEL", "INFO")


class RingConfig(BaseModel):
    model_config = ConfigDict(validate_default=True)

    vnode_count: int = Field(default=DEFAULT_VNODE_COUNT, gt=0)


def resolve_config(vnode_count: Optional[int] = None) -> RingConfig:
    """Build a validated RingConfig, falling back to the env default."""
    if vnode_count is None:
        vnode_count = DEFAULT_VNODE_COUNT
    return RingConfig(vnode_count=vnode_count)


def configure_logging(level: Optional[str] = None):
    """Configure root logging for applications embedding the ring."""
    logging.basicConfig(level=(level or LOG_LEVEL).upper())
