"""Generate JSON patches that inject the Elastic APM Java agent into pods."""

from .config import AgentConfig
from .environment import build_environment
from .patches import PatchOperation, create_patch, create_patch_dicts

__all__ = [
    "AgentConfig",
    "PatchOperation",
    "build_environment",
    "create_patch",
    "create_patch_dicts",
]
