from __future__ import annotations

from typing import Any, Dict, List

from src.common.agent import secret_token_env

from .config import AgentConfig


def build_environment(config: AgentConfig) -> List[Dict[str, Any]]:
    """Return the variables injected into each container.

    The secret token reference always comes first; the configured pairs follow
    in name order.
    """

    env_vars: List[Dict[str, Any]] = [secret_token_env()]
    for name, value in config.sorted_environment():
        env_vars.append({"name": name, "value": value})
    return env_vars


__all__ = ["build_environment"]
