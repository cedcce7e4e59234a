from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence

from src.common.agent import agent_init_container, agent_volume, agent_volume_mount

from .config import AgentConfig
from .environment import build_environment

logger = logging.getLogger(__name__)

ADD = "add"


@dataclass(frozen=True)
class PatchOperation:
    """Single RFC 6902 operation; position in the patch list is its only identity."""

    op: str
    path: str
    value: Any

    def to_dict(self) -> Dict[str, Any]:
        return {"op": self.op, "path": self.path, "value": self.value}


def _is_absent(spec: Mapping[str, Any], field: str) -> bool:
    # An empty list is a present field and gets appended to.
    return spec.get(field) is None


def _add_patch(path: str, create_array: bool, item: Any) -> PatchOperation:
    if create_array:
        return PatchOperation(op=ADD, path=path, value=[item])
    return PatchOperation(op=ADD, path=f"{path}/-", value=item)


def build_volume_patch(create_array: bool) -> PatchOperation:
    return _add_patch("/spec/volumes", create_array, agent_volume())


def build_init_container_patch(create_array: bool) -> PatchOperation:
    return _add_patch("/spec/initContainers", create_array, agent_init_container())


def build_volume_mount_patch(create_array: bool, index: int) -> PatchOperation:
    path = f"/spec/containers/{index}/volumeMounts"
    return _add_patch(path, create_array, agent_volume_mount())


def build_env_patches(
    env_vars: Sequence[Dict[str, Any]], create_array: bool, index: int
) -> List[PatchOperation]:
    """Patch a container's ``env``.

    A missing ``env`` is created with the whole list in one operation; an
    existing one receives one append per variable.
    """

    path = f"/spec/containers/{index}/env"
    if create_array:
        return [PatchOperation(op=ADD, path=path, value=copy.deepcopy(list(env_vars)))]
    return [
        PatchOperation(op=ADD, path=f"{path}/-", value=copy.deepcopy(variable))
        for variable in env_vars
    ]


def create_patch(config: AgentConfig, pod_spec: Mapping[str, Any]) -> List[PatchOperation]:
    """Build the ordered operations injecting the APM agent into ``pod_spec``.

    The volume and init container operations are always emitted, followed by
    a volume mount and the environment for each container in index order.
    Applying the result twice duplicates every injected entry.
    """

    env_vars = build_environment(config)

    patches: List[PatchOperation] = [
        build_volume_patch(_is_absent(pod_spec, "volumes")),
        build_init_container_patch(_is_absent(pod_spec, "initContainers")),
    ]

    containers = pod_spec.get("containers") or []
    for index, container in enumerate(containers):
        patches.append(build_volume_mount_patch(_is_absent(container, "volumeMounts"), index))
        patches.extend(build_env_patches(env_vars, _is_absent(container, "env"), index))
        logger.debug(
            "container %d (%s): volumeMounts %s, env %s",
            index,
            container.get("name", "<unnamed>"),
            "created" if _is_absent(container, "volumeMounts") else "appended",
            "created" if _is_absent(container, "env") else "appended",
        )

    logger.debug("generated %d patch operations for %d containers", len(patches), len(containers))
    return patches


def create_patch_dicts(config: AgentConfig, pod_spec: Mapping[str, Any]) -> List[Dict[str, Any]]:
    return [patch.to_dict() for patch in create_patch(config, pod_spec)]


__all__ = [
    "PatchOperation",
    "build_env_patches",
    "build_init_container_patch",
    "build_volume_mount_patch",
    "build_volume_patch",
    "create_patch",
    "create_patch_dicts",
]
