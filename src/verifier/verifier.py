from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Union

import yaml

from src.common.agent import (
    INIT_CONTAINER_NAME,
    SECRET_TOKEN_ENV,
    VOLUME_NAME,
    configured_env_names,
)
from src.injector.config import AgentConfig

from .jsonpatch_guard import PatchError, PatchLike, apply_patch_ops

logger = logging.getLogger(__name__)


@dataclass
class VerificationResult:
    ok_apply: bool
    ok_volume: bool
    ok_init_container: bool
    ok_containers: bool
    patched_manifest: Optional[Dict[str, Any]]
    errors: List[str] = field(default_factory=list)

    @property
    def accepted(self) -> bool:
        return self.ok_apply and self.ok_volume and self.ok_init_container and self.ok_containers


class InjectionVerifier:
    """Apply injection patches to a Pod and check the agent ended up everywhere once."""

    def __init__(self, config: Optional[AgentConfig] = None) -> None:
        self.config = config or AgentConfig()

    def verify(
        self,
        manifest: Union[str, Dict[str, Any]],
        patch_ops: Iterable[PatchLike],
    ) -> VerificationResult:
        try:
            base_obj = self._load_manifest(manifest)
            patched_obj = apply_patch_ops(base_obj, patch_ops)
        except PatchError as exc:
            logger.warning("patch application failed: %s", exc)
            return VerificationResult(False, False, False, False, None, [str(exc)])

        spec = patched_obj.get("spec") or {}
        errors: List[str] = []

        ok_volume = self._expect_once(
            [v.get("name") for v in spec.get("volumes") or []], VOLUME_NAME, "volume", errors
        )
        ok_init = self._expect_once(
            [c.get("name") for c in spec.get("initContainers") or []],
            INIT_CONTAINER_NAME,
            "init container",
            errors,
        )
        ok_containers = True
        for index, container in enumerate(spec.get("containers") or []):
            if not self._check_container(index, container, errors):
                ok_containers = False

        return VerificationResult(
            ok_apply=True,
            ok_volume=ok_volume,
            ok_init_container=ok_init,
            ok_containers=ok_containers,
            patched_manifest=patched_obj,
            errors=errors,
        )

    def _check_container(self, index: int, container: Dict[str, Any], errors: List[str]) -> bool:
        ok = self._expect_once(
            [m.get("name") for m in container.get("volumeMounts") or []],
            VOLUME_NAME,
            f"containers[{index}] volume mount",
            errors,
        )
        env = container.get("env") or []
        names = [var.get("name") for var in env]
        for name in configured_env_names(self.config.environment):
            if not self._expect_once(names, name, f"containers[{index}] env {name}", errors):
                ok = False
        values = {var.get("name"): var for var in env}
        for name, value in self.config.sorted_environment():
            if name in values and values[name].get("value") != value:
                errors.append(f"containers[{index}] env {name} has unexpected value")
                ok = False
        token = values.get(SECRET_TOKEN_ENV)
        if token is not None and "secretKeyRef" not in (token.get("valueFrom") or {}):
            errors.append(f"containers[{index}] env {SECRET_TOKEN_ENV} is not a secret reference")
            ok = False
        return ok

    @staticmethod
    def _expect_once(names: List[Any], expected: str, label: str, errors: List[str]) -> bool:
        count = names.count(expected)
        if count == 1:
            return True
        errors.append(f"expected exactly one {label} named {expected}, found {count}")
        return False

    @staticmethod
    def _load_manifest(manifest: Union[str, Dict[str, Any]]) -> Dict[str, Any]:
        if isinstance(manifest, dict):
            return manifest
        documents = list(yaml.safe_load_all(manifest))
        if not documents:
            raise PatchError("manifest is empty")
        first = documents[0]
        if not isinstance(first, dict):
            raise PatchError("manifest must be a mapping")
        return first


__all__ = ["InjectionVerifier", "VerificationResult"]
