from __future__ import annotations

import copy
from typing import Any, Dict, Iterable, List, Union

import jsonpatch
import yaml

from src.injector.patches import PatchOperation


class PatchError(Exception):
    """Raised when generated operations cannot be applied to a manifest."""


PatchLike = Union[PatchOperation, Dict[str, Any]]


def _as_dicts(patch_ops: Iterable[PatchLike]) -> List[Dict[str, Any]]:
    ops: List[Dict[str, Any]] = []
    for op in patch_ops:
        if isinstance(op, PatchOperation):
            op = op.to_dict()
        ops.append(copy.deepcopy(op))
    return ops


def apply_patch_ops(document: Dict[str, Any], patch_ops: Iterable[PatchLike]) -> Dict[str, Any]:
    try:
        return jsonpatch.apply_patch(document, _as_dicts(patch_ops), in_place=False)
    except (jsonpatch.JsonPatchException, jsonpatch.JsonPointerException) as exc:
        raise PatchError(f"bad path or conflict: {exc}") from exc


def validate_paths_exist(base_yaml: str, patch_ops: Iterable[PatchLike]) -> None:
    if base_yaml is None:
        raise PatchError("manifest YAML unavailable for validation")
    documents = list(yaml.safe_load_all(base_yaml))
    if not documents or documents[0] is None:
        raise PatchError("manifest YAML empty")
    apply_patch_ops(documents[0], patch_ops)


__all__ = ["PatchError", "apply_patch_ops", "validate_paths_exist"]
