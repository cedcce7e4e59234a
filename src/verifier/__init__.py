"""Verifier package for checking agent injection patches."""

from .jsonpatch_guard import PatchError, apply_patch_ops, validate_paths_exist
from .verifier import InjectionVerifier, VerificationResult

__all__ = [
    "InjectionVerifier",
    "PatchError",
    "VerificationResult",
    "apply_patch_ops",
    "validate_paths_exist",
]
