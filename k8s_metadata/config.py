"""Tunables for the cluster API client, with environment overrides."""

from __future__ import annotations

import os
from typing import Final


def _get_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


def _get_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return max(0.0, float(value.strip()))
    except ValueError:
        return default


# 0 disables the per-request timeout.
K8S_METADATA_TIMEOUT_SECONDS: Final[float] = _get_float("K8S_METADATA_TIMEOUT_SECONDS", 10.0)
K8S_METADATA_ALLOW_KUBECONFIG: Final[bool] = _get_bool("K8S_METADATA_ALLOW_KUBECONFIG", False)

__all__ = [
    "K8S_METADATA_TIMEOUT_SECONDS",
    "K8S_METADATA_ALLOW_KUBECONFIG",
]
