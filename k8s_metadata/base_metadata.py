"""Pod identity attributes injected into the environment by the cluster."""

from __future__ import annotations

import logging
import os
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

log = logging.getLogger(__name__)


class BaseMetadata(str, Enum):
    """Keys for the identity attributes every pod is started with."""

    NODE_NAME = "baseplateK8sNodeName"
    NODE_IP = "baseplateK8sNodeIP"
    POD_NAME = "baseplateK8sPodName"
    POD_IP = "baseplateK8sPodIP"
    NAMESPACE = "baseplateK8sNamespace"


BASE_METADATA_VARIABLES: Mapping[BaseMetadata, str] = MappingProxyType(
    {
        BaseMetadata.NODE_NAME: "BASEPLATE_K8S_METADATA_NODE_NAME",
        BaseMetadata.NODE_IP: "BASEPLATE_K8S_METADATA_NODE_IP",
        BaseMetadata.POD_NAME: "BASEPLATE_K8S_METADATA_POD_NAME",
        BaseMetadata.POD_IP: "BASEPLATE_K8S_METADATA_POD_IP",
        BaseMetadata.NAMESPACE: "BASEPLATE_K8S_METADATA_NAMESPACE",
    }
)


class MissingBaseMetadataError(RuntimeError):
    """Raised when a base metadata variable is unset or blank."""

    def __init__(self, variable: str) -> None:
        super().__init__(f"metadatabp:{variable} base k8s metadata value not present")
        self.variable = variable


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def fetch_base_metadata(environ: Optional[Mapping[str, str]] = None) -> Dict[BaseMetadata, str]:
    """Read all base metadata from *environ*, failing on the first invalid variable.

    The base metadata is what further lookups against the cluster API are
    keyed on, so a partially populated result is never returned.
    """

    env = os.environ if environ is None else environ
    metadata: Dict[BaseMetadata, str] = {}
    for key, variable in BASE_METADATA_VARIABLES.items():
        value = env.get(variable)
        if _is_blank(value):
            raise MissingBaseMetadataError(variable)
        metadata[key] = value  # type: ignore[assignment]
    log.debug("Loaded base k8s metadata for pod %s", metadata[BaseMetadata.POD_NAME])
    return metadata


def missing_base_metadata(environ: Optional[Mapping[str, str]] = None) -> List[str]:
    """Return every unset or blank base metadata variable name."""

    env = os.environ if environ is None else environ
    return [
        variable
        for variable in BASE_METADATA_VARIABLES.values()
        if _is_blank(env.get(variable))
    ]


__all__ = [
    "BASE_METADATA_VARIABLES",
    "BaseMetadata",
    "MissingBaseMetadataError",
    "fetch_base_metadata",
    "missing_base_metadata",
]
