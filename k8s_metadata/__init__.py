"""Pod identity metadata for services running on Kubernetes."""

from .base_metadata import (
    BASE_METADATA_VARIABLES,
    BaseMetadata,
    MissingBaseMetadataError,
    fetch_base_metadata,
    missing_base_metadata,
)
from .fetcher import K8SFetcher, KubernetesFetcher, new_k8s_client
from .metadata import (
    Config,
    FetcherNotConfiguredError,
    Option,
    new,
    with_k8s_client,
    with_k8s_fetcher,
)

__all__ = [
    "BASE_METADATA_VARIABLES",
    "BaseMetadata",
    "Config",
    "FetcherNotConfiguredError",
    "K8SFetcher",
    "KubernetesFetcher",
    "MissingBaseMetadataError",
    "Option",
    "fetch_base_metadata",
    "missing_base_metadata",
    "new",
    "new_k8s_client",
    "with_k8s_client",
    "with_k8s_fetcher",
]
