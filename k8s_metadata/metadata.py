"""Identity metadata of the running pod."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from .base_metadata import BaseMetadata, fetch_base_metadata
from .fetcher import K8SFetcher, new_k8s_client

log = logging.getLogger(__name__)


class FetcherNotConfiguredError(RuntimeError):
    """Raised when a status lookup is made without a fetcher attached."""


class Config:
    """Base metadata of this pod plus an optional status fetcher.

    The metadata mapping is read-only once built. The fetcher is owned by
    whoever created it; :class:`Config` only keeps a reference.
    """

    def __init__(
        self,
        base_k8s_metadata: Optional[Mapping[BaseMetadata, str]] = None,
        k8s_client: Optional[K8SFetcher] = None,
    ) -> None:
        self._base_k8s_metadata: Mapping[BaseMetadata, str] = MappingProxyType(
            dict(base_k8s_metadata or {})
        )
        self._k8s_client = k8s_client

    @property
    def base_k8s_metadata(self) -> Mapping[BaseMetadata, str]:
        return self._base_k8s_metadata

    @property
    def k8s_client(self) -> Optional[K8SFetcher]:
        return self._k8s_client

    def set_k8s_client(self, fetcher: Optional[K8SFetcher]) -> None:
        self._k8s_client = fetcher

    def get_base_metadata(self, key: BaseMetadata) -> str:
        """Return the value stored for *key*.

        Unknown keys yield ``""``, so an unset value cannot be told apart from
        an empty one.
        """

        return self._base_k8s_metadata.get(key, "")

    def get_pod_status(self) -> str:
        """Ask the attached fetcher for the status of this pod."""

        if self._k8s_client is None:
            raise FetcherNotConfiguredError(
                "No k8s client attached; construct with with_k8s_client()"
            )
        return self._k8s_client.get_pod_status(
            self.get_base_metadata(BaseMetadata.NAMESPACE),
            self.get_base_metadata(BaseMetadata.POD_NAME),
        )


Option = Callable[[Config], None]


def new(*options: Option) -> Config:
    """Load the base metadata from the environment and apply *options* in order.

    Errors from loading or from any option propagate unchanged; options after
    a failing one are not run.
    """

    config = Config(fetch_base_metadata())
    for option in options:
        option(config)
    return config


def with_k8s_client() -> Option:
    """Attach a :class:`~k8s_metadata.fetcher.KubernetesFetcher`."""

    def _apply(config: Config) -> None:
        config.set_k8s_client(new_k8s_client())
        log.debug("Attached default k8s client")

    return _apply


def with_k8s_fetcher(fetcher: K8SFetcher) -> Option:
    def _apply(config: Config) -> None:
        config.set_k8s_client(fetcher)

    return _apply


__all__ = [
    "Config",
    "FetcherNotConfiguredError",
    "Option",
    "new",
    "with_k8s_client",
    "with_k8s_fetcher",
]
