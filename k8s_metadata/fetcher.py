"""Status lookups against the Kubernetes API."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

from kubernetes import client
from kubernetes import config as kube_config
from kubernetes.config import ConfigException

from .config import K8S_METADATA_ALLOW_KUBECONFIG, K8S_METADATA_TIMEOUT_SECONDS

log = logging.getLogger(__name__)


class K8SFetcher(Protocol):
    """Anything that can report the status of a pod.

    Only the one method is required so tests can hand in a fake instead of a
    client talking to a real cluster.
    """

    def get_pod_status(self, namespace: str, pod_name: str) -> str:
        ...


class KubernetesFetcher:
    """:class:`K8SFetcher` backed by the official Kubernetes client."""

    def __init__(self, api: Any, *, timeout: Optional[float] = None) -> None:
        self._api = api
        self._timeout = K8S_METADATA_TIMEOUT_SECONDS if timeout is None else max(0.0, timeout)

    @property
    def timeout(self) -> float:
        return self._timeout

    def get_pod_status(self, namespace: str, pod_name: str) -> str:
        """Return the phase of *pod_name*, or ``""`` if the API reports none."""

        pod = self._api.read_namespaced_pod_status(
            name=pod_name,
            namespace=namespace,
            _request_timeout=self._timeout or None,
        )
        status = getattr(pod, "status", None)
        phase = getattr(status, "phase", None)
        log.debug("Pod %s/%s reported phase %s", namespace, pod_name, phase)
        return phase or ""


def new_k8s_client(
    *, allow_kubeconfig: Optional[bool] = None, timeout: Optional[float] = None
) -> KubernetesFetcher:
    """Build a :class:`KubernetesFetcher` from the in-cluster service account.

    With kubeconfig fallback enabled a local kubeconfig is used when no
    in-cluster configuration is found. Loader errors are raised unchanged.
    """

    if allow_kubeconfig is None:
        allow_kubeconfig = K8S_METADATA_ALLOW_KUBECONFIG
    configuration = client.Configuration()
    try:
        kube_config.load_incluster_config(client_configuration=configuration)
    except ConfigException:
        if not allow_kubeconfig:
            raise
        log.info("No in-cluster configuration found, falling back to kubeconfig")
        kube_config.load_kube_config(client_configuration=configuration)
    api = client.CoreV1Api(client.ApiClient(configuration))
    log.debug("Kubernetes client configured for %s", configuration.host)
    return KubernetesFetcher(api, timeout=timeout)


__all__ = ["K8SFetcher", "KubernetesFetcher", "new_k8s_client"]
