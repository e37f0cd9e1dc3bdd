from typing import List, Tuple

import pytest
from kubernetes.config import ConfigException

from k8s_metadata import metadata as metadata_module
from k8s_metadata.base_metadata import BaseMetadata, MissingBaseMetadataError
from k8s_metadata.metadata import (
    Config,
    FetcherNotConfiguredError,
    new,
    with_k8s_client,
    with_k8s_fetcher,
)

_ENV = {
    "BASEPLATE_K8S_METADATA_NODE_NAME": "node-1",
    "BASEPLATE_K8S_METADATA_NODE_IP": "10.0.0.5",
    "BASEPLATE_K8S_METADATA_POD_NAME": "pod-abc",
    "BASEPLATE_K8S_METADATA_POD_IP": "10.0.0.6",
    "BASEPLATE_K8S_METADATA_NAMESPACE": "default",
}


class _FakeFetcher:
    def __init__(self, status: str = "Running") -> None:
        self.status = status
        self.calls: List[Tuple[str, str]] = []

    def get_pod_status(self, namespace: str, pod_name: str) -> str:
        self.calls.append((namespace, pod_name))
        return self.status


@pytest.fixture
def pod_env(monkeypatch):
    for name, value in _ENV.items():
        monkeypatch.setenv(name, value)


def test_new_without_options(pod_env):
    config = new()
    assert config.get_base_metadata(BaseMetadata.NAMESPACE) == "default"
    assert config.get_base_metadata(BaseMetadata.NODE_NAME) == "node-1"
    assert config.get_base_metadata(BaseMetadata.NODE_IP) == "10.0.0.5"
    assert config.get_base_metadata(BaseMetadata.POD_NAME) == "pod-abc"
    assert config.get_base_metadata(BaseMetadata.POD_IP) == "10.0.0.6"
    assert config.k8s_client is None


def test_new_fails_when_variable_unset(pod_env, monkeypatch):
    monkeypatch.delenv("BASEPLATE_K8S_METADATA_POD_IP")
    with pytest.raises(MissingBaseMetadataError, match="BASEPLATE_K8S_METADATA_POD_IP"):
        new()


def test_new_fails_when_variable_blank(pod_env, monkeypatch):
    monkeypatch.setenv("BASEPLATE_K8S_METADATA_NAMESPACE", "   ")
    with pytest.raises(MissingBaseMetadataError, match="BASEPLATE_K8S_METADATA_NAMESPACE"):
        new()


def test_options_not_run_when_metadata_missing(pod_env, monkeypatch):
    monkeypatch.delenv("BASEPLATE_K8S_METADATA_NODE_IP")
    called = False

    def _option(_config):
        nonlocal called
        called = True

    with pytest.raises(MissingBaseMetadataError):
        new(_option)
    assert not called


def test_options_run_in_order_and_stop_at_first_failure(pod_env):
    order: List[str] = []

    def _first(_config):
        order.append("first")

    def _second(_config):
        order.append("second")
        raise ValueError("second option failed")

    def _third(_config):
        order.append("third")

    with pytest.raises(ValueError, match="second option failed"):
        new(_first, _second, _third)
    assert order == ["first", "second"]


def test_options_receive_the_config_under_construction(pod_env):
    seen = []
    config = new(lambda c: seen.append(c.get_base_metadata(BaseMetadata.POD_NAME)))
    assert seen == ["pod-abc"]
    assert config.get_base_metadata(BaseMetadata.POD_NAME) == "pod-abc"


def test_lookup_of_unknown_key_is_empty(pod_env):
    config = new()
    assert config.get_base_metadata("notAKey") == ""  # type: ignore[arg-type]


def test_lookup_on_zero_value_config_is_empty():
    config = Config()
    for key in BaseMetadata:
        assert config.get_base_metadata(key) == ""


def test_metadata_mapping_is_read_only(pod_env):
    config = new()
    with pytest.raises(TypeError):
        config.base_k8s_metadata[BaseMetadata.NAMESPACE] = "other"  # type: ignore[index]


def test_with_k8s_client_attaches_default_client(pod_env, monkeypatch):
    fetcher = _FakeFetcher()
    monkeypatch.setattr(metadata_module, "new_k8s_client", lambda: fetcher)

    config = new(with_k8s_client())

    assert config.k8s_client is fetcher


def test_with_k8s_client_propagates_construction_error(pod_env, monkeypatch):
    error = ConfigException("Service host/port is not set.")

    def _fail():
        raise error

    monkeypatch.setattr(metadata_module, "new_k8s_client", _fail)

    with pytest.raises(ConfigException) as excinfo:
        new(with_k8s_client())
    assert excinfo.value is error


def test_later_option_replaces_fetcher(pod_env):
    first, second = _FakeFetcher(), _FakeFetcher()
    config = new(with_k8s_fetcher(first), with_k8s_fetcher(second))
    assert config.k8s_client is second


def test_get_pod_status_queries_own_pod(pod_env):
    fetcher = _FakeFetcher("Pending")
    config = new(with_k8s_fetcher(fetcher))

    assert config.get_pod_status() == "Pending"
    assert fetcher.calls == [("default", "pod-abc")]


def test_get_pod_status_without_fetcher(pod_env):
    with pytest.raises(FetcherNotConfiguredError):
        new().get_pod_status()
