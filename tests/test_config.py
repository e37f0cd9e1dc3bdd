import pytest

from k8s_metadata import config


@pytest.mark.parametrize(
    "raw, expected",
    [("1", True), ("yes", True), (" ON ", True), ("0", False), ("off", False), ("maybe", False)],
)
def test_get_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("K8S_METADATA_TEST_FLAG", raw)
    assert config._get_bool("K8S_METADATA_TEST_FLAG", False) is expected


def test_get_bool_default_when_unset(monkeypatch):
    monkeypatch.delenv("K8S_METADATA_TEST_FLAG", raising=False)
    assert config._get_bool("K8S_METADATA_TEST_FLAG", True) is True


@pytest.mark.parametrize("raw, expected", [("2.5", 2.5), ("-1", 0.0), ("abc", 10.0)])
def test_get_float(monkeypatch, raw, expected):
    monkeypatch.setenv("K8S_METADATA_TEST_TIMEOUT", raw)
    assert config._get_float("K8S_METADATA_TEST_TIMEOUT", 10.0) == expected
