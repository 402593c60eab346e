import pytest

from nbtree.conf.get_settings import CONFIG_YAML_ENV_VAR, reset_global_settings


@pytest.fixture(autouse=True)
def default_global_settings(monkeypatch):
    monkeypatch.delenv(CONFIG_YAML_ENV_VAR, raising=False)
    reset_global_settings()
    yield
    reset_global_settings()
