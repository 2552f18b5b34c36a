import copy

import pytest
import yaml

from db_connection_model.constants import ENV_MODEL_DEFAULT_CONFIG
from db_connection_model.defaults import load_defaults


@pytest.fixture(autouse=True)
def clear_default_override(monkeypatch):
    monkeypatch.delenv(ENV_MODEL_DEFAULT_CONFIG, raising=False)


@pytest.fixture
def bundled_defaults():
    return load_defaults()


@pytest.fixture
def override_defaults(tmp_path, monkeypatch, bundled_defaults):
    """Point the loader at a modified copy of the bundled document."""
    def _override(mutate=None, text=None):
        path = tmp_path / "model.default.yaml"
        if text is None:
            doc = copy.deepcopy(bundled_defaults)
            if mutate:
                mutate(doc)
            text = yaml.safe_dump(doc)
        path.write_text(text, encoding="utf-8")
        monkeypatch.setenv(ENV_MODEL_DEFAULT_CONFIG, str(path))
        return path
    return _override
