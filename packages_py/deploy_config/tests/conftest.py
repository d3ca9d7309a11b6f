import os

import pytest

from deploy_config.loader import load_document

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")

SETTINGS_ENV_VARS = [
    "UDC_EPHEMERAL_BRANCH_PREFIX",
    "UDC_DISABLE_EPHEMERAL_BRANCH_CHECK",
    "UDC_BRANCH_NAME",
    "GITHUB_REF_NAME",
    "CI_COMMIT_REF_NAME",
    "UDC_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch):
    """CI runners export branch variables; keep them out of the tests."""
    for key in SETTINGS_ENV_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def config_path():
    return os.path.join(FIXTURES_DIR, "deploy-config.json5")


@pytest.fixture
def document(config_path):
    return load_document(config_path)
