"""
Pytest configuration for the vault-agent-config test suite.

This conftest.py provides:
- Machine-mode logging (suppresses console output)
- Default-constant isolation between tests
- Common intent fixtures
"""

import os

import pytest

from vault_agent_config.logging_config import setup_logging, reset_logging
from vault_agent_config.config import AgentDefaults, reset_defaults
from vault_agent_config.intent import AgentIntent, Secret


# ============================================================================
# GLOBAL CONFIGURATION
# ============================================================================

def pytest_configure(config):
    os.environ.setdefault("VAULT_AGENT_CONFIG_MACHINE_MODE", "1")


# ============================================================================
# LOGGING / CONFIG FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def setup_test_logging():
    """
    Machine mode by default - suppress console logs for clean test output.
    """
    reset_logging()
    setup_logging(level="DEBUG", suppress_console=True)


@pytest.fixture(autouse=True)
def isolated_defaults(monkeypatch):
    """Drop any VAULT_AGENT_CONFIG_* overrides and the cached global defaults."""
    for key in list(os.environ):
        if key.startswith("VAULT_AGENT_CONFIG_") and key != "VAULT_AGENT_CONFIG_MACHINE_MODE":
            monkeypatch.delenv(key, raising=False)
    reset_defaults()
    yield
    reset_defaults()


@pytest.fixture
def defaults():
    return AgentDefaults()


# ============================================================================
# INTENT FIXTURES
# ============================================================================

@pytest.fixture
def secrets():
    return [
        Secret(name="foo", path="db/creds/foo", mount_path="/vault/secrets"),
        Secret(name="bar", path="db/creds/bar", mount_path="/vault/secrets"),
    ]


@pytest.fixture
def intent(secrets):
    """A typical sidecar intent with two secrets and no caching."""
    return AgentIntent(
        vault={
            "address": "https://vault:8200",
            "auth_type": "kubernetes",
            "auth_path": "auth/kubernetes",
            "auth_config": {"role": "my-role", "token_path": "/var/run/secrets/token"},
        },
        secrets=secrets,
    )


@pytest.fixture
def intent_file(tmp_path, intent):
    """The intent fixture written to a JSON file."""
    path = tmp_path / "intent.json"
    path.write_text(intent.model_dump_json())
    return path
