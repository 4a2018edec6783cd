"""
vault-agent-config - Vault Agent sidecar configuration synthesis

Builds the JSON configuration a Vault Agent sidecar runs with from an
agent intent.
"""

__version__ = "0.1.0"

# Core exports
from vault_agent_config.intent import AgentIntent, Secret, load_intent
from vault_agent_config.schemas import AgentConfig
from vault_agent_config.config import AgentDefaults, get_defaults
from vault_agent_config.synthesis import ConfigAssembler, new_config, parse
from vault_agent_config.exceptions import VaultAgentConfigError, RenderError

__all__ = [
    "__version__",
    "AgentIntent",
    "Secret",
    "load_intent",
    "AgentConfig",
    "AgentDefaults",
    "get_defaults",
    "ConfigAssembler",
    "new_config",
    "parse",
    "VaultAgentConfigError",
    "RenderError",
]
