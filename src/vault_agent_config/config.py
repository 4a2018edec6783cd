"""
Agent Defaults Configuration.

Well-known constants the synthesized document refers to: file locations inside
the agent container, the cache listener port and the two built-in templates.
All values configurable via VAULT_AGENT_CONFIG_* environment variables.
"""

import os
from dataclasses import dataclass, field, asdict
from typing import Optional, Dict, Any

from .exceptions import ConfigError


DEFAULT_MAP_TEMPLATE = "{{ with secret \"%s\" }}{{ range $k, $v := .Data }}{{ $k }}: {{ $v }}\n{{ end }}{{ end }}"
DEFAULT_JSON_TEMPLATE = "{{ with secret \"%s\" }}{{ .Data | toJSON }}\n{{ end }}"
DEFAULT_TEMPLATE_TYPE = "map"
TEMPLATE_TYPES = ("map", "json")

DEFAULT_PID_FILE = "/home/vault/.pid"
DEFAULT_TOKEN_FILE = "/home/vault/.vault-token"
DEFAULT_CACHE_VOLUME_PATH = "/vault/agent-cache"
DEFAULT_LISTENER_PORT = "8200"

ENV_PREFIX = "VAULT_AGENT_CONFIG_"


def _env_str(key: str, default: str) -> str:
    """Read string from environment variable, ignoring empty values."""
    value = os.getenv(ENV_PREFIX + key)
    if not value:
        return default
    return value


@dataclass(frozen=True)
class AgentDefaults:
    """
    Fixed values injected into the config assembler.

    Environment Variables:
        VAULT_AGENT_CONFIG_PID_FILE: Agent pid file (default: /home/vault/.pid)
        VAULT_AGENT_CONFIG_TOKEN_FILE: Primary token sink (default: /home/vault/.vault-token)
        VAULT_AGENT_CONFIG_CACHE_VOLUME_PATH: Persistent cache directory (default: /vault/agent-cache)
        VAULT_AGENT_CONFIG_LISTENER_PORT: Cache listener port (default: 8200)
        VAULT_AGENT_CONFIG_MAP_TEMPLATE: Built-in "map" template, one %s for the secret path
        VAULT_AGENT_CONFIG_JSON_TEMPLATE: Built-in "json" template, one %s for the secret path
    """

    pid_file: str = field(default_factory=lambda: _env_str("PID_FILE", DEFAULT_PID_FILE))
    token_file: str = field(default_factory=lambda: _env_str("TOKEN_FILE", DEFAULT_TOKEN_FILE))
    cache_volume_path: str = field(default_factory=lambda: _env_str(
        "CACHE_VOLUME_PATH", DEFAULT_CACHE_VOLUME_PATH
    ))
    listener_port: str = field(default_factory=lambda: _env_str(
        "LISTENER_PORT", DEFAULT_LISTENER_PORT
    ))
    map_template: str = field(default_factory=lambda: _env_str(
        "MAP_TEMPLATE", DEFAULT_MAP_TEMPLATE
    ))
    json_template: str = field(default_factory=lambda: _env_str(
        "JSON_TEMPLATE", DEFAULT_JSON_TEMPLATE
    ))

    def __post_init__(self):
        for name in ("map_template", "json_template"):
            if getattr(self, name).count("%s") != 1:
                raise ConfigError(f"{name} must contain exactly one '%s' placeholder")

    def template_for(self, template_type: str) -> str:
        """Return the built-in template format string for a default template type."""
        if template_type == "json":
            return self.json_template
        if template_type == "map":
            return self.map_template
        raise ConfigError(
            f"unknown default template type '{template_type}' (expected one of {', '.join(TEMPLATE_TYPES)})"
        )

    def format_template(self, template_type: str, secret_path: str) -> str:
        """
        Substitute a secret path into a built-in template.

        Only the single %s placeholder is replaced; any other % text (e.g. a
        Go `printf "%v"` call) is left untouched.
        """
        return self.template_for(template_type).replace("%s", secret_path, 1)

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary (for JSON output)."""
        return asdict(self)


# Global instance for convenience
_default_config: Optional[AgentDefaults] = None


def get_defaults() -> AgentDefaults:
    """Get the global defaults."""
    global _default_config
    if _default_config is None:
        _default_config = AgentDefaults()
    return _default_config


def reset_defaults() -> None:
    """Reset global defaults (useful after env var changes or for testing)."""
    global _default_config
    _default_config = None
