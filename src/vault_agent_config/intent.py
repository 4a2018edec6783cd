"""
Agent intent: the already-parsed description of what a sidecar should do.

The synthesis core only reads these models. load_intent() is the small file
collaborator used by the CLI; the core never touches the filesystem.
"""

import json
from pathlib import Path
from typing import Dict, List, Literal, Any, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import IntentLoadError
from .logging_config import logger


class IntentModel(BaseModel):
    """Frozen snapshot; synthesis never mutates its input."""
    model_config = ConfigDict(frozen=True, extra="forbid")


class VaultSettings(IntentModel):
    """
    Connection and auto-auth settings for the Vault server.
    """
    address: str = ""
    ca_cert: str = ""
    ca_path: str = ""
    client_cert: str = ""
    client_key: str = ""
    tls_skip_verify: bool = False
    tls_server_name: str = ""
    auth_type: str = "kubernetes"
    auth_path: str = ""
    namespace: str = ""
    auth_config: Dict[str, Any] = Field(default_factory=dict)
    auth_min_backoff: str = ""
    auth_max_backoff: str = ""


class Secret(IntentModel):
    """
    A secret to render into the shared volume.

    file_name, when set, replaces the secret name as the file written under
    mount_path and may contain sub-directories.
    """
    name: str
    path: str
    mount_path: str
    template: str = ""
    template_file: str = ""
    file_name: str = ""
    file_permission: str = ""
    command: str = ""


class CacheSettings(IntentModel):
    enable: bool = False
    persist: bool = False
    listener_port: str = ""  # empty: use AgentDefaults.listener_port
    use_auto_auth_token: str = ""
    exit_on_err: bool = False
    keep_after_import: bool = False
    service_account_token_file: str = ""


class TemplateSettings(IntentModel):
    exit_on_retry_failure: bool = True
    static_secret_render_interval: str = ""


class AgentIntent(IntentModel):
    """
    Everything the config assembler needs for one sidecar.

    pre_populate_only marks a pod that only runs the init container; ephemeral
    caching is suppressed for it. secret_volume_path is the base directory of the
    extra token sink added when inject_token is set.
    """
    vault: VaultSettings = Field(default_factory=VaultSettings)
    secrets: List[Secret] = Field(default_factory=list)
    default_template: Literal["map", "json"] = "map"
    template_config: TemplateSettings = Field(default_factory=TemplateSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    auto_auth_exit_on_error: bool = False
    inject_token: bool = False
    secret_volume_path: str = "/vault/secrets"
    pre_populate_only: bool = False
    enable_quit: bool = False
    disable_idle_connections: List[str] = Field(default_factory=list)
    disable_keep_alives: List[str] = Field(default_factory=list)


def load_intent(source: Union[str, Path]) -> AgentIntent:
    """
    Load and validate an intent from a JSON file.

    Args:
        source: Path to the intent JSON file

    Returns:
        Validated AgentIntent

    Raises:
        IntentLoadError: If the file cannot be read, is not JSON, or fails validation
    """
    path = Path(source)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise IntentLoadError(str(path), str(e)) from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise IntentLoadError(str(path), f"invalid JSON: {e}") from e

    try:
        intent = AgentIntent.model_validate(data)
    except ValidationError as e:
        raise IntentLoadError(str(path), f"{e.error_count()} validation error(s)\n{e}") from e

    logger.debug(f"Loaded intent from {path} ({len(intent.secrets)} secrets)")
    return intent
