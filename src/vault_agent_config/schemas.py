"""
Vault Agent configuration document.

Field names and aliases match the keys the agent reads. Fields built with
omit_empty() are dropped from the rendered output when empty, the same way the
agent's own Go structs use `omitempty`.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional, Any

OMIT_EMPTY = "omitempty"

# Free-form payload for auth method and sink config stanzas
ConfigMap = Dict[str, Any]


def omit_empty(default: Any = None, **kwargs: Any) -> Any:
    """Declare a field that is left out of the rendered document when empty."""
    if "default_factory" in kwargs:
        return Field(json_schema_extra={OMIT_EMPTY: True}, **kwargs)
    return Field(default, json_schema_extra={OMIT_EMPTY: True}, **kwargs)


class Stanza(BaseModel):
    """Base for every section of the document."""
    model_config = ConfigDict(populate_by_name=True)


class VaultConfig(Stanza):
    """
    Connection settings for the Vault server.
    """
    address: str = ""
    ca_cert: str = omit_empty("")
    ca_path: str = omit_empty("")
    tls_skip_verify: bool = omit_empty(False)
    client_cert: str = omit_empty("")
    client_key: str = omit_empty("")
    tls_server_name: str = omit_empty("")


class Method(Stanza):
    """
    Auto-auth method the agent uses to log in.
    """
    type: str
    mount_path: str = omit_empty("")
    wrap_ttl: Any = omit_empty(None)
    min_backoff: str = omit_empty("")
    max_backoff: str = omit_empty("")
    namespace: str = omit_empty("")
    config: ConfigMap = omit_empty(default_factory=dict)
    exit_on_err: bool = omit_empty(False)


class Sink(Stanza):
    """
    A location the agent writes the authenticated token to.
    """
    type: str
    wrap_ttl: Any = omit_empty(None)
    dh_type: str = omit_empty("")
    dh_path: str = omit_empty("")
    aad: str = omit_empty("")
    aad_env_var: str = omit_empty("")
    config: ConfigMap = omit_empty(default_factory=dict)


class AutoAuth(Stanza):
    """
    Auth method plus its token sinks.
    """
    method: Optional[Method] = omit_empty(None)
    sinks: List[Sink] = omit_empty(default_factory=list, alias="sink")


class Template(Stanza):
    """
    One rendering rule: where a secret comes from and where it is written.
    """
    create_dest_dirs: bool = omit_empty(False)
    destination: str
    contents: str = omit_empty("")
    left_delimiter: str = omit_empty("")
    right_delimiter: str = omit_empty("")
    command: str = omit_empty("")
    source: str = omit_empty("")
    perms: str = omit_empty("")


class AgentAPI(Stanza):
    enable_quit: bool = False


class Listener(Stanza):
    """
    Network listener for the agent cache and API.
    """
    type: str
    address: str
    tls_disable: bool = False
    agent_api: Optional[AgentAPI] = omit_empty(None)


class CachePersist(Stanza):
    """
    Persistent cache storage settings.
    """
    type: str
    path: str
    keep_after_import: bool = omit_empty(False)
    exit_on_err: bool = omit_empty(False)
    service_account_token_file: str = omit_empty("")


class Cache(Stanza):
    use_auto_auth_token: str = omit_empty("")
    persist: Optional[CachePersist] = omit_empty(None)


class TemplateConfig(Stanza):
    exit_on_retry_failure: bool = False
    static_secret_render_interval: str = omit_empty("")


class AgentConfig(Stanza):
    """
    Top level document composing a Vault Agent configuration file.
    """
    auto_auth: Optional[AutoAuth] = None
    exit_after_auth: bool = False
    pid_file: str = ""
    vault: Optional[VaultConfig] = None
    templates: List[Template] = omit_empty(default_factory=list, alias="template")
    listeners: List[Listener] = omit_empty(default_factory=list, alias="listener")
    cache: Optional[Cache] = omit_empty(None)
    template_config: Optional[TemplateConfig] = omit_empty(None)
    disable_idle_connections: List[str] = omit_empty(default_factory=list)
    disable_keep_alives: List[str] = omit_empty(default_factory=list)
