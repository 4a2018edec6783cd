"""
Config assembly: AgentIntent -> Vault Agent configuration bytes.

The assembler builds the connection, auth and sink stanzas itself and
delegates templates, listener/cache wiring and encoding to the other
synthesis components.
"""

from typing import List, Optional

from ..logging_config import logger
from ..config import AgentDefaults, get_defaults
from ..intent import AgentIntent
from ..schemas import (
    AgentConfig,
    AutoAuth,
    Method,
    Sink,
    TemplateConfig,
    VaultConfig,
)
from .config import INJECTED_TOKEN_NAME, SINK_TYPE_FILE
from .listener import ListenerCacheWirer
from .render import Serializer
from .templates import TemplateSynthesizer, join_paths


class ConfigAssembler:
    """
    Top-level synthesis entry point.

    One assembler can serve any number of intents; it keeps no state between
    calls besides the injected defaults.
    """

    def __init__(self, defaults: Optional[AgentDefaults] = None, serializer: Optional[Serializer] = None):
        """
        Args:
            defaults: Well-known paths, port and templates (defaults to the global AgentDefaults)
            serializer: Document encoder (defaults to the JSON Serializer)
        """
        self.defaults = defaults or get_defaults()
        self.serializer = serializer or Serializer()
        self.wirer = ListenerCacheWirer(defaults=self.defaults)

    def vault_config(self, intent: AgentIntent) -> VaultConfig:
        vault = intent.vault
        return VaultConfig(
            address=vault.address,
            ca_cert=vault.ca_cert,
            ca_path=vault.ca_path,
            client_cert=vault.client_cert,
            client_key=vault.client_key,
            tls_skip_verify=vault.tls_skip_verify,
            tls_server_name=vault.tls_server_name,
        )

    def sinks(self, intent: AgentIntent) -> List[Sink]:
        """
        Token sinks: the well-known token file first, then the injected token
        file in the secrets volume when requested.
        """
        sinks = [Sink(type=SINK_TYPE_FILE, config={"path": self.defaults.token_file})]
        if intent.inject_token:
            sinks.append(Sink(
                type=SINK_TYPE_FILE,
                config={"path": join_paths(intent.secret_volume_path, INJECTED_TOKEN_NAME)},
            ))
        return sinks

    def auto_auth(self, intent: AgentIntent) -> AutoAuth:
        vault = intent.vault
        method = Method(
            type=vault.auth_type,
            namespace=vault.namespace,
            mount_path=vault.auth_path,
            config=dict(vault.auth_config),
            min_backoff=vault.auth_min_backoff,
            max_backoff=vault.auth_max_backoff,
            exit_on_err=intent.auto_auth_exit_on_error,
        )
        return AutoAuth(method=method, sinks=self.sinks(intent))

    def build(self, intent: AgentIntent, init: bool = False) -> AgentConfig:
        """
        Assemble the configuration document without encoding it.

        Args:
            intent: Agent intent
            init: True for the init container (exit after auth, no ephemeral cache)

        Returns:
            AgentConfig owned by the caller
        """
        templates = TemplateSynthesizer(
            default_template=intent.default_template,
            defaults=self.defaults,
        ).build(intent.secrets)
        listeners, cache = self.wirer.wire(intent, init)

        document = AgentConfig(
            pid_file=self.defaults.pid_file,
            exit_after_auth=init,
            vault=self.vault_config(intent),
            auto_auth=self.auto_auth(intent),
            templates=templates,
            template_config=TemplateConfig(
                exit_on_retry_failure=intent.template_config.exit_on_retry_failure,
                static_secret_render_interval=intent.template_config.static_secret_render_interval,
            ),
            listeners=listeners,
            cache=cache,
            disable_idle_connections=list(intent.disable_idle_connections),
            disable_keep_alives=list(intent.disable_keep_alives),
        )
        logger.debug(
            f"Assembled agent config: init={init}, sinks={len(document.auto_auth.sinks)}, "
            f"templates={len(templates)}, listeners={len(listeners)}"
        )
        return document

    def assemble(self, intent: AgentIntent, init: bool = False) -> bytes:
        """
        Synthesize and encode the agent configuration.

        Args:
            intent: Agent intent
            init: True for the init container

        Returns:
            Encoded configuration, ready to be written to a file

        Raises:
            RenderError: If the document cannot be encoded
        """
        return self.serializer.render(self.build(intent, init))


def new_config(intent: AgentIntent, init: bool = False, defaults: Optional[AgentDefaults] = None) -> bytes:
    """Convenience function to synthesize a config in one call."""
    return ConfigAssembler(defaults=defaults).assemble(intent, init)
