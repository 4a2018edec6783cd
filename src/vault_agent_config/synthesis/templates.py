"""
Template synthesis: one agent template stanza per requested secret.
"""

import posixpath
from typing import Iterable, Iterator, List, Optional

from ..logging_config import logger
from ..config import AgentDefaults, get_defaults
from ..intent import Secret
from ..schemas import Template
from .config import LEFT_DELIMITER, RIGHT_DELIMITER


def join_paths(*parts: str) -> str:
    """
    Join path segments with '/' and clean the result.

    Leading slashes on later segments do not reset the path, so
    join_paths("a/b", "/x") == "a/b/x". All-empty input yields "".
    A leading "//" collapses to "/" (posixpath keeps it).
    """
    joined = "/".join(part for part in parts if part)
    if not joined:
        return ""
    cleaned = posixpath.normpath(joined)
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


class TemplateSynthesizer:
    """
    Converts secrets into template stanzas, preserving their order.
    """

    def __init__(self, default_template: str = "map", defaults: Optional[AgentDefaults] = None):
        """
        Args:
            default_template: Built-in template used for secrets with no template of their own ("map" or "json")
            defaults: Well-known constants (defaults to the global AgentDefaults)
        """
        self.defaults = defaults or get_defaults()
        self.default_template = default_template

    def contents_for(self, secret: Secret) -> str:
        """Inline contents for a secret without a template file."""
        if secret.template:
            return secret.template
        return self.defaults.format_template(self.default_template, secret.path)

    def destination_for(self, secret: Secret) -> str:
        if secret.file_name:
            return join_paths(secret.mount_path, secret.file_name)
        return f"{secret.mount_path}/{secret.name}"

    def to_template(self, secret: Secret) -> Template:
        # A template file always wins; inline contents are only set without one.
        if secret.template_file:
            source, contents = secret.template_file, ""
        else:
            source, contents = "", self.contents_for(secret)

        return Template(
            source=source,
            contents=contents,
            destination=self.destination_for(secret),
            left_delimiter=LEFT_DELIMITER,
            right_delimiter=RIGHT_DELIMITER,
            command=secret.command,
            perms=secret.file_permission,
        )

    def iter_templates(self, secrets: Iterable[Secret]) -> Iterator[Template]:
        """Lazily yield one template per secret, in input order."""
        for secret in secrets:
            yield self.to_template(secret)

    def build(self, secrets: Iterable[Secret]) -> List[Template]:
        """
        Build template stanzas for all secrets.

        Args:
            secrets: Secrets in the order they were requested

        Returns:
            List of Template stanzas, same length and order as secrets
        """
        templates = list(self.iter_templates(secrets))
        logger.debug(f"Synthesized {len(templates)} template stanza(s) (default template: {self.default_template})")
        return templates
