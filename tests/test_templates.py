"""
Tests for template synthesis: content defaulting, destinations and ordering.
"""

import pytest

from vault_agent_config.config import AgentDefaults, DEFAULT_MAP_TEMPLATE, DEFAULT_JSON_TEMPLATE
from vault_agent_config.exceptions import ConfigError
from vault_agent_config.intent import Secret
from vault_agent_config.synthesis.templates import TemplateSynthesizer, join_paths


class TestContentDefaulting:
    """Test how a template's contents or source is chosen."""

    def test_map_template_default(self, defaults):
        secret = Secret(name="foo", path="db/creds/foo", mount_path="/vault/secrets")
        template = TemplateSynthesizer("map", defaults).to_template(secret)
        assert template.contents == (
            '{{ with secret "db/creds/foo" }}{{ range $k, $v := .Data }}'
            '{{ $k }}: {{ $v }}\n{{ end }}{{ end }}'
        )
        assert template.source == ""

    def test_json_template_default(self, defaults):
        secret = Secret(name="foo", path="db/creds/foo", mount_path="/vault/secrets")
        template = TemplateSynthesizer("json", defaults).to_template(secret)
        assert template.contents == '{{ with secret "db/creds/foo" }}{{ .Data | toJSON }}\n{{ end }}'
        assert template.contents == DEFAULT_JSON_TEMPLATE % "db/creds/foo"

    def test_explicit_template_used_verbatim(self, defaults):
        secret = Secret(
            name="foo",
            path="db/creds/foo",
            mount_path="/vault/secrets",
            template='{{ with secret "db/creds/foo" }}{{ .Data.password }}{{ end }}',
        )
        template = TemplateSynthesizer("json", defaults).to_template(secret)
        assert template.contents == '{{ with secret "db/creds/foo" }}{{ .Data.password }}{{ end }}'

    def test_template_file_sets_source(self, defaults):
        secret = Secret(
            name="foo",
            path="db/creds/foo",
            mount_path="/vault/secrets",
            template_file="/vault/templates/foo.ctmpl",
        )
        template = TemplateSynthesizer("map", defaults).to_template(secret)
        assert template.source == "/vault/templates/foo.ctmpl"
        assert template.contents == ""

    def test_template_file_takes_priority_over_inline_template(self, defaults):
        """A stanza never carries both source and contents."""
        secret = Secret(
            name="foo",
            path="db/creds/foo",
            mount_path="/vault/secrets",
            template="{{ .Data }}",
            template_file="/vault/templates/foo.ctmpl",
        )
        template = TemplateSynthesizer("map", defaults).to_template(secret)
        assert template.source == "/vault/templates/foo.ctmpl"
        assert template.contents == ""

    def test_overridden_builtin_template(self):
        defaults = AgentDefaults(map_template="custom %s")
        secret = Secret(name="foo", path="kv/foo", mount_path="/vault/secrets")
        template = TemplateSynthesizer("map", defaults).to_template(secret)
        assert template.contents == "custom kv/foo"

    def test_unknown_default_template_type(self, defaults):
        secret = Secret(name="foo", path="kv/foo", mount_path="/vault/secrets")
        with pytest.raises(ConfigError):
            TemplateSynthesizer("yaml", defaults).to_template(secret)


class TestDestination:
    """Test destination path derivation."""

    def test_default_destination(self, defaults):
        secret = Secret(name="n", path="kv/n", mount_path="a/b")
        assert TemplateSynthesizer("map", defaults).to_template(secret).destination == "a/b/n"

    def test_explicit_file_name(self, defaults):
        secret = Secret(name="n", path="kv/n", mount_path="a/b", file_name="x/y")
        assert TemplateSynthesizer("map", defaults).to_template(secret).destination == "a/b/x/y"

    def test_explicit_file_name_is_cleaned(self, defaults):
        secret = Secret(name="n", path="kv/n", mount_path="/vault/secrets/", file_name="/conf//app.env")
        destination = TemplateSynthesizer("map", defaults).to_template(secret).destination
        assert destination == "/vault/secrets/conf/app.env"

    def test_join_paths(self):
        assert join_paths("a/b", "x/y") == "a/b/x/y"
        assert join_paths("a/b", "/x") == "a/b/x"
        assert join_paths("", "token") == "token"
        assert join_paths("/vault/secrets/", "token") == "/vault/secrets/token"
        assert join_paths("", "") == ""
        assert join_paths("//vault", "token") == "/vault/token"
        assert join_paths("/", "//x") == "/x"


class TestStanzaFields:
    """Test fixed and copied stanza fields."""

    def test_fixed_delimiters(self, defaults, secrets):
        for template in TemplateSynthesizer("map", defaults).build(secrets):
            assert template.left_delimiter == "{{"
            assert template.right_delimiter == "}}"

    def test_command_and_perms_copied(self, defaults):
        secret = Secret(
            name="foo",
            path="kv/foo",
            mount_path="/vault/secrets",
            command="pkill -HUP app",
            file_permission="0400",
        )
        template = TemplateSynthesizer("map", defaults).to_template(secret)
        assert template.command == "pkill -HUP app"
        assert template.perms == "0400"

    def test_perms_absent_when_not_requested(self, defaults):
        secret = Secret(name="foo", path="kv/foo", mount_path="/vault/secrets")
        template = TemplateSynthesizer("map", defaults).to_template(secret)
        assert template.perms == ""
        assert template.command == ""


class TestOrdering:
    """Test that template order and count follow the secrets."""

    def test_order_preserved(self, defaults):
        secrets = [
            Secret(name=name, path=f"kv/{name}", mount_path="/vault/secrets")
            for name in ["zeta", "alpha", "mid"]
        ]
        templates = TemplateSynthesizer("map", defaults).build(secrets)
        assert [t.destination for t in templates] == [
            "/vault/secrets/zeta",
            "/vault/secrets/alpha",
            "/vault/secrets/mid",
        ]

    def test_empty_secrets(self, defaults):
        assert TemplateSynthesizer("map", defaults).build([]) == []

    def test_iter_templates_is_restartable(self, defaults, secrets):
        synthesizer = TemplateSynthesizer("map", defaults)
        first = list(synthesizer.iter_templates(secrets))
        second = list(synthesizer.iter_templates(secrets))
        assert first == second
        assert len(first) == len(secrets)

    def test_default_map_constant(self, defaults):
        assert defaults.map_template == DEFAULT_MAP_TEMPLATE
