"""
Serializer: AgentConfig <-> bytes.

Output is compact UTF-8 JSON. Keys follow the schema aliases and fields
declared with omit_empty() are skipped when empty, matching what the agent's
own decoder expects.
"""

import json
from typing import Any, Dict, Union

from pydantic import BaseModel, ValidationError

from ..exceptions import RenderError, DecodeError
from ..logging_config import logger
from ..schemas import AgentConfig, OMIT_EMPTY


def _is_empty(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, (str, list, dict)):
        return len(value) == 0
    return False


def _omits_empty(field) -> bool:
    extra = field.json_schema_extra
    return isinstance(extra, dict) and bool(extra.get(OMIT_EMPTY))


def _encode_value(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return to_payload(value)
    if isinstance(value, list):
        return [_encode_value(item) for item in value]
    return value


def to_payload(stanza: BaseModel) -> Dict[str, Any]:
    """
    Convert a stanza to plain JSON-ready data using the schema field table.

    Free-form config maps are passed through untouched; their values are only
    checked when the payload is encoded.
    """
    payload = {}
    for name, field in type(stanza).model_fields.items():
        value = getattr(stanza, name)
        if _omits_empty(field) and _is_empty(value):
            continue
        payload[field.alias or name] = _encode_value(value)
    return payload


class Serializer:
    """Renders an assembled document to the bytes the agent reads."""

    def render(self, document: AgentConfig) -> bytes:
        """
        Encode a document.

        Args:
            document: Fully assembled AgentConfig

        Returns:
            UTF-8 encoded JSON

        Raises:
            RenderError: If a value cannot be represented in JSON
        """
        payload = to_payload(document)
        try:
            text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
            data = text.encode("utf-8")
        except (TypeError, ValueError) as e:
            raise RenderError(str(e)) from e

        logger.debug(f"Rendered agent config ({len(text)} chars)")
        return data

    def parse(self, data: Union[bytes, str]) -> AgentConfig:
        """
        Decode a rendered document back into an AgentConfig.

        Raises:
            DecodeError: If the data is not a valid agent config document
        """
        try:
            return AgentConfig.model_validate_json(data)
        except ValidationError as e:
            raise DecodeError(str(e)) from e


def render(document: AgentConfig) -> bytes:
    """Convenience function to render a document."""
    return Serializer().render(document)


def parse(data: Union[bytes, str]) -> AgentConfig:
    """Convenience function to decode a rendered document."""
    return Serializer().parse(data)
