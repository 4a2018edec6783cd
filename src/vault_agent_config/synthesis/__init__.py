"""
Synthesis Module

Turns an agent intent into a Vault Agent configuration document.
Components, leaves first: Serializer, TemplateSynthesizer,
ListenerCacheWirer, ConfigAssembler.
"""

from .assembler import ConfigAssembler, new_config
from .templates import TemplateSynthesizer, join_paths
from .listener import ListenerCacheWirer, CacheMode, CACHE_MODES
from .render import Serializer, render, parse, to_payload
from .config import (
    LEFT_DELIMITER,
    RIGHT_DELIMITER,
    PERSIST_TYPE,
)

__all__ = [
    # Assembly
    "ConfigAssembler",
    "new_config",

    # Templates
    "TemplateSynthesizer",
    "join_paths",

    # Listener / cache
    "ListenerCacheWirer",
    "CacheMode",
    "CACHE_MODES",

    # Serialization
    "Serializer",
    "render",
    "parse",
    "to_payload",

    # Configuration
    "LEFT_DELIMITER",
    "RIGHT_DELIMITER",
    "PERSIST_TYPE",
]
