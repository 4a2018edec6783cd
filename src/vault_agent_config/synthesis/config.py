"""
Fixed stanza values used by the synthesis components.
"""

# Template delimiters are not configurable per secret
LEFT_DELIMITER = "{{"
RIGHT_DELIMITER = "}}"

# Token sinks
SINK_TYPE_FILE = "file"
INJECTED_TOKEN_NAME = "token"

# Cache listener
LISTENER_TYPE = "tcp"
LISTENER_HOST = "127.0.0.1"

# Persistent cache backend
PERSIST_TYPE = "kubernetes"
