# Custom exceptions for vault-agent-config

class VaultAgentConfigError(Exception):
    """Base exception for all application-specific errors."""
    pass

class RenderError(VaultAgentConfigError):
    """Raised when the assembled document cannot be encoded."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Failed to render agent config: {message}")

class IntentLoadError(VaultAgentConfigError):
    """Raised when an intent file cannot be read or does not validate."""
    def __init__(self, source: str, message: str):
        self.source = source
        self.message = message
        super().__init__(f"Failed to load intent from {source}: {message}")

class ConfigError(VaultAgentConfigError):
    """Raised for invalid defaults overrides."""
    pass

class DecodeError(VaultAgentConfigError):
    """Raised when a rendered document cannot be read back."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Failed to decode agent config: {message}")
