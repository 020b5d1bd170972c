"""Custom exceptions for the contractdiff engine."""


class ContractDiffError(Exception):
    """Base exception for contractdiff errors."""
    pass


class AddressSyntaxError(ContractDiffError, ValueError):
    """Raised when a path expression does not match the address grammar."""
    def __init__(self, text: str, reason: str = "invalid JSONPath"):
        super().__init__(f"Invalid path expression {text!r}: {reason}")
        self.text = text
        self.reason = reason


class ConfigError(ContractDiffError):
    """Raised when a comparison policy cannot be built."""
    def __init__(self, key: str, message: str):
        super().__init__(f"Invalid config value for '{key}': {message}")
        self.key = key
        self.message = message


class CaptureError(ContractDiffError):
    """Raised when a variable template finds nothing in a document."""
    def __init__(self, name: str, path: str):
        super().__init__(f"Variable template '{name}' ({path}) not found in the document")
        self.name = name
        self.path = path


class MaxDepthExceededError(ContractDiffError):
    """Raised when maximum nesting depth is exceeded."""
    def __init__(self, depth: int, side: str):
        super().__init__(f"Maximum depth ({depth}) exceeded in {side} document")
        self.depth = depth
        self.side = side
