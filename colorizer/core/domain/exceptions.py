# colorizer/core/domain/exceptions.py
class DomainError(Exception):
    """Base class for all domain-level exceptions."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

# --- Expression Errors ---

class ExpressionCompileError(DomainError):
    """Raised by a predicate compiler when a rule expression cannot be compiled."""
    def __init__(self, expression: str, reason: str):
        self.expression = expression
        self.reason = reason
        super().__init__(f"Cannot compile expression '{expression}': {reason}")

# --- Persistence Errors ---
# These never reach the engine's callers: the storage adapter maps them
# to "no data" (and deletes the entry when it is corrupt).

class ColorSettingsError(DomainError):
    """Base class for problems with a persisted color settings document."""
    def __init__(self, name: str, message: str):
        self.name = name
        super().__init__(message)

class ColorSettingsTruncatedError(ColorSettingsError):
    """Raised when a stored document is empty or ends before it is complete."""
    def __init__(self, name: str):
        super().__init__(name, f"Color settings '{name}' are empty or truncated.")

class ColorSettingsSchemaError(ColorSettingsError):
    """Raised when a stored document does not match the expected schema."""
    def __init__(self, name: str, detail: str):
        self.detail = detail
        super().__init__(name, f"Invalid color settings schema for '{name}': {detail}")

class UnsupportedSchemaVersionError(ColorSettingsError):
    """Raised when a stored document was written by a newer schema version."""
    def __init__(self, name: str, version: int):
        self.version = version
        super().__init__(name, f"Color settings '{name}' use unsupported schema version {version}.")
