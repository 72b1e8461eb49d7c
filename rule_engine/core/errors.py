class AppError(Exception):
    """Base exception for the rule engine."""
    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.original_error = original_error

class ConfigurationError(AppError):
    """Raised when a node configuration cannot be parsed or a node type is unknown."""
    pass

class ProcessingError(AppError):
    """Raised when a message cannot be delivered to or handled by a node."""
    pass
