# core/exceptions.py

class FlowError(Exception):
    """Base exception for load-flow errors."""
    pass

class ShapeError(FlowError):
    """Raised when an admittance table or phasor pair has the wrong shape."""
    pass

class SingularMatrixError(FlowError):
    """Raised when the coefficient matrix cannot be inverted."""
    pass

class NotConfiguredError(FlowError):
    """Raised when solve is called before a successful configure."""
    pass

class ConfigError(FlowError):
    """Raised when a network or sweep description is invalid."""
    pass
