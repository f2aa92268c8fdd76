"""Print one cryptographically secure random integer below a fixed bound."""

__version__ = "1.0.0"
