class ValidationError(ValueError):
    """Raised when a caller breaks the input contract (shapes, bounds, radius, ...)."""


class EntropyError(RuntimeError):
    """Raised when no random generator can be seeded for the initial simplex."""
