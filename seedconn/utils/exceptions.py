"""Custom exceptions for seedconn."""


class SeedConnError(Exception):
    """Base exception for seedconn."""
    pass


class ConfigurationError(SeedConnError):
    """Error in configuration or selection arguments."""
    pass


class SelectionError(SeedConnError):
    """No seeds could be resolved from a selection."""
    pass


class DataError(SeedConnError):
    """Time series data cannot be used for correlation."""
    pass


class UnrecognizedOptionWarning(UserWarning):
    """Unknown string option, reinterpreted as a label substring."""
    pass
