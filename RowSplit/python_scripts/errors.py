"""Error types reported by the row distribution trigger."""


class RowSplitError(Exception):
    """Base class for failures the trigger reports instead of raising."""


class ValidationError(RowSplitError):
    """The edited or reference cell holds a value of the wrong kind."""


class DivisionByZeroError(RowSplitError, ZeroDivisionError):
    """The row has no blank cell to receive the remainder."""


class ConfigError(RowSplitError, ValueError):
    """Invalid column, span or reference cell configuration."""


__all__ = ["RowSplitError", "ValidationError", "DivisionByZeroError", "ConfigError"]
