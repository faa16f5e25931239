"""Exceptions raised while loading and validating definition files."""


class DataError(Exception):
    """Base exception for the data layer."""


class DataLoadError(DataError):
    """Raised when a definition file is missing or is not valid JSON."""


class DataValidationError(DataError):
    """Raised when definition content has the wrong shape or out-of-range values."""


class DataReferenceError(DataError):
    """Raised when a definition points at a creature or area that does not exist."""
