# File: domain/errors.py


class FormularyError(Exception):
    """Base class for all errors raised by the formulary service."""


class ConfigurationError(FormularyError):
    """Required configuration is missing; the process cannot start."""


class DataAccessError(FormularyError):
    """The database driver failed. The cause is kept for logging only."""

    def __init__(self, message: str, cause: Exception = None):
        super().__init__(message)
        self.cause = cause


class PoolTimeoutError(DataAccessError):
    """No pooled connection became available within the acquisition timeout."""


class DrugNotFoundError(FormularyError):

    def __init__(self, drug_id: int):
        super().__init__(f"Drug {drug_id} not found")
        self.drug_id = drug_id


class SeedError(FormularyError):
    """The seed CSV is missing or malformed."""

    def __init__(self, message: str, cause: Exception = None):
        super().__init__(message)
        self.cause = cause
