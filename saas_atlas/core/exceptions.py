"""
Custom exceptions for SaaS Atlas.
"""


class SaasAtlasError(Exception):
    """Base exception for all SaaS Atlas errors."""
    pass


class ConfigurationError(SaasAtlasError):
    """Raised when there's an error in configuration loading or validation."""
    pass


class StoreError(SaasAtlasError):
    """Raised when the company directory cannot be retrieved from the data store."""
    pass


class CSVProcessingError(SaasAtlasError):
    """Raised when there's an error reading or writing CSV snapshots."""
    pass


class CSVValidationError(CSVProcessingError):
    """Raised when CSV validation fails."""
    pass


class HistoryError(SaasAtlasError):
    """Raised when recent searches cannot be persisted."""
    pass
