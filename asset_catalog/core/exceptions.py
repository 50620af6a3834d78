"""Custom exception hierarchy."""

from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""
    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class DatabaseError(AppError):
    """Raised when a store read or write fails."""
    pass


class ValidationError(AppError):
    """Raised when input validation fails."""
    pass


class ConfigurationError(AppError):
    """Raised when configuration is invalid or missing."""
    pass


class AssetNotFoundError(AppError):
    """Raised when an asset id does not exist in the store."""

    def __init__(self, asset_id: str):
        super().__init__(f"Asset {asset_id} not found")
        self.asset_id = asset_id


class ImmutableFieldError(ValidationError):
    """Raised when an update tries to change a field fixed at creation."""

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(message or f"Field '{field}' cannot be changed after creation")
        self.field = field


class ReadOnlyCatalogError(AppError):
    """Raised when a write is attempted while the catalog is in read-only mode."""
    pass
