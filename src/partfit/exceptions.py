"""Custom exceptions for partfit."""

from typing import Optional


class PartfitError(Exception):
    """Base exception for all partfit errors."""

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)


# ─────────────────────────────────────────────────────────────────────────────
# Config Errors
# ─────────────────────────────────────────────────────────────────────────────


class ConfigError(PartfitError):
    """Base class for configuration errors."""


class ConfigValidationError(ConfigError):
    """Configuration validation failed."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(
            f"Invalid configuration: {field}",
            reason,
        )


# ─────────────────────────────────────────────────────────────────────────────
# Catalog Errors
# ─────────────────────────────────────────────────────────────────────────────


class CatalogError(PartfitError):
    """Base class for catalog service errors."""


class CatalogUnavailableError(CatalogError):
    """Catalog service could not be reached or answered with an error."""

    def __init__(self, url: str, reason: Optional[str] = None) -> None:
        super().__init__(
            f"Catalog request failed: {url}",
            reason,
        )


class CatalogDecodeError(CatalogError):
    """Catalog response did not have the expected shape."""

    def __init__(self, endpoint: str, reason: str) -> None:
        super().__init__(
            f"Unexpected catalog response from {endpoint}",
            reason,
        )


class CatalogFileError(CatalogError):
    """Local catalog document missing or unreadable."""

    def __init__(self, path: str, reason: Optional[str] = None) -> None:
        super().__init__(
            f"Cannot read catalog file: {path}",
            reason or "Check the 'catalog.file' setting in config.toml.",
        )
