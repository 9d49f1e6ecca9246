"""
Error taxonomy for the WebUI.

Every error raised by the catalog and store layers derives from CatalogError
and carries the HTTP status the request boundary should answer with.
"""

from typing import Optional


class CatalogError(Exception):
    """Base class for all recoverable catalog/store errors."""

    status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigError(CatalogError):
    """Invalid application configuration."""


class EntityNotFound(CatalogError):
    """A name could not be resolved at one level of the catalog hierarchy."""

    status = 404

    def __init__(self, level: str, name: Optional[str] = None):
        super().__init__(f"{level.capitalize()} not found")
        self.level = level
        self.name = name


class MissingAncestor(CatalogError):
    """A delete target is missing its name or a required ancestor name."""

    status = 400


class InvalidKind(CatalogError):
    """A delete target names an unknown entity kind."""

    status = 400

    def __init__(self, kind: Optional[str] = None):
        super().__init__("Invalid type. Must be brand, store, material, filament, or instance")
        self.kind = kind


class PathEscape(CatalogError):
    """A resolved path falls outside the permitted roots."""

    status = 400

    def __init__(self, path: Optional[str] = None):
        super().__init__("Invalid path")
        self.path = path


class NotFoundOnDisk(CatalogError):
    """A delete target does not exist on disk."""

    status = 404

    def __init__(self, kind: str, name: str):
        super().__init__(f'{kind} "{name}" not found')
        self.kind = kind
        self.name = name


class DuplicateName(CatalogError):
    """A write would create a sibling that collides under name normalization."""

    status = 400

    def __init__(self, level: str, name: str, existing: str):
        super().__init__(f'A {level} named "{existing}" already exists')
        self.level = level
        self.name = name
        self.existing = existing


class BackendWriteFailure(CatalogError):
    """A filesystem write failed."""

    status = 500


__all__ = [
    'CatalogError',
    'ConfigError',
    'EntityNotFound',
    'MissingAncestor',
    'InvalidKind',
    'PathEscape',
    'NotFoundOnDisk',
    'DuplicateName',
    'BackendWriteFailure',
]
