from __future__ import annotations

class ServiceError(RuntimeError):
    """Base class for service-layer errors."""

class LoaderError(ServiceError):
    """Errors reading or parsing an ingredient catalog source."""

class RepoError(ServiceError):
    """Errors from repositories (I/O, serialization)."""
