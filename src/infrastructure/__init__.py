"""Infrastructure layer implementations."""

from src.infrastructure import excel, storage

__all__ = ["storage", "excel"]
