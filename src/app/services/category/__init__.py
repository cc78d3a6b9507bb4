"""Category management service."""

from app.services.category.service import CategoryService


__all__ = ["CategoryService"]
