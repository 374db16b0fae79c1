"""Application interfaces (ports) implemented by infrastructure."""

from app.application.interfaces.repositories import IProductRepository

__all__ = ["IProductRepository"]
