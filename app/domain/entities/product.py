"""Product domain entity.

Represents the business concept of a product, independent of persistence
and of the cache representation.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from typing import Any

from app.domain.exceptions import ValidationException


def _to_decimal(value: Any) -> Decimal:
    """Normalize a price to Decimal. Floats go through str() so 9.99 stays 9.99."""
    if isinstance(value, bool):
        raise ValidationException("Product price must be a number", field="price")
    if isinstance(value, Decimal):
        price = value
    elif isinstance(value, (int, float, str)):
        try:
            price = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValidationException(
                "Product price must be a number", field="price"
            ) from None
    else:
        raise ValidationException("Product price must be a number", field="price")
    if not price.is_finite():
        raise ValidationException("Product price must be finite", field="price")
    return price


@dataclass(frozen=True)
class ProductEntity:
    """Domain entity for product. Immutable; validation runs on construction.

    id is None until the store assigns one and never changes afterwards.
    Updating produces a new value via with_changes().
    """

    name: str
    price: Decimal
    id: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "price", _to_decimal(self.price))
        self.validate()

    def validate(self) -> None:
        """Validate product business rules. Raises ValidationException if invalid."""
        if self.id is not None and (
            isinstance(self.id, bool) or not isinstance(self.id, int) or self.id < 1
        ):
            raise ValidationException(
                "Product id must be a positive integer", field="id"
            )
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValidationException("Product name must not be blank", field="name")
        if self.price <= 0:
            raise ValidationException("Product price must be greater than 0", field="price")

    def with_changes(
        self, *, name: str | None = None, price: Decimal | None = None
    ) -> ProductEntity:
        """Return a new product with the same id and the given name/price applied."""
        return replace(
            self,
            name=self.name if name is None else name,
            price=self.price if price is None else price,
        )

    def to_cache_dict(self) -> dict[str, Any]:
        """JSON-safe representation stored in the cache (price as string)."""
        return {"id": self.id, "name": self.name, "price": str(self.price)}

    @classmethod
    def from_cache_dict(cls, data: dict[str, Any]) -> ProductEntity:
        """Rebuild a product from to_cache_dict() output.

        Raises:
            ValidationException: If the data does not describe a valid product.
        """
        try:
            return cls(id=data["id"], name=data["name"], price=data["price"])
        except (KeyError, TypeError) as e:
            raise ValidationException(f"Malformed cached product: {e}") from e
