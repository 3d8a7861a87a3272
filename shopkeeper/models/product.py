from typing import Optional

from pydantic import Field, field_validator

from shopkeeper.models.base import Record


class Product(Record):
    id: str
    name: str
    sku: str
    price: float = Field(gt=0)
    stock: int = Field(default=0, ge=0)
    min_stock: int = Field(default=10, ge=0)
    category: str = ""
    cost: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = None
    image: Optional[str] = None

    @field_validator("sku")
    @classmethod
    def _normalize_sku(cls, value: str) -> str:
        return value.strip().upper()

    @property
    def is_low_stock(self) -> bool:
        return self.stock < self.min_stock

    @property
    def is_out_of_stock(self) -> bool:
        return self.stock == 0
