import datetime
from typing import List

from pydantic import Field, model_validator

from shopkeeper.models.base import MONEY_TOLERANCE, Record


class PurchaseItem(Record):
    product_id: str
    quantity: int = Field(gt=0)
    cost: float = Field(ge=0)

    @property
    def subtotal(self) -> float:
        return self.quantity * self.cost


class Purchase(Record):
    id: str
    date: datetime.date
    supplier: str
    items: List[PurchaseItem] = Field(alias="products", min_length=1)
    total: float

    @property
    def units(self) -> int:
        return sum(item.quantity for item in self.items)

    @model_validator(mode="after")
    def _check_total(self):
        expected = sum(item.subtotal for item in self.items)
        if abs(self.total - expected) > MONEY_TOLERANCE:
            raise ValueError(
                "total {:.2f} does not match line items {:.2f}".format(self.total, expected)
            )
        return self
