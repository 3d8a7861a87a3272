import datetime
from typing import List

from pydantic import Field, model_validator

from shopkeeper.models.base import MONEY_TOLERANCE, Record


class SaleItem(Record):
    product_id: str
    quantity: int = Field(gt=0)
    price: float = Field(ge=0)

    @property
    def subtotal(self) -> float:
        return self.quantity * self.price


class Sale(Record):
    """
    A completed sale.

    Line item prices are snapshots taken when the sale was recorded, so later
    product price changes never alter historical totals. ``total`` always
    equals the line item subtotal plus ``tax``.
    """

    id: str
    date: datetime.date
    customer: str
    items: List[SaleItem] = Field(alias="products", min_length=1)
    tax: float = Field(default=0.0, ge=0)
    total: float
    payment_method: str

    @property
    def subtotal(self) -> float:
        return sum(item.subtotal for item in self.items)

    @model_validator(mode="after")
    def _check_total(self):
        expected = self.subtotal + self.tax
        if abs(self.total - expected) > MONEY_TOLERANCE:
            raise ValueError(
                "total {:.2f} does not match line items plus tax {:.2f}".format(self.total, expected)
            )
        return self
