from datetime import date
from typing import List, Optional

from pydantic import Field

from shopkeeper.core.constants import DEFAULT_CUSTOMER, DEFAULT_PAYMENT_METHOD
from shopkeeper.models import SaleItem
from shopkeeper.schemas.base import RequestModel


class SaleItemDraft(RequestModel):
    product_id: str = ""
    quantity: Optional[int] = None
    price: Optional[float] = None


class SaleCreate(RequestModel):
    customer: str = DEFAULT_CUSTOMER
    items: List[SaleItemDraft] = Field(default_factory=list, alias="products")
    payment_method: str = DEFAULT_PAYMENT_METHOD
    include_tax: Optional[bool] = None
    sale_date: Optional[date] = Field(default=None, alias="date")


class SaleItemAdd(RequestModel):
    items: List[SaleItem] = Field(default_factory=list, alias="products")
    product_id: str = ""
    quantity: Optional[int] = None
