from datetime import date
from typing import List, Optional

from pydantic import Field

from shopkeeper.models import PurchaseItem
from shopkeeper.schemas.base import RequestModel


class PurchaseItemDraft(RequestModel):
    product_id: str = ""
    quantity: Optional[int] = None
    cost: Optional[float] = None


class PurchaseCreate(RequestModel):
    supplier: str = ""
    items: List[PurchaseItemDraft] = Field(default_factory=list, alias="products")
    purchase_date: Optional[date] = Field(default=None, alias="date")


class PurchaseItemAdd(RequestModel):
    items: List[PurchaseItem] = Field(default_factory=list, alias="products")
    product_id: str = ""
    quantity: Optional[int] = None
    cost: Optional[float] = None


class PurchaseEstimateRequest(RequestModel):
    items: List[PurchaseItem] = Field(default_factory=list, alias="products")
