from shopkeeper.schemas.product import ProductCreate, ProfitPreview
from shopkeeper.schemas.purchase import (
    PurchaseCreate,
    PurchaseEstimateRequest,
    PurchaseItemAdd,
    PurchaseItemDraft,
)
from shopkeeper.schemas.sale import SaleCreate, SaleItemAdd, SaleItemDraft

__all__ = [
    "ProductCreate",
    "ProfitPreview",
    "PurchaseCreate",
    "PurchaseEstimateRequest",
    "PurchaseItemAdd",
    "PurchaseItemDraft",
    "SaleCreate",
    "SaleItemAdd",
    "SaleItemDraft",
]
