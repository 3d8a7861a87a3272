from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from shopkeeper.dependencies import get_store, raise_for_errors
from shopkeeper.models import Purchase
from shopkeeper.schemas.purchase import PurchaseCreate, PurchaseEstimateRequest, PurchaseItemAdd
from shopkeeper.services.listing_service import filter_purchases, sort_by_date_desc
from shopkeeper.services.product_service import find_product
from shopkeeper.services.purchase_service import (
    add_purchase_item,
    purchase_estimate,
    submit_purchase,
    suggest_purchase_cost,
    suggested_suppliers,
)
from shopkeeper.services.report_service import purchases_summary

router = APIRouter(prefix="/purchases", tags=["Purchases"])


@router.get("", response_model=List[Purchase])
def list_purchases(
    search: Optional[str] = Query(None, description="Supplier name or purchase id"),
    purchase_date: Optional[date] = Query(None, alias="date", description="Exact purchase date"),
    store=Depends(get_store),
):
    return sort_by_date_desc(filter_purchases(store.get_purchases(), search, purchase_date))


@router.get("/summary")
def summary(store=Depends(get_store)):
    return purchases_summary(store.get_purchases())


@router.get("/suppliers", response_model=List[str])
def suppliers(store=Depends(get_store)):
    return suggested_suppliers(store.get_purchases())


@router.get("/suggested-cost/{product_id}")
def suggested_cost(product_id: str, store=Depends(get_store)):
    product = find_product(store.get_products(), product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found.")
    return {"product_id": product_id, "cost": suggest_purchase_cost(product)}


@router.post("/items")
def add_item(payload: PurchaseItemAdd, store=Depends(get_store)):
    products = store.get_products()
    result = add_purchase_item(
        payload.items,
        products,
        payload.product_id,
        payload.quantity,
        payload.cost,
    )
    raise_for_errors(result)
    return {
        "products": [item.model_dump(by_alias=True) for item in result.items],
        **purchase_estimate(result.items, products),
    }


@router.post("/estimate")
def estimate(payload: PurchaseEstimateRequest, store=Depends(get_store)):
    return purchase_estimate(payload.items, store.get_products())


@router.post("", response_model=Purchase, status_code=201)
def create_purchase(payload: PurchaseCreate, store=Depends(get_store)):
    result = submit_purchase(
        store,
        payload.supplier,
        payload.items,
        purchase_date=payload.purchase_date,
    )
    raise_for_errors(result)
    return result.record


__all__ = ["router"]
