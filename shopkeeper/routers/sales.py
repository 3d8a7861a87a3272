from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from shopkeeper.config import get_settings
from shopkeeper.dependencies import get_store, raise_for_errors
from shopkeeper.models import Sale
from shopkeeper.schemas.sale import SaleCreate, SaleItemAdd
from shopkeeper.services.listing_service import (
    distinct_payment_methods,
    filter_sales,
    sort_by_date_desc,
)
from shopkeeper.services.report_service import sale_invoice
from shopkeeper.services.sale_service import add_sale_item, sale_totals, submit_sale

router = APIRouter(prefix="/sales", tags=["Sales"])


def _find_sale(sales, sale_id):
    for sale in sales:
        if sale.id == sale_id:
            return sale
    raise HTTPException(status_code=404, detail="Sale not found.")


@router.get("", response_model=List[Sale])
def list_sales(
    search: Optional[str] = Query(None, description="Customer name or sale id"),
    sale_date: Optional[date] = Query(None, alias="date", description="Exact sale date"),
    payment_method: Optional[str] = Query(None, description="Payment method or 'all'"),
    store=Depends(get_store),
):
    sales = filter_sales(store.get_sales(), search, sale_date, payment_method)
    return sort_by_date_desc(sales)


@router.get("/payment-methods", response_model=List[str])
def list_payment_methods(store=Depends(get_store)):
    return distinct_payment_methods(store.get_sales())


@router.post("/items")
def add_item(payload: SaleItemAdd, store=Depends(get_store)):
    result = add_sale_item(payload.items, store.get_products(), payload.product_id, payload.quantity)
    raise_for_errors(result)
    settings = get_settings()
    return {
        "products": [item.model_dump(by_alias=True) for item in result.items],
        **sale_totals(result.items, settings.TAX_RATE, settings.TAX_INCLUSIVE_TOTALS),
    }


@router.get("/{sale_id}", response_model=Sale)
def get_sale(sale_id: str, store=Depends(get_store)):
    return _find_sale(store.get_sales(), sale_id)


@router.get("/{sale_id}/invoice")
def get_invoice(sale_id: str, store=Depends(get_store)):
    snapshot = store.snapshot()
    return sale_invoice(_find_sale(snapshot.sales, sale_id), snapshot.products)


@router.post("", response_model=Sale, status_code=201)
def create_sale(payload: SaleCreate, store=Depends(get_store)):
    result = submit_sale(
        store,
        payload.customer,
        payload.items,
        payload.payment_method,
        sale_date=payload.sale_date,
        include_tax=payload.include_tax,
    )
    raise_for_errors(result)
    return result.record


__all__ = ["router"]
