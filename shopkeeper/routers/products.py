from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from shopkeeper.dependencies import get_store, raise_for_errors
from shopkeeper.models import Product
from shopkeeper.schemas.product import ProductCreate, ProfitPreview
from shopkeeper.services.listing_service import search_products
from shopkeeper.services.product_service import (
    find_product,
    generate_product_code,
    profit_margin,
    submit_product,
)

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("", response_model=List[Product])
def list_products(
    search: Optional[str] = Query(None, description="Match name, SKU or category"),
    store=Depends(get_store),
):
    return search_products(store.get_products(), search)


@router.get("/categories", response_model=List[str])
def list_categories(store=Depends(get_store)):
    return store.get_categories()


@router.get("/generate-code")
def generate_code(
    category: Optional[str] = Query(None, description="Category used for the code prefix"),
    store=Depends(get_store),
):
    return {"code": generate_product_code(category, store.get_products())}


@router.get("/profit", response_model=ProfitPreview)
def preview_profit(
    cost: float = Query(0.0, ge=0),
    price: float = Query(0.0, ge=0),
):
    return profit_margin(cost, price)


@router.get("/{product_id}", response_model=Product)
def get_product(product_id: str, store=Depends(get_store)):
    product = find_product(store.get_products(), product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found.")
    return product


@router.post("", response_model=Product, status_code=201)
def create_product(payload: ProductCreate, store=Depends(get_store)):
    result = submit_product(store, payload)
    raise_for_errors(result)
    return result.record


__all__ = ["router"]
