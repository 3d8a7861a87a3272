from datetime import date

from fastapi import APIRouter, Depends

from shopkeeper.dependencies import get_store, get_today
from shopkeeper.services.dashboard_service import dashboard_summary

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/summary")
def summary(store=Depends(get_store), today: date = Depends(get_today)):
    snapshot = store.snapshot()
    return dashboard_summary(snapshot.products, snapshot.sales, snapshot.purchases, today)


__all__ = ["router"]
