from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from shopkeeper.config import get_settings
from shopkeeper.dependencies import get_store

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(store=Depends(get_store)):
    settings = get_settings()
    snapshot = store.snapshot()
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
        "time": datetime.now(timezone.utc).isoformat(),
        "records": {
            "products": len(snapshot.products),
            "sales": len(snapshot.sales),
            "purchases": len(snapshot.purchases),
            "notifications": len(snapshot.notifications),
        },
    }


__all__ = ["router"]
