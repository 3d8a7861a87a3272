from typing import Optional

from fastapi import HTTPException, Query, Request

from shopkeeper.core.dates import normalize_date, resolve_today


def get_store(request: Request):
    return request.app.state.store


def get_today(today: Optional[str] = Query(None, description="Override today's date (YYYY-MM-DD)")):
    if today is not None and normalize_date(today) is None:
        raise HTTPException(status_code=400, detail="today must be an ISO date (YYYY-MM-DD).")
    return resolve_today(today)


def raise_for_errors(result):
    if not result.ok:
        raise HTTPException(status_code=422, detail={"errors": result.errors})


__all__ = ["get_store", "get_today", "raise_for_errors"]
