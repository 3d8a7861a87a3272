from typing import List

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from shopkeeper.dependencies import get_store
from shopkeeper.models import Notification
from shopkeeper.services.notification_service import dismiss, mark_all_read, mark_read

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=List[Notification])
def list_notifications(store=Depends(get_store)):
    return store.get_notifications()


@router.post("/read-all")
def read_all(store=Depends(get_store)):
    return {"updated": mark_all_read(store)}


@router.post("/{notif_id}/read", response_model=Notification)
def read_notification(notif_id: str, store=Depends(get_store)):
    notification = mark_read(store, notif_id)
    if notification is None:
        raise HTTPException(status_code=404, detail="Notification not found.")
    return notification


@router.delete("/{notif_id}", status_code=204)
def dismiss_notification(notif_id: str, store=Depends(get_store)):
    if not dismiss(store, notif_id):
        raise HTTPException(status_code=404, detail="Notification not found.")
    return Response(status_code=204)


__all__ = ["router"]
