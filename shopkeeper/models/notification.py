from typing import Literal

from shopkeeper.models.base import Record


class Notification(Record):
    id: str
    message: str
    type: Literal["warning", "info"] = "warning"
    read: bool = False
