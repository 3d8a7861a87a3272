from typing import Optional

from shopkeeper.schemas.base import RequestModel


class ProductCreate(RequestModel):
    name: str = ""
    code: str = ""
    category: str = ""
    cost: Optional[float] = None
    price: Optional[float] = None
    description: str = ""
    image: Optional[str] = None


class ProfitPreview(RequestModel):
    profit: float
    margin: float
