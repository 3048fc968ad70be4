from decimal import Decimal
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional
from datetime import date, datetime

from schemas.cart import MAX_LINE_QUANTITY


# Input schema for one checkout line
class OrderItemIn(BaseModel):
    service_id: int = Field(gt=0)
    quantity: int = Field(ge=1, le=MAX_LINE_QUANTITY)
    # Price the client saw; checked against the catalog, never trusted
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)


# Input schema for creating a new order
class OrderCreatePayload(BaseModel):
    user_id: int = Field(alias="userId", gt=0)
    items: List[OrderItemIn]
    delivery_address: str
    delivery_date: date

    model_config = ConfigDict(populate_by_name=True)


class OrderCreateResponse(BaseModel):
    success: bool = True
    order_id: int
    total_amount: float


# Output schema for an individual order line item
class OrderItemOut(BaseModel):
    service_id: Optional[int] = None
    service_name: Optional[str] = None
    quantity: int
    price: float


# Output schema representing the full order details
class OrderResponse(BaseModel):
    order_id: int
    user_id: int
    delivery_address: str
    delivery_date: date
    total_amount: float
    status: str
    order_date: Optional[datetime] = None
    items: List[OrderItemOut]
