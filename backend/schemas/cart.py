from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional

# Upper bound for one cart or order line
MAX_LINE_QUANTITY = 10_000

# Request bodies carry the owner as userId (client naming) or user_id
class CartUserRef(BaseModel):
    user_id: int = Field(alias="userId", gt=0)

    model_config = ConfigDict(populate_by_name=True)

# Request schema for adding a service to the cart
class CartAddItem(CartUserRef):
    service_id: int = Field(gt=0)
    quantity: int = Field(default=1, ge=1, le=MAX_LINE_QUANTITY)

# Request schema for removing a service from the cart
class CartRemoveItem(CartUserRef):
    service_id: int = Field(gt=0)

# Response schema for a single cart line item
class CartItemOut(BaseModel):
    cart_item_id: int
    service_id: int
    quantity: int
    name: str
    price: float
    duration: Optional[str] = None
    image_url: Optional[str] = None

# Response schema for the entire cart summary
class CartOut(BaseModel):
    items: List[CartItemOut]
    total: float

# Result of a cart mutation, with the server cart for the client to reconcile against
class CartActionResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    items: List[CartItemOut]
    total: float
