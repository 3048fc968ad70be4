from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime


# Input schema for a new review of a service
class ReviewCreate(BaseModel):
    user_id: int = Field(alias="userId", gt=0)
    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)


class ReviewOut(BaseModel):
    id: int
    service_id: int
    user_id: int
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    # Joined display fields
    full_name: Optional[str] = None
    service_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
