# backend/schemas/catalog.py
from decimal import Decimal
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# Input schema for creating or renaming a category
class CategoryIn(BaseModel):
    name: str = Field(min_length=1)


class CategoryOut(ORMBase):
    id: int
    name: str


# Shared attributes of a catalog service
class ServiceBase(ORMBase):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    duration: Optional[str] = None
    image_url: Optional[str] = None
    category_id: int = Field(gt=0)


# Schema for creating a service and for full (PUT) updates
class ServiceIn(ServiceBase):
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)


# Full service representation including ID and category name
class ServiceOut(ServiceBase):
    id: int
    price: float
    category_name: Optional[str] = None
