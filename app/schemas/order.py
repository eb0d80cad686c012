# app/schemas/order.py
from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class OrderStatus(str, Enum):
    pending = "pending"
    in_progress = "in-progress"
    preview_sent = "preview-sent"
    completed = "completed"
    cancelled = "cancelled"


# --- UPDATE (Admin) ---
class OrderStatusUpdate(BaseModel):
    status: OrderStatus
    version: int = Field(..., description="Version of the order the change is based on")


class OrderNotesUpdate(BaseModel):
    admin_notes: Optional[str] = None
    version: int = Field(..., description="Version of the order the change is based on")


# --- RESPONSE ---
class OrderResponse(BaseModel):
    id: int
    full_name: str
    email: str
    whatsapp: str
    business_name: str
    niche: str
    website_goal: str
    website_goal_other: Optional[str]
    key_features: Optional[str]
    special_requests: Optional[str]
    reference_style: Optional[str]
    status: str
    admin_notes: Optional[str]
    version: int
    created_at: datetime
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True
