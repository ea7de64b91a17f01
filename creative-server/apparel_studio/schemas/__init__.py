"""Pydantic schemas used across the project."""
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from apparel_studio.modules.orders import OrderStatus


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=6)


class RegisterRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=1, max_length=100)


class TokenData(BaseModel):
    account_id: str
    email: str
    role: str


class AccountResponse(BaseModel):
    id: str
    email: str
    name: str
    role: str
    is_active: bool
    created_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AccountLoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    account: AccountResponse
    ws_url: str


class BrandCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    tagline: Optional[str] = Field(None, max_length=255)
    description: str = ""
    color_palette: list[str] = Field(default_factory=list)
    is_primary: bool = False
    logo_url: Optional[str] = None
    reference_assets: list[str] = Field(default_factory=list)


class BrandUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)
    tagline: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    color_palette: Optional[list[str]] = None
    is_primary: Optional[bool] = None
    logo_url: Optional[str] = None
    reference_assets: Optional[list[str]] = None


class BrandResponse(BaseModel):
    id: str
    customer_id: str
    name: str
    tagline: Optional[str] = None
    description: str = ""
    color_palette: list[str] = Field(default_factory=list)
    is_primary: bool = False
    logo_url: Optional[str] = None
    reference_assets: list[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class BrandListResponse(BaseModel):
    total: int
    brands: list[BrandResponse]


class AttachmentCreate(BaseModel):
    url: str = Field(..., min_length=1)
    name: str = Field("", max_length=255)
    type: Literal["image", "document"] = "document"


class ResultAttachmentCreate(BaseModel):
    url: str = Field(..., min_length=1)
    name: str = Field("", max_length=255)


class AttachmentResponse(BaseModel):
    id: str
    order_id: str
    name: str
    url: str
    type: str
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class OrderCreate(BaseModel):
    brand_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    creative_expectations: str = ""
    colors: str = ""
    sizes: str = ""
    features: str = ""
    target_audience: str = ""
    usage: str = ""
    notes: Optional[str] = None
    attachments: list[AttachmentCreate] = Field(default_factory=list)


class OrderResponse(BaseModel):
    id: str
    customer_id: str
    brand_id: str
    title: str
    status: OrderStatus
    description: str = ""
    creative_expectations: str = ""
    colors: str = ""
    sizes: str = ""
    features: str = ""
    target_audience: str = ""
    usage: str = ""
    notes: Optional[str] = None
    admin_notes: Optional[str] = None
    revision_notes: Optional[str] = None
    attachments: list[AttachmentResponse] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class OrderListResponse(BaseModel):
    total: int
    orders: list[OrderResponse]


class AdminOrderUpdate(BaseModel):
    status: Optional[OrderStatus] = None
    admin_notes: Optional[str] = None
    results: list[ResultAttachmentCreate] = Field(default_factory=list)


class AttachmentBatchCreate(BaseModel):
    attachments: list[AttachmentCreate] = Field(..., min_length=1)


class RevisionRequest(BaseModel):
    notes: str = Field(..., min_length=1)


class ChangeEvent(BaseModel):
    table: Literal["orders", "brands", "attachments"]
    event: Literal["INSERT", "UPDATE", "DELETE"]
    id: str

