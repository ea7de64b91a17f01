"""SQLAlchemy ORM models."""
import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from apparel_studio.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


class Account(Base):
    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="customer")
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    last_login_at = Column(DateTime(timezone=True))

    brands = relationship("Brand", back_populates="customer", cascade="all, delete-orphan")


class Brand(Base):
    __tablename__ = "brands"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    customer_id = Column(String(36), ForeignKey("accounts.id"), nullable=False, index=True)
    name = Column(String(150), nullable=False)
    tagline = Column(String(255))
    description = Column(Text, nullable=False, default="")
    color_palette = Column(Text, nullable=False, default="[]")
    is_primary = Column(Boolean, nullable=False, default=False)
    logo_url = Column(Text)
    reference_assets = Column(Text, nullable=False, default="[]")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    customer = relationship("Account", back_populates="brands")


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    customer_id = Column(String(36), ForeignKey("accounts.id"), nullable=False, index=True)
    brand_id = Column(String(36), ForeignKey("brands.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    creative_expectations = Column(Text, nullable=False, default="")
    status = Column(String(40), nullable=False, default="Pending", index=True)
    colors = Column(Text, nullable=False, default="")
    sizes = Column(Text, nullable=False, default="")
    features = Column(Text, nullable=False, default="")
    target_audience = Column(Text, nullable=False, default="")
    usage = Column(Text, nullable=False, default="")
    notes = Column(Text)
    admin_notes = Column(Text)
    revision_notes = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    brand = relationship("Brand")
    attachments = relationship(
        "Attachment",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="Attachment.position",
    )


class Attachment(Base):
    __tablename__ = "attachments"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    order_id = Column(String(36), ForeignKey("orders.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False, default="")
    url = Column(Text, nullable=False)
    type = Column(String(20), nullable=False, default="document")  # image, document, result
    position = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    order = relationship("Order", back_populates="attachments")
