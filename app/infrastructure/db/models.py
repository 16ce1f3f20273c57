"""
Database Models (SQLAlchemy ORM)
Storefront tables read by the admin dashboard
"""

import uuid

from sqlalchemy import (
    Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text
)
from sqlalchemy.orm import relationship

from app.infrastructure.db.database import Base
from app.utils.time import now_local_naive


def _uuid() -> str:
    return str(uuid.uuid4())


class ProductModel(Base):
    """Product offered in the storefront"""
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(255), nullable=False)
    price_in_cents = Column(Integer, nullable=False)
    description = Column(Text, nullable=False, default="")
    is_available_for_purchase = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime, nullable=False, default=now_local_naive)
    updated_at = Column(DateTime, nullable=False, default=now_local_naive, onupdate=now_local_naive)

    orders = relationship("OrderModel", back_populates="product")


class UserModel(Base):
    """Customer account"""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_uuid)
    email = Column(String(255), nullable=False, unique=True)
    created_at = Column(DateTime, nullable=False, default=now_local_naive, index=True)
    updated_at = Column(DateTime, nullable=False, default=now_local_naive, onupdate=now_local_naive)

    orders = relationship("OrderModel", back_populates="user", cascade="all, delete-orphan")


class OrderModel(Base):
    """Completed purchase - price recorded in minor units"""
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=_uuid)
    price_paid_in_cents = Column(Integer, nullable=False)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(String(36), ForeignKey("products.id", ondelete="RESTRICT"), nullable=False)
    created_at = Column(DateTime, nullable=False, default=now_local_naive)
    updated_at = Column(DateTime, nullable=False, default=now_local_naive, onupdate=now_local_naive)

    user = relationship("UserModel", back_populates="orders")
    product = relationship("ProductModel", back_populates="orders")

    __table_args__ = (
        Index('ix_orders_created_at', 'created_at'),
        Index('ix_orders_product_id', 'product_id'),
    )
