"""
SQLAlchemy ORM models for user accounts and products.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Uuid
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    user_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    # Uniqueness is checked by the handlers, not by the table.
    email = Column(String(255), nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(255))
    username = Column(String(128), nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    role = Column(String(32), nullable=False, default="user")

    # Onboarding profile
    user_type = Column(String(64), nullable=True)
    gender = Column(String(32), nullable=True)
    date_of_birth = Column(String(32), nullable=True)
    phone_number = Column(String(32), nullable=True)
    organization_name = Column(String(255), nullable=True)
    organization_size = Column(String(64), nullable=True)
    project_type = Column(String(64), nullable=True)
    onboarding = Column(Boolean, nullable=False, default=False)

    color = Column(Integer, nullable=False, default=1)
    notifications = Column(JSON, nullable=False, default=list)
    projects = Column(JSON, nullable=False, default=list)
    docs = Column(JSON, nullable=False, default=list)


class Product(Base):
    __tablename__ = "products"

    product_id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
