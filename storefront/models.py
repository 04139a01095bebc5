"""
SQLAlchemy Database Models

Tenant-scoped menu data:
- Tenants with branding/settings
- Physical stores
- Categories and products
- Modifier groups (bread, sides, ...) and their options

All prices are stored as integer cents.
"""

import uuid

from sqlalchemy import Column, Integer, String, DateTime, Text, Boolean, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.sql import func

from storefront.database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class Tenant(Base):
    """
    An isolated restaurant/business account.

    Every other table is scoped by tenant_id.
    """
    __tablename__ = "tenants"

    id = Column(String(36), primary_key=True, default=_new_id)
    slug = Column(String(100), nullable=False, unique=True, index=True)
    name = Column(String(200), nullable=False)
    branding = Column(JSON, nullable=False, default=dict)
    settings = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Tenant {self.slug} - {self.name}>"


class Store(Base):
    """Physical location of a tenant."""
    __tablename__ = "stores"

    id = Column(String(36), primary_key=True, default=_new_id)
    tenant_id = Column(String(36), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    address = Column(String(255), nullable=True)
    city = Column(String(100), nullable=True)
    postal_code = Column(String(20), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Store {self.name}>"


class Category(Base):
    """Menu section, ordered by (sort_order, name)."""
    __tablename__ = "categories"
    __table_args__ = (UniqueConstraint("tenant_id", "slug", name="uq_categories_tenant_slug"),)

    id = Column(String(36), primary_key=True, default=_new_id)
    tenant_id = Column(String(36), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    slug = Column(String(100), nullable=False)
    sort_order = Column(Integer, nullable=False, default=0)
    is_featured = Column(Boolean, nullable=False, default=False)

    def __repr__(self):
        return f"<Category {self.slug} ({self.sort_order})>"


class Product(Base):
    """Sellable item. Inactive products are hidden from the menu."""
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=_new_id)
    tenant_id = Column(String(36), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(String(36), ForeignKey("categories.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    slug = Column(String(100), nullable=False)
    description = Column(Text, nullable=False, default="")
    base_price_cents = Column(Integer, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True, index=True)

    def __repr__(self):
        return f"<Product {self.slug} - {self.base_price_cents}c>"


class ModifierGroup(Base):
    """A single- or multi-select customization group (e.g. bread, side)."""
    __tablename__ = "modifier_groups"
    __table_args__ = (UniqueConstraint("tenant_id", "slug", name="uq_modifier_groups_tenant_slug"),)

    id = Column(String(36), primary_key=True, default=_new_id)
    tenant_id = Column(String(36), ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    slug = Column(String(100), nullable=False)
    required = Column(Boolean, nullable=False, default=False)
    min_select = Column(Integer, nullable=False, default=0)
    max_select = Column(Integer, nullable=False, default=1)
    sort_order = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<ModifierGroup {self.slug}>"


class ModifierOption(Base):
    """One choice inside a modifier group, with its price delta."""
    __tablename__ = "modifier_options"

    id = Column(String(36), primary_key=True, default=_new_id)
    group_id = Column(String(36), ForeignKey("modifier_groups.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    price_delta_cents = Column(Integer, nullable=False, default=0)
    sort_order = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<ModifierOption {self.name} +{self.price_delta_cents}c>"
