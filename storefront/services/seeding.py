"""
Menu Seeding Service

Loads a tenant's menu document into the relational store.

The tenant row is upserted by slug and its whole subtree (stores,
categories, products, modifier groups and options) is replaced inside a
single transaction, so reseeding is idempotent and a failure leaves the
previous menu untouched.

Usage:
    from storefront.services.seeding import load_seed_document, seed_tenant

    document = load_seed_document("data/seed_menu.estafeten.json")
    async with async_session_maker() as session:
        result = await seed_tenant(session, document)
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from pydantic import ValidationError
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models import Tenant, Store, Category, Product, ModifierGroup, ModifierOption
from storefront.schemas import SeedDocument

logger = logging.getLogger(__name__)


class SeedDataError(ValueError):
    """Raised when the seed document is missing or malformed."""


@dataclass
class SeedResult:
    """Counts of the rows written for one tenant."""
    tenant_id: str
    tenant_slug: str
    tenant_created: bool
    stores: int = 0
    categories: int = 0
    products: int = 0
    modifier_groups: int = 0
    modifier_options: int = 0

    def to_dict(self) -> dict:
        return {
            "tenant_id": self.tenant_id,
            "tenant_slug": self.tenant_slug,
            "tenant_created": self.tenant_created,
            "stores": self.stores,
            "categories": self.categories,
            "products": self.products,
            "modifier_groups": self.modifier_groups,
            "modifier_options": self.modifier_options,
        }


def load_seed_document(path: Union[str, Path]) -> SeedDocument:
    """
    Read and validate a seed document.

    Raises:
        SeedDataError: If the file is missing, not JSON, or fails validation
    """
    path = Path(path)
    if not path.exists():
        raise SeedDataError(f"Seed file not found: {path}")

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SeedDataError(f"Invalid JSON in {path}: {e}") from e

    try:
        return SeedDocument.model_validate(raw)
    except ValidationError as e:
        raise SeedDataError(f"Invalid seed document {path}: {e}") from e


async def seed_tenant(db: AsyncSession, document: SeedDocument) -> SeedResult:
    """
    Replace the tenant subtree described by ``document`` in one transaction.

    Args:
        db: Session with no transaction in progress
        document: Validated seed document

    Returns:
        SeedResult: What was written
    """
    async with db.begin():
        tenant, created = await _upsert_tenant(db, document)
        await _delete_tenant_subtree(db, tenant.id)

        result = SeedResult(
            tenant_id=tenant.id,
            tenant_slug=tenant.slug,
            tenant_created=created,
        )

        if document.store is not None:
            db.add(Store(
                tenant_id=tenant.id,
                name=document.store.name,
                address=document.store.address,
                city=document.store.city,
                postal_code=document.store.postal_code,
            ))
            result.stores = 1

        for group_data in document.modifier_groups:
            group = ModifierGroup(
                tenant_id=tenant.id,
                name=group_data.name,
                slug=group_data.slug,
                required=group_data.required,
                min_select=group_data.min_select,
                max_select=group_data.max_select,
                sort_order=group_data.sort_order,
            )
            db.add(group)
            await db.flush()
            result.modifier_groups += 1

            for position, option_data in enumerate(group_data.options):
                db.add(ModifierOption(
                    group_id=group.id,
                    name=option_data.name,
                    price_delta_cents=option_data.price_cents,
                    sort_order=position,
                ))
                result.modifier_options += 1

        for category_data in document.categories:
            category = Category(
                tenant_id=tenant.id,
                name=category_data.name,
                slug=category_data.slug,
                sort_order=category_data.sort_order if category_data.sort_order is not None else 0,
                is_featured=category_data.is_featured,
            )
            db.add(category)
            await db.flush()
            result.categories += 1

            for product_data in category_data.products:
                db.add(Product(
                    tenant_id=tenant.id,
                    category_id=category.id,
                    name=product_data.name,
                    slug=product_data.slug,
                    description=product_data.description or "",
                    base_price_cents=product_data.price_cents,
                    is_active=product_data.is_active,
                ))
                result.products += 1

    logger.info(
        f"Seeded tenant {result.tenant_slug}: {result.categories} categories, "
        f"{result.products} products, {result.modifier_groups} modifier groups"
    )
    return result


async def _upsert_tenant(db: AsyncSession, document: SeedDocument) -> tuple[Tenant, bool]:
    result = await db.execute(select(Tenant).where(Tenant.slug == document.tenant.slug))
    tenant = result.scalar_one_or_none()

    if tenant is None:
        tenant = Tenant(
            slug=document.tenant.slug,
            name=document.tenant.name,
            branding=document.tenant.branding,
            settings=document.tenant.settings,
        )
        db.add(tenant)
        await db.flush()
        logger.info(f"Tenant created: {tenant.name}")
        return tenant, True

    tenant.name = document.tenant.name
    tenant.branding = document.tenant.branding
    tenant.settings = document.tenant.settings
    logger.info(f"Tenant updated: {tenant.name}")
    return tenant, False


async def _delete_tenant_subtree(db: AsyncSession, tenant_id: str) -> None:
    # Children before parents; no reliance on ON DELETE CASCADE
    group_ids = select(ModifierGroup.id).where(ModifierGroup.tenant_id == tenant_id)

    await db.execute(delete(Product).where(Product.tenant_id == tenant_id))
    await db.execute(delete(ModifierOption).where(ModifierOption.group_id.in_(group_ids)))
    await db.execute(delete(ModifierGroup).where(ModifierGroup.tenant_id == tenant_id))
    await db.execute(delete(Category).where(Category.tenant_id == tenant_id))
    await db.execute(delete(Store).where(Store.tenant_id == tenant_id))
