"""
Menu Query Service

Read-only view of a tenant's menu:
    - tenant identity and branding
    - categories ordered by (sort_order, name)
    - active products per category ordered by name
    - modifier groups and their options

Usage:
    from storefront.services.menu import get_menu, TenantNotFoundError

    try:
        menu = await get_menu(db, "estafeten")
    except TenantNotFoundError:
        ...
"""

import logging
from collections import defaultdict

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models import Tenant, Category, Product, ModifierGroup, ModifierOption
from storefront.schemas import (
    MenuResponse,
    MenuCategory,
    MenuProduct,
    MenuModifierGroup,
    MenuModifierOption,
    TenantInfo,
)

logger = logging.getLogger(__name__)


class TenantNotFoundError(LookupError):
    """Raised when no tenant matches the requested slug."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Tenant '{slug}' not found")


async def get_menu(db: AsyncSession, tenant_slug: str) -> MenuResponse:
    """
    Load the menu of a tenant.

    Args:
        db: Open database session
        tenant_slug: Public tenant identifier

    Returns:
        MenuResponse: Tenant, categories with active products, modifier groups

    Raises:
        TenantNotFoundError: If the slug is unknown
    """
    result = await db.execute(select(Tenant).where(Tenant.slug == tenant_slug))
    tenant = result.scalar_one_or_none()

    if tenant is None:
        raise TenantNotFoundError(tenant_slug)

    categories_result = await db.execute(
        select(Category)
        .where(Category.tenant_id == tenant.id)
        .order_by(Category.sort_order.asc(), Category.name.asc())
    )
    categories = categories_result.scalars().all()

    products_result = await db.execute(
        select(Product)
        .where(Product.tenant_id == tenant.id, Product.is_active.is_(True))
        .order_by(Product.name.asc())
    )
    products_by_category = defaultdict(list)
    for product in products_result.scalars().all():
        products_by_category[product.category_id].append(
            MenuProduct(
                id=product.id,
                name=product.name,
                description=product.description or "",
                base_price_cents=product.base_price_cents,
            )
        )

    groups = await _load_modifier_groups(db, tenant.id)

    logger.debug(
        f"Menu for {tenant_slug}: {len(categories)} categories, "
        f"{sum(len(p) for p in products_by_category.values())} active products"
    )

    return MenuResponse(
        tenant=TenantInfo(
            id=tenant.id,
            slug=tenant.slug,
            name=tenant.name,
            branding=tenant.branding or {},
            settings=tenant.settings or {},
        ),
        categories=[
            MenuCategory(
                id=category.id,
                name=category.name,
                slug=category.slug,
                sort_order=category.sort_order,
                is_featured=category.is_featured,
                products=products_by_category.get(category.id, []),
            )
            for category in categories
        ],
        modifier_groups=groups,
    )


async def _load_modifier_groups(db: AsyncSession, tenant_id: str) -> list[MenuModifierGroup]:
    groups_result = await db.execute(
        select(ModifierGroup)
        .where(ModifierGroup.tenant_id == tenant_id)
        .order_by(ModifierGroup.sort_order.asc(), ModifierGroup.name.asc())
    )
    groups = groups_result.scalars().all()
    if not groups:
        return []

    options_result = await db.execute(
        select(ModifierOption)
        .where(ModifierOption.group_id.in_([g.id for g in groups]))
        .order_by(ModifierOption.sort_order.asc(), ModifierOption.name.asc())
    )
    options_by_group = defaultdict(list)
    for option in options_result.scalars().all():
        options_by_group[option.group_id].append(
            MenuModifierOption(
                id=option.id,
                name=option.name,
                price_delta_cents=option.price_delta_cents,
            )
        )

    return [
        MenuModifierGroup(
            id=group.id,
            name=group.name,
            slug=group.slug,
            required=group.required,
            min_select=group.min_select,
            max_select=group.max_select,
            options=options_by_group.get(group.id, []),
        )
        for group in groups
    ]
