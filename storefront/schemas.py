"""
Pydantic Schemas for Request/Response Validation

- Menu API response (camelCase on the wire)
- Seed document consumed by the seeding procedure
- Error and health responses
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List, Any
from datetime import datetime


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys, accepting either form."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# MENU RESPONSE SCHEMAS
# =============================================================================

class TenantInfo(CamelModel):
    """Tenant identity and branding."""
    id: str
    slug: str
    name: str
    branding: dict[str, Any] = Field(default_factory=dict)
    settings: dict[str, Any] = Field(default_factory=dict)


class MenuProduct(CamelModel):
    """Active product as shown on the menu."""
    id: str
    name: str
    description: str = ""
    base_price_cents: int = Field(..., ge=0)


class MenuCategory(CamelModel):
    """Category with its active products ordered by name."""
    id: str
    name: str
    slug: str
    sort_order: int = 0
    is_featured: bool = False
    products: List[MenuProduct] = Field(default_factory=list)


class MenuModifierOption(CamelModel):
    id: str
    name: str
    price_delta_cents: int = 0


class MenuModifierGroup(CamelModel):
    id: str
    name: str
    slug: str
    required: bool = False
    min_select: int = 0
    max_select: int = 1
    options: List[MenuModifierOption] = Field(default_factory=list)


class MenuResponse(CamelModel):
    """Response for GET /api/menu/{tenant}."""
    tenant: TenantInfo
    categories: List[MenuCategory] = Field(default_factory=list)
    modifier_groups: List[MenuModifierGroup] = Field(default_factory=list)

    def find_product(self, product_id: str) -> Optional[MenuProduct]:
        for category in self.categories:
            for product in category.products:
                if product.id == product_id:
                    return product
        return None

    def find_modifier_group(self, slug: str) -> Optional[MenuModifierGroup]:
        for group in self.modifier_groups:
            if group.slug == slug:
                return group
        return None


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    database: str
    timestamp: datetime


# =============================================================================
# SEED DOCUMENT SCHEMAS
# =============================================================================

class SeedTenant(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    slug: str = Field(..., min_length=1, max_length=100, pattern=r"^[a-z0-9][a-z0-9-]*$")
    branding: dict[str, Any] = Field(default_factory=dict)
    settings: dict[str, Any] = Field(default_factory=dict)


class SeedStore(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None


class SeedModifierOption(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    price_cents: int = Field(default=0, ge=0)


class SeedModifierGroup(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    slug: str = Field(..., min_length=1, max_length=100)
    required: bool = False
    min_select: int = Field(default=0, ge=0)
    max_select: int = Field(default=1, ge=1)
    sort_order: int = 0
    options: List[SeedModifierOption] = Field(default_factory=list)


class SeedProduct(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    slug: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    price_cents: int = Field(..., ge=0)
    is_active: bool = True


class SeedCategory(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    slug: str = Field(..., min_length=1, max_length=100)
    sort_order: Optional[int] = None
    is_featured: bool = False
    products: List[SeedProduct] = Field(default_factory=list)


class SeedDocument(CamelModel):
    """Complete menu document for one tenant."""
    tenant: SeedTenant
    store: Optional[SeedStore] = None
    modifier_groups: List[SeedModifierGroup] = Field(default_factory=list)
    categories: List[SeedCategory] = Field(default_factory=list)

    @field_validator("categories")
    @classmethod
    def validate_unique_category_slugs(cls, v: List[SeedCategory]) -> List[SeedCategory]:
        slugs = [c.slug for c in v]
        duplicates = sorted({s for s in slugs if slugs.count(s) > 1})
        if duplicates:
            raise ValueError(f"Duplicate category slugs: {duplicates}")
        return v

    @field_validator("modifier_groups")
    @classmethod
    def validate_unique_group_slugs(cls, v: List[SeedModifierGroup]) -> List[SeedModifierGroup]:
        slugs = [g.slug for g in v]
        duplicates = sorted({s for s in slugs if slugs.count(s) > 1})
        if duplicates:
            raise ValueError(f"Duplicate modifier group slugs: {duplicates}")
        return v
