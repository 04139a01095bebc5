"""
Test cases for the product customization flow.
"""

import pytest

from storefront.cart import (
    CartModifiers,
    CloseReason,
    CustomizationIncompleteError,
    DEFAULT_BREADS,
    DEFAULT_SIDES,
    ProductCustomization,
)
from storefront.schemas import MenuProduct, MenuResponse
from tests.conftest import make_seed_payload


@pytest.fixture
def product():
    return MenuProduct(id="p1", name="Clásica", description="Ternera", base_price_cents=500)


@pytest.fixture
def flow(product):
    return ProductCustomization(product)


def make_menu(with_groups: bool = True, bread_delta: int = 0) -> MenuResponse:
    groups = []
    if with_groups:
        groups = [
            {
                "id": "g1",
                "name": "Pan",
                "slug": "pan",
                "required": True,
                "options": [{"id": "o1", "name": "Brioche", "priceDeltaCents": bread_delta}],
            },
            {
                "id": "g2",
                "name": "Guarnición",
                "slug": "guarnicion",
                "required": True,
                "options": [
                    {"id": "o2", "name": "Ensalada", "priceDeltaCents": 0},
                    {"id": "o3", "name": "Aros de cebolla", "priceDeltaCents": 150},
                ],
            },
        ]
    return MenuResponse.model_validate({
        "tenant": {"id": "t1", "slug": "la-cantina", "name": "La Cantina"},
        "categories": [],
        "modifierGroups": groups,
    })


class TestSelection:
    """Required single-select groups."""

    def test_cannot_add_without_selections(self, flow):
        assert flow.can_add is False

    def test_bread_alone_is_not_enough(self, flow):
        flow.select_bread("Tradicional")

        assert flow.can_add is False

    def test_side_alone_is_not_enough(self, flow):
        flow.select_side("Boniato")

        assert flow.can_add is False

    def test_both_selections_enable_add(self, flow):
        flow.select_bread("Tradicional")
        flow.select_side("Patatas fritas (incluido)")

        assert flow.can_add is True

    def test_total_includes_side_delta(self, flow):
        assert flow.total_cents == 500

        flow.select_side("Boniato")
        assert flow.total_cents == 620

        flow.select_side("Patatas fritas (incluido)")
        assert flow.total_cents == 500

    def test_unknown_options_rejected(self, flow):
        with pytest.raises(ValueError):
            flow.select_bread("Pan de oro")
        with pytest.raises(ValueError):
            flow.select_side("Caviar")

        assert flow.bread is None
        assert flow.side is None


class TestConfirmation:
    """Handing the selection to the cart."""

    def test_confirm_adds_composite_line(self, flow, cart):
        flow.select_bread("Tradicional")
        flow.select_side("Boniato")

        line = flow.confirm(cart)

        assert line.product_id == "p1"
        assert line.name == "Clásica"
        assert line.unit_price_cents == 620
        assert line.modifiers == CartModifiers(bread="Tradicional", side="Boniato", side_price_cents=120)
        assert cart.subtotal_cents() == 620
        assert flow.is_open is False
        assert flow.bread is None

    def test_confirm_incomplete_raises_and_leaves_cart(self, flow, cart):
        flow.select_bread("Tradicional")

        with pytest.raises(CustomizationIncompleteError):
            flow.confirm(cart)

        assert cart.items == ()
        assert flow.is_open is True

    def test_same_selection_twice_merges(self, product, cart):
        for _ in range(2):
            flow = ProductCustomization(product)
            flow.select_bread("Mantequilla")
            flow.select_side("Boniato")
            flow.confirm(cart)

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2
        assert cart.subtotal_cents() == 1240

    def test_different_bread_makes_new_line(self, product, cart):
        for bread in ("Mantequilla", "Tradicional"):
            flow = ProductCustomization(product)
            flow.select_bread(bread)
            flow.select_side("Boniato")
            flow.confirm(cart)

        assert len(cart.items) == 2

    @pytest.mark.parametrize("reason", list(CloseReason))
    def test_cancel_discards_selection(self, flow, cart, storage, reason):
        flow.select_bread("Tradicional")
        flow.select_side("Boniato")

        flow.cancel(reason)

        assert cart.items == ()
        assert storage.get_item("test-cart") is None
        assert flow.can_add is False
        assert flow.total_cents == 500


class TestFromMenu:
    """Options sourced from the tenant's modifier groups."""

    def test_uses_tenant_groups(self, product):
        flow = ProductCustomization.from_menu(make_menu(), product)

        assert [o.name for o in flow.bread_options] == ["Brioche"]
        assert [(o.name, o.price_cents) for o in flow.side_options] == [
            ("Ensalada", 0),
            ("Aros de cebolla", 150),
        ]

        flow.select_side("Aros de cebolla")
        assert flow.total_cents == 650

    def test_falls_back_to_defaults(self, product):
        flow = ProductCustomization.from_menu(make_menu(with_groups=False), product)

        assert flow.bread_options == DEFAULT_BREADS
        assert flow.side_options == DEFAULT_SIDES

    def test_seeded_groups_shape(self, product):
        payload = make_seed_payload()
        groups = [
            {
                "id": g["slug"],
                "name": g["name"],
                "slug": g["slug"],
                "options": [
                    {"id": o["name"], "name": o["name"], "priceDeltaCents": o.get("priceCents", 0)}
                    for o in g["options"]
                ],
            }
            for g in payload["modifierGroups"]
        ]
        menu = MenuResponse.model_validate({
            "tenant": {"id": "t1", "slug": "la-cantina", "name": "La Cantina"},
            "modifierGroups": groups,
        })

        flow = ProductCustomization.from_menu(menu, product)

        assert [o.name for o in flow.bread_options] == ["Tradicional", "Brioche"]

    def test_priced_bread_is_charged(self, product, cart):
        flow = ProductCustomization.from_menu(make_menu(bread_delta=50), product)

        flow.select_bread("Brioche")
        flow.select_side("Aros de cebolla")
        assert flow.total_cents == 700

        line = flow.confirm(cart)

        assert line.unit_price_cents == 700
        assert line.modifiers.bread_price_cents == 50
        assert cart.subtotal_cents() == 700

    def test_bread_delta_is_part_of_line_identity(self, product, cart):
        for delta in (0, 50):
            flow = ProductCustomization.from_menu(make_menu(bread_delta=delta), product)
            flow.select_bread("Brioche")
            flow.select_side("Ensalada")
            flow.confirm(cart)

        assert [item.unit_price_cents for item in cart.items] == [500, 550]
