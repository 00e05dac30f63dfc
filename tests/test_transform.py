"""Tests for the record transformer."""

from __future__ import annotations

import pytest

from greenbox.models.product import DisplayProduct, RawProduct
from greenbox.transform import capitalize_name, price_to_money, to_display_product, to_display_products


class TestCapitalizeName:
    def test_upper_case_name(self) -> None:
        assert capitalize_name("BLUE SOAP") == "Blue soap"

    def test_mixed_case_name(self) -> None:
        assert capitalize_name("oRGANIC kALE") == "Organic kale"

    def test_empty_string(self) -> None:
        assert capitalize_name("") == ""

    def test_single_character(self) -> None:
        assert capitalize_name("x") == "X"

    def test_leading_digit_is_kept(self) -> None:
        assert capitalize_name("7UP BOTTLE") == "7up bottle"

    @pytest.mark.parametrize("name", ["BLUE SOAP", "blue soap", "Blue Soap", "", "a", "  leading space"])
    def test_idempotent(self, name: str) -> None:
        once = capitalize_name(name)
        assert capitalize_name(once) == once


class TestPriceToMoney:
    @pytest.mark.parametrize(
        ("cents", "expected"),
        [
            (1253, "$12.53"),
            (1245, "$12.45"),
            (0, "$0.00"),
            (5, "$0.05"),
            (100, "$1.00"),
            (123456, "$1234.56"),
        ],
    )
    def test_formats_two_decimals(self, cents: int, expected: str) -> None:
        assert price_to_money(cents) == expected


def test_to_display_product_copies_id_and_formats_fields() -> None:
    raw = RawProduct(id="p-1", name="BLUE SOAP", price=1253)

    assert to_display_product(raw) == DisplayProduct(id="p-1", name="Blue soap", price="$12.53")


def test_to_display_products_preserves_order() -> None:
    raws = [
        RawProduct(id="c", name="tea", price=300),
        RawProduct(id="a", name="HONEY", price=1245),
        RawProduct(id="b", name="Kale", price=0),
    ]

    products = to_display_products(raws)

    assert isinstance(products, tuple)
    assert [p.id for p in products] == ["c", "a", "b"]
    assert [p.price for p in products] == ["$3.00", "$12.45", "$0.00"]


def test_to_display_products_empty() -> None:
    assert to_display_products([]) == ()


def test_to_display_product_keeps_upstream_id_verbatim() -> None:
    raw = RawProduct.model_validate({"id": " p-1 ", "name": "tea", "price": 1})
    assert to_display_product(raw).id == " p-1 "
