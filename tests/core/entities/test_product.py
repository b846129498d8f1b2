"""Tests for product, BOM and ledger entities."""

import datetime as dt

import pytest
from pydantic import ValidationError as PydanticValidationError

from src.core.entities import (
    BOM,
    BomComponent,
    Product,
    ProductType,
    PurchaseOrderItem,
    RawMaterialEntry,
    StockChange,
)


class TestProduct:
    def test_defaults(self):
        product = Product(product_code="RAW-001", name="Steel", type=ProductType.RAW_MATERIAL)
        assert product.stock == 0.0
        assert product.unit == "pcs"
        assert product.description is None
        assert len(product.id) == 32

    def test_ids_are_unique(self):
        a = Product(product_code="A", name="A", type="finished")
        b = Product(product_code="B", name="B", type="finished")
        assert a.id != b.id

    def test_type_from_string(self):
        product = Product(product_code="X", name="X", type="semi_finished")
        assert product.type is ProductType.SEMI_FINISHED

    def test_empty_code_rejected(self):
        with pytest.raises(PydanticValidationError):
            Product(product_code="", name="X", type="finished")

    def test_unknown_type_rejected(self):
        with pytest.raises(PydanticValidationError):
            Product(product_code="X", name="X", type="gadget")

    def test_display_name(self):
        product = Product(product_code="FIN-001", name="Cabinet", type="finished")
        assert product.display_name == "FIN-001 - Cabinet"


class TestProductType:
    @pytest.mark.parametrize(
        "product_type,expected",
        [
            (ProductType.RAW_MATERIAL, True),
            (ProductType.AUXILIARY, True),
            (ProductType.SEMI_FINISHED, False),
            (ProductType.FINISHED, False),
        ],
    )
    def test_purchasable(self, product_type, expected):
        assert product_type.purchasable is expected


class TestBOM:
    def test_component_ids_keep_order(self):
        bom = BOM(
            product_id="p",
            components=[BomComponent(product_id="b", quantity=1), BomComponent(product_id="a", quantity=2)],
        )
        assert bom.component_ids() == ["b", "a"]

    def test_component_quantity_must_be_positive(self):
        with pytest.raises(PydanticValidationError):
            BomComponent(product_id="a", quantity=0)


class TestLedgerEntities:
    def test_entry_date_defaults_to_today(self):
        entry = RawMaterialEntry(product_id="p", quantity=5)
        assert entry.date == dt.date.today()

    def test_entry_quantity_must_be_positive(self):
        with pytest.raises(PydanticValidationError):
            RawMaterialEntry(product_id="p", quantity=-1)

    def test_stock_change_delta(self):
        change = StockChange(product_id="p", before=10, after=4)
        assert change.delta == -6


class TestPurchaseOrderItem:
    def test_remaining_and_received(self):
        item = PurchaseOrderItem(product_id="p", ordered_quantity=10, received_quantity=4)
        assert item.remaining_quantity == 6
        assert not item.is_fully_received

    def test_fully_received(self):
        item = PurchaseOrderItem(product_id="p", ordered_quantity=10, received_quantity=10)
        assert item.remaining_quantity == 0
        assert item.is_fully_received
