"""
Row resolver.

Turns workbook rows into domain entities: product codes, supplier names
and purchase order references become ids, and quantities and dates are
coerced. Every problem raises ``ValidationError`` naming the column, so
only checked ids and numbers reach the stock engine.
"""

import datetime as dt
import re
from dataclasses import dataclass, field
from typing import Any

from openpyxl.utils.datetime import from_excel

from src.core.entities import (
    BOM,
    BomComponent,
    Product,
    ProductionLog,
    ProductType,
    RawMaterialEntry,
    ShipmentLog,
    StockCount,
)
from src.core.exceptions import ValidationError
from src.core.services import EntityStore, bom_name_for
from src.infrastructure.excel.reader import SheetRow

_DOTTED_DATE = re.compile(r"^(\d{1,2})[./](\d{1,2})[./](\d{4})$")
_ISO_DATE = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})")

_TYPE_ALIASES = {
    "raw material": ProductType.RAW_MATERIAL,
    "semi finished": ProductType.SEMI_FINISHED,
    "semi-finished": ProductType.SEMI_FINISHED,
    "finished good": ProductType.FINISHED,
    "auxiliary material": ProductType.AUXILIARY,
    # Turkish labels used by older templates
    "hammadde": ProductType.RAW_MATERIAL,
    "yari_mamul": ProductType.SEMI_FINISHED,
    "yarı mamul": ProductType.SEMI_FINISHED,
    "mamul": ProductType.FINISHED,
    "yardimci_malzeme": ProductType.AUXILIARY,
    "yardımcı malzeme": ProductType.AUXILIARY,
}

_BOM_OWNER_TYPES = (ProductType.FINISHED, ProductType.SEMI_FINISHED)
_BOM_COMPONENT_TYPES = (ProductType.RAW_MATERIAL, ProductType.SEMI_FINISHED)


# Coercion helpers


def parse_text(value: Any) -> str | None:
    """Cell text; numbers keep their integer form (``1001.0`` -> ``"1001"``)."""
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


def parse_quantity(value: Any, allow_zero: bool = False) -> float | None:
    """
    Parse a quantity cell.

    Accepts numbers and text with either decimal separator ("1,5" or
    "1.5"). Returns None when the value is not a usable quantity.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().replace(" ", "")
        if "," in text and "." in text:
            # 1.234,5 or 1,234.5
            if text.rfind(",") > text.rfind("."):
                text = text.replace(".", "").replace(",", ".")
            else:
                text = text.replace(",", "")
        else:
            text = text.replace(",", ".")
        try:
            number = float(text)
        except ValueError:
            return None
    if number < 0 or (number == 0 and not allow_zero):
        return None
    return number


def parse_date(value: Any) -> dt.date | None:
    """
    Parse a date cell.

    Handles Excel date cells, Excel serial numbers, DD.MM.YYYY (and
    D.M.YYYY or slashes) and ISO dates.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, (int, float)):
        try:
            converted = from_excel(value)
        except (ValueError, OverflowError):
            return None
        return converted.date() if isinstance(converted, dt.datetime) else None

    text = str(value).strip()
    match = _DOTTED_DATE.match(text)
    if match:
        day, month, year = map(int, match.groups())
    else:
        match = _ISO_DATE.match(text)
        if not match:
            return None
        year, month, day = map(int, match.groups())
    try:
        return dt.date(year, month, day)
    except ValueError:
        return None


def parse_product_type(value: Any) -> ProductType | None:
    text = parse_text(value)
    if text is None:
        return None
    key = text.casefold()
    try:
        return ProductType(key.replace(" ", "_").replace("-", "_"))
    except ValueError:
        return _TYPE_ALIASES.get(key)


@dataclass
class BomDraft:
    """Components gathered for one main product across BOM sheet rows."""

    main_code: str
    rows: list[SheetRow] = field(default_factory=list)

    @property
    def first_row(self) -> int:
        return self.rows[0].number


class RowResolver:
    """Resolve sheet rows against the current entity store."""

    def __init__(self, entity_store: EntityStore):
        self._store = entity_store

    # Field helpers

    @staticmethod
    def _required(row: SheetRow, header: str) -> Any:
        value = row.get(header)
        if value is None:
            raise ValidationError(header, "is required")
        return value

    def _text(self, row: SheetRow, header: str) -> str:
        return parse_text(self._required(row, header))

    def _quantity(self, row: SheetRow, header: str, allow_zero: bool = False) -> float:
        raw = self._required(row, header)
        quantity = parse_quantity(raw, allow_zero=allow_zero)
        if quantity is None:
            expected = "a number of zero or more" if allow_zero else "a positive number"
            raise ValidationError(header, f"must be {expected}", raw)
        return quantity

    def _date(self, row: SheetRow, header: str) -> dt.date:
        raw = self._required(row, header)
        date = parse_date(raw)
        if date is None:
            raise ValidationError(header, "must be a date (DD.MM.YYYY or an Excel date)", raw)
        return date

    def _product(
        self,
        row: SheetRow,
        header: str,
        allowed: tuple[ProductType, ...] | None = None,
    ) -> Product:
        code = self._text(row, header)
        product = self._store.get_product_by_code(code)
        if product is None:
            raise ValidationError(header, f"no product with code '{code}'", code)
        if allowed is not None and product.type not in allowed:
            names = ", ".join(t.value for t in allowed)
            raise ValidationError(
                header,
                f"'{code}' is a {product.type.value} product; expected {names}",
                code,
            )
        return product

    # Sheets

    def product(self, row: SheetRow) -> Product:
        raw_type = self._required(row, "Type*")
        product_type = parse_product_type(raw_type)
        if product_type is None:
            allowed = ", ".join(t.value for t in ProductType)
            raise ValidationError("Type*", f"must be one of {allowed}", raw_type)

        stock = 0.0
        if row.get("Initial Stock") is not None:
            stock = self._quantity(row, "Initial Stock", allow_zero=True)

        return Product(
            product_code=self._text(row, "Product Code*"),
            name=self._text(row, "Name*"),
            type=product_type,
            unit=parse_text(row.get("Unit")) or "pcs",
            stock=stock,
            description=parse_text(row.get("Description")),
        )

    def group_bom_rows(self, rows: list[SheetRow]) -> tuple[list[BomDraft], list[tuple[SheetRow, ValidationError]]]:
        """Group BOM rows by main product code, in first-seen order."""
        drafts: dict[str, BomDraft] = {}
        errors: list[tuple[SheetRow, ValidationError]] = []
        for row in rows:
            try:
                code = self._text(row, "Main Product Code*")
            except ValidationError as e:
                errors.append((row, e))
                continue
            drafts.setdefault(code.casefold(), BomDraft(main_code=code)).rows.append(row)
        return list(drafts.values()), errors

    def bom(self, draft: BomDraft) -> tuple[BOM | None, list[tuple[SheetRow, ValidationError]]]:
        """
        Build a BOM from a draft.

        Component rows with problems are reported and left out; the BOM is
        still built from the remaining rows. Returns no BOM when the main
        product is unusable, already has a recipe, or no component survives.
        """
        errors: list[tuple[SheetRow, ValidationError]] = []
        first = draft.rows[0]
        try:
            main = self._product(first, "Main Product Code*", allowed=_BOM_OWNER_TYPES)
        except ValidationError as e:
            return None, [(first, e)]

        if any(b.product_id == main.id for b in self._store.boms):
            error = ValidationError(
                "Main Product Code*",
                f"'{main.product_code}' already has a recipe; rows skipped",
                main.product_code,
            )
            return None, [(first, error)]

        components: list[BomComponent] = []
        for row in draft.rows:
            try:
                component = self._product(row, "Component Product Code*", allowed=_BOM_COMPONENT_TYPES)
                if component.id == main.id:
                    raise ValidationError(
                        "Component Product Code*", "a product cannot be a component of itself", component.product_code
                    )
                if any(c.product_id == component.id for c in components):
                    raise ValidationError(
                        "Component Product Code*",
                        f"'{component.product_code}' is listed more than once; first row kept",
                        component.product_code,
                    )
                quantity = self._quantity(row, "Component Quantity*")
            except ValidationError as e:
                errors.append((row, e))
                continue
            components.append(BomComponent(product_id=component.id, quantity=quantity))

        if not components:
            errors.append(
                (first, ValidationError("Component Product Code*", f"no valid components for '{main.product_code}'"))
            )
            return None, errors
        return BOM(product_id=main.id, name=bom_name_for(main), components=components), errors

    def raw_material_entry(self, row: SheetRow) -> RawMaterialEntry:
        product = self._product(row, "Product Code*", allowed=(ProductType.RAW_MATERIAL, ProductType.AUXILIARY))

        supplier_id = None
        supplier_name = parse_text(row.get("Supplier"))
        if supplier_name:
            supplier = self._store.get_supplier_by_name(supplier_name)
            if supplier is None:
                raise ValidationError("Supplier", f"no supplier named '{supplier_name}'", supplier_name)
            supplier_id = supplier.id

        purchase_order_id = None
        reference = parse_text(row.get("Purchase Order Reference"))
        if reference:
            order = self._store.get_purchase_order_by_reference(reference)
            if order is None:
                raise ValidationError(
                    "Purchase Order Reference", f"no purchase order '{reference}'", reference
                )
            purchase_order_id = order.id
            supplier_id = supplier_id or order.supplier_id

        return RawMaterialEntry(
            product_id=product.id,
            quantity=self._quantity(row, "Quantity*"),
            date=self._date(row, "Date*"),
            supplier_id=supplier_id,
            purchase_order_id=purchase_order_id,
            notes=parse_text(row.get("Notes")),
        )

    def production_log(self, row: SheetRow) -> ProductionLog:
        product = self._product(row, "Product Code*")
        owner = self._product(row, "BOM Product Code*")
        bom = next((b for b in self._store.boms if b.product_id == owner.id), None)
        if bom is None or bom.product_id != product.id:
            raise ValidationError(
                "BOM Product Code*",
                f"no recipe for '{product.product_code}' with main product '{owner.product_code}'",
                owner.product_code,
            )
        return ProductionLog(
            product_id=product.id,
            bom_id=bom.id,
            quantity=self._quantity(row, "Quantity*"),
            date=self._date(row, "Date*"),
            notes=parse_text(row.get("Notes")),
        )

    def shipment_log(self, row: SheetRow) -> ShipmentLog:
        product = self._product(row, "Product Code*")
        customer_order_id = parse_text(row.get("Customer Order ID"))
        if customer_order_id and self._store.get_customer_order(customer_order_id) is None:
            raise ValidationError(
                "Customer Order ID", f"no customer order '{customer_order_id}'", customer_order_id
            )
        return ShipmentLog(
            product_id=product.id,
            quantity=self._quantity(row, "Quantity*"),
            date=self._date(row, "Date*"),
            customer_order_id=customer_order_id,
            notes=parse_text(row.get("Notes")),
        )

    def stock_count(self, row: SheetRow) -> StockCount:
        product = self._product(row, "Product Code*")
        return StockCount(
            product_id=product.id,
            quantity=self._quantity(row, "Counted Quantity*", allow_zero=True),
        )
