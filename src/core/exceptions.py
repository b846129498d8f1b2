"""
Domain exceptions for the StokTakip application.

Every business-rule violation raised by the stock engine and the master-data
services is one of these types. They are raised before any state is touched,
so a caller that catches one can assume nothing changed.
"""

from typing import Any


class StokTakipError(Exception):
    """Base exception for all StokTakip errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Lookup Exceptions
class NotFoundError(StokTakipError):
    """A referenced entity id does not exist."""

    def __init__(self, entity: str, entity_id: str, code: str | None = None):
        super().__init__(
            f"{entity} not found: {entity_id}",
            code=code or "NOT_FOUND",
            details={"entity": entity, "entity_id": entity_id},
        )
        self.entity = entity
        self.entity_id = entity_id


class ProductNotFoundError(NotFoundError):
    """Product not found in the store."""

    def __init__(self, product_id: str):
        super().__init__("Product", product_id, code="PRODUCT_NOT_FOUND")


class BomNotFoundError(NotFoundError):
    """Bill of materials not found in the store."""

    def __init__(self, bom_id: str):
        super().__init__("BOM", bom_id, code="BOM_NOT_FOUND")


class RawMaterialEntryNotFoundError(NotFoundError):
    """Raw material entry not found in the ledger."""

    def __init__(self, entry_id: str):
        super().__init__("Raw material entry", entry_id, code="RAW_MATERIAL_ENTRY_NOT_FOUND")


class ProductionLogNotFoundError(NotFoundError):
    """Production log not found in the ledger."""

    def __init__(self, log_id: str):
        super().__init__("Production log", log_id, code="PRODUCTION_LOG_NOT_FOUND")


class ShipmentLogNotFoundError(NotFoundError):
    """Shipment log not found in the ledger."""

    def __init__(self, log_id: str):
        super().__init__("Shipment log", log_id, code="SHIPMENT_LOG_NOT_FOUND")


class CustomerOrderNotFoundError(NotFoundError):
    """Customer order not found in the store."""

    def __init__(self, order_id: str):
        super().__init__("Customer order", order_id, code="CUSTOMER_ORDER_NOT_FOUND")


class SupplierNotFoundError(NotFoundError):
    """Supplier not found in the store."""

    def __init__(self, supplier_id: str):
        super().__init__("Supplier", supplier_id, code="SUPPLIER_NOT_FOUND")


class PurchaseOrderNotFoundError(NotFoundError):
    """Purchase order not found in the store."""

    def __init__(self, order_id: str):
        super().__init__("Purchase order", order_id, code="PURCHASE_ORDER_NOT_FOUND")


# Consistency Exceptions
class DuplicateError(StokTakipError):
    """A unique field already holds the given value."""

    def __init__(self, entity: str, field: str, value: str):
        super().__init__(
            f"{entity} with {field} '{value}' already exists",
            code="DUPLICATE",
            details={"entity": entity, "field": field, "value": value},
        )


class ImmutableFieldError(StokTakipError):
    """An update tried to change a field that must stay stable."""

    def __init__(self, entity: str, field: str, old_value: Any, new_value: Any):
        super().__init__(
            f"{entity} {field} cannot be changed on update "
            f"(delete the record and create a new one instead)",
            code="IMMUTABLE_FIELD",
            details={
                "entity": entity,
                "field": field,
                "old_value": old_value,
                "new_value": new_value,
            },
        )


class InsufficientStockError(StokTakipError):
    """Feasibility check failed for a consuming operation."""

    def __init__(self, product: str, requested: float, available: float):
        super().__init__(
            f"Insufficient stock for '{product}': requested {requested:g}, "
            f"available {available:g}",
            code="INSUFFICIENT_STOCK",
            details={
                "product": product,
                "requested": requested,
                "available": available,
            },
        )
        self.product = product
        self.requested = requested
        self.available = available


class ReferentialIntegrityError(StokTakipError):
    """Delete blocked because another entity still references the target."""

    def __init__(self, entity: str, entity_id: str, referenced_by: str):
        super().__init__(
            f"{entity} {entity_id} is still referenced by {referenced_by}; "
            f"remove those references first",
            code="REFERENTIAL_INTEGRITY",
            details={
                "entity": entity,
                "entity_id": entity_id,
                "referenced_by": referenced_by,
            },
        )
        self.referenced_by = referenced_by


# Validation Exceptions
class ValidationError(StokTakipError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Validation error for '{field}': {message}",
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class InvalidProductTypeError(ValidationError):
    """Product type does not allow the requested operation."""

    def __init__(self, product: str, product_type: str, expected: str):
        super().__init__(
            field="product_id",
            message=f"'{product}' is a {product_type} product; only {expected} products are allowed",
            value=product_type,
        )
        self.code = "INVALID_PRODUCT_TYPE"


class FileTooLargeError(ValidationError):
    """Uploaded file exceeds size limit."""

    def __init__(self, filename: str, size: int, max_size: int):
        super().__init__(
            field="file",
            message=f"File '{filename}' is too large ({size} bytes, max {max_size})",
        )
        self.details.update(
            {
                "filename": filename,
                "size": size,
                "max_size": max_size,
            }
        )


class UnsupportedFileTypeError(ValidationError):
    """File type is not supported."""

    def __init__(self, filename: str, extension: str, allowed: list[str]):
        super().__init__(
            field="file",
            message=f"Unsupported file type '{extension}'. Allowed: {', '.join(allowed)}",
        )
        self.details.update(
            {
                "filename": filename,
                "extension": extension,
                "allowed": allowed,
            }
        )


# Storage Exceptions
class StorageError(StokTakipError):
    """Base exception for storage operations."""

    pass


class DatabaseError(StorageError):
    """Database operation failed."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Database error during {operation}: {error}",
            code="DATABASE_ERROR",
            details={"operation": operation, "error": error},
        )


class ConfigurationError(StokTakipError):
    """Configuration error."""

    pass
