"""
Domain exceptions for the billing application.

Provides specific exception types for different error scenarios.
"""

from typing import Any


class BillingError(Exception):
    """Base exception for all billing errors."""

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
class NotFoundError(BillingError):
    """Referenced entity does not exist."""

    pass


class InvoiceNotFoundError(NotFoundError):
    """Invoice not found in storage."""

    def __init__(self, invoice_id: int):
        super().__init__(
            f"Invoice not found: {invoice_id}",
            code="INVOICE_NOT_FOUND",
            details={"invoice_id": invoice_id},
        )


class ProductNotFoundError(NotFoundError):
    """Product not found in the catalog."""

    def __init__(self, product_id: int):
        super().__init__(
            f"Product not found: {product_id}",
            code="PRODUCT_NOT_FOUND",
            details={"product_id": product_id},
        )


# Ownership Exceptions
class PermissionDeniedError(BillingError):
    """Entity exists but belongs to a different tenant."""

    def __init__(self, entity: str, entity_id: int, tenant_id: int):
        super().__init__(
            f"{entity.capitalize()} {entity_id} does not belong to tenant {tenant_id}",
            code="PERMISSION_DENIED",
            details={"entity": entity, "entity_id": entity_id, "tenant_id": tenant_id},
        )


# State Exceptions
class InvalidStateError(BillingError):
    """Operation rejected because of the entity's current state."""

    pass


class PaidInvoiceError(InvalidStateError):
    """Paid invoices can not be updated or deleted."""

    def __init__(self, invoice_id: int, operation: str):
        super().__init__(
            f"Cannot {operation} a paid invoice: {invoice_id}",
            code="INVOICE_PAID",
            details={"invoice_id": invoice_id, "operation": operation},
        )


class ProductInUseError(InvalidStateError):
    """Product is still referenced by invoice items."""

    def __init__(self, product_id: int):
        super().__init__(
            f"Product {product_id} is referenced by existing invoices",
            code="PRODUCT_IN_USE",
            details={"product_id": product_id},
        )


class DuplicateInvoiceNumberError(InvalidStateError):
    """Generated invoice number already exists for the tenant."""

    def __init__(self, invoice_number: str, tenant_id: int):
        super().__init__(
            f"Invoice number already exists: {invoice_number}",
            code="DUPLICATE_INVOICE_NUMBER",
            details={"invoice_number": invoice_number, "tenant_id": tenant_id},
        )


# Validation Exceptions
class ValidationError(BillingError):
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


class FractionalQuantityError(ValidationError):
    """Fractional quantity given for a whole-number unit."""

    def __init__(self, quantity: Any, unit_display_name: str):
        super().__init__(
            field="quantity",
            message=f"Quantity for {unit_display_name} must be a whole number",
            value=quantity,
        )
        self.details["unit"] = unit_display_name


class EmptyImportFileError(ValidationError):
    """Uploaded import file has no content."""

    def __init__(self, filename: str):
        super().__init__(field="file", message=f"File '{filename}' is empty")
        self.details["filename"] = filename


# Storage Exceptions
class StorageError(BillingError):
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


# Export Exceptions
class ExportError(BillingError):
    """Rendering an invoice or report failed."""

    def __init__(self, target: str, reason: str):
        super().__init__(
            f"Failed to export {target}: {reason}",
            code="EXPORT_FAILED",
            details={"target": target, "reason": reason},
        )


class ConfigurationError(BillingError):
    """Configuration error."""

    pass
