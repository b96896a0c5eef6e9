"""Unit tests for domain exceptions."""

from decimal import Decimal

from billing.core.exceptions import (
    BillingError,
    DuplicateInvoiceNumberError,
    EmptyImportFileError,
    ExportError,
    FractionalQuantityError,
    InvalidStateError,
    InvoiceNotFoundError,
    NotFoundError,
    PaidInvoiceError,
    PermissionDeniedError,
    ProductInUseError,
    ProductNotFoundError,
    ValidationError,
)


class TestBillingError:
    def test_default_code_is_class_name(self):
        error = BillingError("boom")
        assert error.code == "BillingError"
        assert error.details == {}

    def test_to_dict(self):
        error = BillingError("boom", code="X", details={"a": 1})
        assert error.to_dict() == {"error": "X", "message": "boom", "details": {"a": 1}}


class TestLookupErrors:
    def test_invoice_not_found(self):
        error = InvoiceNotFoundError(42)
        assert isinstance(error, NotFoundError)
        assert error.code == "INVOICE_NOT_FOUND"
        assert error.details == {"invoice_id": 42}

    def test_product_not_found(self):
        error = ProductNotFoundError(7)
        assert isinstance(error, NotFoundError)
        assert "7" in error.message

    def test_permission_denied(self):
        error = PermissionDeniedError("invoice", 5, 2)
        assert error.code == "PERMISSION_DENIED"
        assert error.message == "Invoice 5 does not belong to tenant 2"


class TestStateErrors:
    def test_state_errors_share_base(self):
        for error in (
            PaidInvoiceError(1, "delete"),
            ProductInUseError(1),
            DuplicateInvoiceNumberError("INV-1-2024-000001", 1),
        ):
            assert isinstance(error, InvalidStateError)


class TestValidationErrors:
    def test_value_truncated(self):
        error = ValidationError("name", "too long", "x" * 500)
        assert len(error.details["value"]) == 100

    def test_fractional_quantity(self):
        error = FractionalQuantityError(Decimal("1.5"), "Pieces")
        assert isinstance(error, ValidationError)
        assert error.details["unit"] == "Pieces"
        assert error.details["value"] == "1.5"

    def test_empty_import_file(self):
        error = EmptyImportFileError("products.csv")
        assert error.details["filename"] == "products.csv"

    def test_export_error(self):
        error = ExportError("invoice pdf", "font missing")
        assert error.code == "EXPORT_FAILED"
