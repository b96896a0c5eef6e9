"""Tests for CsvProductReader."""

from decimal import Decimal

import pytest

from billing.core.entities.product import UnitType
from billing.core.exceptions import EmptyImportFileError, ValidationError
from billing.infrastructure.importers import CsvProductReader


@pytest.fixture
def reader():
    return CsvProductReader()


class TestCsvProductReader:
    def test_parses_rows(self, reader):
        content = (
            b"Name, Price ,MRP,Quantity,minStockLevel,Category,Unit,Description\n"
            b" Rice ,60,70,2.5,3,Grocery,kg,Long grain\n"
        )
        result = reader.read(content, tenant_id=4)

        assert result.skipped == []
        product = result.products[0]
        assert product.tenant_id == 4
        assert product.code is None
        assert product.name == "Rice"
        assert product.price == Decimal("60")
        assert product.mrp == Decimal("70")
        assert product.quantity == Decimal("2.5")
        assert product.min_stock_level == 3
        assert product.unit == UnitType.KILOGRAMS
        assert result.rows[0].line_number == 2

    def test_utf8_bom_header(self, reader):
        result = reader.read("\ufeffname,price\nSoap,10\n".encode("utf-8"), tenant_id=1)
        assert [p.name for p in result.products] == ["Soap"]

    def test_defaults_for_optional_columns(self, reader):
        product = reader.read(b"name,price\nSoap,10\n", tenant_id=1).products[0]
        assert product.quantity == Decimal("0")
        assert product.min_stock_level == 0
        assert product.mrp is None
        assert product.unit == UnitType.PIECES

    @pytest.mark.parametrize(
        ("row", "reason"),
        [
            (b",10,,", "missing name"),
            (b"Soap,,,", "missing price"),
            (b"Soap,0,,", "price must be positive"),
            (b"Soap,ten,,", "price is not a number"),
            (b"Soap,10,1.5,pcs", "whole number"),
            (b"Soap,10,x,", "quantity is not a number"),
            (b"Soap,NaN,1,pcs", "price is not a number"),
            (b"Soap,Infinity,1,pcs", "price is not a number"),
            (b"Rice,10,NaN,kg", "quantity is not a number"),
            (b"Soap,10,-5,pcs", "quantity"),
        ],
    )
    def test_bad_rows_skipped(self, reader, row, reason):
        content = b"name,price,quantity,unit\nGood,1,1,pcs\n" + row + b"\n"
        result = reader.read(content, tenant_id=1)

        assert [p.name for p in result.products] == ["Good"]
        assert result.skipped[0].line_number == 3
        assert reason in result.skipped[0].reason

    def test_bad_min_stock_level(self, reader):
        result = reader.read(b"name,price,minStockLevel\nSoap,10,lots\n", tenant_id=1)
        assert "minStockLevel" in result.skipped[0].reason

    @pytest.mark.parametrize("content", [b"", b"  \n "])
    def test_empty_file(self, reader, content):
        with pytest.raises(EmptyImportFileError):
            reader.read(content, tenant_id=1)

    @pytest.mark.parametrize("mrp", [b"0", b"-3", b"NaN"])
    def test_non_positive_mrp_skipped(self, reader, mrp):
        content = b"name,price,mrp\nGood,10,12\nSoap,10," + mrp + b"\nTea,5,\n"
        result = reader.read(content, tenant_id=1)

        assert [p.name for p in result.products] == ["Good", "Tea"]
        assert result.skipped[0].line_number == 3
        assert "mrp" in result.skipped[0].reason

    def test_negative_min_stock_level(self, reader):
        result = reader.read(b"name,price,minStockLevel\nSoap,10,-1\n", tenant_id=1)

        assert result.products == []
        assert "min_stock_level" in result.skipped[0].reason

    def test_invalid_utf8_rejected(self, reader):
        with pytest.raises(ValidationError) as exc_info:
            reader.read(b"name,price\nCaf\xe9,10\n", tenant_id=1, filename="latin1.csv")

        assert exc_info.value.details["field"] == "file"
