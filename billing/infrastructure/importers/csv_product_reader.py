"""
CSV product import reader.

Expects a header row with the columns ``name, description, price, mrp,
quantity, minStockLevel, category, unit`` (case-insensitive, values
trimmed). Product codes are never read from the file; they are assigned
on creation. A row that fails to parse is skipped and reported without
affecting the others.
"""

import csv
import io
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

from pydantic import ValidationError as PydanticValidationError

from billing.application.dto.requests import ProductRequest
from billing.config import get_logger
from billing.core.entities.product import Product, UnitType
from billing.core.exceptions import EmptyImportFileError, ValidationError

logger = get_logger(__name__)

REQUIRED_COLUMNS = ("name", "price")


@dataclass
class SkippedRow:
    """A CSV row that could not be turned into a product."""

    line_number: int
    reason: str


@dataclass
class ParsedRow:
    """A CSV row parsed into a product draft without id or code."""

    line_number: int
    product: Product


@dataclass
class CsvReadResult:
    rows: list[ParsedRow] = field(default_factory=list)
    skipped: list[SkippedRow] = field(default_factory=list)

    @property
    def products(self) -> list[Product]:
        return [row.product for row in self.rows]


class RowError(ValueError):
    """Raised for a single unparseable CSV row."""


def _decimal(value: str | None, column: str, default: Decimal | None = None) -> Decimal | None:
    if value is None or value == "":
        return default
    try:
        number = Decimal(value)
    except InvalidOperation as e:
        raise RowError(f"{column} is not a number: {value!r}") from e
    if not number.is_finite():
        raise RowError(f"{column} is not a number: {value!r}")
    return number


class CsvProductReader:
    """Parses product rows for a tenant from CSV bytes."""

    def __init__(self, encoding: str = "utf-8-sig") -> None:
        self._encoding = encoding

    def read(self, content: bytes, tenant_id: int, filename: str = "upload.csv") -> CsvReadResult:
        if not content or not content.strip():
            raise EmptyImportFileError(filename)

        try:
            text = content.decode(self._encoding)
        except UnicodeDecodeError as e:
            raise ValidationError("file", f"'{filename}' is not valid {self._encoding} text") from e
        reader = csv.DictReader(io.StringIO(text))
        if reader.fieldnames is None:
            raise EmptyImportFileError(filename)
        # Header matching ignores case and surrounding spaces
        reader.fieldnames = [name.strip().lower() for name in reader.fieldnames]

        result = CsvReadResult()
        for row in reader:
            line_number = reader.line_num
            values = {k: (v or "").strip() for k, v in row.items() if k is not None}
            try:
                product = self._to_product(values, tenant_id)
            except RowError as e:
                logger.warning("csv_row_skipped", line=line_number, reason=str(e))
                result.skipped.append(SkippedRow(line_number=line_number, reason=str(e)))
                continue
            result.rows.append(ParsedRow(line_number=line_number, product=product))

        logger.info(
            "csv_products_read",
            filename=filename,
            parsed=len(result.rows),
            skipped=len(result.skipped),
        )
        return result

    @staticmethod
    def _to_product(values: dict[str, str], tenant_id: int) -> Product:
        for column in REQUIRED_COLUMNS:
            if not values.get(column):
                raise RowError(f"missing {column}")

        price = _decimal(values["price"], "price")
        if price is None or price <= 0:
            raise RowError("price must be positive")

        unit = UnitType.from_string(values.get("unit"))
        quantity = _decimal(values.get("quantity"), "quantity", Decimal("0"))
        if not unit.accepts(quantity):
            raise RowError(f"quantity for {unit.display_name} must be a whole number")

        min_stock = values.get("minstocklevel") or "0"
        try:
            min_stock_level = int(min_stock)
        except ValueError as e:
            raise RowError(f"minStockLevel is not an integer: {min_stock!r}") from e

        # Same bounds as a product created through the API
        try:
            request = ProductRequest(
                name=values["name"],
                description=values.get("description") or None,
                price=price,
                mrp=_decimal(values.get("mrp"), "mrp"),
                quantity=quantity,
                min_stock_level=min_stock_level,
                category=values.get("category") or None,
                unit=unit,
                active=True,
            )
        except PydanticValidationError as e:
            err = e.errors()[0]
            field_name = ".".join(str(part) for part in err["loc"])
            raise RowError(f"{field_name}: {err['msg']}") from e

        return Product(tenant_id=tenant_id, **request.model_dump())
