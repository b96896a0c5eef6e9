"""Product catalog domain entities."""

from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class UnitType(str, Enum):
    """Measurement unit of a product.

    Each unit carries a short code, a display name and whether fractional
    quantities are allowed when invoicing it.
    """

    PIECES = "PIECES"
    KILOGRAMS = "KILOGRAMS"
    GRAMS = "GRAMS"
    LITERS = "LITERS"

    @property
    def code(self) -> str:
        return _UNIT_DETAILS[self][0]

    @property
    def display_name(self) -> str:
        return _UNIT_DETAILS[self][1]

    @property
    def allows_decimal(self) -> bool:
        return _UNIT_DETAILS[self][2]

    def accepts(self, quantity: Decimal) -> bool:
        """Return True if *quantity* is expressible in this unit."""
        if self.allows_decimal:
            return True
        return quantity == quantity.to_integral_value()

    @classmethod
    def from_string(cls, value: str | None) -> "UnitType":
        """Resolve a unit from its name, code or display name.

        Unknown or empty values fall back to PIECES.
        """
        if value:
            needle = value.strip().lower()
            for unit in cls:
                if needle in (unit.value.lower(), unit.code.lower(), unit.display_name.lower()):
                    return unit
        return cls.PIECES


_UNIT_DETAILS: dict[UnitType, tuple[str, str, bool]] = {
    UnitType.PIECES: ("pcs", "Pieces", False),
    UnitType.KILOGRAMS: ("kg", "Kilograms", True),
    UnitType.GRAMS: ("g", "Grams", True),
    UnitType.LITERS: ("L", "Liters", True),
}


class Product(BaseModel):
    """A catalog product owned by a single tenant."""

    id: int | None = None
    tenant_id: int
    code: str | None = None  # unique per tenant, generated on create
    name: str
    description: str | None = None
    price: Decimal
    mrp: Decimal | None = None  # reference (maximum retail) price
    quantity: Decimal = Decimal("0")  # stock on hand, may go negative
    min_stock_level: int = 0
    category: str | None = None
    unit: UnitType = UnitType.PIECES
    active: bool = True
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def is_low_stock(self) -> bool:
        """Advisory threshold check; never blocks a stock mutation."""
        return self.quantity <= self.min_stock_level

    def belongs_to(self, tenant_id: int) -> bool:
        return self.tenant_id == tenant_id

    def adjust_stock(self, delta: Decimal) -> Decimal:
        """Apply a signed stock delta and return the new quantity."""
        self.quantity = self.quantity + delta
        return self.quantity
