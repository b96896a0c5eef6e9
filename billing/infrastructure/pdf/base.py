"""
Shared fpdf2 building blocks for invoice and report documents.

Both documents use the same page frame: company block with a logo
placeholder, a page-numbered footer and money formatted with the
configured currency symbol.
"""

import os
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from billing.config.settings import PdfSettings


def safe_text(text: str | None) -> str:
    """Return *text* limited to characters the core PDF fonts can encode."""
    if not text:
        return ""
    return text.encode("latin-1", errors="replace").decode("latin-1")


def format_money(value: Decimal | None, currency_symbol: str) -> str:
    if value is None:
        return "-"
    return f"{currency_symbol} {value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):,}"


class BillingPdf(FPDF):
    """FPDF subclass that renders a footer on every page."""

    def __init__(self, pdf_settings: PdfSettings) -> None:
        super().__init__()
        self._pdf_settings = pdf_settings
        self._generation_date = datetime.now(UTC).strftime("%Y-%m-%d %H:%M UTC")

    def footer(self) -> None:
        """Render footer with page numbers and generation date."""
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.cell(0, 5, safe_text(self._pdf_settings.footer_text), align="L")
        self.set_x(-60)
        self.cell(
            0,
            5,
            f"Page {self.page_no()} of {{nb}} | {self._generation_date}",
            align="R",
        )

    def company_block(self) -> None:
        """Logo (or placeholder) at top-left with company details beside it."""
        logo_path = self._pdf_settings.logo_path
        if logo_path and os.path.isfile(logo_path):
            self.image(logo_path, x=10, y=10, w=40, h=20)
        else:
            self._draw_logo_placeholder()

        self.set_xy(55, 10)
        self.set_font("Helvetica", "B", 10)
        self.cell(
            0, 5, safe_text(self._pdf_settings.company_name),
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )

        self.set_font("Helvetica", "", 8)
        for line in (
            self._pdf_settings.company_address,
            f"Phone: {self._pdf_settings.company_phone}" if self._pdf_settings.company_phone else "",
            f"Email: {self._pdf_settings.company_email}" if self._pdf_settings.company_email else "",
        ):
            if line:
                self.set_x(55)
                self.cell(0, 4, safe_text(line), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

        # Keep body below the logo area
        if self.get_y() < 32:
            self.set_y(32)

    def separator(self) -> None:
        y = self.get_y()
        self.set_draw_color(100, 100, 100)
        self.line(10, y, 200, y)
        self.set_draw_color(0, 0, 0)
        self.ln(4)

    def table_header(self, headers: list[str], widths: list[int]) -> None:
        self.set_font("Helvetica", "B", 9)
        self.set_fill_color(70, 70, 70)
        self.set_text_color(255, 255, 255)
        for header, width in zip(headers, widths):
            self.cell(width, 7, header, border=1, fill=True, align="C")
        self.ln()
        self.set_text_color(0, 0, 0)

    def table_row(
        self, values: list[str], widths: list[int], index: int, numeric_from: int = 1
    ) -> None:
        """One bordered row; alternate rows are shaded, numeric columns right-aligned."""
        self.set_font("Helvetica", "", 8)
        fill = index % 2 == 0
        if fill:
            self.set_fill_color(240, 240, 240)
        for col, (value, width) in enumerate(zip(values, widths)):
            align = "R" if col >= numeric_from else "L"
            self.cell(width, 6, safe_text(value), border=1, align=align, fill=fill)
        self.ln()

    def _draw_logo_placeholder(self) -> None:
        x, y = 10, 10
        w, h = 40, 20
        self.set_draw_color(180, 180, 180)
        self.rect(x, y, w, h)
        self.set_font("Helvetica", "I", 10)
        self.set_text_color(180, 180, 180)
        self.set_xy(x, y + 6)
        self.cell(w, 8, "LOGO", align="C")
        self.set_draw_color(0, 0, 0)
        self.set_text_color(0, 0, 0)
