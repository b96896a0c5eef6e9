"""Tests for report PDF and Excel exporters."""

from io import BytesIO

from openpyxl import load_workbook

from billing.core.entities.report import Report
from billing.infrastructure.excel import OpenpyxlReportExporter
from billing.infrastructure.pdf import Fpdf2ReportExporter


class TestFpdf2ReportExporter:
    def test_media_type(self):
        assert Fpdf2ReportExporter.media_type == "application/pdf"
        assert Fpdf2ReportExporter.file_extension == "pdf"

    def test_renders_sections(self, pdf_settings, pdf_text, dashboard_report):
        data = Fpdf2ReportExporter(pdf_settings).export(dashboard_report)

        assert data.startswith(b"%PDF")
        text = pdf_text(data)
        assert "Dashboard Report" in text
        assert "Rice" in text

    def test_minimal_report(self, pdf_settings):
        data = Fpdf2ReportExporter(pdf_settings).export(Report(report_type="Daily Sales Report"))
        assert data.startswith(b"%PDF")


class TestOpenpyxlReportExporter:
    def test_workbook_contents(self, dashboard_report):
        data = OpenpyxlReportExporter().export(dashboard_report)

        ws = load_workbook(BytesIO(data)).active
        assert ws.title == "Dashboard Report"
        values = [cell.value for row in ws.iter_rows() for cell in row if cell.value is not None]
        assert values[0] == "Dashboard Report"
        assert "Top Products" in values
        assert "Rice" in values
        assert "Monthly Breakdown" in values

    def test_sheet_title_sanitized(self):
        report = Report(report_type="Sales [2024/25]: a very long report name indeed")
        ws = load_workbook(BytesIO(OpenpyxlReportExporter().export(report))).active
        assert len(ws.title) <= 31
        assert "/" not in ws.title and "[" not in ws.title
