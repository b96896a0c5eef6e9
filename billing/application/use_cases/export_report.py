"""Export Report Use Case: renders a finished report as PDF or Excel."""

import re
from dataclasses import dataclass
from enum import Enum

from billing.config import get_logger
from billing.core.entities.report import Report
from billing.core.interfaces import IReportExporter

logger = get_logger(__name__)


class ExportFormat(str, Enum):
    PDF = "pdf"
    EXCEL = "excel"


@dataclass
class ReportExport:
    content: bytes
    media_type: str
    filename: str


def _slug(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-") or "report"


class ExportReportUseCase:
    """Pick the exporter for a format and render the report with it."""

    def __init__(self, exporters: dict[ExportFormat, IReportExporter] | None = None):
        self._exporters = exporters

    def _get_exporter(self, export_format: ExportFormat) -> IReportExporter:
        if self._exporters is None:
            from billing.infrastructure.excel import OpenpyxlReportExporter
            from billing.infrastructure.pdf import Fpdf2ReportExporter

            self._exporters = {
                ExportFormat.PDF: Fpdf2ReportExporter(),
                ExportFormat.EXCEL: OpenpyxlReportExporter(),
            }
        return self._exporters[export_format]

    def execute(self, report: Report, export_format: ExportFormat) -> ReportExport:
        exporter = self._get_exporter(export_format)
        content = exporter.export(report)
        logger.info(
            "report_export_complete",
            report_type=report.report_type,
            format=export_format.value,
            file_size=len(content),
        )
        return ReportExport(
            content=content,
            media_type=exporter.media_type,
            filename=f"{_slug(report.report_type)}.{exporter.file_extension}",
        )
