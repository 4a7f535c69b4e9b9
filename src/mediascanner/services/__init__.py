"""File removal, keep-one reconciliation and report rendering services."""

from .file_service import FileService
from .duplicate_service import DuplicateService
from .report_service import ReportService

__all__ = ["FileService", "DuplicateService", "ReportService"]
