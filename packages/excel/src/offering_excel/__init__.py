"""Excel export for offering allocation audits."""

from .audit_workbook_renderer import AuditWorkbookRenderer

__all__ = ["AuditWorkbookRenderer"]
