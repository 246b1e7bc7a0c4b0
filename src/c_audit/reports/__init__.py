"""Reports — text, JSON and Markdown renderings of a lint run."""

from c_audit.reports.exporters import export_result

__all__ = ["export_result"]
