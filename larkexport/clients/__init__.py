"""High-level clients."""

from .exporter import ChatExport, ChatHistoryExporter, ExportReport

__all__ = ["ChatExport", "ChatHistoryExporter", "ExportReport"]
