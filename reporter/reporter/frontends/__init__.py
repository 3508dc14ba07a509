from .pdf import ReportDocument, create_document, render

__all__ = ["ReportDocument", "create_document", "render"]
