from .cursor import DocumentCursor
from .document import ReportDocument, create_document, render

__all__ = ["DocumentCursor", "ReportDocument", "create_document", "render"]
