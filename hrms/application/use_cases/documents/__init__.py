"""Document use cases."""

from hrms.application.use_cases.documents.document_operations import DocumentService

__all__ = ["DocumentService"]
