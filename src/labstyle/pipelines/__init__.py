from .check import DocumentResult, check_documents, check_text

__all__ = ["DocumentResult", "check_documents", "check_text"]
