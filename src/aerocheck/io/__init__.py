"""Input handling: document discovery and reading."""

from aerocheck.io.documents import Document, find_documents, read_document, read_documents

__all__ = ["Document", "find_documents", "read_document", "read_documents"]
