"""Document analysis collaborator — protocol and HTTP adapter."""

from src.integrations.document_analysis.client import DocumentAnalyzer, HttpDocumentAnalyzer, document_analyzer

__all__ = ["DocumentAnalyzer", "HttpDocumentAnalyzer", "document_analyzer"]
