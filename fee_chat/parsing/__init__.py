"""PDF parsing utilities for uploaded documents.

Responsibilities:
    - PDF validation (header, size, emptiness)
    - Page-by-page text extraction with pypdf
    - Lenient extraction that degrades to empty text on failure
"""

from fee_chat.parsing.pdf_parser import PDFContent, PDFParseError, extract_text, parse_pdf

__all__ = ["PDFContent", "PDFParseError", "extract_text", "parse_pdf"]
