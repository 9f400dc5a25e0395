"""Parsing of MRRT report template documents"""

from .parser import TemplateFileParser, extract_body_from_text
from .validator import TemplateMetadataValidator

__all__ = ["TemplateFileParser", "TemplateMetadataValidator", "extract_body_from_text"]
