"""
Services Package

Business logic and persistence coordination for the report template registry.
"""

from .concept_catalog import ConceptCatalog, DatabaseConceptCatalog, StaticConceptCatalog
from .study_service import StudyService
from .template_query import TemplateQueryEngine
from .template_service import TemplateService
from .template_store import TemplateStore
from .term_resolver import TermResolver
from .uid_generator import DicomUidGenerator

__all__ = [
    "ConceptCatalog",
    "DatabaseConceptCatalog",
    "StaticConceptCatalog",
    "StudyService",
    "TemplateQueryEngine",
    "TemplateService",
    "TemplateStore",
    "TermResolver",
    "DicomUidGenerator",
]
