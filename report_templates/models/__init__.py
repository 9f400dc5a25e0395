"""
Database Models Package

SQLAlchemy ORM models for the report template registry.
"""

from .base import Base
from .concept import ConceptReferenceTerm
from .study import RadiologyStudy
from .template import ReportTemplate, TemplateTerm

__all__ = [
    "Base",
    "ConceptReferenceTerm",
    "RadiologyStudy",
    "ReportTemplate",
    "TemplateTerm",
]
