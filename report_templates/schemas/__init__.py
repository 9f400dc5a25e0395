"""Pydantic schemas for parsed templates, terms and search criteria"""

from .search import TemplateSearchCriteria
from .study import PerformedProcedureStepStatus, ScheduledProcedureStepStatus
from .template import DCTERMS_VOCABULARY, ParsedTemplate, Term

__all__ = [
    "DCTERMS_VOCABULARY",
    "ParsedTemplate",
    "Term",
    "TemplateSearchCriteria",
    "ScheduledProcedureStepStatus",
    "PerformedProcedureStepStatus",
]
