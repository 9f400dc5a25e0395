"""Template Query Engine - metadata search over stored templates"""

from typing import List

from ..logging_config import get_logger
from ..models.template import ReportTemplate
from ..schemas.search import TemplateSearchCriteria
from .template_store import TemplateStore

logger = get_logger(__name__)

# Search criteria field -> ReportTemplate attribute
CRITERIA_FIELDS = {
    "title": "dcterms_title",
    "publisher": "dcterms_publisher",
    "license": "dcterms_license",
    "creator": "dcterms_creator",
}


def matches(template: ReportTemplate, criteria: TemplateSearchCriteria) -> bool:
    """True if every active criterion occurs, ignoring case, in its metadata field"""
    for name, needle in criteria.active_filters().items():
        value = getattr(template, CRITERIA_FIELDS[name])
        if value is None or needle.casefold() not in value.casefold():
            return False
    return True


class TemplateQueryEngine:
    """Evaluates search criteria against every stored template"""

    def __init__(self, store: TemplateStore):
        self.store = store

    async def find(self, criteria: TemplateSearchCriteria) -> List[ReportTemplate]:
        """Templates matching all active criteria, in template_id order

        Empty criteria match every template. No match yields an empty list.
        """
        candidates = await self.store.list_all()
        found = [template for template in candidates if matches(template, criteria)]

        logger.debug(
            "Template search",
            criteria=criteria.active_filters(),
            candidates=len(candidates),
            found=len(found),
        )
        return found
