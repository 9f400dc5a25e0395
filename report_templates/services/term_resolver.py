"""Term Resolver - maps concept-reference markers to known coded terms"""

from typing import List, Sequence

from ..logging_config import get_logger
from ..schemas.template import Term
from .concept_catalog import ConceptCatalog

logger = get_logger(__name__)


class TermResolver:
    """Resolves marker texts against a concept catalog"""

    def __init__(self, catalog: ConceptCatalog):
        self.catalog = catalog

    async def resolve(self, markers: Sequence[str]) -> List[Term]:
        """Resolve markers in order

        Markers the catalog does not know are dropped: templates routinely
        reference concepts this installation has not loaded yet.

        Args:
            markers: Marker texts in document order

        Returns:
            List[Term]: one term per resolved marker, in input order
        """
        terms = []
        for marker in markers:
            concept_id = await self.catalog.lookup(marker)
            if concept_id is None:
                logger.debug("Unresolved concept reference", marker=marker)
                continue
            terms.append(Term(source_marker_text=marker, resolved_concept_id=concept_id))
        return terms
