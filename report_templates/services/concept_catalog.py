"""
Concept Catalog

Lookup of coded concepts by concept-reference marker text. Markers take the
form ``SCHEME:CODE`` (for example ``RADLEX:RID10321``).
"""

from typing import Mapping, Optional, Protocol

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.concept import ConceptReferenceTerm

SCHEME_SEPARATOR = ":"


class ConceptCatalog(Protocol):
    """Read-only catalog of coded concepts"""

    async def lookup(self, marker_text: str) -> Optional[str]:
        """Return the concept id for ``marker_text`` or None if unknown"""
        ...


def split_marker(marker_text: str) -> Optional[tuple[str, str]]:
    """Split ``SCHEME:CODE`` into its parts; None when either part is missing"""
    scheme, separator, code = marker_text.partition(SCHEME_SEPARATOR)
    scheme, code = scheme.strip(), code.strip()
    if not separator or not scheme or not code:
        return None
    return scheme, code


class StaticConceptCatalog:
    """Catalog backed by an in-memory mapping of marker text to concept id"""

    def __init__(self, concepts: Optional[Mapping[str, str]] = None):
        self._concepts = dict(concepts or {})

    async def lookup(self, marker_text: str) -> Optional[str]:
        return self._concepts.get(marker_text)


class DatabaseConceptCatalog:
    """Catalog backed by the concept_reference_terms table"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def lookup(self, marker_text: str) -> Optional[str]:
        """Concept id of the oldest row matching the marker's scheme (any case) and code"""
        parts = split_marker(marker_text)
        if parts is None:
            return None
        scheme, code = parts

        result = await self.db.execute(
            select(ConceptReferenceTerm.concept_id).where(
                func.upper(ConceptReferenceTerm.scheme) == scheme.upper(),
                ConceptReferenceTerm.code == code,
            )
            .order_by(ConceptReferenceTerm.concept_reference_term_id)
            .limit(1)
        )
        return result.scalars().first()
