"""
Concept Reference Term Model

Local catalog of coded concepts (RadLex, LOINC, ...) templates may reference
"""

from sqlalchemy import Column, Integer, String, UniqueConstraint
from sqlalchemy.orm import validates

from .base import Base


class ConceptReferenceTerm(Base):
    """Coded term of a terminology scheme mapped to a local concept"""

    __tablename__ = "concept_reference_terms"

    concept_reference_term_id = Column(Integer, primary_key=True, autoincrement=True)

    scheme = Column(String(50), nullable=False, index=True, comment="Coding scheme, e.g. RADLEX")
    code = Column(String(100), nullable=False, comment="Code within the scheme, e.g. RID10321")
    name = Column(String(255), nullable=True, comment="Human readable meaning")
    concept_id = Column(String(255), nullable=False, comment="Local concept the code maps to")

    __table_args__ = (
        UniqueConstraint("scheme", "code", name="uq_concept_reference_term_scheme_code"),
    )

    @validates("scheme")
    def normalize_scheme(self, key, scheme):
        """Schemes are stored upper-case so RadLex and RADLEX share one code space"""
        return scheme.strip().upper() if scheme is not None else scheme

    def __repr__(self):
        return f"<ConceptReferenceTerm({self.scheme}:{self.code} -> {self.concept_id})>"
