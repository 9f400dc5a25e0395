"""Template-related Pydantic schemas"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# Dublin Core keys recognized in <meta name="dcterms.KEY"> elements
DCTERMS_VOCABULARY = (
    "title",
    "description",
    "identifier",
    "type",
    "language",
    "publisher",
    "rights",
    "license",
    "date",
    "creator",
)


class ParsedTemplate(BaseModel):
    """Result of parsing an MRRT template document, before term resolution"""

    dcterms_title: Optional[str] = None
    dcterms_description: Optional[str] = None
    dcterms_identifier: Optional[str] = None
    dcterms_type: Optional[str] = None
    dcterms_language: Optional[str] = None
    dcterms_publisher: Optional[str] = None
    dcterms_rights: Optional[str] = None
    dcterms_license: Optional[str] = None
    dcterms_date: Optional[str] = None
    dcterms_creator: Optional[str] = None

    body: str = Field(default="", description="Serialized inner content of <body>")
    term_references: List[str] = Field(
        default_factory=list,
        description="Concept-reference marker texts in document order",
    )

    model_config = ConfigDict(frozen=True)

    def metadata(self) -> Dict[str, Optional[str]]:
        """Dublin Core fields keyed by their ReportTemplate column names"""
        return {f"dcterms_{key}": getattr(self, f"dcterms_{key}") for key in DCTERMS_VOCABULARY}


class Term(BaseModel):
    """A concept-reference marker resolved against the concept catalog"""

    source_marker_text: str
    resolved_concept_id: str

    model_config = ConfigDict(frozen=True)
