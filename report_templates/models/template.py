"""
Report Template Models

Report templates imported from MRRT documents and the coded terms they reference
"""

from uuid import uuid4

from sqlalchemy import Column, ForeignKey, Integer, String, TEXT, TIMESTAMP, UniqueConstraint, func
from sqlalchemy.orm import relationship

from .base import Base


def _new_uuid() -> str:
    return str(uuid4())


class ReportTemplate(Base):
    """Report template model - metadata record backed by a template file"""

    __tablename__ = "report_templates"

    # Primary key
    template_id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Surrogate template identifier",
    )

    uuid = Column(
        String(38),
        nullable=False,
        unique=True,
        index=True,
        default=_new_uuid,
        comment="External template identifier",
    )

    # Dublin Core metadata
    dcterms_title = Column(String(255), nullable=True, index=True, comment="dcterms.title")
    dcterms_description = Column(TEXT, nullable=True, comment="dcterms.description")
    dcterms_identifier = Column(
        String(255),
        nullable=True,
        unique=True,
        index=True,
        comment="dcterms.identifier (unique when present)",
    )
    dcterms_type = Column(String(255), nullable=True, comment="dcterms.type")
    dcterms_language = Column(String(50), nullable=True, comment="dcterms.language")
    dcterms_publisher = Column(String(255), nullable=True, comment="dcterms.publisher")
    dcterms_rights = Column(TEXT, nullable=True, comment="dcterms.rights")
    dcterms_license = Column(String(255), nullable=True, comment="dcterms.license")
    dcterms_date = Column(String(50), nullable=True, comment="dcterms.date")
    dcterms_creator = Column(String(255), nullable=True, comment="dcterms.creator")

    # Backing file
    path = Column(
        String(1024),
        nullable=True,
        comment="Absolute path of the stored template document",
    )

    created_at = Column(
        TIMESTAMP(timezone=True),
        server_default=func.now(),
        comment="Template creation time",
    )

    # Relationships
    terms = relationship(
        "TemplateTerm",
        back_populates="template",
        cascade="all, delete-orphan",
        order_by="TemplateTerm.position",
        lazy="selectin",
    )

    def __repr__(self):
        return (
            f"<ReportTemplate(template_id={self.template_id}, uuid={self.uuid}, "
            f"identifier={self.dcterms_identifier})>"
        )


class TemplateTerm(Base):
    """A concept-reference marker of a template resolved to a known concept"""

    __tablename__ = "report_template_terms"

    term_id = Column(Integer, primary_key=True, autoincrement=True)

    template_id = Column(
        Integer,
        ForeignKey("report_templates.template_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owning template",
    )

    position = Column(
        Integer,
        nullable=False,
        comment="Order of the marker within the template body (0-based)",
    )

    source_marker_text = Column(String(255), nullable=False, comment="Marker text as found in the body")
    resolved_concept_id = Column(String(255), nullable=False, comment="Concept the marker resolved to")

    __table_args__ = (
        UniqueConstraint("template_id", "position", name="uq_template_term_position"),
    )

    template = relationship("ReportTemplate", back_populates="terms")

    def __repr__(self):
        return f"<TemplateTerm(marker={self.source_marker_text}, concept={self.resolved_concept_id})>"
