"""
Radiology Study Model

Study attached to a radiology order, identified by a DICOM study instance UID
"""

from uuid import uuid4

from sqlalchemy import CheckConstraint, Column, Integer, String, TIMESTAMP, func

from .base import Base


class RadiologyStudy(Base):
    """Radiology study model"""

    __tablename__ = "radiology_studies"

    study_id = Column(Integer, primary_key=True, autoincrement=True)

    uuid = Column(
        String(38),
        nullable=False,
        unique=True,
        index=True,
        default=lambda: str(uuid4()),
    )

    order_id = Column(Integer, nullable=False, unique=True, index=True, comment="Radiology order")

    study_instance_uid = Column(
        String(64),
        nullable=True,
        unique=True,
        index=True,
        comment="DICOM study instance UID",
    )

    modality = Column(String(16), nullable=True, comment="DICOM modality, e.g. CT")

    scheduled_date = Column(TIMESTAMP(timezone=True), nullable=True)

    scheduled_status = Column(
        String(20),
        nullable=True,
        comment="Scheduled procedure step status: SCHEDULED | ARRIVED | READY | STARTED | DEPARTED",
    )

    performed_status = Column(
        String(20),
        nullable=True,
        comment="Performed procedure step status: IN_PROGRESS | DISCONTINUED | COMPLETED",
    )

    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    __table_args__ = (
        CheckConstraint(
            "scheduled_status IS NULL OR scheduled_status IN ('SCHEDULED', 'ARRIVED', 'READY', 'STARTED', 'DEPARTED')",
            name="chk_study_scheduled_status",
        ),
        CheckConstraint(
            "performed_status IS NULL OR performed_status IN ('IN_PROGRESS', 'DISCONTINUED', 'COMPLETED')",
            name="chk_study_performed_status",
        ),
    )

    def __repr__(self):
        return f"<RadiologyStudy(study_id={self.study_id}, study_instance_uid={self.study_instance_uid})>"
