"""Study Service - radiology studies and their DICOM study instance UIDs"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import InvalidArgumentError, NotFoundError, StorageError, require
from ..logging_config import get_logger
from ..models.study import RadiologyStudy
from ..schemas.study import PerformedProcedureStepStatus, ScheduledProcedureStepStatus
from .uid_generator import DicomUidGenerator

logger = get_logger(__name__)


class StudyService:
    """Service for radiology study records"""

    def __init__(self, db: AsyncSession, uid_generator: DicomUidGenerator, org_root: str):
        """Initialize StudyService

        Args:
            db: Database session
            uid_generator: Generator for study instance UIDs
            org_root: DICOM UID root new study instance UIDs are generated under
        """
        self.db = db
        self.uid_generator = uid_generator
        self.org_root = org_root

    async def save(self, study: RadiologyStudy) -> RadiologyStudy:
        """Save a study, filling in scheduled status and study instance UID

        The scheduled status becomes SCHEDULED when unset and the study has a
        scheduled date. A blank study instance UID is replaced with a new one.

        Raises:
            InvalidArgumentError: if study is None
            StorageError: if the record cannot be written
        """
        require(study, "study")

        if study.scheduled_status is None and study.scheduled_date is not None:
            study.scheduled_status = ScheduledProcedureStepStatus.SCHEDULED.value

        if not (study.study_instance_uid or "").strip():
            study.study_instance_uid = self.uid_generator.new_uid(self.org_root)

        order_id = study.order_id
        try:
            self.db.add(study)
            await self.db.commit()
            await self.db.refresh(study)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Study save failed", order_id=order_id, error=str(e))
            raise StorageError(
                "Failed to save study",
                details={"order_id": order_id, "error": str(e)},
            ) from e

        logger.info("Study saved", study_id=study.study_id, study_instance_uid=study.study_instance_uid)
        return study

    async def update_performed_status(
        self,
        study_instance_uid: str,
        performed_status: PerformedProcedureStepStatus,
    ) -> RadiologyStudy:
        """Set the performed procedure step status of a study

        Raises:
            InvalidArgumentError: if an argument is None or the status is unknown
            NotFoundError: if no study has the given UID
        """
        require(study_instance_uid, "study_instance_uid")
        require(performed_status, "performed_status")
        try:
            status = PerformedProcedureStepStatus(performed_status)
        except ValueError as e:
            raise InvalidArgumentError(
                f"Unknown performed status {performed_status}", argument="performed_status"
            ) from e

        study = await self.get_by_study_instance_uid(study_instance_uid)
        if study is None:
            raise NotFoundError("RadiologyStudy", study_instance_uid)

        study.performed_status = status.value
        return await self.save(study)

    async def get(self, study_id: int) -> Optional[RadiologyStudy]:
        require(study_id, "study_id")
        return await self.db.get(RadiologyStudy, study_id)

    async def get_by_uuid(self, uuid: str) -> Optional[RadiologyStudy]:
        require(uuid, "uuid")
        result = await self.db.execute(select(RadiologyStudy).where(RadiologyStudy.uuid == uuid))
        return result.scalar_one_or_none()

    async def get_by_order_id(self, order_id: int) -> Optional[RadiologyStudy]:
        require(order_id, "order_id")
        result = await self.db.execute(select(RadiologyStudy).where(RadiologyStudy.order_id == order_id))
        return result.scalar_one_or_none()

    async def get_by_study_instance_uid(self, study_instance_uid: str) -> Optional[RadiologyStudy]:
        require(study_instance_uid, "study_instance_uid")
        result = await self.db.execute(
            select(RadiologyStudy).where(RadiologyStudy.study_instance_uid == study_instance_uid)
        )
        return result.scalar_one_or_none()

    async def get_by_order_ids(self, order_ids: List[int]) -> List[RadiologyStudy]:
        """Studies for the given orders, in order_id order"""
        require(order_ids, "order_ids")
        if not order_ids:
            return []
        result = await self.db.execute(
            select(RadiologyStudy)
            .where(RadiologyStudy.order_id.in_(order_ids))
            .order_by(RadiologyStudy.order_id)
        )
        return list(result.scalars().all())
