"""Integration tests for StudyService"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from report_templates.exceptions import ErrorCode, InvalidArgumentError, NotFoundError, StorageError
from report_templates.models import RadiologyStudy
from report_templates.schemas.study import PerformedProcedureStepStatus, ScheduledProcedureStepStatus
from report_templates.services.study_service import StudyService
from report_templates.services.uid_generator import DicomUidGenerator, is_valid_uid

ORG_ROOT = "1.2.826.0.1.3680043.8"


@pytest.fixture
def study_service(db_session):
    return StudyService(db_session, DicomUidGenerator(), ORG_ROOT)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_save_assigns_study_instance_uid(study_service):
    study = await study_service.save(RadiologyStudy(order_id=1, modality="CT"))

    assert study.study_id is not None
    assert study.study_instance_uid.startswith(f"{ORG_ROOT}.")
    assert is_valid_uid(study.study_instance_uid)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_save_keeps_given_study_instance_uid(study_service):
    study = await study_service.save(RadiologyStudy(order_id=1, study_instance_uid="1.2.3.4"))

    assert study.study_instance_uid == "1.2.3.4"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_save_marks_scheduled_study(study_service):
    """Test a study with a scheduled date defaults to SCHEDULED"""
    scheduled = await study_service.save(
        RadiologyStudy(order_id=1, scheduled_date=datetime(2026, 1, 5, 9, 30, tzinfo=timezone.utc))
    )
    unscheduled = await study_service.save(RadiologyStudy(order_id=2))

    assert scheduled.scheduled_status == ScheduledProcedureStepStatus.SCHEDULED.value
    assert unscheduled.scheduled_status is None


@pytest.mark.integration
@pytest.mark.asyncio
async def test_update_performed_status(study_service):
    study = await study_service.save(RadiologyStudy(order_id=1))

    updated = await study_service.update_performed_status(
        study.study_instance_uid, PerformedProcedureStepStatus.IN_PROGRESS
    )

    assert updated.performed_status == "IN_PROGRESS"
    stored = await study_service.get_by_study_instance_uid(study.study_instance_uid)
    assert stored.performed_status == "IN_PROGRESS"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_update_performed_status_of_unknown_study(study_service):
    with pytest.raises(NotFoundError) as exc_info:
        await study_service.update_performed_status("1.2.3.4", PerformedProcedureStepStatus.COMPLETED)

    assert exc_info.value.error_code == ErrorCode.RESOURCE_NOT_FOUND


@pytest.mark.integration
@pytest.mark.asyncio
async def test_update_performed_status_rejects_unknown_status(study_service):
    study = await study_service.save(RadiologyStudy(order_id=1))

    with pytest.raises(InvalidArgumentError, match="Unknown performed status"):
        await study_service.update_performed_status(study.study_instance_uid, "PAUSED")


@pytest.mark.integration
@pytest.mark.asyncio
@pytest.mark.parametrize(
    "uid, status, argument",
    [
        (None, PerformedProcedureStepStatus.COMPLETED, "study_instance_uid"),
        ("1.2.3.4", None, "performed_status"),
    ],
)
async def test_update_performed_status_requires_arguments(study_service, uid, status, argument):
    with pytest.raises(InvalidArgumentError, match=f"{argument} cannot be null"):
        await study_service.update_performed_status(uid, status)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_lookups(study_service):
    first = await study_service.save(RadiologyStudy(order_id=10))
    second = await study_service.save(RadiologyStudy(order_id=20))

    assert (await study_service.get(first.study_id)).order_id == 10
    assert (await study_service.get_by_uuid(second.uuid)).order_id == 20
    assert (await study_service.get_by_order_id(20)).study_id == second.study_id
    assert await study_service.get_by_order_id(30) is None
    assert await study_service.get_by_study_instance_uid("1.2.3") is None


@pytest.mark.integration
@pytest.mark.asyncio
async def test_get_by_order_ids(study_service):
    for order_id in (30, 10, 20):
        await study_service.save(RadiologyStudy(order_id=order_id))

    found = await study_service.get_by_order_ids([20, 30, 99])

    assert [study.order_id for study in found] == [20, 30]
    assert await study_service.get_by_order_ids([]) == []


@pytest.mark.integration
@pytest.mark.asyncio
async def test_save_none_is_rejected(study_service):
    with pytest.raises(InvalidArgumentError, match="study cannot be null"):
        await study_service.save(None)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_save_duplicate_order_is_storage_error(study_service):
    """Test constraint violations surface as StorageError"""
    await study_service.save(RadiologyStudy(order_id=1))

    with pytest.raises(StorageError, match="Failed to save study") as exc_info:
        await study_service.save(RadiologyStudy(order_id=1))

    assert exc_info.value.error_code == ErrorCode.SERVICE_STORAGE_ERROR
    assert exc_info.value.details["order_id"] == 1
    assert [study.order_id for study in await study_service.get_by_order_ids([1])] == [1]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_save_database_failure_is_storage_error(study_service, db_session):
    failure = OperationalError("INSERT INTO radiology_studies", {}, Exception("database is locked"))

    with patch.object(db_session, "commit", AsyncMock(side_effect=failure)):
        with pytest.raises(StorageError):
            await study_service.save(RadiologyStudy(order_id=5))

    assert await study_service.get_by_order_id(5) is None
