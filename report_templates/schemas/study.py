"""Study-related enums"""

from enum import Enum


class ScheduledProcedureStepStatus(str, Enum):
    """DICOM scheduled procedure step status"""
    SCHEDULED = "SCHEDULED"
    ARRIVED = "ARRIVED"
    READY = "READY"
    STARTED = "STARTED"
    DEPARTED = "DEPARTED"


class PerformedProcedureStepStatus(str, Enum):
    """DICOM performed procedure step status"""
    IN_PROGRESS = "IN_PROGRESS"
    DISCONTINUED = "DISCONTINUED"
    COMPLETED = "COMPLETED"
