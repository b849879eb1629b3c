"""
Vital Models - Single physiological observations with a severity bucket.
"""

import uuid
from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class VitalType(str, Enum):
    BLOOD_PRESSURE = "Blood Pressure"
    BLOOD_SUGAR = "Blood Sugar"
    HEART_RATE = "Heart Rate"
    SPO2 = "SpO2"
    WEIGHT = "Weight"
    TEMPERATURE = "Temperature"


class VitalStatus(str, Enum):
    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"
    UNKNOWN = "unknown"


class VitalSource(str, Enum):
    EXTRACTED = "extracted"
    MANUAL = "manual"


def new_vital_id() -> str:
    return f"vital-{uuid.uuid4().hex}"


class VitalCreate(BaseModel):
    """Manual vital entry. Status is always computed server-side."""
    type: str
    value: str
    unit: str = ""


class VitalRecord(BaseModel):
    """A recorded vital. Immutable once created."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_vital_id)
    type: str  # VitalType value; unknown types are stored and classified as unknown
    value: str  # compound for blood pressure, e.g. "120/80"
    unit: str = ""
    timestamp: datetime
    status: VitalStatus = VitalStatus.UNKNOWN
    source: VitalSource = VitalSource.MANUAL
