"""
Dose Models - Concrete scheduled administrations and adherence summaries.
"""

import uuid
from datetime import datetime, date
from enum import Enum
from typing import Optional, Tuple
from pydantic import BaseModel, Field


class DoseStatus(str, Enum):
    PENDING = "pending"
    TAKEN = "taken"
    SKIPPED = "skipped"
    MISSED = "missed"


def new_dose_id() -> str:
    return f"dose-{uuid.uuid4().hex}"


class DoseInstance(BaseModel):
    """
    One scheduled administration of a medication on a given date.

    Name, dosage, instructions and label are copied from the medication when
    the schedule is generated. ``id`` identifies the history row, while
    ``slot_key`` identifies the slot across regenerations.
    """
    id: str = Field(default_factory=new_dose_id)
    medication_id: str
    medication_name: str
    dosage: str = ""
    instructions: str = ""
    label: str
    time: str  # HH:MM, 24-hour
    date: date
    status: DoseStatus = DoseStatus.PENDING
    action_time: Optional[datetime] = None  # set only while status is taken

    @property
    def slot_key(self) -> Tuple[str, str]:
        return (self.medication_id, self.time)


class AdherenceStats(BaseModel):
    """Adherence over a trailing window of dose history."""
    percentage: int
    taken: int
    missed: int
    total: int
    days: int
