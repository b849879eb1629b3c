"""
Medication Models - Prescribed drugs and the time-of-day slots they are taken in.
"""

import uuid
from enum import Enum
from typing import Optional, List
from pydantic import BaseModel, Field


class TimeOfDay(str, Enum):
    """Named periods a medication can be scheduled against."""
    MORNING = "Morning"
    AFTERNOON = "Afternoon"
    EVENING = "Evening"
    NIGHT = "Night"
    AS_NEEDED = "As Needed"


def new_medication_id() -> str:
    return f"med-{uuid.uuid4().hex}"


class MedicationBase(BaseModel):
    """Fields shared by stored medications and create payloads."""
    name: str
    dosage: str = ""
    frequency: str = ""
    instructions: str = ""
    duration: Optional[str] = None

    # Slot values are kept as plain strings: AI extraction can return
    # values outside TimeOfDay and the scheduler falls back for those.
    times: List[str] = Field(default_factory=list)

    color: Optional[str] = None
    category: Optional[str] = None
    general_use: Optional[str] = None


class MedicationCreate(MedicationBase):
    """Manual medication entry."""
    pass


class MedicationUpdate(BaseModel):
    """Partial edit of a medication. The id is never editable."""
    name: Optional[str] = None
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    instructions: Optional[str] = None
    duration: Optional[str] = None
    times: Optional[List[str]] = None
    color: Optional[str] = None
    category: Optional[str] = None
    general_use: Optional[str] = None


class Medication(MedicationBase):
    """A prescribed drug owned by the user's medication list."""
    id: str = Field(default_factory=new_medication_id)

    def apply_update(self, update: MedicationUpdate) -> "Medication":
        """
        Return a validated copy with the fields set on ``update`` replaced.

        Fields sent as null are left unchanged.
        """
        changes = update.model_dump(exclude_unset=True, exclude_none=True)
        return type(self).model_validate({**self.model_dump(), **changes})
