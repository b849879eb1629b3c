"""
Report Models - AI extraction results, health summaries, prescriptions and chat.
"""

import uuid
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field

from .medication import Medication
from .vital import VitalRecord


class ExtractionResult(BaseModel):
    """Structured data read from a prescription image."""
    medications: List[Medication] = Field(default_factory=list)
    vitals: List[VitalRecord] = Field(default_factory=list)


class SummaryReport(BaseModel):
    """Patient summary and caregiver note generated from meds and vitals."""
    summary: str
    risk_flags: List[str] = Field(default_factory=list)
    caregiver_note: str = ""


class Prescription(BaseModel):
    """A scanned prescription and the medications read from it."""
    id: str = Field(default_factory=lambda: f"rx-{uuid.uuid4().hex}")
    upload_date: datetime
    media_type: str = "image/png"
    medication_ids: List[str] = Field(default_factory=list)
    doctor_name: Optional[str] = None
    notes: Optional[str] = None


class ChatTurn(BaseModel):
    """One previous turn of an assistant conversation."""
    role: str  # user, assistant
    content: str


class ChatRequest(BaseModel):
    message: str
    history: List[ChatTurn] = Field(default_factory=list)


class ChatReply(BaseModel):
    role: str = "assistant"
    content: str
