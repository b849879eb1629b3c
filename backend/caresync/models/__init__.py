"""Models module."""

from .medication import TimeOfDay, Medication, MedicationCreate, MedicationUpdate
from .dose import DoseStatus, DoseInstance, AdherenceStats
from .vital import VitalType, VitalStatus, VitalSource, VitalCreate, VitalRecord
from .report import ExtractionResult, SummaryReport, Prescription, ChatTurn, ChatRequest, ChatReply

__all__ = [
    'TimeOfDay', 'Medication', 'MedicationCreate', 'MedicationUpdate',
    'DoseStatus', 'DoseInstance', 'AdherenceStats',
    'VitalType', 'VitalStatus', 'VitalSource', 'VitalCreate', 'VitalRecord',
    'ExtractionResult', 'SummaryReport', 'Prescription', 'ChatTurn', 'ChatRequest', 'ChatReply',
]
