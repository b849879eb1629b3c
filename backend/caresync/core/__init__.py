"""Core module - dose scheduling, reminders, vitals classification and the care manager."""

from .errors import CareSyncError, DoseNotFoundError, MedicationNotFoundError, ExtractionError
from .schedule import TIME_MAPPING, generate_doses, reconcile, toggle_dose_status
from .reminders import scan_due_reminders
from .vitals import classify_vital
from .adherence import compute_adherence
from .care_manager import CareManager, init_care_manager, get_care_manager

__all__ = [
    'CareSyncError', 'DoseNotFoundError', 'MedicationNotFoundError', 'ExtractionError',
    'TIME_MAPPING', 'generate_doses', 'reconcile', 'toggle_dose_status',
    'scan_due_reminders', 'classify_vital', 'compute_adherence',
    'CareManager', 'init_care_manager', 'get_care_manager',
]
