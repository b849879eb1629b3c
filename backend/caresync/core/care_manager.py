"""
Care Manager - Owns today's working dose list for the running service.
Ties the pure schedule functions to care storage and the clock.
"""

import asyncio
import logging
from datetime import date, datetime
from typing import Callable, Iterable, List, Optional

from ..models import (
    AdherenceStats, DoseInstance, Medication, MedicationUpdate,
    VitalCreate, VitalRecord, VitalSource,
)
from ..storage import CareStorage
from .adherence import compute_adherence
from .errors import MedicationNotFoundError
from .reminders import scan_due_reminders
from .schedule import generate_doses, reconcile, toggle_dose_status
from .vitals import classify_vital

logger = logging.getLogger(__name__)


class CareManager:
    """
    Holds the medication list, today's reconciled dose list and the active reminder.

    Every medication change regenerates today's schedule and reconciles it
    against the working list, so taken doses stay taken. Dose status changes
    are written through to dose history. Mutations are serialised with a lock.
    """

    def __init__(
        self,
        storage: CareStorage,
        clock: Callable[[], datetime] = datetime.now,
        reminder_tolerance_minutes: int = 1,
    ):
        """
        Args:
            storage: Care record storage
            clock: Returns the current local wall-clock time
            reminder_tolerance_minutes: Window either side of a dose time
        """
        self.storage = storage
        self.clock = clock
        self.reminder_tolerance_minutes = reminder_tolerance_minutes

        self.medications: List[Medication] = []
        self.doses: List[DoseInstance] = []
        self.schedule_date: Optional[date] = None
        self.active_reminder: Optional[DoseInstance] = None
        self._lock = asyncio.Lock()

    async def load(self) -> None:
        """Load medications and rebuild today's schedule from dose history."""
        async with self._lock:
            await self._load()

    async def _load(self) -> None:
        today = self.clock().date()
        self.medications = await self.storage.get_medications()
        history = await self.storage.get_dose_history_for(today)

        self.doses = reconcile(generate_doses(self.medications, today), history)
        self.schedule_date = today
        self.active_reminder = None

        logger.info(
            "Schedule loaded",
            extra={"extra_fields": {
                "date": today.isoformat(),
                "medications": len(self.medications),
                "doses": len(self.doses),
                "recorded": len(history),
            }}
        )

    async def _ensure_today(self) -> None:
        if self.schedule_date != self.clock().date():
            await self._load()

    async def ensure_today(self) -> None:
        """Reload the schedule if the date has rolled over since the last load."""
        async with self._lock:
            await self._ensure_today()

    def _regenerate(self, medications: List[Medication]) -> None:
        """Reschedule today for ``medications``; state is only replaced if that succeeds."""
        fresh = generate_doses(medications, self.schedule_date)
        doses = reconcile(fresh, self.doses)

        self.medications = medications
        self.doses = doses

        # Follow the reconciled instance so an edit shows up in the active reminder
        if self.active_reminder is not None:
            self.active_reminder = next(
                (dose for dose in doses if dose.id == self.active_reminder.id), None
            )

    async def get_medications(self) -> List[Medication]:
        async with self._lock:
            await self._ensure_today()
            return list(self.medications)

    async def get_today_doses(self) -> List[DoseInstance]:
        async with self._lock:
            await self._ensure_today()
            return list(self.doses)

    async def add_medications(self, medications: Iterable[Medication]) -> List[Medication]:
        """
        Append medications (manual entry or scan result) and reschedule today.

        Returns:
            List[Medication]: The full medication list after the change
        """
        new_meds = list(medications)
        async with self._lock:
            await self._ensure_today()
            self._regenerate(self.medications + new_meds)
            await self.storage.save_medications(self.medications)

        logger.info(f"Added {len(new_meds)} medication(s); {len(self.doses)} doses scheduled today")
        return list(self.medications)

    async def update_medication(self, medication_id: str, update: MedicationUpdate) -> Medication:
        """
        Edit a medication and reschedule today, keeping recorded dose status.

        Raises:
            MedicationNotFoundError: If no medication has ``medication_id``
        """
        async with self._lock:
            await self._ensure_today()
            for index, med in enumerate(self.medications):
                if med.id == medication_id:
                    updated = med.apply_update(update)
                    break
            else:
                raise MedicationNotFoundError(medication_id)

            self._regenerate(self.medications[:index] + [updated] + self.medications[index + 1:])
            await self.storage.save_medications(self.medications)

        logger.info(f"Updated medication {medication_id}")
        return updated

    async def toggle_dose(self, dose_id: str) -> DoseInstance:
        """
        Flip a dose between taken and pending and record it in dose history.
        Clears the active reminder if it was for this dose.

        Raises:
            DoseNotFoundError: If the dose is not on today's schedule
        """
        async with self._lock:
            await self._ensure_today()
            updated = toggle_dose_status(self.doses, dose_id, self.clock())
            self.doses = [updated if dose.id == dose_id else dose for dose in self.doses]
            await self.storage.upsert_dose(updated)

            if self.active_reminder is not None and self.active_reminder.id == dose_id:
                self.active_reminder = None

        logger.info(
            "Dose status changed",
            extra={"extra_fields": {
                "dose_id": dose_id,
                "medication_id": updated.medication_id,
                "status": updated.status.value,
            }}
        )
        return updated

    async def due_reminders(self) -> List[DoseInstance]:
        """Pending doses due right now, without touching the active reminder."""
        async with self._lock:
            await self._ensure_today()
            return scan_due_reminders(self.doses, self.clock(), self.reminder_tolerance_minutes)

    async def check_reminders(self) -> Optional[DoseInstance]:
        """
        Scan for due doses and surface the first one as the active reminder.
        Runs on the reminder job's polling interval.

        Returns:
            Optional[DoseInstance]: The active reminder after the scan
        """
        due = await self.due_reminders()
        if due:
            self.active_reminder = due[0]
            logger.info(
                f"Reminder due: {due[0].medication_name} {due[0].dosage} at {due[0].time}",
                extra={"extra_fields": {"dose_id": due[0].id, "due_count": len(due)}}
            )
        return self.active_reminder

    def dismiss_reminder(self) -> None:
        self.active_reminder = None

    async def record_vital(self, vital: VitalCreate) -> VitalRecord:
        """Classify and store a manually entered vital."""
        record = VitalRecord(
            type=vital.type,
            value=vital.value,
            unit=vital.unit,
            timestamp=self.clock(),
            status=classify_vital(vital.type, vital.value),
            source=VitalSource.MANUAL,
        )
        await self.storage.add_vitals([record])
        return record

    async def adherence(self, days: int = 7) -> AdherenceStats:
        history = await self.storage.get_dose_history()
        return compute_adherence(history, self.clock().date(), days)


# Global care manager instance
_care_manager: Optional[CareManager] = None


def init_care_manager(
    storage: CareStorage,
    clock: Callable[[], datetime] = datetime.now,
    reminder_tolerance_minutes: int = 1,
) -> CareManager:
    """Create the global care manager. Call load() on it before serving."""
    global _care_manager
    _care_manager = CareManager(storage, clock, reminder_tolerance_minutes)
    return _care_manager


def get_care_manager() -> CareManager:
    """
    Get the global care manager instance.

    Raises:
        RuntimeError: If the care manager has not been initialized
    """
    if _care_manager is None:
        raise RuntimeError("Care manager not initialized. Call init_care_manager() first.")
    return _care_manager
