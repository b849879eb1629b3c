"""
Dose Schedule - Builds today's dose timeline and keeps recorded actions across regenerations.

All functions here are pure: "today" and "now" are passed in by the caller and
no storage is touched. Persisting the results is the job of CareManager.
"""

from datetime import date, datetime
from typing import Dict, Iterable, List, Sequence, Tuple

from ..models import DoseInstance, DoseStatus, Medication, TimeOfDay
from .errors import DoseNotFoundError

TIME_MAPPING: Dict[str, str] = {
    TimeOfDay.MORNING.value: "08:00",
    TimeOfDay.AFTERNOON.value: "13:00",
    TimeOfDay.EVENING.value: "18:00",
    TimeOfDay.NIGHT.value: "21:00",
}

# Used for slot values outside TIME_MAPPING (malformed extraction output)
DEFAULT_DOSE_TIME = "09:00"


def slot_time(time_of_day: str) -> str:
    """Resolve a time-of-day slot to its HH:MM clock time."""
    return TIME_MAPPING.get(time_of_day, DEFAULT_DOSE_TIME)


def generate_doses(medications: Iterable[Medication], today: date) -> List[DoseInstance]:
    """
    Expand medications into today's dose instances.

    One pending instance is produced per (medication, slot) pair. As-needed
    slots are never put on the timeline. The result is ordered by clock time;
    doses at the same time keep medication order.

    Args:
        medications: Medications to schedule
        today: Date stamped on every instance

    Returns:
        List[DoseInstance]: Fresh instances, each with a new storage id
    """
    doses: List[DoseInstance] = []

    for med in medications:
        seen_times = set()
        for time_of_day in med.times:
            if time_of_day == TimeOfDay.AS_NEEDED.value:
                continue

            # A slot key must be unique per day, so repeated slots collapse
            time = slot_time(time_of_day)
            if time in seen_times:
                continue
            seen_times.add(time)

            doses.append(DoseInstance(
                medication_id=med.id,
                medication_name=med.name,
                dosage=med.dosage,
                instructions=med.instructions,
                label=time_of_day,
                time=time,
                date=today,
                status=DoseStatus.PENDING,
            ))

    return sorted(doses, key=lambda d: d.time)


def reconcile(
    fresh_doses: Sequence[DoseInstance],
    previous_doses: Sequence[DoseInstance],
) -> List[DoseInstance]:
    """
    Merge freshly generated doses with previously known doses for the same day.

    Doses are matched on (medication_id, time). A matched slot shows the fresh
    medication details but keeps the previous id, status and action time, so a
    renamed medication still shows as taken and later upserts hit the same
    history row. Unmatched fresh doses stay pending. Previous doses whose slot
    is no longer generated are dropped.

    Args:
        fresh_doses: Output of generate_doses
        previous_doses: History for today, or the current working list

    Returns:
        List[DoseInstance]: Merged list in fresh_doses order
    """
    previous_by_slot: Dict[Tuple[str, str], DoseInstance] = {}
    for dose in previous_doses:
        # First record wins if history holds duplicates for a slot
        previous_by_slot.setdefault(dose.slot_key, dose)

    merged: List[DoseInstance] = []
    for fresh in fresh_doses:
        previous = previous_by_slot.get(fresh.slot_key)
        if previous is None:
            merged.append(fresh)
            continue

        merged.append(fresh.model_copy(update={
            "id": previous.id,
            "status": previous.status,
            "action_time": previous.action_time,
        }))

    return merged


def toggle_dose_status(
    doses: Sequence[DoseInstance],
    dose_id: str,
    now: datetime,
) -> DoseInstance:
    """
    Flip a dose between taken and pending.

    A taken dose goes back to pending and loses its action time. Any other
    status becomes taken, stamped with ``now``. The input list is left alone;
    the caller swaps the returned instance in and persists it.

    Raises:
        DoseNotFoundError: If no dose in ``doses`` has ``dose_id``
    """
    for dose in doses:
        if dose.id != dose_id:
            continue

        if dose.status == DoseStatus.TAKEN:
            return dose.model_copy(update={"status": DoseStatus.PENDING, "action_time": None})
        return dose.model_copy(update={"status": DoseStatus.TAKEN, "action_time": now})

    raise DoseNotFoundError(dose_id)
