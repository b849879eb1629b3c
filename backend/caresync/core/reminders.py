"""
Reminder scanning - finds pending doses whose scheduled time is now.
"""

from datetime import datetime
from typing import List, Optional, Sequence

from ..models import DoseInstance, DoseStatus


def _minutes_since_midnight(clock_time: str) -> Optional[int]:
    """Parse "HH:MM" into minutes since midnight, or None if malformed."""
    parts = clock_time.split(":")
    if len(parts) != 2:
        return None
    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    return hours * 60 + minutes


def scan_due_reminders(
    doses: Sequence[DoseInstance],
    now: datetime,
    tolerance_minutes: int = 1,
) -> List[DoseInstance]:
    """
    Return the pending doses scheduled within ``tolerance_minutes`` of ``now``.

    This is a snapshot: it has to be polled, and a dose whose window passes
    between two polls is not reported afterwards.

    Args:
        doses: Working dose list for today
        now: Current local wall-clock time
        tolerance_minutes: Allowed distance either side of the dose time

    Returns:
        List[DoseInstance]: Due doses in input order
    """
    current = now.hour * 60 + now.minute
    due: List[DoseInstance] = []

    for dose in doses:
        if dose.status != DoseStatus.PENDING:
            continue
        scheduled = _minutes_since_midnight(dose.time)
        if scheduled is None:
            continue
        if abs(current - scheduled) <= tolerance_minutes:
            due.append(dose)

    return due
