"""
Adherence statistics over recorded dose history.
"""

from datetime import date, timedelta
from typing import Iterable

from ..models import AdherenceStats, DoseInstance, DoseStatus


def compute_adherence(history: Iterable[DoseInstance], today: date, days: int = 7) -> AdherenceStats:
    """
    Summarise taken and missed doses dated within the last ``days`` days
    (today and the ``days - 1`` days before it).

    An empty window counts as full adherence.
    """
    cutoff = today - timedelta(days=days)
    relevant = [dose for dose in history if dose.date > cutoff]

    total = len(relevant)
    if total == 0:
        return AdherenceStats(percentage=100, taken=0, missed=0, total=0, days=days)

    taken = sum(1 for dose in relevant if dose.status == DoseStatus.TAKEN)
    missed = sum(1 for dose in relevant if dose.status == DoseStatus.MISSED)

    return AdherenceStats(
        percentage=int(taken * 100 / total + 0.5),  # half-up, not banker's rounding
        taken=taken,
        missed=missed,
        total=total,
        days=days,
    )
