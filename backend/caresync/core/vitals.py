"""
Vital sign classification against simple clinical threshold rules.

Values arrive as free text (often straight from image extraction), so the
parsers read the leading number and anything unreadable is "unknown".
"""

import re
from typing import Optional, Tuple

from ..models import VitalStatus, VitalType

_LEADING_NUMBER = re.compile(r"^\s*([-+]?(?:\d+(?:\.\d*)?|\.\d+))")
_LEADING_INT = re.compile(r"^\s*([-+]?\d+)")


def parse_number(value: str) -> Optional[float]:
    """Read the leading decimal number of ``value`` ("98%" -> 98.0)."""
    match = _LEADING_NUMBER.match(value or "")
    if not match:
        return None
    return float(match.group(1))


def parse_blood_pressure(value: str) -> Optional[Tuple[int, int]]:
    """Read "systolic/diastolic" as two integers, or None."""
    parts = (value or "").split("/")
    if len(parts) != 2:
        return None

    readings = []
    for part in parts:
        match = _LEADING_INT.match(part)
        if not match:
            return None
        readings.append(int(match.group(1)))

    return readings[0], readings[1]


def _classify_blood_pressure(value: str) -> VitalStatus:
    reading = parse_blood_pressure(value)
    if reading is None:
        return VitalStatus.UNKNOWN
    systolic, diastolic = reading

    if systolic > 140 or diastolic > 90:
        return VitalStatus.CRITICAL
    if systolic < 90 or diastolic < 60:
        return VitalStatus.WARNING  # low
    if systolic > 120 or diastolic > 80:
        return VitalStatus.WARNING  # elevated
    return VitalStatus.NORMAL


def _classify_blood_sugar(num: float) -> VitalStatus:
    if num > 200:
        return VitalStatus.CRITICAL
    if num > 140 or num < 70:
        return VitalStatus.WARNING
    return VitalStatus.NORMAL


def _classify_heart_rate(num: float) -> VitalStatus:
    # No critical tier for heart rate
    if num > 100 or num < 60:
        return VitalStatus.WARNING
    return VitalStatus.NORMAL


def _classify_spo2(num: float) -> VitalStatus:
    if num < 90:
        return VitalStatus.CRITICAL
    if num < 95:
        return VitalStatus.WARNING
    return VitalStatus.NORMAL


_NUMERIC_RULES = {
    VitalType.BLOOD_SUGAR.value: _classify_blood_sugar,
    VitalType.HEART_RATE.value: _classify_heart_rate,
    VitalType.SPO2.value: _classify_spo2,
}


def classify_vital(vital_type: str, value: str) -> VitalStatus:
    """
    Classify a raw vital reading into normal / warning / critical / unknown.

    Weight, temperature and unrecognised types have no rules and are always
    unknown. Never raises.
    """
    if vital_type == VitalType.BLOOD_PRESSURE.value:
        return _classify_blood_pressure(value)

    rule = _NUMERIC_RULES.get(vital_type)
    if rule is None:
        return VitalStatus.UNKNOWN

    num = parse_number(value)
    if num is None:
        return VitalStatus.UNKNOWN
    return rule(num)
