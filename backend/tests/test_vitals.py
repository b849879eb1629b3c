"""
Unit tests for vital sign classification.
"""

import pytest

from caresync.core.vitals import classify_vital, parse_blood_pressure, parse_number
from caresync.models import VitalStatus


class TestParsers:

    def test_parse_number_leading_prefix(self):
        assert parse_number("98") == 98.0
        assert parse_number(" 98% ") == 98.0
        assert parse_number("110 mg/dL") == 110.0
        assert parse_number("36.6") == 36.6

    @pytest.mark.parametrize("value", ["", "abc", "mg 110", "nan", None])
    def test_parse_number_rejects(self, value):
        assert parse_number(value) is None

    def test_parse_blood_pressure(self):
        assert parse_blood_pressure("120/80") == (120, 80)
        assert parse_blood_pressure(" 135 / 85 mmHg") == (135, 85)

    @pytest.mark.parametrize("value", ["bad-data", "120", "120/80/70", "abc/def", "/80", ""])
    def test_parse_blood_pressure_rejects(self, value):
        assert parse_blood_pressure(value) is None


class TestBloodPressure:

    @pytest.mark.parametrize("value,expected", [
        ("150/95", VitalStatus.CRITICAL),
        ("145/70", VitalStatus.CRITICAL),
        ("110/95", VitalStatus.CRITICAL),
        ("110/70", VitalStatus.NORMAL),
        ("120/80", VitalStatus.NORMAL),
        ("85/70", VitalStatus.WARNING),
        ("110/55", VitalStatus.WARNING),
        ("130/75", VitalStatus.WARNING),
        ("115/85", VitalStatus.WARNING),
        ("bad-data", VitalStatus.UNKNOWN),
        ("abc/80", VitalStatus.UNKNOWN),
    ])
    def test_classification(self, value, expected):
        assert classify_vital("Blood Pressure", value) == expected

    def test_critical_checked_before_low(self):
        # Low diastolic but high systolic: critical wins
        assert classify_vital("Blood Pressure", "150/55") == VitalStatus.CRITICAL

    def test_low_checked_before_elevated(self):
        assert classify_vital("Blood Pressure", "130/55") == VitalStatus.WARNING


class TestNumericVitals:

    @pytest.mark.parametrize("value,expected", [
        ("250", VitalStatus.CRITICAL),
        ("201", VitalStatus.CRITICAL),
        ("200", VitalStatus.WARNING),
        ("150", VitalStatus.WARNING),
        ("140", VitalStatus.NORMAL),
        ("70", VitalStatus.NORMAL),
        ("65", VitalStatus.WARNING),
        ("high", VitalStatus.UNKNOWN),
    ])
    def test_blood_sugar(self, value, expected):
        assert classify_vital("Blood Sugar", value) == expected

    @pytest.mark.parametrize("value,expected", [
        ("105", VitalStatus.WARNING),
        ("72", VitalStatus.NORMAL),
        ("100", VitalStatus.NORMAL),
        ("60", VitalStatus.NORMAL),
        ("55", VitalStatus.WARNING),
        ("180", VitalStatus.WARNING),
        ("--", VitalStatus.UNKNOWN),
    ])
    def test_heart_rate(self, value, expected):
        assert classify_vital("Heart Rate", value) == expected

    @pytest.mark.parametrize("value,expected", [
        ("88", VitalStatus.CRITICAL),
        ("93", VitalStatus.WARNING),
        ("98", VitalStatus.NORMAL),
        ("95", VitalStatus.NORMAL),
        ("90", VitalStatus.WARNING),
        ("97%", VitalStatus.NORMAL),
        ("n/a", VitalStatus.UNKNOWN),
    ])
    def test_spo2(self, value, expected):
        assert classify_vital("SpO2", value) == expected


class TestUnclassifiedTypes:

    @pytest.mark.parametrize("vital_type,value", [
        ("Weight", "70"),
        ("Temperature", "39.5"),
        ("Cholesterol", "240"),
        ("", ""),
    ])
    def test_unknown(self, vital_type, value):
        assert classify_vital(vital_type, value) == VitalStatus.UNKNOWN

    def test_type_match_is_exact(self):
        assert classify_vital("blood pressure", "150/95") == VitalStatus.UNKNOWN
