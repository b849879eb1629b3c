"""
Shared test fixtures and configuration.
"""

import pytest
import os
from datetime import datetime

# Set test environment variables before importing caresync modules
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("LOCAL_STORAGE_PATH", "/tmp/caresync_test_data")
os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ.setdefault("LOG_API_REQUESTS", "false")
os.environ.setdefault("REMINDER_JOB_ENABLED", "false")
os.environ["LLM_API_KEY"] = ""


class FakeClock:
    """Settable clock for CareManager."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 3, 14, 7, 30))


@pytest.fixture
def local_storage(tmp_path):
    from caresync.storage import LocalStorage
    return LocalStorage(str(tmp_path / "data"))


@pytest.fixture
def care_storage(local_storage):
    from caresync.storage import CareStorage
    return CareStorage(local_storage)


@pytest.fixture
def make_med():
    """Factory for medications with readable defaults."""
    from caresync.models import Medication

    def _make(med_id="m1", name="Metformin", times=("Morning",), **kwargs):
        return Medication(
            id=med_id,
            name=name,
            dosage=kwargs.pop("dosage", "500mg"),
            frequency=kwargs.pop("frequency", "1-0-0"),
            instructions=kwargs.pop("instructions", "After food"),
            times=list(times),
            **kwargs,
        )

    return _make
