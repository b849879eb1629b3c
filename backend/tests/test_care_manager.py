"""
Tests for the care manager and the reminder polling job.
Uses real LocalStorage under tmp_path and a settable clock.
"""

import pytest
from datetime import date, datetime
from unittest.mock import AsyncMock, MagicMock

from caresync.core.care_manager import CareManager, get_care_manager, init_care_manager
from caresync.core.errors import DoseNotFoundError, MedicationNotFoundError
from caresync.core.reminder_job import REMINDER_JOB_ID, ReminderJob
from caresync.models import (
    DoseStatus, MedicationUpdate, VitalCreate, VitalSource, VitalStatus,
)


@pytest.fixture
def manager(care_storage, clock):
    return CareManager(care_storage, clock=clock)


class TestLoading:

    @pytest.mark.asyncio
    async def test_empty_storage(self, manager):
        await manager.load()
        assert manager.schedule_date == date(2024, 3, 14)
        assert await manager.get_today_doses() == []
        assert await manager.get_medications() == []

    @pytest.mark.asyncio
    async def test_recorded_status_survives_restart(self, manager, care_storage, clock, make_med):
        await manager.load()
        await manager.add_medications([make_med(times=["Morning", "Night"])])
        doses = await manager.get_today_doses()
        await manager.toggle_dose(doses[0].id)

        restarted = CareManager(care_storage, clock=clock)
        await restarted.load()
        reloaded = await restarted.get_today_doses()

        assert [d.time for d in reloaded] == ["08:00", "21:00"]
        assert reloaded[0].id == doses[0].id
        assert reloaded[0].status == DoseStatus.TAKEN
        assert reloaded[1].status == DoseStatus.PENDING

    @pytest.mark.asyncio
    async def test_date_rollover_reloads(self, manager, clock, make_med):
        await manager.load()
        await manager.add_medications([make_med()])
        dose = (await manager.get_today_doses())[0]
        await manager.toggle_dose(dose.id)

        clock.now = datetime(2024, 3, 15, 7, 0)
        tomorrow = await manager.get_today_doses()

        assert manager.schedule_date == date(2024, 3, 15)
        assert len(tomorrow) == 1
        assert tomorrow[0].date == date(2024, 3, 15)
        assert tomorrow[0].status == DoseStatus.PENDING
        assert tomorrow[0].id != dose.id


class TestMedicationChanges:

    @pytest.mark.asyncio
    async def test_add_returns_full_list(self, manager, care_storage, make_med):
        await manager.load()
        await manager.add_medications([make_med("m1")])
        result = await manager.add_medications([make_med("m2", times=["Evening"])])

        assert [m.id for m in result] == ["m1", "m2"]
        assert [m.id for m in await care_storage.get_medications()] == ["m1", "m2"]
        assert [d.time for d in await manager.get_today_doses()] == ["08:00", "18:00"]

    @pytest.mark.asyncio
    async def test_update_keeps_taken_dose(self, manager, make_med):
        await manager.load()
        await manager.add_medications([make_med(times=["Morning"])])
        dose = (await manager.get_today_doses())[0]
        await manager.toggle_dose(dose.id)

        updated = await manager.update_medication(
            "m1", MedicationUpdate(name="Glucophage", times=["Morning", "Night"])
        )
        assert updated.name == "Glucophage"
        assert updated.dosage == "500mg"

        doses = await manager.get_today_doses()
        assert [(d.time, d.status) for d in doses] == [
            ("08:00", DoseStatus.TAKEN),
            ("21:00", DoseStatus.PENDING),
        ]
        assert doses[0].medication_name == "Glucophage"

    @pytest.mark.asyncio
    async def test_null_fields_in_update_are_ignored(self, manager, care_storage, clock, make_med):
        await manager.load()
        await manager.add_medications([make_med("m1"), make_med("m2", name="Lisinopril", times=["Night"])])

        update = MedicationUpdate.model_validate({"name": None, "times": None, "dosage": "850mg"})
        updated = await manager.update_medication("m1", update)
        assert updated.name == "Metformin"
        assert updated.times == ["Morning"]
        assert updated.dosage == "850mg"

        restarted = CareManager(care_storage, clock=clock)
        await restarted.load()
        meds = await restarted.get_medications()
        assert [(m.id, m.name, m.dosage) for m in meds] == [
            ("m1", "Metformin", "850mg"),
            ("m2", "Lisinopril", "500mg"),
        ]

    @pytest.mark.asyncio
    async def test_failed_reschedule_changes_nothing(self, manager, care_storage, make_med, monkeypatch):
        await manager.load()
        await manager.add_medications([make_med()])
        doses_before = await manager.get_today_doses()

        def broken_generate(medications, today):
            raise ValueError("bad schedule")

        monkeypatch.setattr("caresync.core.care_manager.generate_doses", broken_generate)
        with pytest.raises(ValueError):
            await manager.update_medication("m1", MedicationUpdate(name="Glucophage"))

        assert [m.name for m in manager.medications] == ["Metformin"]
        assert manager.doses == doses_before
        assert [m.name for m in await care_storage.get_medications()] == ["Metformin"]

    @pytest.mark.asyncio
    async def test_update_unknown_medication(self, manager):
        await manager.load()
        with pytest.raises(MedicationNotFoundError):
            await manager.update_medication("nope", MedicationUpdate(name="x"))


class TestDosesAndReminders:

    @pytest.mark.asyncio
    async def test_toggle_writes_history(self, manager, care_storage, clock, make_med):
        await manager.load()
        await manager.add_medications([make_med()])
        dose = (await manager.get_today_doses())[0]

        clock.now = datetime(2024, 3, 14, 8, 3)
        taken = await manager.toggle_dose(dose.id)
        assert taken.action_time == datetime(2024, 3, 14, 8, 3)

        history = await care_storage.get_dose_history()
        assert [(d.id, d.status) for d in history] == [(dose.id, DoseStatus.TAKEN)]

        await manager.toggle_dose(dose.id)
        history = await care_storage.get_dose_history()
        assert [(d.id, d.status) for d in history] == [(dose.id, DoseStatus.PENDING)]

    @pytest.mark.asyncio
    async def test_toggle_unknown_dose(self, manager):
        await manager.load()
        with pytest.raises(DoseNotFoundError):
            await manager.toggle_dose("dose-missing")

    @pytest.mark.asyncio
    async def test_check_reminders_sets_active(self, manager, clock, make_med):
        await manager.load()
        await manager.add_medications([make_med("m1"), make_med("m2", times=["Night"])])

        assert await manager.check_reminders() is None

        clock.now = datetime(2024, 3, 14, 8, 0, 30)
        active = await manager.check_reminders()
        assert active is not None
        assert active.medication_id == "m1"
        assert manager.active_reminder == active

    @pytest.mark.asyncio
    async def test_toggle_clears_matching_reminder(self, manager, clock, make_med):
        await manager.load()
        await manager.add_medications([make_med()])
        clock.now = datetime(2024, 3, 14, 8, 0)
        active = await manager.check_reminders()

        await manager.toggle_dose(active.id)
        assert manager.active_reminder is None
        assert await manager.due_reminders() == []

    @pytest.mark.asyncio
    async def test_removed_slot_clears_reminder(self, manager, clock, make_med):
        await manager.load()
        await manager.add_medications([make_med(times=["Morning", "Night"])])
        clock.now = datetime(2024, 3, 14, 8, 0)
        await manager.check_reminders()

        await manager.update_medication("m1", MedicationUpdate(times=["Night"]))
        assert manager.active_reminder is None

    @pytest.mark.asyncio
    async def test_reminder_follows_medication_edit(self, manager, clock, make_med):
        await manager.load()
        await manager.add_medications([make_med()])
        clock.now = datetime(2024, 3, 14, 8, 0)
        active = await manager.check_reminders()

        await manager.update_medication("m1", MedicationUpdate(name="Glucophage", dosage="850mg"))

        assert manager.active_reminder.id == active.id
        assert manager.active_reminder.medication_name == "Glucophage"
        assert manager.active_reminder.dosage == "850mg"

    @pytest.mark.asyncio
    async def test_dismiss_reminder(self, manager, clock, make_med):
        await manager.load()
        await manager.add_medications([make_med()])
        clock.now = datetime(2024, 3, 14, 8, 1)
        await manager.check_reminders()

        manager.dismiss_reminder()
        assert manager.active_reminder is None


class TestVitalsAndAdherence:

    @pytest.mark.asyncio
    async def test_record_vital_is_classified(self, manager, care_storage, clock):
        record = await manager.record_vital(VitalCreate(type="Blood Pressure", value="150/95", unit="mmHg"))

        assert record.status == VitalStatus.CRITICAL
        assert record.source == VitalSource.MANUAL
        assert record.timestamp == clock.now
        assert await care_storage.get_vitals() == [record]

    @pytest.mark.asyncio
    async def test_adherence_from_history(self, manager, make_med):
        await manager.load()
        await manager.add_medications([make_med(times=["Morning", "Night"])])
        doses = await manager.get_today_doses()
        await manager.toggle_dose(doses[0].id)

        stats = await manager.adherence()
        assert stats.taken == 1
        assert stats.total == 1
        assert stats.percentage == 100


class TestGlobalManager:

    def test_init_and_get(self, care_storage, clock):
        manager = init_care_manager(care_storage, clock=clock, reminder_tolerance_minutes=2)
        assert get_care_manager() is manager
        assert manager.reminder_tolerance_minutes == 2


class TestReminderJob:

    @pytest.mark.asyncio
    async def test_start_and_stop(self):
        job = ReminderJob(MagicMock(), interval_seconds=5)
        assert job.running is False

        job.start()
        try:
            assert job.running is True
            scheduled = job._scheduler.get_job(REMINDER_JOB_ID)
            assert scheduled is not None
            assert scheduled.trigger.interval.total_seconds() == 5
        finally:
            job.stop()

        assert job.running is False

    @pytest.mark.asyncio
    async def test_start_twice_keeps_one_scheduler(self):
        job = ReminderJob(MagicMock())
        job.start()
        scheduler = job._scheduler
        job.start()
        assert job._scheduler is scheduler
        job.stop()

    def test_stop_without_start(self):
        ReminderJob(MagicMock()).stop()

    @pytest.mark.asyncio
    async def test_scan_calls_manager(self):
        manager = MagicMock()
        manager.check_reminders = AsyncMock(return_value=None)
        await ReminderJob(manager)._scan()
        manager.check_reminders.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_scan_survives_errors(self):
        manager = MagicMock()
        manager.check_reminders = AsyncMock(side_effect=RuntimeError("disk gone"))
        await ReminderJob(manager)._scan()
