"""Unit tests for clock.interaction and profile"""

from datetime import date, datetime, timedelta

import pytest

from puppycare.clock.interaction import EngineClock, InteractionClock
from puppycare.profile import PetProfile


def test_elapsed_since_last_care(fake_now):
    clock = InteractionClock(now=fake_now)
    fake_now.advance(minutes=45)
    assert clock.elapsed_since_last_care() == timedelta(minutes=45)
    clock.record_care()
    assert clock.elapsed_since_last_care() == timedelta(0)


def test_interaction_does_not_count_as_care(fake_now):
    clock = InteractionClock(now=fake_now)
    fake_now.advance(minutes=10)
    clock.record_interaction()
    assert clock.state.last_interaction_at == fake_now()
    assert clock.elapsed_since_last_care() == timedelta(minutes=10)


def test_clock_going_backwards_reads_zero(fake_now):
    clock = InteractionClock(now=fake_now)
    fake_now.advance(hours=-2)
    assert clock.elapsed_since_active() == timedelta(0)


def test_engine_clock_record_roundtrip():
    t = datetime(2025, 4, 20, 9, 30)
    clock = EngineClock(t, t, t, last_conversation_at=None)
    assert EngineClock.from_record(clock.to_record()) == clock


def test_days_together():
    profile = PetProfile(adoption_date=date(2025, 4, 10))
    assert profile.days_together(date(2025, 4, 20)) == 10


def test_days_together_never_negative():
    profile = PetProfile(adoption_date=date(2025, 5, 1))
    assert profile.days_together(date(2025, 4, 20)) == 0
    assert PetProfile().days_together(date(2025, 4, 20)) == 0


def test_profile_record_roundtrip():
    profile = PetProfile("Pochi", "Ada", date(2025, 4, 1))
    assert PetProfile.from_record(profile.to_record()) == profile


def test_profile_rejects_non_string_name():
    with pytest.raises(TypeError):
        PetProfile.from_record({"name": 42})


def test_profile_blank_names_load_as_none():
    profile = PetProfile.from_record({"name": "", "owner_name": "  "})
    assert profile.name is None
    assert profile.owner_name is None
