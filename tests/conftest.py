"""Shared fixtures and test doubles for BhashaPath tests."""

import random
from datetime import datetime, timedelta, timezone

import pytest

from bhashapath.classroom import LocalStorage, ProgressStore, StorageError
from bhashapath.utils import load_config


IST = timezone(timedelta(hours=5, minutes=30))


class FixedClock:
    """Clock returning a settable aware datetime."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


class FakeSpeaker:
    """Records utterances instead of synthesizing them."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.spoken: list[tuple[str, str, float, float]] = []
        self.stop_count = 0

    async def speak(self, text, language_tag, pitch=1.0, rate=1.0):
        if self.fail:
            raise RuntimeError("no audio output")
        self.spoken.append((text, language_tag, pitch, rate))

    def stop(self):
        self.stop_count += 1

    @property
    def texts(self) -> list[str]:
        return [s[0] for s in self.spoken]


class FirstChoice(random.Random):
    """Random source that always picks the first candidate."""

    def choice(self, seq):
        return seq[0]


class LastChoice(random.Random):
    def choice(self, seq):
        return seq[-1]


class BrokenStorage(LocalStorage):
    """Storage whose reads and/or writes fail."""

    def __init__(self, db_path, fail_reads=True, fail_writes=True):
        super().__init__(db_path)
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    def read(self, key):
        if self.fail_reads:
            raise StorageError("disk unavailable")
        return super().read(key)

    def write(self, key, value):
        if self.fail_writes:
            raise StorageError("disk full")
        super().write(key, value)


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def clock():
    return FixedClock(datetime(2024, 3, 15, 12, 0, tzinfo=IST))


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "storage.db")


@pytest.fixture
def store(storage, clock, config):
    return ProgressStore(storage, clock=clock, config=config)


@pytest.fixture
def speaker():
    return FakeSpeaker()
