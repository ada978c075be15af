from datetime import datetime, timedelta

import pytest

from daybook.config import DaybookConfig
from daybook.workspace import Workspace

# A Monday morning.
NOW = datetime(2025, 10, 6, 10, 30)


class FakeClock:
    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def workspace(tmp_path, clock) -> Workspace:
    return Workspace(DaybookConfig(data_dir=tmp_path / "data"), clock=clock)
