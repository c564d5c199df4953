from datetime import datetime, timedelta, timezone

import pytest

from investment_tracker.models import Config, Investment, Performance


FIXED_NOW = datetime(2024, 3, 15, 18, 30, tzinfo=timezone.utc)


class FakeNotifier:
    def __init__(self):
        self.sent = []

    def send(self, report):
        self.sent.append(report)


@pytest.fixture()
def fixed_now():
    return FIXED_NOW


@pytest.fixture()
def clock():
    return lambda: FIXED_NOW


@pytest.fixture()
def notifier():
    return FakeNotifier()


@pytest.fixture()
def config_path(tmp_path):
    return tmp_path / "config.json"


@pytest.fixture()
def sample_config():
    day = timedelta(days=1)
    return Config(
        investments=[
            Investment("VTI", datetime(2023, 1, 3, tzinfo=timezone.utc), 1000.0, 5.0),
            Investment("AAPL", datetime(2022, 6, 1, tzinfo=timezone.utc), 1500.5, 10.0),
        ],
        history={
            "VTI": [
                Performance("VTI", 210.0, 4.5, FIXED_NOW - 2 * day),
                Performance("VTI", 215.25, 6.126, FIXED_NOW - day),
            ],
        },
    )
