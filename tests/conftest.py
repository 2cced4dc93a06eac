from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest

from weeklydraw import create_app
from weeklydraw.stores.local_store import LocalStore

MSK = timezone(timedelta(hours=3))


class FrozenClock:
    def __init__(self, now: datetime) -> None:
        self.current = now

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


class ManualTimer:
    """Records the armed instant; tests call ``fire`` to simulate expiry."""

    def __init__(self) -> None:
        self.at: datetime | None = None
        self.callback = None
        self.armed_count = 0
        self.cancelled = False

    def arm(self, at, callback) -> None:
        self.at = at
        self.callback = callback
        self.armed_count += 1

    def cancel(self) -> None:
        self.cancelled = True
        self.at = None
        self.callback = None

    def shutdown(self) -> None:
        pass

    def fire(self) -> None:
        callback = self.callback
        assert callback is not None, "timer not armed"
        self.callback = None
        callback()


@pytest.fixture()
def clock() -> FrozenClock:
    # Wednesday 14.10.2026 12:00 MSK
    return FrozenClock(datetime(2026, 10, 14, 12, 0, tzinfo=MSK))


@pytest.fixture()
def timer() -> ManualTimer:
    return ManualTimer()


@pytest.fixture()
def data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture()
def store(data_dir) -> LocalStore:
    return LocalStore(str(data_dir))


@pytest.fixture()
def write_json(data_dir):
    def _write(key: str, value) -> None:
        path = data_dir / f"{key}.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(value), encoding="utf-8")

    return _write


@pytest.fixture()
def app(store, clock, timer, data_dir):
    app = create_app(
        {
            "TESTING": True,
            "SCHEDULER_ENABLED": False,
            "DATA_DIR": str(data_dir),
            "ADMIN_PASSWORD": "1001",
            "STORE_WRITE_RETRIES": 3,
        },
        store=store,
        clock=clock,
        timer=timer,
    )
    return app


@pytest.fixture()
def client(app):
    return app.test_client()
