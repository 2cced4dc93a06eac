import random
from datetime import datetime, timezone

from weeklydraw.services.draw_service import DrawGenerator
from weeklydraw.stores.local_store import LocalStore


def test_generate_appends_record(store, clock):
    generator = DrawGenerator(store, clock=clock, rng=random.Random(1))

    first = generator.generate()
    second = generator.generate()

    history, _ = store.read("history")
    assert [r["number"] for r in history] == [first.number, second.number]
    assert all(r["date"] == "14.10.2026" for r in history)
    assert all(r["name"] == "" and r["prize"] == "" for r in history)


def test_numbers_stay_in_range(store, clock):
    generator = DrawGenerator(store, clock=clock, rng=random.Random(42))
    numbers = {generator.make_record().number for _ in range(2000)}

    assert min(numbers) == 1
    assert max(numbers) == 100


def test_date_uses_reference_zone(store, clock):
    # 21:30 UTC on the 16th is the 17th in the reference zone.
    clock.current = datetime(2026, 10, 16, 21, 30, tzinfo=timezone.utc)
    generator = DrawGenerator(store, clock=clock)

    assert generator.make_record().date == "17.10.2026"


def test_generate_survives_conflicting_writer(store, clock, write_json, data_dir):
    class _RacingStore(LocalStore):
        def write(self, key, value, token):
            # Another writer lands between read and write.
            write_json("history", [{"date": "01.10.2026", "number": 3}])
            return super().write(key, value, token)

    racing = _RacingStore(str(data_dir))
    record = DrawGenerator(racing, clock=clock).generate()

    assert 1 <= record.number <= 100
    history, _ = store.read("history")
    assert history == [{"date": "01.10.2026", "number": 3}]
