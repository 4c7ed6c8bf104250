import json
import logging

from tracker.data_model import IncomeState, TrackerState
from tracker.engine.state import TrackerSession
from tracker.engine.storage import DictStore, decode_record

KEY = "carProgressData"


class StepClock:
    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return f"2025-01-01T00:00:0{self.calls}.000Z"


class BrokenStore:
    def get(self, key):
        raise OSError("storage unavailable")

    def set(self, key, value):
        raise OSError("storage unavailable")


def _stored(payload):
    return DictStore({KEY: json.dumps(payload)})


def test_restore_without_saved_data_uses_defaults():
    session = TrackerSession(DictStore(), key=KEY)

    assert session.restore() == TrackerState()
    assert session.status is None


def test_restore_loads_saved_record():
    store = _stored(
        {
            "income": {"oneTimePayment": 0, "monthlyRetainer": 2000, "monthlySecondaryRevenue": 300},
            "accumulatedTotal": 12500,
            "savedAt": "2025-02-01T10:00:00.000Z",
        }
    )
    session = TrackerSession(store, key=KEY)

    state = session.restore()

    assert state.income == IncomeState(monthly_retainer=2000.0, monthly_secondary_revenue=300.0)
    assert state.accumulated_total == 12500.0
    assert session.status == "Last loaded: 2025-02-01T10:00:00.000Z"


def test_restore_falls_back_to_defaults_on_corrupt_data(caplog):
    session = TrackerSession(DictStore({KEY: "{corrupt"}), key=KEY, state=TrackerState(accumulated_total=7.0))

    with caplog.at_level(logging.WARNING):
        state = session.restore()

    assert state == TrackerState()
    assert session.status is None
    assert "Could not restore" in caplog.text


def test_restore_survives_store_errors():
    session = TrackerSession(BrokenStore(), key=KEY)

    assert session.restore() == TrackerState()


def test_add_one_time_payment_saves_with_new_timestamp():
    store = DictStore()
    clock = StepClock()
    session = TrackerSession(store, key=KEY, clock=clock, state=TrackerState(accumulated_total=1000.0))
    session.update_income_field("one_time_payment", "500")

    session.add_one_time_payment()

    assert session.state.accumulated_total == 1500.0
    assert session.state.income.one_time_payment == 0.0
    saved = decode_record(store.get(KEY))
    assert saved.accumulated_total == 1500.0
    assert saved.saved_at == "2025-01-01T00:00:01.000Z"
    assert session.status == "Saved at 2025-01-01T00:00:01.000Z"

    session.save()

    assert decode_record(store.get(KEY)).saved_at == "2025-01-01T00:00:02.000Z"


def test_export_then_import_round_trips_state():
    state = TrackerState(
        income=IncomeState(one_time_payment=125.5, monthly_retainer=3000.0, monthly_secondary_revenue=42.0),
        accumulated_total=27000.0,
    )
    exporter = TrackerSession(DictStore(), key=KEY, clock=StepClock(), state=state)
    filename, content = exporter.export()

    target_store = DictStore()
    importer = TrackerSession(target_store, key=KEY)
    assert importer.import_text(content) is True

    assert filename == "car-progress-2025-01-01T00-00-01-000Z.json"
    assert content.startswith("{\n  ")
    assert importer.state == state
    assert decode_record(target_store.get(KEY)).to_state() == state
    assert importer.status == "Imported data saved at 2025-01-01T00:00:01.000Z"
    assert exporter.store.data == {}


def test_failed_import_leaves_state_and_store_unchanged():
    state = TrackerState(accumulated_total=800.0)
    store = DictStore({KEY: "previous"})
    session = TrackerSession(store, key=KEY, state=state)

    assert session.import_text("definitely not json") is False

    assert session.state == state
    assert store.data == {KEY: "previous"}
    assert session.status.startswith("Import failed")


OVERSIZED = '{"accumulatedTotal": 1' + "0" * 400 + "}"
DEEPLY_NESTED = "[" * 100000 + "]" * 100000


class ReadOnlyStore(DictStore):
    def set(self, key, value):
        raise OSError("read-only")


def test_import_with_oversized_total_reads_as_zero():
    session = TrackerSession(DictStore(), key=KEY, state=TrackerState(accumulated_total=5.0))

    assert session.import_text(OVERSIZED) is True

    assert session.state == TrackerState()


def test_restore_with_oversized_total_does_not_raise():
    session = TrackerSession(DictStore({KEY: OVERSIZED}), key=KEY)

    assert session.restore() == TrackerState()


def test_deeply_nested_json_is_handled():
    store = DictStore({KEY: DEEPLY_NESTED})
    session = TrackerSession(store, key=KEY, state=TrackerState(accumulated_total=3.0))

    assert session.import_text(DEEPLY_NESTED) is False
    assert session.state.accumulated_total == 3.0
    assert session.restore() == TrackerState()


def test_import_keeps_state_when_store_write_fails():
    state = TrackerState(accumulated_total=800.0)
    session = TrackerSession(ReadOnlyStore(), key=KEY, state=state)
    payload = json.dumps({"accumulatedTotal": 42, "savedAt": "then"})

    assert session.import_text(payload) is False

    assert session.state == state
    assert session.status == "Import failed: read-only"
