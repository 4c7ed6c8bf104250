# engine/state.py
import logging
from typing import Callable, Optional, Tuple

from ..data_model import PersistedRecord, TrackerState
from . import actions
from .storage import (
    DEFAULT_STORAGE_KEY,
    KeyValueStore,
    decode_record,
    encode_record,
    export_filename,
    utc_timestamp,
)

logger = logging.getLogger(__name__)


class TrackerSession:
    """Current tracker state bound to a key-value store.

    ``status`` holds the message from the most recent persistence operation,
    or ``None`` when there is nothing to report.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str = DEFAULT_STORAGE_KEY,
        clock: Callable[[], str] = utc_timestamp,
        state: Optional[TrackerState] = None,
    ):
        self.store = store
        self.key = key
        self.clock = clock
        self.state = state or TrackerState()
        self.status: Optional[str] = None

    def restore(self) -> TrackerState:
        self.status = None
        try:
            raw = self.store.get(self.key)
            if raw is None:
                self.state = TrackerState()
                return self.state
            record = decode_record(raw)
        except (ValueError, TypeError, OverflowError, RecursionError, OSError) as exc:
            logger.warning("Could not restore saved progress: %s", exc)
            self.state = TrackerState()
            return self.state
        self.state = record.to_state()
        self.status = f"Last loaded: {record.saved_at}"
        return self.state

    def save(self) -> PersistedRecord:
        record = PersistedRecord.from_state(self.state, self.clock())
        self.store.set(self.key, encode_record(record))
        self.status = f"Saved at {record.saved_at}"
        logger.debug("Saved progress under %s", self.key)
        return record

    def update_income_field(self, field: str, raw) -> TrackerState:
        self.state = actions.update_income_field(self.state, field, raw)
        return self.state

    def add_one_time_payment(self) -> TrackerState:
        self.state = actions.add_one_time_payment(self.state)
        self.save()
        return self.state

    def export(self) -> Tuple[str, str]:
        record = PersistedRecord.from_state(self.state, self.clock())
        filename = export_filename(record.saved_at)
        self.status = f"Exported {filename}"
        logger.info("Exported progress to %s", filename)
        return filename, encode_record(record, indent=2)

    def import_text(self, text: str) -> bool:
        try:
            record = decode_record(text)
        except (ValueError, TypeError, OverflowError, RecursionError) as exc:
            logger.warning("Import failed: %s", exc)
            self.status = f"Import failed: {exc}"
            return False
        try:
            self.store.set(self.key, encode_record(record))
        except OSError as exc:
            logger.warning("Could not store imported progress: %s", exc)
            self.status = f"Import failed: {exc}"
            return False
        self.state = record.to_state()
        self.status = f"Imported data saved at {record.saved_at}" if record.saved_at else "Imported data"
        logger.info("Imported progress saved at %s", record.saved_at)
        return True
