# engine/storage.py
import base64
import json
import logging
import math
import os
import re
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Protocol

from ..data_model import INCOME_FORM, IncomeState, PersistedRecord
from .actions import parse_amount

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "carProgressData"
EXPORT_PREFIX = "car-progress-"

# Key names written by the first version of the page.
LEGACY_INCOME_KEYS = {
    "one_time_payment": ("clientPayments",),
    "monthly_retainer": ("monthlyRetainers",),
    "monthly_secondary_revenue": ("saasRevenue",),
}


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


def ensure_user_data_dir(path: str) -> None:
    folder = os.path.dirname(path)
    if folder and not os.path.exists(folder):
        os.makedirs(folder, exist_ok=True)


def _sanitize_json_compat(value: Any):
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return value
    if isinstance(value, dict):
        return {key: _sanitize_json_compat(val) for key, val in value.items()}
    if isinstance(value, list):
        return [_sanitize_json_compat(item) for item in value]
    return value


def _extract_payload_value(payload: dict, *keys: str, default=None):
    for key in keys:
        if key in payload and payload[key] is not None:
            return payload[key]
    return default


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with milliseconds and a ``Z`` suffix."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def export_filename(saved_at: str) -> str:
    safe = re.sub(r"[^A-Za-z0-9_-]", "-", saved_at)
    return f"{EXPORT_PREFIX}{safe}.json"


def encode_record(record: PersistedRecord, indent: Optional[int] = None) -> str:
    clean = _sanitize_json_compat(record.to_payload())
    return json.dumps(clean, indent=indent, allow_nan=False)


def decode_record(text: str) -> PersistedRecord:
    """Parse a stored or imported record.

    Raises ``ValueError`` when the text is not JSON or not a JSON object.
    Numeric fields that are missing or unusable read as 0.
    """
    return record_from_payload(json.loads(text))


def record_from_payload(raw: Any) -> PersistedRecord:
    if not isinstance(raw, dict):
        raise ValueError("Record must be a JSON object.")
    income_raw = raw.get("income")
    if income_raw is None:
        income_raw = {}
    elif not isinstance(income_raw, dict):
        raise ValueError("Record income must be a JSON object.")
    values = {}
    for definition in INCOME_FORM.fields:
        keys = (definition.key, definition.field) + LEGACY_INCOME_KEYS.get(definition.field, ())
        values[definition.field] = parse_amount(_extract_payload_value(income_raw, *keys, default=0.0))
    total = parse_amount(_extract_payload_value(raw, "accumulatedTotal", "totalAccumulated", default=0.0))
    saved_at = str(_extract_payload_value(raw, "savedAt", default=""))
    return PersistedRecord(income=IncomeState(**values), accumulated_total=total, saved_at=saved_at)


def decode_upload(contents: str) -> str:
    """Turn ``dcc.Upload`` contents (a base64 data URL) into text."""
    if not contents or "," not in contents:
        raise ValueError("Upload is not a data URL.")
    _, encoded = contents.split(",", 1)
    return base64.b64decode(encoded, validate=True).decode("utf-8")


def write_export(directory: str, filename: str, content: str) -> str:
    path = os.path.join(directory, filename)
    ensure_user_data_dir(path)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
    return path


class DictStore:
    """Store backed by the dictionary held in a browser-side ``dcc.Store``."""

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self.data: Dict[str, Any] = dict(data) if isinstance(data, dict) else {}

    def get(self, key: str) -> Optional[str]:
        value = self.data.get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileStore:
    """Store persisted as a single JSON object on disk."""

    def __init__(self, path: str = "user_data/tracker.json"):
        self.path = path

    def _load(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw_text = f.read().strip()
                if not raw_text:
                    return {}
                data = json.loads(raw_text)
        except (json.JSONDecodeError, RecursionError, OSError) as exc:
            logger.warning("Ignoring unreadable store %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            return {}
        return {key: value for key, value in data.items() if isinstance(value, str)}

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        ensure_user_data_dir(self.path)
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f)
        os.replace(tmp_path, self.path)
