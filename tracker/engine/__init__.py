from .actions import add_one_time_payment, parse_amount, update_income_field
from .progress import (
    DEFAULT_MRR_TARGET,
    allocation,
    allocation_frame,
    clamp_percent,
    monthly_income,
    months_to_goal,
    mrr_progress,
    overall_progress,
    summarize,
    target_progress,
    total_target_cost,
)
from .state import TrackerSession
from .storage import DictStore, JsonFileStore, decode_record, encode_record, export_filename

__all__ = [
    "DEFAULT_MRR_TARGET",
    "DictStore",
    "JsonFileStore",
    "TrackerSession",
    "add_one_time_payment",
    "allocation",
    "allocation_frame",
    "clamp_percent",
    "decode_record",
    "encode_record",
    "export_filename",
    "monthly_income",
    "months_to_goal",
    "mrr_progress",
    "overall_progress",
    "parse_amount",
    "summarize",
    "target_progress",
    "total_target_cost",
    "update_income_field",
]
