# components/callbacks.py
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from dash import Input, Output, State, ctx, dcc, no_update

from tracker.config import Settings
from tracker.data_model import INCOME_FORM, TrackerState
from tracker.engine.progress import allocation_frame, summarize
from tracker.engine.state import TrackerSession
from tracker.engine.storage import DictStore, decode_upload, record_from_payload, utc_timestamp

from .layout import (
    ADD_PAYMENT_ID,
    ALLOCATION_TABLE_ID,
    DOWNLOAD_ID,
    EXPORT_ID,
    FIELD_BY_INPUT_ID,
    INPUT_IDS,
    LOCAL_STORE_ID,
    MRR_PROGRESS_ID,
    OVERALL_PROGRESS_ID,
    SAVE_ID,
    STATE_STORE_ID,
    STATUS_ID,
    SUMMARY_ID,
    TARGETS_ID,
    UPLOAD_ID,
    render_mrr_progress,
    render_overall_progress,
    render_summary,
    render_targets,
)

logger = logging.getLogger(__name__)


def state_to_data(state: TrackerState) -> Dict[str, Any]:
    return {"income": state.income.to_payload(), "accumulatedTotal": state.accumulated_total}


def state_from_data(data: Any) -> TrackerState:
    if not data:
        return TrackerState()
    try:
        return record_from_payload(data).to_state()
    except (ValueError, TypeError, OverflowError, RecursionError) as exc:
        logger.warning("Discarding malformed session state: %s", exc)
        return TrackerState()


def _input_values(state: TrackerState) -> List[Optional[float]]:
    # Zero shows as an empty field.
    return [getattr(state.income, f.field) or None for f in INCOME_FORM.fields]


def handle_event(
    trigger: Optional[str],
    values: Sequence[Any],
    state_data: Any,
    store_data: Any,
    upload_contents: Optional[str],
    key: str,
    clock: Callable[[], str] = utc_timestamp,
):
    """Apply one page event.

    Returns ``(state_data, store_data, status, input_values)``; unchanged parts
    are ``no_update``. ``trigger`` is ``None`` on page load.
    """
    store = DictStore(store_data)
    original_store = dict(store.data)
    session = TrackerSession(store, key=key, clock=clock, state=state_from_data(state_data))
    refresh_inputs = True

    if trigger is None:
        session.restore()
    elif trigger == ADD_PAYMENT_ID:
        session.add_one_time_payment()
    elif trigger == SAVE_ID:
        session.save()
    elif trigger == UPLOAD_ID:
        if not upload_contents:
            return no_update, no_update, no_update, [no_update] * len(INPUT_IDS)
        try:
            text = decode_upload(upload_contents)
        except ValueError as exc:
            logger.warning("Could not read uploaded file: %s", exc)
            session.status = f"Import failed: {exc}"
        else:
            session.import_text(text)
    elif trigger in FIELD_BY_INPUT_ID:
        index = INPUT_IDS.index(trigger)
        session.update_income_field(FIELD_BY_INPUT_ID[trigger], values[index])
        refresh_inputs = False
    else:
        raise KeyError(f"Unexpected trigger: {trigger}")

    status = session.status
    if status is None:
        status = "" if trigger is None else no_update
    store_out = store.data if store.data != original_store else no_update
    inputs_out = _input_values(session.state) if refresh_inputs else [no_update] * len(INPUT_IDS)
    return state_to_data(session.state), store_out, status, inputs_out


def export_download(state_data: Any, key: str, clock: Callable[[], str] = utc_timestamp):
    session = TrackerSession(DictStore(), key=key, clock=clock, state=state_from_data(state_data))
    filename, content = session.export()
    return dcc.send_string(content, filename), session.status


def render_state(state_data: Any, settings: Settings):
    state = state_from_data(state_data)
    summary = summarize(state, settings.targets, settings.mrr_target)
    table = allocation_frame(settings.targets, state.accumulated_total).round(2).to_dict("records")
    return (
        render_summary(summary),
        render_mrr_progress(summary),
        render_overall_progress(summary),
        render_targets(summary),
        table,
    )


def register_callbacks(app, settings: Settings) -> None:
    @app.callback(
        Output(STATE_STORE_ID, "data"),
        Output(LOCAL_STORE_ID, "data"),
        Output(STATUS_ID, "children"),
        [Output(component_id, "value") for component_id in INPUT_IDS],
        [Input(component_id, "value") for component_id in INPUT_IDS],
        Input(ADD_PAYMENT_ID, "n_clicks"),
        Input(SAVE_ID, "n_clicks"),
        Input(UPLOAD_ID, "contents"),
        State(STATE_STORE_ID, "data"),
        State(LOCAL_STORE_ID, "data"),
    )
    def on_tracker_event(*args):
        count = len(INPUT_IDS)
        values = args[:count]
        _add_clicks, _save_clicks, upload_contents, state_data, store_data = args[count:]
        state_out, store_out, status, inputs_out = handle_event(
            ctx.triggered_id,
            values,
            state_data,
            store_data,
            upload_contents,
            settings.storage_key,
        )
        return (state_out, store_out, status, *inputs_out)

    @app.callback(
        Output(DOWNLOAD_ID, "data"),
        Output(STATUS_ID, "children", allow_duplicate=True),
        Input(EXPORT_ID, "n_clicks"),
        State(STATE_STORE_ID, "data"),
        prevent_initial_call=True,
    )
    def on_export(_n_clicks, state_data):
        return export_download(state_data, settings.storage_key)

    @app.callback(
        Output(SUMMARY_ID, "children"),
        Output(MRR_PROGRESS_ID, "children"),
        Output(OVERALL_PROGRESS_ID, "children"),
        Output(TARGETS_ID, "children"),
        Output(ALLOCATION_TABLE_ID, "data"),
        Input(STATE_STORE_ID, "data"),
    )
    def on_state_change(state_data):
        return render_state(state_data, settings)
