"""Dash entry point for the car progress tracker page."""
from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import dash
import dash_bootstrap_components as dbc

from components.callbacks import register_callbacks
from components.layout import build_layout
from tracker.config import Settings, configure_logging, load_settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> dash.Dash:
    settings = settings or load_settings()
    app = dash.Dash(__name__, external_stylesheets=[dbc.themes.DARKLY], title="Luxury Car Progress Tracker")
    app.layout = build_layout()
    register_callbacks(app, settings)
    return app


def main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()
    parser = argparse.ArgumentParser(description="Serve the car progress tracker page.")
    parser.add_argument("--host", default=settings.host, help="Interface to bind.")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to listen on.")
    parser.add_argument("--debug", action="store_true", default=settings.debug, help="Enable Dash debug mode.")
    args = parser.parse_args(argv)

    configure_logging(settings.log_level)
    app = create_app(settings)
    logger.info("Serving tracker on http://%s:%s", args.host, args.port)
    app.run(host=args.host, port=args.port, debug=args.debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
