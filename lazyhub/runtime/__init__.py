"""Interactive terminal runtime: config, input decoding, rendering and loop."""

from .app import build_session, run_app

__all__ = ["build_session", "run_app"]
