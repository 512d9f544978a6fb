"""Playwright helpers shared by retailer extractors."""

from .browser import browser_session, build_launch_args
from .pages import wait_for_any_selector, dismiss_popup
from .artifacts import capture_debug_artifacts

__all__ = [
    "browser_session",
    "build_launch_args",
    "wait_for_any_selector",
    "dismiss_popup",
    "capture_debug_artifacts",
]
