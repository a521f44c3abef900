"""Textual UI for otterboard."""

from otterboard.ui.app import OtterboardApp

__all__ = ["OtterboardApp"]
