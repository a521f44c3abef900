"""Icons used across the UI."""

ICON_BOARD = "🗒"
ICON_ADD = "+"
ICON_IMAGE = "🖼"
ICON_VIDEO = "🎬"
ICON_BUSY = "⏳"
ICON_BIG_ROCK = "🪨"
ICON_QUICK_WIN = "⚡"
ICON_ZOOM_IN = "+"
ICON_ZOOM_OUT = "−"
ICON_RESET = "⟲"
ICON_SYNC_IDLE = "☁"
ICON_SYNC_ACTIVE = "⇅"
ICON_SYNC_OFFLINE = "⚠"
