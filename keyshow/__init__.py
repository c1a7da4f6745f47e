"""Show keystrokes captured from Linux input devices in a terminal or an overlay window."""

__version__ = "1.2.0"