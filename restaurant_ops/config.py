"""Runtime configuration defaults for logging, staff and printing."""

from __future__ import annotations

import os

RESTAURANT_NAME = os.environ.get("RESTAURANT_OPS_NAME", "Restaurant Ops")
DEFAULT_WAITER_NAME = os.environ.get("RESTAURANT_OPS_WAITER", "Staff")

DEBUG_LOG_PATH = os.environ.get("RESTAURANT_OPS_DEBUG_LOG", "/tmp/restaurant-ops-debug.log")
LOG_LEVEL = os.environ.get("RESTAURANT_OPS_LOG_LEVEL", "DEBUG")

# Generic 58mm ESC/POS thermal printer.
PRINTER_USB_VENDOR_ID = 0x28E9
PRINTER_USB_PRODUCT_ID = 0x0289
PRINTER_WIDTH_PX = 384
PRINTER_FONT_SIZE = 28
PRINTER_TITLE_FONT_SIZE = 40
PRINTER_FONT_PATH = "/System/Library/Fonts/SFNS.ttf"
PRINTER_FONT_OVERRIDE_ENV = "RESTAURANT_OPS_PRINTER_FONT_PATH"
PRINTER_LEFT_INDENT_PX = 8
PRINTER_RIGHT_GUTTER_PX = 8
PRINTER_TAIL_SPACER_PX = 70
