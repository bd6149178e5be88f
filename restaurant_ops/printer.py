"""Bill receipt printing on an ESC/POS thermal printer."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path

from restaurant_ops.config import (
    PRINTER_FONT_OVERRIDE_ENV,
    PRINTER_FONT_PATH,
    PRINTER_FONT_SIZE,
    PRINTER_LEFT_INDENT_PX,
    PRINTER_RIGHT_GUTTER_PX,
    PRINTER_TAIL_SPACER_PX,
    PRINTER_TITLE_FONT_SIZE,
    PRINTER_USB_PRODUCT_ID,
    PRINTER_USB_VENDOR_ID,
    PRINTER_WIDTH_PX,
    RESTAURANT_NAME,
)
from restaurant_ops.models import Order
from restaurant_ops.pricing import receipt_breakdown
from restaurant_ops.rendering import format_money

_RULE_HEIGHT_PX = 14
_RULE_THICKNESS_PX = 2
_LINE_EXTRA_PX = 10
_LINUX_FONT_FALLBACKS = (
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/noto/NotoSans-Regular.ttf",
    "/usr/share/fonts/liberation/LiberationSans-Regular.ttf",
)
_RULE_TOKEN = "__RULE__"


def resolve_printer_font_path() -> str:
    """
    Resolve a printer font path.

    Resolution order:
    1. RESTAURANT_OPS_PRINTER_FONT_PATH (if set)
    2. PRINTER_FONT_PATH
    3. Known Linux fallbacks
    """
    env_override = os.environ.get(PRINTER_FONT_OVERRIDE_ENV, "").strip()
    candidates: list[str] = []
    if env_override:
        candidates.append(env_override)
    candidates.append(PRINTER_FONT_PATH)
    candidates.extend(_LINUX_FONT_FALLBACKS)

    seen: set[str] = set()
    for candidate in candidates:
        if not candidate or candidate in seen:
            continue
        seen.add(candidate)
        if Path(candidate).is_file():
            return candidate

    raise RuntimeError(
        f"No usable printer font found. Set {PRINTER_FONT_OVERRIDE_ENV} to a valid .ttf/.otf file. "
        f"Tried: {', '.join(seen)}"
    )


def check_printer_dependencies() -> tuple[bool, str]:
    """Check whether printer dependencies are importable and a font is available."""
    try:
        from escpos.printer import Usb  # noqa: F401
        from PIL import ImageFont

        ImageFont.truetype(resolve_printer_font_path(), PRINTER_FONT_SIZE)
    except Exception as exc:
        return (False, f"Printer unavailable: {exc}")
    return (True, "Printer ready")


def receipt_rows(order: Order, printed_at: datetime | None = None) -> list[tuple[str, str]]:
    """
    Lay out the bill as (left, right) text rows.

    `_RULE_TOKEN` rows become horizontal rules when rendered.
    """
    printed_at = printed_at or datetime.now(timezone.utc)
    figures = receipt_breakdown(order)
    rows: list[tuple[str, str]] = [
        (f"Table {order.table_no}", order.id),
        (printed_at.strftime("%Y-%m-%d"), printed_at.strftime("%H:%M")),
        (f"Server: {order.waiter_name}", ""),
        (_RULE_TOKEN, ""),
    ]
    rows.extend((f"{line.quantity}x {line.name}", format_money(line.subtotal)) for line in order.items)
    rows.append((_RULE_TOKEN, ""))
    rows.append(("Subtotal", format_money(figures.subtotal)))
    rows.append(("Tax (8%)", format_money(figures.tax)))
    rows.append(("TOTAL", format_money(figures.total)))
    return rows


def _fit_text_to_px(text: str, font: object, max_width_px: int) -> str:
    from PIL import Image, ImageDraw

    measure = Image.new("1", (1, 1), color=1)
    draw = ImageDraw.Draw(measure)
    if draw.textbbox((0, 0), text, font=font)[2] <= max_width_px:
        return text
    ellipsis = "..."
    trimmed = text
    while trimmed:
        candidate = f"{trimmed}{ellipsis}"
        if draw.textbbox((0, 0), candidate, font=font)[2] <= max_width_px:
            return candidate
        trimmed = trimmed[:-1]
    return ellipsis


def _render_title(text: str, font: object) -> object:
    from PIL import Image, ImageDraw

    measure = ImageDraw.Draw(Image.new("1", (1, 1), color=1))
    bbox = measure.textbbox((0, 0), text, font=font)
    text_width = bbox[2] - bbox[0]
    text_height = bbox[3] - bbox[1]
    canvas_height = text_height + (_LINE_EXTRA_PX * 2)

    img = Image.new("1", (PRINTER_WIDTH_PX, canvas_height), color=1)
    draw = ImageDraw.Draw(img)
    x = max(0, (PRINTER_WIDTH_PX - text_width) // 2 - bbox[0])
    y = (canvas_height - text_height) // 2 - bbox[1]
    draw.text((x, y), text, font=font, fill=0)
    return img


def _render_row(left: str, right: str, font: object) -> object:
    """Render one row with `left` flush left and `right` flush right."""
    from PIL import Image, ImageDraw

    measure = ImageDraw.Draw(Image.new("1", (1, 1), color=1))
    right_bbox = measure.textbbox((0, 0), right, font=font) if right else (0, 0, 0, 0)
    right_width = right_bbox[2] - right_bbox[0]
    usable = PRINTER_WIDTH_PX - PRINTER_LEFT_INDENT_PX - PRINTER_RIGHT_GUTTER_PX
    left = _fit_text_to_px(left, font, max(40, usable - right_width - 12))
    left_bbox = measure.textbbox((0, 0), left or " ", font=font)
    text_height = max(left_bbox[3] - left_bbox[1], right_bbox[3] - right_bbox[1])
    canvas_height = text_height + _LINE_EXTRA_PX

    img = Image.new("1", (PRINTER_WIDTH_PX, canvas_height), color=1)
    draw = ImageDraw.Draw(img)
    # Offset by bbox top so descenders are not clipped.
    y = (canvas_height - text_height) // 2 - left_bbox[1]
    draw.text((PRINTER_LEFT_INDENT_PX, y), left, font=font, fill=0)
    if right:
        right_x = PRINTER_WIDTH_PX - PRINTER_RIGHT_GUTTER_PX - right_width - right_bbox[0]
        draw.text((right_x, y), right, font=font, fill=0)
    return img


def _render_rule() -> object:
    from PIL import Image, ImageDraw

    img = Image.new("1", (PRINTER_WIDTH_PX, _RULE_HEIGHT_PX), color=1)
    draw = ImageDraw.Draw(img)
    top = (_RULE_HEIGHT_PX - _RULE_THICKNESS_PX) // 2
    draw.rectangle((PRINTER_LEFT_INDENT_PX, top, PRINTER_WIDTH_PX - PRINTER_RIGHT_GUTTER_PX, top + _RULE_THICKNESS_PX - 1), fill=0)
    return img


def _render_spacer(height_px: int) -> object:
    from PIL import Image

    return Image.new("1", (PRINTER_WIDTH_PX, max(1, height_px)), color=1)


def render_receipt(order: Order, font: object, title_font: object, printed_at: datetime | None = None) -> list[object]:
    """Render the bill as a list of 1-bit images, top to bottom."""
    images = [_render_title(RESTAURANT_NAME, title_font)]
    for left, right in receipt_rows(order, printed_at):
        if left == _RULE_TOKEN:
            images.append(_render_rule())
        else:
            images.append(_render_row(left, right, font))
    images.append(_render_title("Thank you!", font))
    images.append(_render_spacer(PRINTER_TAIL_SPACER_PX))
    return images


def print_receipt(order: Order, printer: object | None = None, printed_at: datetime | None = None) -> None:
    """Print the bill for `order` and cut the paper."""
    if not order.items:
        return

    try:
        from PIL import ImageFont
    except Exception as exc:
        raise RuntimeError(f"Printer dependencies unavailable: {exc}") from exc

    if printer is None:
        try:
            from escpos.printer import Usb
        except Exception as exc:
            raise RuntimeError(f"Printer dependencies unavailable: {exc}") from exc
        printer = Usb(PRINTER_USB_VENDOR_ID, PRINTER_USB_PRODUCT_ID)

    font_path = resolve_printer_font_path()
    font = ImageFont.truetype(font_path, PRINTER_FONT_SIZE)
    title_font = ImageFont.truetype(font_path, PRINTER_TITLE_FONT_SIZE)
    for image in render_receipt(order, font, title_font, printed_at):
        printer.image(image)
    printer.cut()
