from __future__ import annotations

import pytest
from PIL import ImageFont

from restaurant_ops import printer
from restaurant_ops.config import PRINTER_WIDTH_PX

from conftest import NOW


class FakePrinter:
    def __init__(self) -> None:
        self.images: list[object] = []
        self.cuts = 0

    def image(self, img: object) -> None:
        self.images.append(img)

    def cut(self) -> None:
        self.cuts += 1


def test_receipt_rows_layout(demo_store):
    rows = printer.receipt_rows(demo_store.order("ord3"), printed_at=NOW)

    assert rows[0] == ("Table 1", "ord3")
    assert rows[1] == ("2024-05-01", "18:30")
    assert ("1x Mushroom Risotto", "$16.99") in rows
    assert ("2x Sparkling Water", "$7.98") in rows
    assert rows[-3:] == [("Subtotal", "$24.97"), ("Tax (8%)", "$2.00"), ("TOTAL", "$26.97")]


def test_render_receipt_produces_printer_width_images(demo_store):
    font = ImageFont.load_default()
    images = printer.render_receipt(demo_store.order("ord1"), font, font, printed_at=NOW)

    rows = printer.receipt_rows(demo_store.order("ord1"), printed_at=NOW)
    # Title, one image per row, thank-you line, tail spacer.
    assert len(images) == len(rows) + 3
    assert all(image.width == PRINTER_WIDTH_PX for image in images)
    assert all(image.mode == "1" for image in images)


def test_print_receipt_sends_images_then_cuts(demo_store, monkeypatch):
    monkeypatch.setattr(printer, "resolve_printer_font_path", lambda: "unused.ttf")
    # load_default() goes through truetype() on newer Pillow, so build it before patching.
    default_font = ImageFont.load_default()
    monkeypatch.setattr(ImageFont, "truetype", lambda *args, **kwargs: default_font)
    fake = FakePrinter()

    printer.print_receipt(demo_store.order("ord2"), printer=fake, printed_at=NOW)

    assert fake.cuts == 1
    assert len(fake.images) > 5


def test_resolve_font_prefers_env_override(tmp_path, monkeypatch):
    font_file = tmp_path / "receipt.ttf"
    font_file.write_bytes(b"")
    monkeypatch.setenv("RESTAURANT_OPS_PRINTER_FONT_PATH", str(font_file))
    assert printer.resolve_printer_font_path() == str(font_file)


def test_resolve_font_fails_when_nothing_exists(tmp_path, monkeypatch):
    monkeypatch.delenv("RESTAURANT_OPS_PRINTER_FONT_PATH", raising=False)
    monkeypatch.setattr(printer, "PRINTER_FONT_PATH", str(tmp_path / "missing.ttf"))
    monkeypatch.setattr(printer, "_LINUX_FONT_FALLBACKS", ())
    with pytest.raises(RuntimeError):
        printer.resolve_printer_font_path()
