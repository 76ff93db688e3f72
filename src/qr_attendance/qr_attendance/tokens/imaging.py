from __future__ import annotations

import io
from typing import BinaryIO

import qrcode
from PIL import Image
from pyzbar.pyzbar import decode as pyzbar_decode

from .payload import QRPayload, encode_payload


def render_png(payload: QRPayload, *, box_size: int = 10, border: int = 2) -> bytes:
    """Render a payload into a PNG QR symbol."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
    )
    qr.add_data(encode_payload(payload))
    qr.make(fit=True)

    img = qr.make_image(fill_color="#1e40af", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def decode_image(stream: BinaryIO) -> list[str]:
    """Decode every QR symbol found in an uploaded photo, in detection order.

    Raises `OSError` (including `PIL.UnidentifiedImageError`) or Pillow's `SyntaxError` when
    the upload is not a readable image. Bytes that are not UTF-8 are replaced, so such a symbol later fails
    payload decoding as malformed.
    """
    img = Image.open(stream).convert("RGB")
    return [symbol.data.decode("utf-8", errors="replace").strip() for symbol in pyzbar_decode(img)]
