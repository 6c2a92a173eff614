from __future__ import annotations

import base64
import binascii
import io
from typing import IO, Optional, Union

import qrcode
from PIL import Image, UnidentifiedImageError

from ..core.exceptions import ValidationError


def render_qr_png(data: str) -> bytes:
    """Render ``data`` as a PNG QR code."""

    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=10,
        border=2,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def decode_data_url(value: Optional[str]) -> Optional[bytes]:
    """Bytes of a ``data:image/png;base64,...`` URL as sent by the server."""

    if not value:
        return None
    _, _, encoded = value.partition("base64,")
    if not encoded:
        return None
    try:
        return base64.b64decode(encoded, validate=False)
    except (binascii.Error, ValueError):
        return None


def read_qr_payload(image: Union[bytes, IO[bytes]]) -> str:
    """Decode the first QR code found in an uploaded photo."""

    stream = io.BytesIO(image) if isinstance(image, (bytes, bytearray)) else image
    try:
        img = Image.open(stream).convert("RGB")
    except (UnidentifiedImageError, OSError):
        raise ValidationError("The uploaded file is not an image")

    # pyzbar loads the zbar shared library on import
    from pyzbar.pyzbar import decode as pyzbar_decode

    decoded = pyzbar_decode(img)
    if not decoded:
        raise ValidationError("No QR code found in the image")
    try:
        return decoded[0].data.decode("utf-8").strip()
    except UnicodeDecodeError:
        raise ValidationError("The QR code could not be read")
