"""
File transport helpers
"""
import base64
import binascii
from urllib.parse import quote

from hrcontracts.core.exceptions import ValidationError


def decode_base64_content(encoded: str, field_name: str = "content") -> bytes:
    """
    Decode a base64 file payload. Data-URL prefixes
    (e.g. "data:application/...;base64,") are accepted.
    """
    if not encoded or not encoded.strip():
        raise ValidationError(f"File {field_name} is required")

    payload = encoded.strip()
    if payload.startswith("data:") and "," in payload:
        payload = payload.split(",", 1)[1]

    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError(f"File {field_name} is not valid base64: {str(e)}")


def attachment_headers(filename: str) -> dict:
    """
    Content-Disposition for a download, with an RFC 5987 fallback
    for non-ASCII file names
    """
    ascii_name = filename.encode("ascii", "ignore").decode("ascii") or "download"
    disposition = f'attachment; filename="{ascii_name}"'
    if ascii_name != filename:
        disposition += f"; filename*=UTF-8''{quote(filename)}"

    return {
        "Content-Disposition": disposition,
        "Access-Control-Expose-Headers": "Content-Disposition",
    }


def header_list(values) -> str:
    """
    Comma-separated header value. Items are percent-encoded so any
    text survives the latin-1 header encoding
    """
    return ",".join(quote(str(value), safe="") for value in values)
