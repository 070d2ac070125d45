"""
Form Body Helpers
Inspect and extend raw form bodies without re-encoding them.

Multipart bodies are forwarded byte-for-byte; adding a field means splicing
one extra part in front of the closing boundary.
"""

import re
from typing import Iterator, Optional
from urllib.parse import parse_qsl, urlencode

_BOUNDARY_RE = re.compile(r'boundary=(?:"([^"]+)"|([^;\s]+))', re.IGNORECASE)


def media_type(content_type: Optional[str]) -> str:
    """Bare media type, lower-cased: "multipart/form-data; boundary=x" -> "multipart/form-data"."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def is_multipart(content_type: Optional[str]) -> bool:
    return media_type(content_type) == "multipart/form-data"


def is_urlencoded(content_type: Optional[str]) -> bool:
    return media_type(content_type) == "application/x-www-form-urlencoded"


def is_json(content_type: Optional[str]) -> bool:
    kind = media_type(content_type)
    return kind == "application/json" or kind.endswith("+json")


def get_boundary(content_type: Optional[str]) -> Optional[bytes]:
    """Extract the multipart boundary from a Content-Type header"""
    if not is_multipart(content_type):
        return None
    match = _BOUNDARY_RE.search(content_type)
    if not match:
        return None
    return (match.group(1) or match.group(2)).encode("latin-1")


def _part_headers(body: bytes, boundary: bytes) -> Iterator[bytes]:
    """Header block of each multipart part (text up to the first blank line)"""
    for segment in body.split(b"--" + boundary)[1:]:
        if segment.startswith(b"--"):
            break
        headers, _, _ = segment.lstrip(b"\r\n").partition(b"\r\n\r\n")
        yield headers


def has_form_field(body: bytes, content_type: Optional[str], name: str) -> bool:
    """Check whether a multipart or urlencoded body already carries a field"""
    if is_urlencoded(content_type):
        pairs = parse_qsl(body.decode("latin-1"), keep_blank_values=True)
        return any(key == name for key, _ in pairs)
    boundary = get_boundary(content_type)
    if boundary is None:
        return False
    pattern = re.compile(
        rb'(?im)^content-disposition:\s*form-data;[^\r\n]*\bname="'
        + re.escape(name.encode("utf-8"))
        + rb'"'
    )
    return any(pattern.search(headers) for headers in _part_headers(body, boundary))


def append_form_field(body: bytes, content_type: Optional[str], name: str, value: str) -> bytes:
    """
    Return the body with one more text field.

    Raises ValueError when the body is not a form or the multipart body has
    no closing boundary.
    """
    if is_urlencoded(content_type):
        extra = urlencode({name: value}).encode("ascii")
        return body + b"&" + extra if body else extra

    boundary = get_boundary(content_type)
    if boundary is None:
        raise ValueError("Body is not a multipart or urlencoded form")

    closing = b"--" + boundary + b"--"
    position = body.rfind(closing)
    if position == -1:
        raise ValueError("Multipart body has no closing boundary")

    part = (
        b"--" + boundary + b"\r\n"
        + b'Content-Disposition: form-data; name="' + name.encode("utf-8") + b'"\r\n'
        + b"\r\n"
        + value.encode("utf-8") + b"\r\n"
    )
    return body[:position] + part + body[position:]
