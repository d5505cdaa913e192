"""
Shared validators for input sanitization.
"""

import re
from typing import Optional
from urllib.parse import urlparse

# Blocked internal hosts that should never appear in image references
BLOCKED_HOSTS = [
    "localhost",
    "127.0.0.1",
    "0.0.0.0",
    "10.",
    "192.168.",
    "169.254.",
    "[::1]",
]

BLOCKED_SCHEMES = {"javascript", "data", "file", "ftp", "mailto", "tel"}

MAX_URL_LENGTH = 2048

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def validate_image_url(url: Optional[str]) -> Optional[str]:
    """
    Validate a product image reference.

    Accepts absolute HTTP(S) URLs and site-relative paths ("/img/x.png").

    Raises:
        ValueError: If the reference is invalid or points at an internal host
    """
    if url is None:
        return None

    url = url.strip()
    if not url:
        return None

    if len(url) > MAX_URL_LENGTH:
        raise ValueError(f"URL demasiado larga (máximo {MAX_URL_LENGTH} caracteres)")

    if url.startswith("/") and not url.startswith("//"):
        return url

    parsed = urlparse(url)
    scheme = parsed.scheme.lower()
    if scheme in BLOCKED_SCHEMES:
        raise ValueError(f"Esquema de URL no permitido: {scheme}")
    if scheme not in ("http", "https"):
        raise ValueError("Solo se permiten URLs HTTP/HTTPS")

    host = parsed.netloc.lower()
    if not host:
        raise ValueError("URL sin host válido")
    for blocked in BLOCKED_HOSTS:
        if host.startswith(blocked):
            raise ValueError("URL interna no permitida")

    return url


def sanitize_text(value: Optional[str]) -> Optional[str]:
    """Strip control characters and surrounding whitespace; blank becomes None."""
    if value is None:
        return None
    cleaned = _CONTROL_CHARS.sub("", value).strip()
    return cleaned or None
