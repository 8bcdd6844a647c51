"""Response headers announcing a binary PDF download."""

from __future__ import annotations

from datetime import datetime, timezone
from email.utils import format_datetime


PDF_CONTENT_TYPES = (
    "application/octet-stream",
    "application/download",
    "application/pdf",
)


def http_date(moment: datetime | None = None) -> str:
    """Format ``moment`` (default: now) as an HTTP GMT date."""
    value = moment or datetime.now(timezone.utc)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


def pdf_download_headers(
    length: int | None = None, *, now: datetime | None = None
) -> list[tuple[str, str]]:
    """Return the ordered header list sent before a PDF body.

    ``Content-Type`` appears once per entry of ``PDF_CONTENT_TYPES``; clients
    honour the last one.
    """
    headers = [
        ("Content-Description", "File Transfer"),
        ("Cache-Control", "public, must-revalidate, max-age=0"),
        ("Pragma", "public"),
        ("Last-Modified", http_date(now)),
    ]
    headers.extend(("Content-Type", content_type) for content_type in PDF_CONTENT_TYPES)
    headers.append(("Content-Transfer-Encoding", "binary"))
    if length is not None:
        headers.append(("Content-Length", str(length)))
    return headers


__all__ = ["PDF_CONTENT_TYPES", "http_date", "pdf_download_headers"]
