from __future__ import annotations

from datetime import datetime, timedelta, timezone

from htmlpdf.core.headers import http_date, pdf_download_headers


def test_headers_are_ordered_with_all_content_types() -> None:
    moment = datetime(2024, 3, 5, 14, 7, 9, tzinfo=timezone.utc)

    headers = pdf_download_headers(now=moment)

    assert headers == [
        ("Content-Description", "File Transfer"),
        ("Cache-Control", "public, must-revalidate, max-age=0"),
        ("Pragma", "public"),
        ("Last-Modified", "Tue, 05 Mar 2024 14:07:09 GMT"),
        ("Content-Type", "application/octet-stream"),
        ("Content-Type", "application/download"),
        ("Content-Type", "application/pdf"),
        ("Content-Transfer-Encoding", "binary"),
    ]


def test_content_length_is_appended_when_known() -> None:
    headers = pdf_download_headers(1234)

    assert headers[-1] == ("Content-Length", "1234")
    assert [name for name, _ in headers].count("Content-Length") == 1


def test_http_date_normalises_to_gmt() -> None:
    offset = timezone(timedelta(hours=2))
    moment = datetime(2024, 1, 1, 2, 30, 0, tzinfo=offset)

    assert http_date(moment) == "Mon, 01 Jan 2024 00:30:00 GMT"
    assert http_date(datetime(2024, 1, 1, 0, 0, 0)) == "Mon, 01 Jan 2024 00:00:00 GMT"
