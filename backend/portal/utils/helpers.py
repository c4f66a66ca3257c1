import math
import re
from datetime import datetime, timezone
from typing import Optional

from bs4 import BeautifulSoup

_WHITESPACE = re.compile(r"\s+")

# แท็กที่ขึ้นบรรทัดใหม่เมื่อแสดงผล ข้อความในแท็ก inline ต่อกันโดยไม่มีช่องว่าง
_BLOCK_TAGS = [
    "address", "article", "aside", "blockquote", "br", "caption", "dd", "div", "dl", "dt",
    "figcaption", "figure", "footer", "h1", "h2", "h3", "h4", "h5", "h6", "header", "hr",
    "li", "main", "nav", "ol", "p", "pre", "section", "table", "tbody", "td", "tfoot",
    "th", "thead", "tr", "ul",
]


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def normalize_whitespace(value: Optional[str]) -> str:
    if not value:
        return ""
    return _WHITESPACE.sub(" ", value).strip()


def html_to_text(raw: Optional[str]) -> Optional[str]:
    """ข้อความล้วนจาก rich-text: ตัดแท็ก แปลง entity และยุบช่องว่าง"""
    if raw is None:
        return None
    if "<" not in raw and "&" not in raw:
        return normalize_whitespace(raw)
    soup = BeautifulSoup(raw, "html.parser")
    for tag in soup.find_all(_BLOCK_TAGS):
        tag.insert_before("\n")
        tag.insert_after("\n")
    return normalize_whitespace(soup.get_text())


def total_pages(total: int, page_size: int) -> int:
    return max(1, math.ceil(total / page_size))
