"""ไฮไลต์คำค้นในฟิลด์ของผลการค้นหาโดยไม่ทำลายแท็ก rich-text เดิม

ฟิลด์ที่อยู่ใน allow-list จะได้ฟิลด์พี่น้อง ``<field>_marked`` เพิ่ม ถ้าคำค้นว่าง
หรือไม่พบคำในฟิลด์ ค่า ``_marked`` จะเท่ากับต้นฉบับทุกไบต์
"""

import logging
import re
import unicodedata
from typing import Any, Dict, Iterable, List, Optional, Pattern, Tuple

from bs4 import BeautifulSoup, NavigableString

from portal.config import settings

logger = logging.getLogger(__name__)

HIGHLIGHT_FIELDS = (
    "official_name_th",
    "title",
    "short_description",
    "content_html",
    "family",
    "synonyms",
)

# ข้อความใต้แท็กเหล่านี้ไม่ใช่ข้อความที่ผู้ใช้เห็น หรือถูกไฮไลต์ไว้แล้ว
_SKIP_PARENTS = {"script", "style", "textarea", "template", "mark"}
_MARKUP_CHARS = ("<", ">", "&")
# สระบน/ล่างและวรรณยุกต์ไทยอยู่ในหมวด Mn ต้องอยู่ในช่วงเดียวกับพยัญชนะที่นำหน้า
_MARK_CATEGORIES = ("Mn", "Me")


def build_pattern(query: Optional[str]) -> Optional[Pattern]:
    """Regex ของคำค้นแบบไม่สนตัวพิมพ์ ช่องว่างในคำค้นตรงกับช่องว่างกี่ตัวก็ได้"""
    terms = (query or "").split()
    if not terms:
        return None
    return re.compile(r"\s+".join(re.escape(term) for term in terms), re.IGNORECASE)


def split_matches(text: str, pattern: Pattern) -> Optional[List[Tuple[bool, str]]]:
    """แบ่งข้อความเป็นช่วง (ตรงคำค้นหรือไม่, ข้อความ) ตามตำแหน่ง code point"""
    pieces: List[Tuple[bool, str]] = []
    cursor = 0
    for match in pattern.finditer(text):
        start, end = match.span()
        if start == end or start < cursor:
            continue
        while end < len(text) and unicodedata.category(text[end]) in _MARK_CATEGORIES:
            end += 1
        if start > cursor:
            pieces.append((False, text[cursor:start]))
        pieces.append((True, text[start:end]))
        cursor = end
    if not any(is_match for is_match, _ in pieces):
        return None
    if cursor < len(text):
        pieces.append((False, text[cursor:]))
    return pieces


class SearchHighlighter:
    def __init__(self, fields: Iterable[str] = HIGHLIGHT_FIELDS, tag: Optional[str] = None):
        self.fields = tuple(fields)
        self.tag = tag or settings.HIGHLIGHT_TAG

    def highlight(self, value: Optional[str], query: Optional[str]) -> Optional[str]:
        return self._highlight_field(value, build_pattern(query))

    def decorate(self, row: Dict[str, Any], query: Optional[str]) -> Dict[str, Any]:
        """เพิ่ม ``<field>_marked`` ให้ทุกฟิลด์ใน allow-list ของแถวผลลัพธ์"""
        pattern = build_pattern(query)
        for field in self.fields:
            row[f"{field}_marked"] = self._highlight_field(
                row.get(field), pattern, label=f"entry {row.get('id')} field {field}"
            )
        return row

    def decorate_all(self, rows: List[Dict[str, Any]], query: Optional[str]) -> List[Dict[str, Any]]:
        return [self.decorate(row, query) for row in rows]

    def _highlight_field(self, value: Optional[str], pattern: Optional[Pattern], label: str = "-") -> Optional[str]:
        if pattern is None or not value:
            return value
        try:
            return self._mark(value, pattern)
        except Exception as exc:
            logger.warning("[search] highlight degraded for %s: %s", label, exc)
            return value

    def _mark(self, value: str, pattern: Pattern) -> str:
        if not any(ch in value for ch in _MARKUP_CHARS):
            return self._mark_plain(value, pattern)
        return self._mark_markup(value, pattern)

    def _mark_plain(self, value: str, pattern: Pattern) -> str:
        pieces = split_matches(value, pattern)
        if pieces is None:
            return value
        return "".join(
            f"<{self.tag}>{chunk}</{self.tag}>" if is_match else chunk
            for is_match, chunk in pieces
        )

    def _mark_markup(self, value: str, pattern: Pattern) -> str:
        soup = BeautifulSoup(value, "html.parser")
        changed = False
        for node in list(soup.find_all(string=True)):
            # Comment/CData/Doctype เป็น subclass ของ NavigableString
            if type(node) is not NavigableString:
                continue
            if any(parent.name in _SKIP_PARENTS for parent in node.parents):
                continue
            pieces = split_matches(str(node), pattern)
            if pieces is None:
                continue
            fragments = []
            for is_match, chunk in pieces:
                if is_match:
                    wrapper = soup.new_tag(self.tag)
                    wrapper.string = chunk
                    fragments.append(wrapper)
                else:
                    fragments.append(NavigableString(chunk))
            node.replace_with(*fragments)
            changed = True
        if not changed:
            return value
        # html5: คง &nbsp; และ <br> ตามรูปแบบเดิมในส่วนที่ไม่ได้ไฮไลต์
        return soup.decode(formatter="html5")
