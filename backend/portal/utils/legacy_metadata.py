"""ดึง metadata จากตารางข้อมูลใน content_html ของบทความรุ่นเก่า

ใช้เฉพาะในสคริปต์ migration ครั้งเดียว คอลัมน์ในฐานข้อมูลเป็นแหล่งข้อมูลหลักเสมอ
"""

from typing import Dict, Iterator, Optional, Tuple

from bs4 import BeautifulSoup

from portal.utils.helpers import normalize_whitespace

LABEL_FIELDS = {
    "ชื่อวิทยาศาสตร์": "scientific_name",
    "scientific name": "scientific_name",
    "ชื่อทางการ": "official_name_th",
    "ชื่อไทย": "official_name_th",
    "วงศ์": "family",
    "family": "family",
    "สกุล": "genus",
    "genus": "genus",
    "ชนิด": "species",
    "species": "species",
    "ชื่อพ้อง": "synonyms",
    "synonym": "synonyms",
    "synonyms": "synonyms",
    "ชื่ออื่น": "other_names",
    "ชื่ออื่น ๆ": "other_names",
    "ชื่ออื่นๆ": "other_names",
    "ผู้เขียน": "author",
}


def _field_for(label: str) -> Optional[str]:
    key = normalize_whitespace(label).rstrip(":：").strip().lower()
    return LABEL_FIELDS.get(key)


def _pairs(soup: BeautifulSoup) -> Iterator[Tuple[str, str]]:
    for dt in soup.find_all("dt"):
        dd = dt.find_next_sibling("dd")
        if dd is not None:
            yield dt.get_text(" "), dd.get_text(" ")
    for tr in soup.find_all("tr"):
        cells = tr.find_all(["th", "td"], recursive=False)
        if len(cells) >= 2:
            yield cells[0].get_text(" "), cells[1].get_text(" ")
    for strong in soup.find_all(["strong", "b"]):
        label = strong.get_text(" ")
        tail = []
        for sibling in strong.next_siblings:
            if getattr(sibling, "name", None) in ("br", "strong", "b", "p"):
                break
            tail.append(sibling.get_text(" ") if hasattr(sibling, "get_text") else str(sibling))
        value = "".join(tail).strip()
        # "<b>วงศ์:</b> ค่า" หรือ "<b>วงศ์</b>: ค่า"
        if value.startswith((":", "：")):
            value = value[1:]
        elif not label.strip().endswith((":", "：")):
            continue
        yield label, value


def extract_metadata(content_html: Optional[str]) -> Dict[str, str]:
    """คืน {ชื่อคอลัมน์: ค่า} จากคู่ป้าย/ค่าแรกที่พบของแต่ละคอลัมน์"""
    if not content_html:
        return {}
    soup = BeautifulSoup(content_html, "html.parser")
    found: Dict[str, str] = {}
    for label, value in _pairs(soup):
        field = _field_for(label)
        value = normalize_whitespace(value)
        if field and value and field not in found:
            found[field] = value
    return found
