"""ไฮไลต์คำค้นในผลการค้นหา: ต้นฉบับไม่เปลี่ยนเมื่อไม่มีคำค้น ครอบทุกคำที่ตรง และไม่ทำลายแท็กเดิม"""

import re
from html.parser import HTMLParser

import pytest

from portal.services import highlight_service
from portal.services.highlight_service import HIGHLIGHT_FIELDS, SearchHighlighter, build_pattern, split_matches

VOID_TAGS = {"area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "source", "track", "wbr"}


class _TagBalance(HTMLParser):
    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.stack = []
        self.balanced = True

    def handle_starttag(self, tag, attrs):
        if tag not in VOID_TAGS:
            self.stack.append(tag)

    def handle_endtag(self, tag):
        if tag in VOID_TAGS:
            return
        if not self.stack or self.stack.pop() != tag:
            self.balanced = False


def assert_well_formed(markup: str):
    parser = _TagBalance()
    parser.feed(markup)
    parser.close()
    assert parser.balanced, markup
    assert parser.stack == [], markup


def _row(**fields):
    row = {"id": 1}
    row.update(fields)
    return row


def test_empty_query_keeps_every_field_byte_identical():
    row = _row(
        title="กล้วยน้ำไทย",
        official_name_th="กล้วยน้ำไทย",
        short_description="<p>ไม้ล้มลุก&nbsp;อายุหลายปี</p>",
        content_html='<p class="lead">A &amp; B<br>กล้วย</p>',
        family="MUSACEAE",
        synonyms=None,
    )
    original = dict(row)
    for query in ("", "   ", None):
        decorated = SearchHighlighter().decorate(dict(original), query)
        for field in HIGHLIGHT_FIELDS:
            assert decorated[f"{field}_marked"] == original[field]


def test_basic_thai_highlight():
    row = SearchHighlighter().decorate(_row(title="กล้วยน้ำไทย", official_name_th="กล้วยน้ำไทย"), "กล้วย")
    assert row["title_marked"] == "<mark>กล้วย</mark>น้ำไทย"
    assert row["official_name_th_marked"] == "<mark>กล้วย</mark>น้ำไทย"
    assert row["title"] == "กล้วยน้ำไทย"


def test_every_occurrence_is_marked_without_overlap():
    assert SearchHighlighter().highlight("กล้วยกล้วย กล้วย", "กล้วย") == (
        "<mark>กล้วย</mark><mark>กล้วย</mark> <mark>กล้วย</mark>"
    )


def test_match_is_case_insensitive_and_keeps_source_case():
    assert SearchHighlighter().highlight("Musa PARADISIACA", "paradisiaca") == "Musa <mark>PARADISIACA</mark>"


def test_query_whitespace_is_normalized():
    highlighted = SearchHighlighter().highlight("Musa   sapientum L.", "  musa sapientum ")
    assert highlighted == "<mark>Musa   sapientum</mark> L."


def test_regex_metacharacters_are_literal():
    assert SearchHighlighter().highlight("Oryza sativa (L.)", "(L.)") == "Oryza sativa <mark>(L.)</mark>"


def test_thai_combining_marks_are_sliced_on_code_points():
    assert SearchHighlighter().highlight("กล้วย", "ล้วย") == "ก<mark>ล้วย</mark>"


def test_match_ending_before_thai_marks_keeps_the_cluster_whole():
    assert SearchHighlighter().highlight("กล้วย", "กล") == "<mark>กล้</mark>วย"
    assert SearchHighlighter().highlight("น้ำว้า", "น") == "<mark>น้</mark>ำว้า"
    assert split_matches("ที่กล้วย", build_pattern("ท")) == [(True, "ที่"), (False, "กล้วย")]


def test_markup_tags_and_attributes_are_not_split():
    html = '<p class="lead"><a href="/กล้วย">กล้วยหอม</a> และ กล้วย</p>'
    marked = SearchHighlighter().highlight(html, "กล้วย")
    assert marked == '<p class="lead"><a href="/กล้วย"><mark>กล้วย</mark>หอม</a> และ <mark>กล้วย</mark></p>'


def test_entities_are_not_double_escaped():
    marked = SearchHighlighter().highlight("<p>A &amp; B กล้วย</p>", "กล้วย")
    assert marked == "<p>A &amp; B <mark>กล้วย</mark></p>"


def test_unmatched_markup_keeps_entities_and_void_tags():
    html = "<p>กล้วย&nbsp;น้ำว้า<br>ผลสุก</p>"
    marked = SearchHighlighter().highlight(html, "กล้วย")
    assert marked == "<p><mark>กล้วย</mark>&nbsp;น้ำว้า<br>ผลสุก</p>"


def test_script_and_existing_marks_are_left_alone():
    html = '<p>กล้วย <mark>กล้วย</mark></p><script>var x = "กล้วย";</script>'
    marked = SearchHighlighter().highlight(html, "กล้วย")
    assert marked == '<p><mark>กล้วย</mark> <mark>กล้วย</mark></p><script>var x = "กล้วย";</script>'


def test_field_without_match_is_unchanged():
    html = "<p>ข้าว<br>ข้าวเจ้า</p>"
    assert SearchHighlighter().highlight(html, "กล้วย") == html


@pytest.mark.parametrize(
    "html, query",
    [
        ("<p>กล้วย<b>กล้วย</b><i>กล้ว</i>ย</p>", "กล้วย"),
        ("<ul><li>Musa</li><li>MUSA <em>musa</em></li></ul>", "musa"),
        ('<p>ราก<br>กล้วย<img src="กล้วย.png" alt="กล้วย"></p>', "กล้วย"),
        ("<table><tr><td>วงศ์</td><td>MUSACEAE</td></tr></table>", "musaceae"),
        ("<div><p>เสือ <span style=\"color:red\">โคร่ง</span> เสือ</p></div>", "เสือ"),
    ],
)
def test_marked_markup_stays_well_formed(html, query):
    marked = SearchHighlighter().highlight(html, query)
    assert "<mark>" in marked
    assert_well_formed(marked)


def test_attribute_values_survive_highlighting():
    marked = SearchHighlighter().highlight('<p>ราก<br>กล้วย<img src="กล้วย.png" alt="กล้วย"></p>', "กล้วย")
    assert 'src="กล้วย.png"' in marked
    assert 'alt="กล้วย"' in marked
    assert marked.count("<mark>") == 1


@pytest.mark.parametrize(
    "field, value, query",
    [
        ("title", "กล้วยน้ำว้า", "น้ำว้า"),
        ("official_name_th", "เสือโคร่ง", "โคร่ง"),
        ("short_description", "ไม้ล้มลุก อายุหลายปี", "อายุ"),
        ("content_html", "<p>ผลเรียงเป็น<strong>หวี</strong></p>", "หวี"),
        ("family", "MUSACEAE", "Musa"),
        ("synonyms", "Musa sapientum L.", "SAPIENTUM"),
    ],
)
def test_each_allow_listed_field_gets_a_marked_span(field, value, query):
    row = SearchHighlighter().decorate(_row(**{field: value}), query)
    spans = re.findall(r"<mark>(.*?)</mark>", row[f"{field}_marked"])
    assert any(span.lower() == query.lower() for span in spans)


def test_fields_outside_allow_list_get_no_marked_sibling():
    row = SearchHighlighter().decorate(_row(title="กล้วย", genus="กล้วย"), "กล้วย")
    assert "genus_marked" not in row


def test_custom_marker_tag():
    assert SearchHighlighter(tag="em").highlight("กล้วยหอม", "กล้วย") == "<em>กล้วย</em>หอม"


def test_unparseable_markup_degrades_to_unmarked(monkeypatch, caplog):
    def broken_parser(*args, **kwargs):
        raise ValueError("cannot parse")

    monkeypatch.setattr(highlight_service, "BeautifulSoup", broken_parser)
    row = _row(title="กล้วยน้ำไทย", content_html="<p>กล้วย</p>")

    with caplog.at_level("WARNING", logger="portal.services.highlight_service"):
        decorated = SearchHighlighter().decorate(row, "กล้วย")

    assert decorated["content_html_marked"] == "<p>กล้วย</p>"
    assert decorated["title_marked"] == "<mark>กล้วย</mark>น้ำไทย"
    assert "highlight degraded" in caplog.text


def test_build_pattern_and_split_matches():
    assert build_pattern("") is None
    assert build_pattern(" \t ") is None
    pattern = build_pattern("กล้วย")
    assert split_matches("ข้าว", pattern) is None
    assert split_matches("ก กล้วย ข", pattern) == [(False, "ก "), (True, "กล้วย"), (False, " ข")]
