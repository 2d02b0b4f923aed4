"""Tests for Markdown rendering of Docs documents."""

from typing import Any

import pytest

from google_docs_markdown.core.document import Document, parse_document
from google_docs_markdown.core.markdown import (
    EMPTY_DOCUMENT_MESSAGE,
    MarkdownRenderer,
    convert_docs_json_to_markdown,
)


def _doc(*blocks: dict[str, Any]) -> dict[str, Any]:
    return {"body": {"content": list(blocks)}}


def _para(*runs: dict[str, Any], style: str | None = None, bullet: bool = False) -> dict[str, Any]:
    paragraph: dict[str, Any] = {"elements": [{"textRun": run} for run in runs]}
    if style:
        paragraph["paragraphStyle"] = {"namedStyleType": style}
    if bullet:
        paragraph["bullet"] = {}
    return {"paragraph": paragraph}


def _run(content: str, **style: Any) -> dict[str, Any]:
    run: dict[str, Any] = {"content": content}
    if style:
        run["textStyle"] = style
    return run


def _cell(*blocks: dict[str, Any]) -> dict[str, Any]:
    return {"content": list(blocks)}


def _table(*rows: list[dict[str, Any]]) -> dict[str, Any]:
    return {"table": {"tableRows": [{"tableCells": cells} for cells in rows]}}


@pytest.mark.unit
class TestEmptyDocuments:
    """Tests for documents without content."""

    def test_empty_mapping(self):
        """Test that an empty document returns the sentinel."""
        assert convert_docs_json_to_markdown({}) == EMPTY_DOCUMENT_MESSAGE

    def test_document_without_body(self):
        """Test that a document with only a title returns the sentinel."""
        assert convert_docs_json_to_markdown({"title": "Test"}) == "Document appears to be empty."

    def test_body_without_content(self):
        """Test that a body without content returns the sentinel."""
        assert convert_docs_json_to_markdown({"body": {}}) == EMPTY_DOCUMENT_MESSAGE

    def test_body_with_empty_content(self):
        """Test that an empty content list returns the sentinel."""
        assert convert_docs_json_to_markdown(_doc()) == EMPTY_DOCUMENT_MESSAGE


@pytest.mark.unit
class TestParagraphs:
    """Tests for paragraph and heading rendering."""

    def test_simple_paragraph(self):
        """Test a plain paragraph renders as its text."""
        assert convert_docs_json_to_markdown(_doc(_para(_run("Hello World")))) == "Hello World"

    def test_heading_1(self):
        """Test HEADING_1 renders with a single hash."""
        assert convert_docs_json_to_markdown(_doc(_para(_run("Main Title"), style="HEADING_1"))) == "# Main Title"

    def test_heading_2(self):
        """Test HEADING_2 renders with two hashes."""
        assert convert_docs_json_to_markdown(_doc(_para(_run("Subtitle"), style="HEADING_2"))) == "## Subtitle"

    @pytest.mark.parametrize("level", [3, 4, 5, 6])
    def test_deeper_headings(self, level):
        """Test HEADING_3 through HEADING_6 get matching hash counts."""
        result = convert_docs_json_to_markdown(_doc(_para(_run("Deep"), style=f"HEADING_{level}")))
        assert result == f"{'#' * level} Deep"

    def test_title_renders_as_heading_1(self):
        """Test TITLE is treated like HEADING_1."""
        result = convert_docs_json_to_markdown(_doc(_para(_run("Document Title"), style="TITLE")))
        assert result == "# Document Title"

    def test_normal_text_and_subtitle_have_no_prefix(self):
        """Test that non-heading named styles render without a prefix."""
        result = convert_docs_json_to_markdown(
            _doc(_para(_run("Body"), style="NORMAL_TEXT"), _para(_run("Tagline"), style="SUBTITLE"))
        )
        assert result == "Body\nTagline"

    def test_runs_are_concatenated_in_order(self):
        """Test that all runs of a paragraph are joined without separators."""
        result = convert_docs_json_to_markdown(_doc(_para(_run("Hello "), _run("big", bold=True), _run(" world"))))
        assert result == "Hello **big** world"

    def test_multiple_paragraphs(self):
        """Test that top-level paragraphs appear in order."""
        result = convert_docs_json_to_markdown(_doc(_para(_run("First paragraph")), _para(_run("Second paragraph"))))
        assert "First paragraph" in result
        assert "Second paragraph" in result
        assert result.index("First paragraph") < result.index("Second paragraph")

    def test_embedded_newlines_are_preserved(self):
        """Test that run content is kept verbatim, newlines included."""
        result = convert_docs_json_to_markdown(_doc(_para(_run("line one\nline two\n"))))
        assert result == "line one\nline two\n"

    def test_non_text_elements_are_ignored(self):
        """Test that paragraph elements without a text run contribute nothing."""
        doc = _doc(
            {
                "paragraph": {
                    "elements": [
                        {"inlineObjectElement": {"inlineObjectId": "img1"}},
                        {"textRun": {"content": "Caption"}},
                        {"pageBreak": {}},
                    ]
                }
            }
        )
        assert convert_docs_json_to_markdown(doc) == "Caption"

    def test_paragraph_without_elements_is_empty_line(self):
        """Test that an empty paragraph renders as an empty line."""
        result = convert_docs_json_to_markdown(_doc(_para(_run("Above")), {"paragraph": {}}, _para(_run("Below"))))
        assert result == "Above\n\nBelow"


@pytest.mark.unit
class TestTextStyles:
    """Tests for text run styling."""

    def test_bold(self):
        """Test bold text."""
        assert convert_docs_json_to_markdown(_doc(_para(_run("Bold Text", bold=True)))) == "**Bold Text**"

    def test_italic(self):
        """Test italic text."""
        assert convert_docs_json_to_markdown(_doc(_para(_run("Italic Text", italic=True)))) == "*Italic Text*"

    def test_bold_italic_uses_single_triple_marker(self):
        """Test bold+italic is one *** marker, intentionally not nested ** and *."""
        result = convert_docs_json_to_markdown(_doc(_para(_run("Bold Italic", bold=True, italic=True))))
        assert result == "***Bold Italic***"

    def test_strikethrough(self):
        """Test strikethrough text."""
        assert convert_docs_json_to_markdown(_doc(_para(_run("Deleted", strikethrough=True)))) == "~~Deleted~~"

    def test_link(self):
        """Test links."""
        result = convert_docs_json_to_markdown(_doc(_para(_run("Click here", link={"url": "https://example.com"}))))
        assert result == "[Click here](https://example.com)"

    def test_link_inside_emphasis(self):
        """Test that emphasis wraps the already linked text."""
        result = convert_docs_json_to_markdown(
            _doc(_para(_run("Docs", bold=True, link={"url": "https://example.com"})))
        )
        assert result == "**[Docs](https://example.com)**"

    def test_strikethrough_wraps_emphasis(self):
        """Test that strikethrough is applied outside emphasis."""
        result = convert_docs_json_to_markdown(
            _doc(_para(_run("Gone", bold=True, italic=True, strikethrough=True)))
        )
        assert result == "~~***Gone***~~"

    def test_link_without_url_is_plain(self):
        """Test that a link object without url does not wrap."""
        result = convert_docs_json_to_markdown(_doc(_para(_run("Bookmark", link={"bookmarkId": "b1"}))))
        assert result == "Bookmark"

    def test_false_flags_are_plain(self):
        """Test that explicitly false flags produce no markers."""
        result = convert_docs_json_to_markdown(_doc(_para(_run("Plain", bold=False, italic=False))))
        assert result == "Plain"

    def test_empty_styled_run_renders_nothing(self):
        """Test that a styled run without content adds no stray markers."""
        result = convert_docs_json_to_markdown(_doc(_para(_run("", bold=True), _run("Text"))))
        assert result == "Text"


@pytest.mark.unit
class TestLists:
    """Tests for bullet lists."""

    def test_bullet_list(self):
        """Test consecutive bullets render on consecutive lines."""
        result = convert_docs_json_to_markdown(
            _doc(_para(_run("List item 1"), bullet=True), _para(_run("List item 2"), bullet=True))
        )
        assert result == "- List item 1\n- List item 2"

    def test_bullet_wins_over_heading(self):
        """Test that a bulleted heading paragraph gets only the bullet prefix."""
        result = convert_docs_json_to_markdown(_doc(_para(_run("Item"), style="HEADING_2", bullet=True)))
        assert result == "- Item"

    def test_bullet_value_is_ignored(self):
        """Test that any bullet payload marks a list item."""
        bullet = {"listId": "kix.abc", "nestingLevel": 2}
        doc = _doc({"paragraph": {"bullet": bullet, "elements": [{"textRun": _run("Nested")}]}})
        assert convert_docs_json_to_markdown(doc) == "- Nested"


@pytest.mark.unit
class TestSectionBreaks:
    """Tests for section breaks."""

    def test_section_break_between_paragraphs(self):
        """Test a section break renders as a horizontal rule line."""
        result = convert_docs_json_to_markdown(_doc(_para(_run("Before")), {"sectionBreak": {}}, _para(_run("After"))))
        assert "---" in result.split("\n")
        assert result == "Before\n---\nAfter"


@pytest.mark.unit
class TestTables:
    """Tests for table rendering."""

    def test_simple_table(self):
        """Test header, separator and data rows."""
        doc = _doc(
            _table(
                [_cell(_para(_run("Header 1"))), _cell(_para(_run("Header 2")))],
                [_cell(_para(_run("Cell 1"))), _cell(_para(_run("Cell 2")))],
            )
        )
        lines = convert_docs_json_to_markdown(doc).split("\n")
        assert lines == ["| Header 1 | Header 2 |", "| --- | --- |", "| Cell 1 | Cell 2 |"]

    def test_header_only_table(self):
        """Test a single-row table still gets a separator."""
        doc = _doc(_table([_cell(_para(_run("A"))), _cell(_para(_run("B"))), _cell(_para(_run("C")))]))
        assert convert_docs_json_to_markdown(doc) == "| A | B | C |\n| --- | --- | --- |"

    def test_table_without_rows_renders_nothing(self):
        """Test that an empty table contributes no lines."""
        result = convert_docs_json_to_markdown(_doc(_para(_run("Intro")), {"table": {}}))
        assert result == "Intro"

    def test_styled_cell_content(self):
        """Test that cell text keeps inline styling."""
        name = _cell(_para(_run("Name", bold=True)))
        site = _cell(_para(_run("site", link={"url": "https://x.io"})))
        doc = _doc(_table([name, site]))
        assert convert_docs_json_to_markdown(doc).split("\n")[0] == "| **Name** | [site](https://x.io) |"

    def test_multi_paragraph_cell_is_flattened(self):
        """Test that several paragraphs in a cell join with spaces on one line."""
        doc = _doc(
            _table(
                [_cell(_para(_run("Notes")))],
                [_cell(_para(_run("first\n")), _para(_run("")), _para(_run("second\n")))],
            )
        )
        assert convert_docs_json_to_markdown(doc).split("\n")[2] == "| first second |"

    def test_pipes_in_cells_are_escaped(self):
        """Test that a literal pipe cannot split a cell."""
        doc = _doc(_table([_cell(_para(_run("a|b")))]))
        assert convert_docs_json_to_markdown(doc).split("\n")[0] == "| a\\|b |"

    def test_empty_cell(self):
        """Test that a cell without content renders as empty text."""
        doc = _doc(_table([_cell(_para(_run("A"))), _cell()]))
        assert convert_docs_json_to_markdown(doc).split("\n")[0] == "| A |  |"

    def test_nested_table_stays_on_one_line(self):
        """Test that a table nested in a cell is flattened into the cell."""
        inner = _table([_cell(_para(_run("x")))])
        doc = _doc(_table([_cell(inner)]))
        header = convert_docs_json_to_markdown(doc).split("\n")[0]
        assert "\n" not in header
        assert header.startswith("| ")
        assert header.endswith(" |")


@pytest.mark.unit
class TestRobustness:
    """Tests for malformed and unknown input."""

    def test_unknown_blocks_are_skipped(self):
        """Test that structural elements of unknown kind render nothing."""
        result = convert_docs_json_to_markdown(
            _doc(_para(_run("Kept")), {"tableOfContents": {"content": []}}, {"startIndex": 5})
        )
        assert result == "Kept"

    @pytest.mark.parametrize("data", [None, [], "text", {"body": "nope"}, {"body": {"content": "nope"}}])
    def test_malformed_input_never_raises(self, data):
        """Test that input of the wrong shape degrades to the sentinel."""
        assert convert_docs_json_to_markdown(data) == EMPTY_DOCUMENT_MESSAGE

    @pytest.mark.parametrize(
        "paragraph",
        [
            {"elements": [{"textRun": {"content": "Null", "textStyle": {"bold": None, "italic": None}}}]},
            {"paragraphStyle": {"namedStyleType": None}, "elements": [{"textRun": {"content": "Null"}}]},
            {"bullet": None, "elements": [{"textRun": {"content": "Null", "textStyle": {"link": None}}}]},
        ],
    )
    def test_null_fields_render_as_defaults(self, paragraph):
        """Test that null style fields behave like absent ones."""
        result = convert_docs_json_to_markdown(_doc(_para(_run("Keep me")), {"paragraph": paragraph}))
        assert result == "Keep me\nNull"

    @pytest.mark.parametrize(
        "paragraph",
        [
            {"elements": None},
            {"elements": [{"textRun": {"content": None}}]},
            {"elements": [{"textRun": None}]},
        ],
    )
    def test_null_content_renders_empty_paragraph(self, paragraph):
        """Test that null elements or text leave neighbouring paragraphs intact."""
        result = convert_docs_json_to_markdown(
            _doc(_para(_run("Keep me")), {"paragraph": paragraph}, _para(_run("And me")))
        )
        assert result == "Keep me\n\nAnd me"

    def test_null_body_and_table_fields(self):
        """Test that nulls at document and table level degrade to empty values."""
        assert convert_docs_json_to_markdown({"title": None, "body": None}) == EMPTY_DOCUMENT_MESSAGE
        result = convert_docs_json_to_markdown(
            _doc(_para(_run("Keep me")), {"table": {"tableRows": None}}, {"sectionBreak": {}})
        )
        assert result == "Keep me\n---"

    def test_rendering_is_idempotent(self, sample_document):
        """Test that rendering the same input twice gives the same output."""
        assert convert_docs_json_to_markdown(sample_document) == convert_docs_json_to_markdown(sample_document)

    def test_input_is_not_mutated(self, sample_document):
        """Test that the raw input mapping is left unchanged."""
        import copy

        before = copy.deepcopy(sample_document)
        convert_docs_json_to_markdown(sample_document)
        assert sample_document == before


@pytest.mark.unit
class TestMarkdownRenderer:
    """Tests for the renderer class used directly."""

    def test_full_document(self, sample_document, sample_markdown):
        """Test rendering a document mixing all block kinds."""
        assert MarkdownRenderer().render(parse_document(sample_document)) == sample_markdown

    def test_accepts_parsed_document(self, sample_document, sample_markdown):
        """Test that the conversion helper accepts a Document model."""
        assert convert_docs_json_to_markdown(parse_document(sample_document)) == sample_markdown

    def test_render_empty_model(self):
        """Test rendering a default Document."""
        assert MarkdownRenderer().render(Document()) == EMPTY_DOCUMENT_MESSAGE
