#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_numbering.py
"""Unit tests for numbering format resolution."""

import pytest
from utils import SAMPLE_NUMBERING, W_NS, XML_DECLARATION, numbering_xml

from qbank.parsers.numbering import resolve_numbering_formats, to_format_keyword


@pytest.mark.unit
class TestFormatKeywords:
    """Tests for mapping Word numFmt values to keywords."""

    @pytest.mark.parametrize(
        "word_format,keyword",
        [
            ("bullet", "bullet"),
            ("decimal", "decimal"),
            ("upperLetter", "upper-alpha"),
            ("lowerLetter", "lower-alpha"),
            ("lowerRoman", "decimal"),
            ("ordinal", "decimal"),
        ],
    )
    def test_mapping(self, word_format: str, keyword: str) -> None:
        assert to_format_keyword(word_format) == keyword


@pytest.mark.unit
class TestResolveNumberingFormats:
    """Tests for the (numbering-id, indent-level) table."""

    def test_sample_table(self) -> None:
        table = resolve_numbering_formats(SAMPLE_NUMBERING)

        assert table == {
            "1": {"0": "decimal", "1": "lower-alpha"},
            "2": {"0": "bullet", "1": "bullet"},
        }

    def test_definitions_after_references(self) -> None:
        # w:num elements may precede the abstract definitions they point at
        markup = (
            f'{XML_DECLARATION}<w:numbering xmlns:w="{W_NS}">'
            '<w:num w:numId="5"><w:abstractNumId w:val="3"/></w:num>'
            '<w:abstractNum w:abstractNumId="3"><w:lvl w:ilvl="0"><w:numFmt w:val="upperLetter"/></w:lvl>'
            "</w:abstractNum>"
            "</w:numbering>"
        )

        assert resolve_numbering_formats(markup) == {"5": {"0": "upper-alpha"}}

    def test_several_ids_share_one_definition(self) -> None:
        table = resolve_numbering_formats(numbering_xml({1: {0: "bullet"}}, {7: 1, 8: 1}))

        assert table["7"] == table["8"] == {"0": "bullet"}

    def test_dangling_abstract_reference_keeps_empty_entry(self) -> None:
        table = resolve_numbering_formats(numbering_xml({}, {4: 99}))

        assert table == {"4": {}}

    def test_level_without_format_is_omitted(self) -> None:
        markup = (
            f'{XML_DECLARATION}<w:numbering xmlns:w="{W_NS}">'
            '<w:abstractNum w:abstractNumId="1">'
            '<w:lvl w:ilvl="0"><w:start w:val="1"/></w:lvl>'
            '<w:lvl w:ilvl="1"><w:numFmt w:val="bullet"/></w:lvl>'
            '<w:lvl><w:numFmt w:val="decimal"/></w:lvl>'
            "</w:abstractNum>"
            '<w:num w:numId="1"><w:abstractNumId w:val="1"/></w:num>'
            "</w:numbering>"
        )

        assert resolve_numbering_formats(markup) == {"1": {"1": "bullet"}}

    def test_num_without_abstract_reference_is_omitted(self) -> None:
        markup = f'{XML_DECLARATION}<w:numbering xmlns:w="{W_NS}"><w:num w:numId="1"/></w:numbering>'

        assert resolve_numbering_formats(markup) == {}

    @pytest.mark.parametrize("markup", ["", "   ", "<w:numbering", "not xml at all"])
    def test_empty_or_malformed_markup(self, markup: str) -> None:
        assert resolve_numbering_formats(markup) == {}
