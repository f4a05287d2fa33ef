#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_metadata.py
"""Unit tests for the ``[id]: tag / tag`` metadata line."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from qbank.parsers.metadata import ItemMetadata, extract_metadata


@pytest.mark.unit
class TestExtractMetadata:
    """Tests for identifier and tag extraction."""

    def test_id_and_tags(self) -> None:
        assert extract_metadata("[42]: Arrhythmia / ECG", "Cardiology") == ItemMetadata(
            id="42", tags=("Cardiology", "Arrhythmia", "ECG")
        )

    def test_id_without_tags(self) -> None:
        assert extract_metadata("[42]", "Cardiology") == ItemMetadata("42", ("Cardiology",))

    def test_id_with_empty_tag_list(self) -> None:
        assert extract_metadata("[42]: ", "Cardiology") == ItemMetadata("42", ("Cardiology",))

    def test_non_numeric_id(self) -> None:
        assert extract_metadata("[card-07]: Valves", "Cardiology").id == "card-07"

    def test_no_bracketed_prefix(self) -> None:
        assert extract_metadata("Arrhythmia / ECG", "Cardiology") is None

    def test_brackets_later_in_text_are_ignored(self) -> None:
        assert extract_metadata("See [42]", "Cardiology") is None

    def test_empty_pieces_are_dropped(self) -> None:
        assert extract_metadata("[1]: a /  / b", "S").tags == ("S", "a", "b")

    def test_duplicate_tags_are_dropped(self) -> None:
        assert extract_metadata("[1]: Cardiology / ECG / ECG", "Cardiology").tags == ("Cardiology", "ECG")

    def test_custom_separator(self) -> None:
        assert extract_metadata("[1]: a; b", "S", separator="; ").tags == ("S", "a", "b")

    @given(
        item_id=st.text(alphabet="0123456789abcdefXYZ-_ .:", min_size=1),
        tags=st.lists(st.text(alphabet="abcdefghij XYZ-", min_size=1), max_size=5),
    )
    def test_section_title_is_always_the_first_tag(self, item_id: str, tags: list[str]) -> None:
        metadata = extract_metadata(f"[{item_id}]: {' / '.join(tags)}", "Section")

        assert metadata is not None
        assert metadata.id == item_id
        assert metadata.tags[0] == "Section"
        assert len(set(metadata.tags)) == len(metadata.tags)
