"""Integration tests for DOCX to question bank conversion."""

import asyncio

import docx
import pytest
from utils import DocxTestGenerator

from qbank import to_question_bank, to_question_bank_async
from qbank.api import blob_to_raw_question_bank, parse_question_bank
from qbank.ast import List, ListItem, Paragraph, Run, Sequence, list_depths
from qbank.ast.serialization import bank_to_json, json_to_bank
from qbank.parsers.package import raw_from_json, raw_to_json


@pytest.mark.integration
class TestPythonDocxBank:
    """Convert a bank saved by python-docx with Word's built-in styles."""

    def setup_method(self):
        self.bank = to_question_bank(
            DocxTestGenerator.to_bytes(DocxTestGenerator.create_question_bank_document())
        )

    def test_outline(self):
        assert list(self.bank) == ["Cardiology", "Neurology"]
        assert list(self.bank["Cardiology"]) == ["Systolic murmur", "Diastolic murmur"]
        assert list(self.bank["Neurology"]) == ["Stroke"]

    def test_metadata(self):
        murmur = self.bank["Cardiology"]["Systolic murmur"]
        stroke = self.bank["Neurology"]["Stroke"]

        assert murmur.id == "42"
        assert murmur.tags == ("Cardiology", "Auscultation", "Valves")
        assert stroke.tags == ("Neurology", "Vascular", "Imaging")

    def test_stem_keeps_inline_formatting(self):
        stem = self.bank["Cardiology"]["Systolic murmur"].content

        assert stem == Sequence(
            children=(
                Paragraph(
                    text=(
                        Run("Which lesion causes a "),
                        Run("crescendo-decrescendo", bold=True),
                        Run(" murmur?"),
                    )
                ),
            )
        )

    def test_sub_fields(self):
        murmur = self.bank["Cardiology"]["Systolic murmur"]

        assert list(murmur.fields) == ["Answer", "Rationale"]
        assert murmur["Answer"] == Sequence(
            children=(
                List(
                    format="decimal",
                    items=(ListItem((Run("Aortic stenosis"),)), ListItem((Run("Radiates to the carotids"),))),
                ),
            )
        )
        assert murmur["Rationale"] == Sequence(children=(Paragraph((Run("Ejection murmur", italic=True),)),))

    def test_item_without_sub_fields(self):
        diastolic = self.bank["Cardiology"]["Diastolic murmur"]

        assert diastolic.keys() == ["title", "id", "tags", "content"]
        assert diastolic.content == Sequence(children=(Paragraph((Run("Name one cause."),)),))


@pytest.mark.integration
def test_path_and_bytes_agree(tmp_path, sample_docx_bytes):
    """Test that a saved file and its bytes convert to the same bank."""
    path = tmp_path / "bank.docx"
    path.write_bytes(sample_docx_bytes)

    assert to_question_bank(path) == to_question_bank(sample_docx_bytes)
    assert to_question_bank(str(path)) == to_question_bank(sample_docx_bytes)


@pytest.mark.integration
def test_numbered_list_styles(tmp_path):
    """Test lists that carry numbering properties through python-docx styles."""
    doc = docx.Document()
    doc.add_heading("Section", level=1)
    doc.add_heading("Question", level=2)
    doc.add_heading("Answer", level=3)
    doc.add_paragraph("First", style="List Number")
    doc.add_paragraph("Second", style="List Number")

    bank = to_question_bank(DocxTestGenerator.to_bytes(doc))

    # List Number carries its numbering on the style, not the paragraph
    answer = bank["Section"]["Question"]["Answer"]
    assert answer == Sequence(children=(Paragraph((Run("First"),)), Paragraph((Run("Second"),))))

    bank = to_question_bank(DocxTestGenerator.to_bytes(doc), list_styles=("ListNumber",))
    assert list_depths(bank["Section"]["Question"]["Answer"]) == [("First", 1), ("Second", 1)]


@pytest.mark.integration
def test_raw_pair_round_trip(sample_docx_bytes):
    """Test converting through the stored raw pair."""
    raw = blob_to_raw_question_bank(sample_docx_bytes)

    restored = raw_from_json(raw_to_json(raw))

    assert restored == raw
    assert parse_question_bank(restored) == to_question_bank(sample_docx_bytes)


@pytest.mark.integration
def test_json_round_trip(sample_docx_bytes):
    bank = to_question_bank(sample_docx_bytes)

    assert json_to_bank(bank_to_json(bank)) == bank


@pytest.mark.integration
def test_async_conversion(sample_docx_bytes):
    bank = asyncio.run(to_question_bank_async(sample_docx_bytes))

    assert bank == to_question_bank(sample_docx_bytes)


@pytest.mark.integration
def test_custom_metadata_style():
    doc = docx.Document()
    doc.add_heading("Section", level=1)
    doc.add_heading("Question", level=2)
    doc.add_paragraph("[9]: Custom", style="Intense Quote")

    bank = to_question_bank(DocxTestGenerator.to_bytes(doc), metadata_style="IntenseQuote")

    assert bank["Section"]["Question"].id == "9"
    assert bank["Section"]["Question"].tags == ("Section", "Custom")


@pytest.mark.integration
def test_unreadable_package_gives_empty_bank(caplog):
    bank = to_question_bank(b"this is not a docx")

    assert len(bank) == 0
    assert "Could not unpack question bank package" in caplog.text
