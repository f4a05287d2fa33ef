"""Test utilities for the qbank test suite.

This module provides builders for WordprocessingML markup, in-memory DOCX
packages, and python-docx generated question banks.
"""

import io
import tempfile
import zipfile
from pathlib import Path
from typing import Optional, Union
from xml.sax.saxutils import escape

import docx

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'


def run_xml(text: str, bold: bool = False, italic: bool = False, underline: bool = False) -> str:
    """Build a ``w:r`` with one ``w:t`` and the requested formatting."""
    properties = ""
    if bold:
        properties += "<w:b/>"
    if italic:
        properties += "<w:i/>"
    if underline:
        properties += '<w:u w:val="single"/>'
    rpr = f"<w:rPr>{properties}</w:rPr>" if properties else ""
    return f'<w:r>{rpr}<w:t xml:space="preserve">{escape(text)}</w:t></w:r>'


def paragraph_xml(
    text: str = "",
    style: Optional[str] = None,
    ilvl: Optional[int] = None,
    num_id: Optional[int] = None,
    runs: Optional[list[str]] = None,
) -> str:
    """Build a ``w:p``.

    Either ``text`` (one plain run) or pre-built ``runs`` supply the content.
    """
    properties = ""
    if style is not None:
        properties += f'<w:pStyle w:val="{style}"/>'
    if ilvl is not None or num_id is not None:
        numbering = ""
        if ilvl is not None:
            numbering += f'<w:ilvl w:val="{ilvl}"/>'
        if num_id is not None:
            numbering += f'<w:numId w:val="{num_id}"/>'
        properties += f"<w:numPr>{numbering}</w:numPr>"
    ppr = f"<w:pPr>{properties}</w:pPr>" if properties else ""
    body = "".join(runs) if runs is not None else (run_xml(text) if text else "")
    return f"<w:p>{ppr}{body}</w:p>"


def heading1(text: str) -> str:
    return paragraph_xml(text, style="Heading1")


def heading2(text: str) -> str:
    return paragraph_xml(text, style="Heading2")


def heading3(text: str) -> str:
    return paragraph_xml(text, style="Heading3")


def subtitle(text: str) -> str:
    return paragraph_xml(text, style="Subtitle")


def list_item(text: str, ilvl: Optional[int] = 0, num_id: Optional[int] = 1, style: str = "ListParagraph") -> str:
    return paragraph_xml(text, style=style, ilvl=ilvl, num_id=num_id)


def page_number_field(number: str = "3") -> str:
    """A footer-style paragraph holding a PAGE field."""
    return (
        "<w:p>"
        '<w:r><w:fldChar w:fldCharType="begin"/></w:r>'
        '<w:r><w:instrText xml:space="preserve"> PAGE </w:instrText></w:r>'
        '<w:r><w:fldChar w:fldCharType="separate"/></w:r>'
        f"{run_xml(number)}"
        '<w:r><w:fldChar w:fldCharType="end"/></w:r>'
        "</w:p>"
    )


def toc_field(text: str = "Cardiology") -> str:
    """A table-of-contents entry carrying only an instruction field."""
    return f'<w:p><w:r><w:instrText xml:space="preserve"> TOC \\o "1-3" </w:instrText></w:r>{run_xml(text)}</w:p>'


def document_xml(*paragraphs: str) -> str:
    """Wrap paragraphs in a ``w:document`` body."""
    return f'{XML_DECLARATION}<w:document xmlns:w="{W_NS}"><w:body>{"".join(paragraphs)}</w:body></w:document>'


def numbering_xml(abstract_nums: dict[int, dict[int, str]], nums: dict[int, int]) -> str:
    """Build a numbering part.

    Parameters
    ----------
    abstract_nums : dict
        abstractNumId -> {ilvl: numFmt value}
    nums : dict
        numId -> abstractNumId

    """
    parts = []
    for abstract_id, levels in abstract_nums.items():
        lvls = "".join(
            f'<w:lvl w:ilvl="{ilvl}"><w:start w:val="1"/><w:numFmt w:val="{fmt}"/></w:lvl>'
            for ilvl, fmt in levels.items()
        )
        parts.append(f'<w:abstractNum w:abstractNumId="{abstract_id}">{lvls}</w:abstractNum>')
    for num_id, abstract_id in nums.items():
        parts.append(f'<w:num w:numId="{num_id}"><w:abstractNumId w:val="{abstract_id}"/></w:num>')
    return f'{XML_DECLARATION}<w:numbering xmlns:w="{W_NS}">{"".join(parts)}</w:numbering>'


def make_package(document: Union[str, bytes, None], numbering: Optional[str] = None, extra: Optional[dict] = None) -> bytes:
    """Zip the given parts into DOCX package bytes."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        archive.writestr("[Content_Types].xml", f"{XML_DECLARATION}<Types/>")
        if document is not None:
            archive.writestr("word/document.xml", document)
        if numbering is not None:
            archive.writestr("word/numbering.xml", numbering)
        for name, data in (extra or {}).items():
            archive.writestr(name, data)
    return buffer.getvalue()


# numId 1: decimal outer, lower-alpha inner; numId 2: bullets
SAMPLE_NUMBERING = numbering_xml({10: {0: "decimal", 1: "lowerLetter"}, 20: {0: "bullet", 1: "bullet"}}, {1: 10, 2: 20})


def sample_bank_document() -> str:
    """Two sections, a duplicate item title, metadata, sub-fields and a nested list."""
    return document_xml(
        paragraph_xml("Table of Contents"),
        toc_field("Cardiology"),
        heading1("Cardiology"),
        heading2("Systolic murmur"),
        subtitle("[42]: Auscultation / Valves"),
        paragraph_xml("Describe the murmur."),
        heading3("Answer"),
        list_item("Aortic stenosis", ilvl=0),
        list_item("Ejection click", ilvl=1),
        list_item("Mitral regurgitation", ilvl=0),
        heading3("Rationale"),
        paragraph_xml("Crescendo-decrescendo."),
        page_number_field("1"),
        heading2("Systolic murmur"),
        paragraph_xml("Second copy"),
        heading1("Neurology"),
        heading2("Stroke"),
        subtitle("[7]: Vascular"),
    )


class DocxTestGenerator:
    """Generator for question bank DOCX documents built with python-docx."""

    @staticmethod
    def create_question_bank_document() -> docx.Document:
        """Create a small bank using Word's built-in heading and subtitle styles."""
        doc = docx.Document()

        doc.add_heading("Cardiology", level=1)
        doc.add_heading("Systolic murmur", level=2)
        doc.add_paragraph("[42]: Auscultation / Valves", style="Subtitle")

        stem = doc.add_paragraph("Which lesion causes a ")
        stem.add_run("crescendo-decrescendo").bold = True
        stem.add_run(" murmur?")

        doc.add_heading("Answer", level=3)
        doc.add_paragraph("Aortic stenosis", style="List Paragraph")
        doc.add_paragraph("Radiates to the carotids", style="List Paragraph")

        doc.add_heading("Rationale", level=3)
        rationale = doc.add_paragraph()
        rationale.add_run("Ejection murmur").italic = True

        doc.add_heading("Diastolic murmur", level=2)
        doc.add_paragraph("[43]: Auscultation", style="Subtitle")
        doc.add_paragraph("Name one cause.")

        doc.add_heading("Neurology", level=1)
        doc.add_heading("Stroke", level=2)
        doc.add_paragraph("[7]: Vascular / Imaging", style="Subtitle")
        doc.add_heading("Answer", level=3)
        doc.add_paragraph("CT first.")

        return doc

    @staticmethod
    def to_bytes(doc: docx.Document) -> bytes:
        """Save a python-docx document to package bytes."""
        buffer = io.BytesIO()
        doc.save(buffer)
        return buffer.getvalue()


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp())


def cleanup_test_dir(temp_dir: Path) -> None:
    """Clean up test directory and files."""
    import shutil

    if temp_dir.exists():
        shutil.rmtree(temp_dir)
