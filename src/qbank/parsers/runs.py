#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/qbank/parsers/runs.py
"""Run formatting for body paragraphs."""

from __future__ import annotations

from typing import NamedTuple, Optional
from xml.etree.ElementTree import Element

from qbank.ast.nodes import RichText, Run
from qbank.constants import (
    DISABLED_TOGGLE_VALUES,
    W_BOLD,
    W_ITALIC,
    W_RUN,
    W_RUN_PROPERTIES,
    W_TEXT,
    W_UNDERLINE,
    W_VAL,
)


class FormattedText(NamedTuple):
    """Plain and formatted renditions of one paragraph.

    Parameters
    ----------
    plain : str
        Concatenated run text, trimmed; used for classification and keys
    rich : RichText
        The same runs with their formatting flags, untrimmed

    """

    plain: str
    rich: RichText


def _toggle(properties: Optional[Element], tag: str) -> bool:
    if properties is None:
        return False
    marker = properties.find(tag)
    if marker is None:
        return False
    return (marker.get(W_VAL) or "").lower() not in DISABLED_TOGGLE_VALUES


def format_runs(paragraph: Element) -> FormattedText:
    """Walk the runs of ``paragraph`` in document order.

    Runs nested in hyperlinks, insertions and similar wrappers are included.
    Each ``w:t`` of a run becomes one :class:`Run` carrying that run's
    bold/italic/underline flags.

    Parameters
    ----------
    paragraph : Element
        A ``w:p`` element

    Returns
    -------
    FormattedText
        Trimmed plain text and the formatted runs

    """
    runs: list[Run] = []
    for run in paragraph.iter(W_RUN):
        properties = run.find(W_RUN_PROPERTIES)
        bold = _toggle(properties, W_BOLD)
        italic = _toggle(properties, W_ITALIC)
        underline = _toggle(properties, W_UNDERLINE)
        for text in run.findall(W_TEXT):
            runs.append(Run(text=text.text or "", bold=bold, italic=italic, underline=underline))

    plain = "".join(run.text for run in runs).strip()
    return FormattedText(plain=plain, rich=tuple(runs))
