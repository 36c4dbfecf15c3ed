"""Row-reference rewriting for formulas after a worksheet row is deleted."""

from __future__ import annotations

import logging
import re

from openpyxl.formula.tokenizer import Token, Tokenizer, TokenizerError

logger = logging.getLogger(__name__)

REF_ERROR = "#REF!"

_ENDPOINT_RE = re.compile(r"^(\$?[A-Za-z]{1,3})?(\$?)(\d+)$")


def _split_sheet(reference: str) -> tuple[str | None, str]:
    if "!" not in reference:
        return None, reference
    sheet, _, area = reference.rpartition("!")
    if len(sheet) >= 2 and sheet.startswith("'") and sheet.endswith("'"):
        sheet = sheet[1:-1].replace("''", "'")
    return sheet, area


def _endpoint(match: re.Match[str], row: int) -> str:
    column, anchor, _ = match.groups()
    return f"{column or ''}{anchor}{row}"


def shift_reference(reference: str, removed_row: int, sheet_title: str, local: bool = True) -> str:
    """Rewrite one range operand as if ``removed_row`` of ``sheet_title`` had been deleted.

    Unqualified references belong to ``sheet_title`` only when ``local`` is set.
    Whole-column references and names are returned unchanged; a reference that
    lay entirely on the removed row becomes ``#REF!``.
    """
    sheet, area = _split_sheet(reference)
    if sheet is None and not local:
        return reference
    if sheet is not None and sheet != sheet_title:
        return reference

    parts = area.split(":")
    if len(parts) > 2:
        return reference
    matches = [_ENDPOINT_RE.match(part) for part in parts]
    if any(match is None for match in matches):
        return reference

    first, last = int(matches[0].group(3)), int(matches[-1].group(3))
    if first > last:
        matches.reverse()
        first, last = last, first
    if first == last == removed_row:
        return REF_ERROR

    new_first = first - 1 if first > removed_row else first
    new_last = last - 1 if last >= removed_row else last
    prefix = reference[: len(reference) - len(area)]
    if len(parts) == 1:
        return f"{prefix}{_endpoint(matches[0], new_first)}"
    return f"{prefix}{_endpoint(matches[0], new_first)}:{_endpoint(matches[-1], new_last)}"


def shift_formula(formula: str, removed_row: int, sheet_title: str, local: bool = True) -> str:
    """Apply :func:`shift_reference` to every range operand of ``formula``."""
    if not formula.startswith("="):
        return formula
    try:
        tokenizer = Tokenizer(formula)
    except TokenizerError as exc:
        logger.warning("Formula %r kept as is after row removal: %s", formula, exc)
        return formula

    changed = False
    for token in tokenizer.items:
        if token.type != Token.OPERAND or token.subtype != Token.RANGE:
            continue
        shifted = shift_reference(token.value, removed_row, sheet_title, local)
        if shifted != token.value:
            token.value = shifted
            changed = True
    return tokenizer.render() if changed else formula
