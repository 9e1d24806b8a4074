"""Document identifier grammar and revision resolution.

Recognized families (case-insensitive):

  N4861      N-papers, exactly four digits, no revisions
  P1234R2    P/D papers, four digits, optional R{n} revision suffix
  CWG123     issue lists (CWG, EWG, LWG, LEWG, FS), one to four digits

An identifier only matches as a whole word: ``P12345`` or ``XP1234`` never
yield ``P1234``.
"""

from __future__ import annotations

import re
from collections.abc import Container
from typing import NamedTuple

_REVISABLE_ID_LENGTH = 5


class IdentifierFamily(NamedTuple):
    prefixes: tuple[str, ...]
    min_digits: int
    max_digits: int
    revisions: bool = False

    @property
    def pattern(self) -> str:
        # Longest prefix first so LEWG is tried before EWG.
        prefixes = "|".join(sorted(self.prefixes, key=len, reverse=True))
        if self.min_digits == self.max_digits:
            digits = rf"\d{{{self.min_digits}}}"
        else:
            digits = rf"\d{{{self.min_digits},{self.max_digits}}}"
        revision = r"(?:R\d+)?" if self.revisions else ""
        return f"(?:{prefixes}){digits}{revision}"

    def matches(self, identifier: str) -> bool:
        return re.fullmatch(self.pattern, identifier, re.IGNORECASE) is not None


N_PAPERS = IdentifierFamily(("N",), 4, 4)
P_PAPERS = IdentifierFamily(("P", "D"), 4, 4, revisions=True)
ISSUES = IdentifierFamily(("CWG", "EWG", "LWG", "LEWG", "FS"), 1, 4)

FAMILIES: tuple[IdentifierFamily, ...] = (N_PAPERS, P_PAPERS, ISSUES)

_GRAMMAR = "|".join(family.pattern for family in FAMILIES)
_BARE_RE = re.compile(rf"(?<![A-Za-z0-9])(?:{_GRAMMAR})(?![A-Za-z0-9])", re.IGNORECASE)
_BRACKETED_RE = re.compile(rf"\[((?:{_GRAMMAR}))\]", re.IGNORECASE)


def match_identifier(text: str) -> str | None:
    """Return the first whole-word identifier in ``text``, as typed."""
    match = _BARE_RE.search(text or "")
    return match.group(0) if match else None


def match_bracketed_identifier(text: str) -> str | None:
    """Return the identifier inside the first ``[ID]`` in ``text``, without brackets."""
    match = _BRACKETED_RE.search(text or "")
    return match.group(1) if match else None


def family_of(identifier: str) -> IdentifierFamily | None:
    for family in FAMILIES:
        if family.matches(identifier):
            return family
    return None


def resolve_latest_revision(paper_id: str, catalog: Container[str]) -> str | None:
    """Return ``{paper_id}R{k}`` for the highest contiguous revision k, or None.

    Probing starts at R0 and stops at the first missing revision, so a family
    whose R0 is absent resolves to None even if later revisions exist.
    """
    base = paper_id.upper()
    latest: str | None = None
    revision = 0
    while f"{base}R{revision}" in catalog:
        latest = f"{base}R{revision}"
        revision += 1
    return latest


def resolve_identifier(raw: str, catalog: Container[str]) -> str:
    """Normalize ``raw`` to uppercase and expand a bare P/D id to its latest revision.

    The input is returned normalized but otherwise unchanged when no revision
    applies or none exists.
    """
    paper_id = raw.strip().upper()
    if len(paper_id) == _REVISABLE_ID_LENGTH and paper_id[0] in P_PAPERS.prefixes:
        return resolve_latest_revision(paper_id, catalog) or paper_id
    return paper_id
