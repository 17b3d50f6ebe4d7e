"""Site annotation: free-text residue mentions -> amino acid + position.

Examples:
  'Ser123'           -> serine, 123
  'serine 45'        -> serine, 45
  'lysine residues'  -> lysine
  'S473'             -> serine, 473
  'Xyz12'            -> nothing (unknown abbreviation)
"""
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from .amino_acids import PatternLibrary, get_pattern_library


@dataclass(frozen=True)
class SiteInfo:
    site_text: str
    identifier: Optional[str] = None
    amino_acid: Optional[str] = None
    position: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {'site_text': self.site_text}
        if self.identifier:
            out['identifier'] = self.identifier
        if self.amino_acid:
            out['amino_acid'] = self.amino_acid
        if self.position:
            out['position'] = self.position
        return out


def parse_site_text(text: str, lib: Optional[PatternLibrary] = None):
    """Return (amino_acid, position) for the first cascade pattern that matches.

    Both are None when nothing matched, or when a pattern matched but its
    captured abbreviation/code is not a known amino acid.
    """
    lib = lib or get_pattern_library()
    txt = (text or '').strip()
    if not txt:
        return None, None

    m = lib.name_only.fullmatch(txt)
    if m:
        aa = lib.lookup_name(m.group(1))
        return (aa.name if aa else None), None

    m = lib.abbreviation_only.fullmatch(txt)
    if m:
        aa = lib.lookup_abbreviation(m.group(1))
        return (aa.name if aa else None), None

    m = lib.name_position.fullmatch(txt)
    if m:
        aa = lib.lookup_name(m.group(1))
        return (aa.name, m.group(2)) if aa else (None, None)

    m = lib.abbreviation_position.fullmatch(txt)
    if m:
        aa = lib.lookup_abbreviation(m.group(1))
        return (aa.name, m.group(2)) if aa else (None, None)

    m = lib.code_position.fullmatch(txt)
    if m:
        aa = lib.lookup_code(m.group(1))
        return (aa.name, m.group(2)) if aa else (None, None)

    return None, None


def correct_identifier(site: SiteInfo, lib: Optional[PatternLibrary] = None) -> SiteInfo:
    # Upstream grounding often maps residues to unrelated proteins/chemicals;
    # a recognised amino acid always gets the table identifier.
    if not site.amino_acid:
        return site
    lib = lib or get_pattern_library()
    canonical = lib.canonical_identifier(site.amino_acid)
    if canonical is None:
        return site
    return replace(site, identifier=canonical)


def annotate_site(text: str, identifier: Optional[str] = None,
                  lib: Optional[PatternLibrary] = None) -> SiteInfo:
    lib = lib or get_pattern_library()
    amino_acid, position = parse_site_text(text, lib)
    site = SiteInfo(site_text=text or '', identifier=identifier,
                    amino_acid=amino_acid, position=position)
    return correct_identifier(site, lib)


__all__ = ['SiteInfo', 'parse_site_text', 'correct_identifier', 'annotate_site']
