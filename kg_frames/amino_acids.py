"""Amino-acid reference table and the site patterns compiled from it.

The table is static; everything derived from it (lookup maps and compiled
regular expressions) is built once by `get_pattern_library()` and shared
read-only by every document, including across worker processes.
"""
from __future__ import annotations
import re
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class AminoAcid:
    name: str          # canonical lower-case name
    abbreviation: str  # three-letter code, lower case
    code: str          # one-letter code, upper case
    identifier: str    # canonical grounding (ChEBI, L-form)


# ChEBI identifiers for the L-amino acids; used to overwrite whatever the
# upstream grounding step attached to a site mention.
AMINO_ACIDS: Tuple[AminoAcid, ...] = (
    AminoAcid('alanine', 'ala', 'A', 'chebi:CHEBI:16977'),
    AminoAcid('arginine', 'arg', 'R', 'chebi:CHEBI:16467'),
    AminoAcid('asparagine', 'asn', 'N', 'chebi:CHEBI:17196'),
    AminoAcid('aspartic acid', 'asp', 'D', 'chebi:CHEBI:17053'),
    AminoAcid('cysteine', 'cys', 'C', 'chebi:CHEBI:17561'),
    AminoAcid('glutamic acid', 'glu', 'E', 'chebi:CHEBI:16015'),
    AminoAcid('glutamine', 'gln', 'Q', 'chebi:CHEBI:18050'),
    AminoAcid('glycine', 'gly', 'G', 'chebi:CHEBI:15428'),
    AminoAcid('histidine', 'his', 'H', 'chebi:CHEBI:15971'),
    AminoAcid('isoleucine', 'ile', 'I', 'chebi:CHEBI:17191'),
    AminoAcid('leucine', 'leu', 'L', 'chebi:CHEBI:15603'),
    AminoAcid('lysine', 'lys', 'K', 'chebi:CHEBI:18019'),
    AminoAcid('methionine', 'met', 'M', 'chebi:CHEBI:16643'),
    AminoAcid('phenylalanine', 'phe', 'F', 'chebi:CHEBI:17295'),
    AminoAcid('proline', 'pro', 'P', 'chebi:CHEBI:17203'),
    AminoAcid('serine', 'ser', 'S', 'chebi:CHEBI:17115'),
    AminoAcid('threonine', 'thr', 'T', 'chebi:CHEBI:16857'),
    AminoAcid('tryptophan', 'trp', 'W', 'chebi:CHEBI:16828'),
    AminoAcid('tyrosine', 'tyr', 'Y', 'chebi:CHEBI:17895'),
    AminoAcid('valine', 'val', 'V', 'chebi:CHEBI:16414'),
)

RESIDUE_NOISE = r'(?:\s+residues?)?'
POSITION = r'(\d+)'


@dataclass(frozen=True)
class PatternLibrary:
    by_name: Mapping[str, AminoAcid]
    by_abbreviation: Mapping[str, AminoAcid]
    by_code: Mapping[str, AminoAcid]
    # Cascade order matters: see sites.parse_site_text
    name_only: re.Pattern = field(repr=False)
    abbreviation_only: re.Pattern = field(repr=False)
    name_position: re.Pattern = field(repr=False)
    abbreviation_position: re.Pattern = field(repr=False)
    code_position: re.Pattern = field(repr=False)

    def lookup_name(self, name: str) -> Optional[AminoAcid]:
        return self.by_name.get(' '.join(name.lower().split()))

    def lookup_abbreviation(self, abbreviation: str) -> Optional[AminoAcid]:
        return self.by_abbreviation.get(abbreviation.lower())

    def lookup_code(self, code: str) -> Optional[AminoAcid]:
        return self.by_code.get(code)

    def canonical_identifier(self, name: str) -> Optional[str]:
        aa = self.lookup_name(name)
        return aa.identifier if aa else None


def _alternation(words) -> str:
    # longest first so multi-word names win over their prefixes
    ordered = sorted(words, key=len, reverse=True)
    return '|'.join(re.escape(w).replace(r'\ ', r'\s+') for w in ordered)


def build_pattern_library(table: Tuple[AminoAcid, ...] = AMINO_ACIDS) -> PatternLibrary:
    names = _alternation(aa.name for aa in table)
    abbrevs = _alternation(aa.abbreviation for aa in table)
    return PatternLibrary(
        by_name=MappingProxyType({aa.name: aa for aa in table}),
        by_abbreviation=MappingProxyType({aa.abbreviation: aa for aa in table}),
        by_code=MappingProxyType({aa.code: aa for aa in table}),
        name_only=re.compile(rf'({names}){RESIDUE_NOISE}', re.IGNORECASE),
        abbreviation_only=re.compile(rf'({abbrevs})', re.IGNORECASE),
        name_position=re.compile(rf'({names}){RESIDUE_NOISE}[\s-]*{POSITION}', re.IGNORECASE),
        # any three letters: an unknown abbreviation must fail closed, not fall through
        abbreviation_position=re.compile(rf'([A-Za-z]{{3}})[\s-]*{POSITION}'),
        # case-sensitive: lower-cased one-letter codes are ambiguous
        code_position=re.compile(rf'([A-Z]){POSITION}'),
    )


@lru_cache(maxsize=1)
def get_pattern_library() -> PatternLibrary:
    return build_pattern_library()


__all__ = [
    'AminoAcid', 'AMINO_ACIDS', 'PatternLibrary', 'build_pattern_library', 'get_pattern_library'
]
