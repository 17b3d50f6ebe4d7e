import pytest

from kg_frames.amino_acids import AMINO_ACIDS, get_pattern_library
from kg_frames.sites import SiteInfo, annotate_site, correct_identifier, parse_site_text


SERINE_ID = 'chebi:CHEBI:17115'


def test_ser123_scenario():
    site = annotate_site('Ser123')
    assert site.amino_acid == 'serine'
    assert site.position == '123'
    assert site.identifier == SERINE_ID
    assert site.as_dict() == {
        'site_text': 'Ser123', 'identifier': SERINE_ID, 'amino_acid': 'serine', 'position': '123'
    }


@pytest.mark.parametrize('aa', AMINO_ACIDS, ids=lambda aa: aa.name)
def test_every_spelling_maps_to_same_name(aa):
    spellings = [
        aa.name, aa.name.upper(), f'{aa.name} 45', f'{aa.name} residue 45',
        aa.abbreviation, aa.abbreviation.capitalize(), f'{aa.abbreviation.capitalize()}45',
        f'{aa.abbreviation.capitalize()}-45', f'{aa.code}45',
    ]
    for text in spellings:
        name, _ = parse_site_text(text)
        assert name == aa.name, text


@pytest.mark.parametrize('text, expected', [
    ('serine', ('serine', None)),
    ('lysine residues', ('lysine', None)),
    ('Tyr', ('tyrosine', None)),
    ('serine 45', ('serine', '45')),
    ('threonine residue 308', ('threonine', '308')),
    ('aspartic acid 12', ('aspartic acid', '12')),
    ('Thr-202', ('threonine', '202')),
    ('T202', ('threonine', '202')),
    ('Y15', ('tyrosine', '15')),
])
def test_cascade(text, expected):
    assert parse_site_text(text) == expected


@pytest.mark.parametrize('text', [
    'Xyz12',      # unknown abbreviation with a position fails closed
    'B12',        # not a one-letter amino-acid code
    's473',       # lower-case one-letter codes are not trusted
    'kinase domain',
    '',
    '   ',
])
def test_unparseable_sites_are_empty(text):
    assert parse_site_text(text) == (None, None)
    site = annotate_site(text, identifier='uniprot:P12345')
    assert site.amino_acid is None
    assert site.position is None
    assert site.identifier == 'uniprot:P12345'


def test_correction_overrides_upstream_grounding():
    site = annotate_site('Lys27', identifier='uniprot:Q99999')
    assert site.identifier == 'chebi:CHEBI:18019'


def test_correction_sets_identifier_when_absent():
    site = annotate_site('glycine')
    assert site.identifier == 'chebi:CHEBI:15428'


def test_correct_identifier_leaves_unidentified_site_alone():
    site = SiteInfo(site_text='loop', identifier='go:GO:0005634')
    assert correct_identifier(site) is site


def test_pattern_library_is_shared():
    assert get_pattern_library() is get_pattern_library()
    with pytest.raises(TypeError):
        get_pattern_library().by_name['serine'] = None
