"""Output schema for converted documents.

Key names here are consumed by the downstream loader; change them only
together with that program. Event types and argument roles mirror the
labels emitted by the reader in its FRIES frames.
"""
from __future__ import annotations
from typing import Dict

# -------------------- Document / relation keys --------------------
DOC_ID = 'docId'
EVENTS = 'events'

PARTICIPANT_A = 'participant_a'
PARTICIPANT_B = 'participant_b'
TO_LOCATION = 'to_location'
FROM_LOCATION = 'from_location'
PREDICATE = 'predicate'
SITES = 'sites'
SENTENCE = 'sentence'

# -------------------- Event types --------------------
EVENT_TYPES: Dict[str, Dict[str, object]] = {
    'activation': {
        'description': 'Controller increases the activity of the controlled participant.',
        'output_type': 'activation',
    },
    'regulation': {
        'description': 'Controller changes the amount or state of the controlled participant.',
        'output_type': 'regulation',
    },
    'complex-assembly': {
        'description': 'Two participants bind; emitted in both directions.',
        'output_type': 'binds',
        'symmetric': True,
    },
    'translocation': {
        'description': 'Theme moves from an optional source to a destination location.',
        'output_type': 'translocation',
    },
    'protein-modification': {
        'description': 'Post-translational modification of the theme (see subtype).',
        'output_type': 'protein-modification',
    },
}

CONTROL_EVENT_TYPES = {'activation', 'regulation'}


def output_type(event_type: str) -> str:
    info = EVENT_TYPES.get(event_type)
    return info['output_type'] if info else event_type


# -------------------- Argument roles --------------------
ROLE_CONTROLLER = 'controller'
ROLE_CONTROLLED = 'controlled'
ROLE_THEME = 'theme'
ROLE_SITE = 'site'
ROLE_SOURCE = 'source'
ROLE_DESTINATION = 'destination'

# -------------------- Argument kinds --------------------
KIND_ENTITY = 'entity'
KIND_EVENT = 'event'
KIND_COMPLEX = 'complex'

SIGN_POSITIVE = 'positive'
SIGN_NEGATIVE = 'negative'

# -------------------- Raw frame types kept --------------------
ENTITY_FRAME_TYPE = 'entity-mention'
SENTENCE_FRAME_TYPE = 'sentence'

__all__ = [
    'DOC_ID', 'EVENTS', 'PARTICIPANT_A', 'PARTICIPANT_B', 'TO_LOCATION', 'FROM_LOCATION',
    'PREDICATE', 'SITES', 'SENTENCE', 'EVENT_TYPES', 'CONTROL_EVENT_TYPES', 'output_type',
    'ROLE_CONTROLLER', 'ROLE_CONTROLLED', 'ROLE_THEME', 'ROLE_SITE', 'ROLE_SOURCE',
    'ROLE_DESTINATION', 'KIND_ENTITY', 'KIND_EVENT', 'KIND_COMPLEX',
    'SIGN_POSITIVE', 'SIGN_NEGATIVE', 'ENTITY_FRAME_TYPE', 'SENTENCE_FRAME_TYPE'
]
