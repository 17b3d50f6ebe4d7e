"""Event transformation: one event frame -> zero or more output relations.

Dispatch is on the event type (see RULES). Activation and regulation events
may point at other events through their controller/controlled arguments;
those are transformed recursively and the nested relations stand in as
participants. `visited` carries the event ids on the current recursion path
so a cyclic chain stops instead of recursing forever, and its size is capped
by config.MAX_NESTING_DEPTH so a long acyclic chain cannot exhaust the stack.

Fan-out for control events: one relation per resolved controller, every one
of them sharing the first resolved controlled participant.
"""
from __future__ import annotations
import logging
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Tuple

from . import config
from . import schema
from .frames import (
    ComplexArgument, EntityArgument, EntityMention, EventArgument, EventMention, FrameGraph,
    ModificationRecord,
)
from .resolver import (
    args_by_role, first_arg_by_role, resolve_complex_entities, resolve_entities, resolve_event,
    resolve_sentence,
)
from .sites import annotate_site

log = logging.getLogger(__name__)

Relation = Dict[str, Any]


# -------------------- participant / predicate builders --------------------

def modification_info(mod: ModificationRecord) -> Dict[str, Any]:
    out: Dict[str, Any] = {'modification_type': mod.type}
    if mod.evidence:
        out['evidence'] = mod.evidence
    if mod.negated:
        out['negated'] = True
    if mod.site_text:
        out['site'] = annotate_site(mod.site_text).as_dict()
    return out


def entity_participant(entity: EntityMention) -> Dict[str, Any]:
    out: Dict[str, Any] = {'entity_text': entity.text}
    if entity.type:
        out['entity_type'] = entity.type
    if entity.xrefs:
        out['identifier'] = entity.identifier
        out['xrefs'] = [x.identifier for x in entity.xrefs]
    if entity.modifications:
        out['modifications'] = [modification_info(m) for m in entity.modifications]
    return out


def build_predicate(event: EventMention) -> Dict[str, Any]:
    pred: Dict[str, Any] = {
        'type': schema.output_type(event.type),
        'event_text': event.text or '',
        'sign': event.sign,
        'is_direct': event.is_direct,
        'is_hypothesis': event.is_hypothesis,
        'negative_information': event.sign == schema.SIGN_NEGATIVE,
    }
    if event.subtype:
        pred['sub_type'] = event.subtype
    if event.regulation_type:
        pred['regulation_type'] = event.regulation_type
    if config.INCLUDE_RULE and event.rule:
        pred['rule'] = event.rule
    return pred


def event_sites(graph: FrameGraph, event: EventMention) -> List[Dict[str, Any]]:
    sites = resolve_entities(graph, args_by_role(event, schema.ROLE_SITE))
    return [annotate_site(s.text, s.identifier).as_dict() for s in sites]


def make_relation(predicate: Dict[str, Any], sentence: str, sites: List[Dict[str, Any]],
                  participants: Dict[str, Any]) -> Relation:
    rel: Relation = {k: v for k, v in participants.items() if v is not None}
    rel[schema.PREDICATE] = predicate
    if sites:
        rel[schema.SITES] = sites
    rel[schema.SENTENCE] = sentence
    return rel


# -------------------- control events (recursive) --------------------

def resolve_control_side(doc_id: str, graph: FrameGraph, event: EventMention, role: str,
                         path: FrozenSet[str]) -> Tuple[List[Any], Optional[str]]:
    """Participants for the controller or controlled side, plus any nested subtype."""
    arg = first_arg_by_role(event, role)
    if arg is None:
        return [], None
    if isinstance(arg, EventArgument):
        nested = resolve_event(graph, arg.ref)
        if nested is None:
            log.debug('%s: %s of event %s points at missing event %s', doc_id, role, event.id, arg.ref)
            return [], None
        if nested.id in path:
            log.warning('%s: cyclic %s chain at event %s -> %s; not following', doc_id, role, event.id, nested.id)
            return [], None
        return transform_event(doc_id, graph, nested, path), nested.subtype
    if isinstance(arg, ComplexArgument):
        ents = resolve_complex_entities(graph, arg, config.COMPLEX_THEME_PREFIX)
        return [entity_participant(e) for e in ents], None
    if isinstance(arg, EntityArgument):
        return [entity_participant(e) for e in resolve_entities(graph, [arg])], None
    return [], None


def transform_control(doc_id, graph, event, predicate, sentence, sites, path) -> List[Relation]:
    controlled, ctrld_subtype = resolve_control_side(doc_id, graph, event, schema.ROLE_CONTROLLED, path)
    controllers, ctlr_subtype = resolve_control_side(doc_id, graph, event, schema.ROLE_CONTROLLER, path)
    nested_subtype = ctrld_subtype or ctlr_subtype
    if nested_subtype and 'sub_type' not in predicate:
        predicate['sub_type'] = nested_subtype
    patient = controlled[0] if controlled else None
    return [
        make_relation(predicate, sentence, sites, {
            schema.PARTICIPANT_A: agent,
            schema.PARTICIPANT_B: patient,
        })
        for agent in controllers
    ]


# -------------------- flat event types --------------------

def transform_binding(doc_id, graph, event, predicate, sentence, sites, path) -> List[Relation]:
    themes: Dict[str, EntityMention] = {}
    for ent in resolve_entities(graph, args_by_role(event, schema.ROLE_THEME)):
        themes.setdefault(ent.id, ent)
    if len(themes) != 2:
        log.debug('%s: binding %s has %d distinct themes; skipped', doc_id, event.id, len(themes))
        return []
    a, b = themes.values()
    return [
        make_relation(predicate, sentence, sites, {
            schema.PARTICIPANT_A: entity_participant(a),
            schema.PARTICIPANT_B: entity_participant(b),
        }),
        make_relation(dict(predicate), sentence, list(sites), {
            schema.PARTICIPANT_A: entity_participant(b),
            schema.PARTICIPANT_B: entity_participant(a),
        }),
    ]


def _first_entity(graph: FrameGraph, event: EventMention, role: str) -> Optional[EntityMention]:
    ents = resolve_entities(graph, args_by_role(event, role))
    return ents[0] if ents else None


def transform_translocation(doc_id, graph, event, predicate, sentence, sites, path) -> List[Relation]:
    theme = _first_entity(graph, event, schema.ROLE_THEME)
    source = _first_entity(graph, event, schema.ROLE_SOURCE)
    destination = _first_entity(graph, event, schema.ROLE_DESTINATION)
    if theme is None or destination is None:
        return []
    return [make_relation(predicate, sentence, sites, {
        schema.PARTICIPANT_A: entity_participant(theme),
        schema.TO_LOCATION: entity_participant(destination),
        schema.FROM_LOCATION: entity_participant(source) if source else None,
    })]


def transform_modification(doc_id, graph, event, predicate, sentence, sites, path) -> List[Relation]:
    themes = resolve_entities(graph, args_by_role(event, schema.ROLE_THEME))
    if not themes:
        return []
    return [make_relation(predicate, sentence, sites, {
        schema.PARTICIPANT_B: entity_participant(themes[0]),
    })]


def transform_generic(doc_id, graph, event, predicate, sentence, sites, path) -> List[Relation]:
    args = [a for a in event.arguments if a.role != schema.ROLE_SITE]
    ents = resolve_entities(graph, args)
    return [make_relation(predicate, sentence, sites, {
        schema.PARTICIPANT_A: entity_participant(ents[0]) if len(ents) > 0 else None,
        schema.PARTICIPANT_B: entity_participant(ents[1]) if len(ents) > 1 else None,
    })]


RULES: Dict[str, Callable[..., List[Relation]]] = {
    **{ev_type: transform_control for ev_type in schema.CONTROL_EVENT_TYPES},
    'complex-assembly': transform_binding,
    'translocation': transform_translocation,
    'protein-modification': transform_modification,
}


def transform_event(doc_id: str, graph: FrameGraph, event: EventMention,
                    visited: FrozenSet[str] = frozenset()) -> List[Relation]:
    if event.id in visited:
        log.warning('%s: event %s already on the resolution path; stopping', doc_id, event.id)
        return []
    if len(visited) >= config.MAX_NESTING_DEPTH:
        log.warning('%s: event %s nested deeper than %d levels; stopping',
                    doc_id, event.id, config.MAX_NESTING_DEPTH)
        return []
    path = visited | {event.id}
    predicate = build_predicate(event)
    sentence = resolve_sentence(graph, event.sentence_ref) or ''
    sites = event_sites(graph, event)
    rule = RULES.get(event.type, transform_generic)
    return rule(doc_id, graph, event, predicate, sentence, sites, path)


__all__ = [
    'Relation', 'modification_info', 'entity_participant', 'build_predicate', 'event_sites',
    'make_relation', 'resolve_control_side', 'transform_control', 'transform_binding',
    'transform_translocation', 'transform_modification', 'transform_generic', 'RULES',
    'transform_event'
]
