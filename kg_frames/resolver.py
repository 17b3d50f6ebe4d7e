"""Role lookup and reference dereferencing over a FrameGraph.

Every lookup tolerates dangling references: an identifier missing from the
graph resolves to None (or is dropped from a list), it never raises.
"""
from __future__ import annotations
import logging
from typing import Iterable, List, Optional

from .frames import (
    ArgumentFrame, ComplexArgument, EntityArgument, EntityMention,
    EventMention, FrameGraph,
)

log = logging.getLogger(__name__)


def args_by_role(event: EventMention, role: str) -> List[ArgumentFrame]:
    return [arg for arg in event.arguments if arg.role == role]


def first_arg_by_role(event: EventMention, role: str) -> Optional[ArgumentFrame]:
    for arg in event.arguments:
        if arg.role == role:
            return arg
    return None


def resolve_entity(graph: FrameGraph, ref: Optional[str]) -> Optional[EntityMention]:
    if not ref:
        return None
    ent = graph.entities.get(ref)
    if ent is None:
        log.debug('Dangling entity reference %s', ref)
    return ent


def resolve_event(graph: FrameGraph, ref: Optional[str]) -> Optional[EventMention]:
    if not ref:
        return None
    ev = graph.events.get(ref)
    if ev is None:
        log.debug('Dangling event reference %s', ref)
    return ev


def resolve_sentence(graph: FrameGraph, ref: Optional[str]) -> Optional[str]:
    if not ref:
        return None
    sent = graph.sentences.get(ref)
    return sent.text if sent else None


def resolve_entities(graph: FrameGraph, args: Iterable[ArgumentFrame]) -> List[EntityMention]:
    """Entity-kind arguments only; unresolved ones are dropped, order kept."""
    out = []
    for arg in args:
        if not isinstance(arg, EntityArgument):
            continue
        ent = resolve_entity(graph, arg.ref)
        if ent is not None:
            out.append(ent)
    return out


def refs_by_prefix(arg: ArgumentFrame, prefix: str) -> List[str]:
    if not isinstance(arg, ComplexArgument):
        return []
    return [ref for sub_role, ref in arg.refs if sub_role.startswith(prefix)]


def resolve_complex_entities(graph: FrameGraph, arg: ArgumentFrame, prefix: str) -> List[EntityMention]:
    """Entities behind a compound argument, e.g. a controller that is a complex of A and B."""
    out = []
    for ref in refs_by_prefix(arg, prefix):
        ent = resolve_entity(graph, ref)
        if ent is not None:
            out.append(ent)
    return out


__all__ = [
    'args_by_role', 'first_arg_by_role', 'resolve_entity', 'resolve_event', 'resolve_sentence',
    'resolve_entities', 'refs_by_prefix', 'resolve_complex_entities'
]
