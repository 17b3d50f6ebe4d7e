"""Builders for raw FRIES frames used across the tests."""
from __future__ import annotations
from typing import Any, Dict, List, Optional

from kg_frames.frames import build_frame_graph


def entity(fid: str, text: str, type_: str = 'gene-or-gene-product', xrefs=None, mods=None,
           frame_type: str = 'entity-mention') -> Dict[str, Any]:
    frame = {'frame-id': fid, 'frame-type': frame_type, 'text': text, 'type': type_}
    if xrefs is not None:
        frame['xrefs'] = [{'object-type': 'db-reference', 'namespace': ns, 'id': xid} for ns, xid in xrefs]
    if mods is not None:
        frame['modifications'] = mods
    return frame


def sentence(fid: str, text: str) -> Dict[str, Any]:
    return {'frame-id': fid, 'frame-type': 'sentence', 'text': text}


def arg(role: str, ref: str, kind: str = 'entity', text: Optional[str] = None) -> Dict[str, Any]:
    return {'object-type': 'argument', 'type': role, 'argument-type': kind, 'text': text or ref, 'arg': ref}


def complex_arg(role: str, refs: Dict[str, str], text: str = 'complex') -> Dict[str, Any]:
    return {'object-type': 'argument', 'type': role, 'argument-type': 'complex', 'text': text, 'args': refs}


def event(fid: str, type_: str, args: List[Dict[str, Any]], text: Optional[str] = None,
          sentence_ref: Optional[str] = None, **flags) -> Dict[str, Any]:
    frame = {'frame-id': fid, 'frame-type': 'event-mention', 'type': type_,
             'text': text or f'{type_} event', 'arguments': args}
    if sentence_ref:
        frame['sentence'] = sentence_ref
    for key, value in flags.items():
        frame[key.replace('_', '-')] = value
    return frame


def part(frames) -> Dict[str, Any]:
    return {'frames': list(frames)}


def parts(entities=(), events=(), sentences=()) -> Dict[str, Any]:
    return {'entities': part(entities), 'events': part(events), 'sentences': part(sentences)}


def graph(entities=(), events=(), sentences=()):
    return build_frame_graph(part(entities), part(events), part(sentences))
