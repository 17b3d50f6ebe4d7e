"""Frame records and the per-document frame graph.

A document arrives as three FRIES part trees (entities, events, sentences).
`build_frame_graph` indexes the frames we care about by their frame-id:

- sentence frames            -> SentenceFrame
- entity-mention frames      -> EntityMention
- every event frame          -> EventMention (with typed arguments)

Bad frames are logged and left out; they never abort the document.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from . import schema

log = logging.getLogger(__name__)


class FrameError(ValueError):
    """A raw frame is missing a required field or has the wrong shape."""


@dataclass(frozen=True)
class Xref:
    namespace: str
    id: str

    @property
    def identifier(self) -> str:
        return f'{self.namespace}:{self.id}'


@dataclass(frozen=True)
class ModificationRecord:
    type: Optional[str]
    evidence: Optional[str] = None
    negated: bool = False
    site_text: Optional[str] = None


@dataclass(frozen=True)
class SentenceFrame:
    id: str
    text: str


@dataclass(frozen=True)
class EntityMention:
    id: str
    text: str
    type: Optional[str]
    xrefs: Tuple[Xref, ...] = ()
    modifications: Tuple[ModificationRecord, ...] = ()

    @property
    def identifier(self) -> Optional[str]:
        return self.xrefs[0].identifier if self.xrefs else None


# -------------------- Arguments (closed sum type) --------------------

@dataclass(frozen=True)
class EntityArgument:
    role: str
    text: Optional[str]
    ref: str
    kind: str = field(default=schema.KIND_ENTITY, init=False)


@dataclass(frozen=True)
class EventArgument:
    role: str
    text: Optional[str]
    ref: str
    kind: str = field(default=schema.KIND_EVENT, init=False)


@dataclass(frozen=True)
class ComplexArgument:
    role: str
    text: Optional[str]
    refs: Tuple[Tuple[str, str], ...]  # (sub-role, ref) in source order
    kind: str = field(default=schema.KIND_COMPLEX, init=False)


ArgumentFrame = Union[EntityArgument, EventArgument, ComplexArgument]


@dataclass(frozen=True)
class EventMention:
    id: str
    type: str
    text: Optional[str] = None
    sign: str = schema.SIGN_POSITIVE
    subtype: Optional[str] = None
    regulation_type: Optional[str] = None
    is_direct: bool = False
    is_hypothesis: bool = False
    rule: Optional[str] = None
    sentence_ref: Optional[str] = None
    arguments: Tuple[ArgumentFrame, ...] = ()


@dataclass
class FrameGraph:
    sentences: Dict[str, SentenceFrame] = field(default_factory=dict)
    entities: Dict[str, EntityMention] = field(default_factory=dict)
    events: Dict[str, EventMention] = field(default_factory=dict)

    def stats(self) -> Dict[str, int]:
        return {
            'sentences': len(self.sentences),
            'entities': len(self.entities),
            'events': len(self.events),
        }


# -------------------- Raw frame parsing --------------------

def _frame_id(frame: Any) -> str:
    if not isinstance(frame, dict):
        raise FrameError(f'frame is not an object: {type(frame).__name__}')
    fid = frame.get('frame-id')
    if not isinstance(fid, str) or not fid:
        raise FrameError('missing frame-id')
    return fid


def _opt_str(value: Any) -> Optional[str]:
    if value is None or value == '':
        return None
    return value if isinstance(value, str) else str(value)


def extract_sign(frame: Mapping[str, Any]) -> str:
    """The is-negated flag means the reported interaction did not happen."""
    return schema.SIGN_NEGATIVE if frame.get('is-negated') else schema.SIGN_POSITIVE


def _list_field(frame: Dict[str, Any], key: str, fid: str) -> List[Any]:
    value = frame.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise FrameError(f'frame {fid}: {key} is not a list: {type(value).__name__}')
    return value


def parse_xrefs(raw: Any) -> Tuple[Xref, ...]:
    out: List[Xref] = []
    for xref in (raw if isinstance(raw, list) else []):
        if not isinstance(xref, dict) or not xref:
            continue
        ns, xid = xref.get('namespace'), xref.get('id')
        if ns and xid:
            out.append(Xref(str(ns), str(xid)))
    return tuple(out)


def parse_modifications(raw: Any) -> Tuple[ModificationRecord, ...]:
    out: List[ModificationRecord] = []
    for mod in (raw if isinstance(raw, list) else []):
        if not isinstance(mod, dict) or not mod:
            continue
        out.append(ModificationRecord(
            type=_opt_str(mod.get('type')),
            evidence=_opt_str(mod.get('evidence')),
            negated=bool(mod.get('negated')),
            site_text=_opt_str(mod.get('site')),
        ))
    return tuple(out)


def parse_argument(raw: Any) -> Optional[ArgumentFrame]:
    """Turn a raw argument into its typed form, or None if it carries no reference."""
    if not isinstance(raw, dict):
        return None
    role = _opt_str(raw.get('type')) or ''
    text = _opt_str(raw.get('text'))
    refs = raw.get('args')
    if isinstance(refs, dict) and refs:
        return ComplexArgument(role, text, tuple((str(k), str(v)) for k, v in refs.items() if v))
    ref = raw.get('arg')
    if isinstance(ref, str) and ref:
        if raw.get('argument-type') == schema.KIND_EVENT:
            return EventArgument(role, text, ref)
        return EntityArgument(role, text, ref)
    return None


def parse_sentence(frame: Any) -> SentenceFrame:
    fid = _frame_id(frame)
    text = frame.get('text')
    if not isinstance(text, str):
        raise FrameError(f'sentence {fid} has no text')
    return SentenceFrame(fid, text)


def parse_entity(frame: Any) -> EntityMention:
    fid = _frame_id(frame)
    return EntityMention(
        id=fid,
        text=_opt_str(frame.get('text')) or '',
        type=_opt_str(frame.get('type')),
        xrefs=parse_xrefs(_list_field(frame, 'xrefs', fid)),
        modifications=parse_modifications(_list_field(frame, 'modifications', fid)),
    )


def parse_event(frame: Any) -> EventMention:
    fid = _frame_id(frame)
    ev_type = _opt_str(frame.get('type'))
    if not ev_type:
        raise FrameError(f'event {fid} has no type')
    args: List[ArgumentFrame] = []
    for raw in _list_field(frame, 'arguments', fid):
        arg = parse_argument(raw)
        if arg is None:
            log.warning('Dropping argument without reference in event %s: %r', fid, raw)
            continue
        args.append(arg)
    return EventMention(
        id=fid,
        type=ev_type,
        text=_opt_str(frame.get('text')),
        sign=extract_sign(frame),
        subtype=_opt_str(frame.get('subtype')),
        regulation_type=_opt_str(frame.get('regulation-type')),
        is_direct=bool(frame.get('is-direct')),
        is_hypothesis=bool(frame.get('is-hypothesis')),
        rule=_opt_str(frame.get('found-by')),
        sentence_ref=_opt_str(frame.get('sentence')),
        arguments=tuple(args),
    )


def iter_frames(part: Any):
    frames = part.get('frames') if isinstance(part, dict) else None
    if not isinstance(frames, list):
        log.warning('Part document has no frames array; treating it as empty')
        return
    yield from frames


def _index(target: Dict[str, Any], frames, parser, keep=None, kind: str = 'frame') -> None:
    for frame in frames:
        if keep is not None and not (isinstance(frame, dict) and frame.get('frame-type') == keep):
            continue
        try:
            parsed = parser(frame)
        except FrameError as e:
            log.warning('Skipping malformed %s frame: %s', kind, e)
            continue
        if parsed.id in target:
            log.debug('Duplicate %s frame id %s; keeping the later one', kind, parsed.id)
        target[parsed.id] = parsed


def build_frame_graph(entities: Any, events: Any, sentences: Any) -> FrameGraph:
    graph = FrameGraph()
    _index(graph.sentences, iter_frames(sentences), parse_sentence,
           keep=schema.SENTENCE_FRAME_TYPE, kind='sentence')
    _index(graph.entities, iter_frames(entities), parse_entity,
           keep=schema.ENTITY_FRAME_TYPE, kind='entity')
    _index(graph.events, iter_frames(events), parse_event, kind='event')
    log.debug('Frame graph built: %s', graph.stats())
    return graph


__all__ = [
    'FrameError', 'Xref', 'ModificationRecord', 'SentenceFrame', 'EntityMention',
    'EntityArgument', 'EventArgument', 'ComplexArgument', 'ArgumentFrame', 'EventMention',
    'FrameGraph', 'extract_sign', 'parse_xrefs', 'parse_modifications', 'parse_argument',
    'parse_sentence', 'parse_entity', 'parse_event', 'build_frame_graph'
]
