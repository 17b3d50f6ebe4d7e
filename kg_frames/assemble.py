"""Assemble the per-document output from transformed events."""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping

from . import schema
from .frames import FrameGraph, build_frame_graph
from .transform import transform_event
from .utils import save_json

log = logging.getLogger(__name__)


def get_metadata(doc_id: str) -> Dict[str, Any]:
    return {schema.DOC_ID: doc_id}


def get_events(doc_id: str, graph: FrameGraph) -> List[Dict[str, Any]]:
    out_events: List[Dict[str, Any]] = []
    for event in graph.events.values():
        out_events.extend(transform_event(doc_id, graph, event))  # 1 -> N
    return out_events


def assemble_document(doc_id: str, graph: FrameGraph) -> Dict[str, Any]:
    doc = get_metadata(doc_id)
    doc[schema.EVENTS] = get_events(doc_id, graph)
    log.debug('%s: %d events -> %d relations', doc_id, len(graph.events), len(doc[schema.EVENTS]))
    return doc


def convert_parts(doc_id: str, parts: Mapping[str, Any]) -> Dict[str, Any]:
    """Build the frame graph from the three parsed part trees and assemble the output."""
    graph = build_frame_graph(parts.get('entities'), parts.get('events'), parts.get('sentences'))
    return assemble_document(doc_id, graph)


def output_path(out_dir: Path, doc_id: str) -> Path:
    return out_dir / f'{doc_id}.json'


def write_document(out_dir: Path, doc_id: str, document: Dict[str, Any]) -> Path:
    path = output_path(out_dir, doc_id)
    save_json(document, path)
    return path


__all__ = [
    'get_metadata', 'get_events', 'assemble_document', 'convert_parts', 'output_path',
    'write_document'
]
