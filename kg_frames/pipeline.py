"""Batch conversion: discovered documents -> one output JSON per document.

Documents are independent; with workers > 1 they are spread over a process
pool. A document whose part files cannot be read or decoded is logged and
skipped, the rest of the batch continues.
"""
from __future__ import annotations
import logging
import time
from concurrent.futures import ProcessPoolExecutor
from pathlib import Path
from typing import Any, Dict, Iterable, List

from tqdm import tqdm

from . import schema
from .assemble import convert_parts, write_document
from .discover import DocumentParts
from .utils import load_json

log = logging.getLogger(__name__)


def load_parts(doc: DocumentParts) -> Dict[str, Any]:
    return {doc_type: load_json(path) for doc_type, path in doc.files.items()}


def convert_document(doc: DocumentParts, out_dir: Path) -> Dict[str, Any]:
    t0 = time.time()
    document = convert_parts(doc.doc_id, load_parts(doc))
    path = write_document(out_dir, doc.doc_id, document)
    return {
        'doc_id': doc.doc_id,
        'output': str(path),
        'relations': len(document[schema.EVENTS]),
        'seconds': round(time.time() - t0, 3),
    }


def process_document(doc: DocumentParts, out_dir: Path) -> Dict[str, Any]:
    try:
        return convert_document(doc, out_dir)
    except (OSError, ValueError) as e:
        log.error('%s: conversion failed (%s): %s', doc.doc_id, doc.directory, e)
        return {'doc_id': doc.doc_id, 'error': str(e)}


def _process_args(args) -> Dict[str, Any]:
    return process_document(*args)


def process_documents(docs: Iterable[DocumentParts], out_dir: Path, workers: int = 1,
                      progress: bool = True) -> List[Dict[str, Any]]:
    docs = list(docs)
    out_dir.mkdir(parents=True, exist_ok=True)
    bar = tqdm(total=len(docs), desc='documents', unit='doc', disable=not progress)
    results: List[Dict[str, Any]] = []
    try:
        if workers > 1 and len(docs) > 1:
            with ProcessPoolExecutor(max_workers=workers) as pool:
                for res in pool.map(_process_args, [(d, out_dir) for d in docs]):
                    results.append(res)
                    bar.update(1)
        else:
            for doc in docs:
                results.append(process_document(doc, out_dir))
                bar.update(1)
    finally:
        bar.close()
    return results


def summarize(results: List[Dict[str, Any]]) -> Dict[str, Any]:
    ok = [r for r in results if 'error' not in r]
    return {
        'processed': len(ok),
        'failed': len(results) - len(ok),
        'relations': sum(r['relations'] for r in ok),
        'seconds': round(sum(r['seconds'] for r in ok), 3),
    }


__all__ = ['load_parts', 'convert_document', 'process_document', 'process_documents', 'summarize']
