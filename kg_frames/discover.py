"""Discover reader output files and group them into per-document triples.

Reader output lives in directory trees of JSON part files named either
`<basename>.<type>.json` or `<basename>.uaz.<type>.json`, with type one of
entities / events / sentences. Files sharing a basename form one document.
The document id is the basename, optionally mapped to a PMC id through a
gzipped two-column TSV (basename, PMC id).
"""
from __future__ import annotations
import csv
import gzip
import logging
import os
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Mapping, Optional

from . import config

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocumentParts:
    doc_id: str
    directory: Path
    files: Dict[str, Path]  # part type -> validated readable file


def accept(filename: str) -> bool:
    return filename.endswith(config.FILE_SUFFIX)


def extract_doc_type(filename: str) -> Optional[str]:
    """Part type of a file name, or None when it does not follow the naming scheme."""
    parts = filename.split('.')
    if len(parts) < 3:
        return None
    ftype = parts[2] if len(parts) > 3 else parts[1]
    return ftype if ftype in config.PART_TYPES else None


def file_basename(filename: str) -> str:
    return filename.split('.', 1)[0]


def good_directory(path: Path, writeable: bool = False) -> bool:
    return (path.is_dir() and os.access(path, os.R_OK)
            and (not writeable or os.access(path, os.W_OK)))


def good_file(directory: Path, filename: str) -> Optional[Path]:
    path = directory / filename
    if path.is_file() and os.access(path, os.R_OK):
        return path
    return None


def load_pmc_file_map(path: Path) -> Dict[str, str]:
    """Read basename -> PMC id pairs; lines without exactly two fields are ignored."""
    mapping: Dict[str, str] = {}
    with gzip.open(path, 'rt', encoding='utf-8', newline='') as f:
        for fields in csv.reader(f, delimiter='\t'):
            if len(fields) == 2:
                mapping[fields[0]] = fields[1]
    log.info('Read %d filename mappings from %s', len(mapping), path)
    return mapping


def map_docs_to_files(directory: Path, pmc_map: Optional[Mapping[str, str]] = None) -> Dict[str, Dict]:
    """docId -> {'basename': ..., 'parts': {part type -> filename}} for one directory."""
    grouped: Dict[str, List[str]] = defaultdict(list)
    for entry in sorted(os.listdir(directory)):
        if accept(entry) and (directory / entry).is_file():
            grouped[file_basename(entry)].append(entry)
    docs: Dict[str, Dict] = {}
    for basename, filenames in grouped.items():
        doc_id = (pmc_map or {}).get(basename, basename)
        parts = {}
        for filename in filenames:
            doc_type = extract_doc_type(filename)
            if doc_type:
                parts[doc_type] = filename
        if doc_id and parts:
            docs[doc_id] = {'basename': basename, 'parts': parts}
    return docs


def validate_files(directory: Path, basename: str, parts: Mapping[str, str],
                   verbose: bool = False) -> Optional[Dict[str, Path]]:
    """Checked part map, or None unless every expected part is a readable file."""
    valid: Dict[str, Path] = {}
    for doc_type, filename in parts.items():
        path = good_file(directory, filename)
        if path is not None:
            valid[doc_type] = path
        elif verbose:
            log.error('%s is not found, not a file, or not readable.', filename)
    expected = len(config.PART_TYPES)
    if len(valid) != expected:
        if verbose:
            log.error('%s does not have the expected number (%d) of JSON part files.', basename, expected)
        return None
    return valid


def iter_directory(directory: Path, pmc_map: Optional[Mapping[str, str]] = None,
                   verbose: bool = False) -> Iterator[DocumentParts]:
    for doc_id, info in map_docs_to_files(directory, pmc_map).items():
        files = validate_files(directory, info['basename'], info['parts'], verbose)
        if files:
            yield DocumentParts(doc_id, directory, files)


def iter_documents(top_dir: Path, pmc_map: Optional[Mapping[str, str]] = None,
                   verbose: bool = False) -> Iterator[DocumentParts]:
    """Documents in top_dir and, recursively, in every readable subdirectory."""
    yield from iter_directory(top_dir, pmc_map, verbose)
    for sub in sorted(p for p in top_dir.rglob('*') if p.is_dir()):
        if good_directory(sub):
            yield from iter_directory(sub, pmc_map, verbose)


__all__ = [
    'DocumentParts', 'accept', 'extract_doc_type', 'file_basename', 'good_directory', 'good_file',
    'load_pmc_file_map', 'map_docs_to_files', 'validate_files', 'iter_directory', 'iter_documents'
]
