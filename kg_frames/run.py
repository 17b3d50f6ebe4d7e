"""Command line entry point.

Example:
python -m kg_frames.run -m -v -o frames_out reach_output/
"""
from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import config
from .discover import good_directory, iter_documents, load_pmc_file_map
from .pipeline import process_documents, summarize
from .utils import init_logging

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog='kg-frames',
        description='Convert FRIES entity/event/sentence frame files into relation documents.')
    p.add_argument('directory', type=Path, help='Top directory holding reader JSON part files')
    p.add_argument('-m', '--map', action='store_true',
                   help='Map input filenames to PMC IDs (default: no mapping needed).')
    p.add_argument('--map-file', type=Path, default=config.PMC_MAP_FILE,
                   help='Gzipped TSV of basename -> PMC id used with --map')
    p.add_argument('-o', '--out-dir', type=Path, default=config.OUT_DIR,
                   help='Directory receiving <docId>.json outputs')
    p.add_argument('-w', '--workers', type=int, default=config.WORKERS,
                   help='Documents converted in parallel (processes)')
    p.add_argument('--no-progress', action='store_true', help='Hide the progress bar')
    p.add_argument('-v', '--verbose', action='store_true', help='Run in verbose mode (default: non-verbose).')
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    init_logging(args.verbose)

    directory: Path = args.directory
    if not good_directory(directory):
        log.error('%s is not a readable directory', directory)
        return 1

    pmc_map = None
    if args.map:
        log.info('Reading filename mapping file: %s...', args.map_file)
        try:
            pmc_map = load_pmc_file_map(args.map_file)
        except OSError as e:
            log.error('Cannot read filename mapping file %s: %s', args.map_file, e)
            return 1

    log.info('Processing result files from %s...', directory)
    docs = list(iter_documents(directory, pmc_map, verbose=args.verbose))
    results = process_documents(docs, args.out_dir, workers=args.workers,
                                progress=not args.no_progress)
    stats = summarize(results)
    log.info('Processed %d results (%d failed, %d relations) into %s',
             stats['processed'], stats['failed'], stats['relations'], args.out_dir)
    return 0


if __name__ == '__main__':  # pragma: no cover
    sys.exit(main())
