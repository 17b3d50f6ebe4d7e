"""Central configuration for frame conversion.

Defaults live in CONFIG; a handful of deployment knobs can be overridden from
the environment (a local .env file is honoured through python-dotenv).
"""
from __future__ import annotations
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

CONFIG = {
    'discovery': {
        # Part documents expected for every paper (one file each)
        'part_types': ['entities', 'events', 'sentences'],
        'file_suffix': '.json',
        # Gzipped TSV: <file basename>\t<PMC id>
        'pmc_map_file': os.getenv('KG_FRAMES_MAP_FILE', 'PMC-files_list.tsv.gz'),
    },
    'output': {
        'out_dir': os.getenv('KG_FRAMES_OUT_DIR', 'frames_out'),
        'indent': 2,
        'ensure_ascii': False,
    },
    'transform': {
        # Copy the reader rule name (found-by) into each predicate
        'include_rule': False,
        # Sub-role prefix used when a complex argument stands in for an entity
        'complex_theme_prefix': 'theme',
        # Nested controller/controlled events followed before giving up
        'max_nesting_depth': 64,
    },
    'pipeline': {
        'workers': int(os.getenv('KG_FRAMES_WORKERS', '1')),
    },
    'logging': {
        'level': os.getenv('KG_FRAMES_LOG_LEVEL'),
        'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        'datefmt': '%Y-%m-%d %H:%M:%S',
    },
}

# === Shortcuts so modules do not dig through the dict ===
PART_TYPES = tuple(CONFIG['discovery']['part_types'])
FILE_SUFFIX = CONFIG['discovery']['file_suffix']
PMC_MAP_FILE = Path(CONFIG['discovery']['pmc_map_file'])
OUT_DIR = Path(CONFIG['output']['out_dir'])
JSON_INDENT = CONFIG['output']['indent']
INCLUDE_RULE = CONFIG['transform']['include_rule']
COMPLEX_THEME_PREFIX = CONFIG['transform']['complex_theme_prefix']
MAX_NESTING_DEPTH = CONFIG['transform']['max_nesting_depth']
WORKERS = CONFIG['pipeline']['workers']

__all__ = [
    'CONFIG', 'PART_TYPES', 'FILE_SUFFIX', 'PMC_MAP_FILE', 'OUT_DIR', 'JSON_INDENT',
    'INCLUDE_RULE', 'COMPLEX_THEME_PREFIX', 'MAX_NESTING_DEPTH', 'WORKERS'
]
