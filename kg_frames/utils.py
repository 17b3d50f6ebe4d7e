from __future__ import annotations
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from . import config


def init_logging(verbose: bool = False, level: Optional[str] = None) -> None:
    """Configure stderr logging for CLI runs.

    An explicit level (argument or KG_FRAMES_LOG_LEVEL) wins over the verbose flag.
    """
    level = level or config.CONFIG['logging']['level']
    if level:
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            resolved = logging.INFO
    else:
        resolved = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=resolved,
        format=config.CONFIG['logging']['format'],
        datefmt=config.CONFIG['logging']['datefmt'],
        stream=sys.stderr,
    )


def load_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding='utf-8'))


def dump_json(obj: Any) -> str:
    return json.dumps(
        obj,
        ensure_ascii=config.CONFIG['output']['ensure_ascii'],
        indent=config.JSON_INDENT,
    )


def save_json(obj: Any, path: Path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_json(obj), encoding='utf-8')


__all__ = ['init_logging', 'load_json', 'dump_json', 'save_json']
