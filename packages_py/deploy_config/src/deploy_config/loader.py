"""Load deployment config documents from YAML or JSON5 files."""

import json
import logging
import os
from typing import Any, Dict

import json5
import yaml

logger = logging.getLogger(__name__)

YAML_SUFFIXES = ('.yaml', '.yml')


def load_document(path: str) -> Dict[str, Any]:
    """Read and parse a config file. YAML by suffix, JSON5 otherwise."""
    _, ext = os.path.splitext(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            if ext.lower() in YAML_SUFFIXES:
                data = yaml.safe_load(f)
            else:
                text = f.read()
                data = json5.loads(text) if text.strip() else None
    except yaml.YAMLError as e:
        logger.error(f"YAML parsing error in {path}: {e}")
        raise
    except ValueError as e:
        logger.error(f"JSON5 parsing error in {path}: {e}")
        raise
    except OSError as e:
        logger.error(f"Error loading {path}: {e}")
        raise

    logger.debug(f"Loaded config document: {path}")
    return data if data is not None else {}


def convert_document(path: str, minify: bool = False) -> str:
    """Render a config file as standard JSON."""
    data = load_document(path)
    if minify:
        return json.dumps(data, separators=(',', ':'), ensure_ascii=False)
    return json.dumps(data, indent=2, ensure_ascii=False)
