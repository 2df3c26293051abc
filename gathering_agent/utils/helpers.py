# gathering_agent/utils/helpers.py - Helper functions
"""
General utility and helper functions.
"""

import importlib
from typing import Any, IO, Iterator
import logging

from gathering_agent.errors import ConfigurationError


logger = logging.getLogger(__name__)


def load_object(path: str) -> Any:
    """
    Import an object from a "package.module:attribute" path.

    Args:
        path: Import path, attribute may be dotted

    Returns:
        The imported object

    Raises:
        ConfigurationError: If the path is malformed or cannot be imported
    """
    module_name, _, attribute = path.partition(':')
    if not module_name or not attribute:
        raise ConfigurationError(f"invalid import path {path}, expected 'module:attribute'")

    try:
        target = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"cannot import {module_name}: {e}") from e

    for name in attribute.split('.'):
        try:
            target = getattr(target, name)
        except AttributeError as e:
            raise ConfigurationError(f"{module_name} has no attribute {attribute}") from e

    logger.debug(f"Loaded {path}")
    return target


def read_events(stream: IO) -> Iterator[bytes]:
    """
    Read newline-delimited events from a text or binary stream.

    Blank lines are skipped.

    Args:
        stream: Open file object

    Yields:
        Raw event bytes, one per line
    """
    for line in stream:
        if isinstance(line, str):
            line = line.encode('utf-8')

        line = line.strip()
        if line:
            yield line
