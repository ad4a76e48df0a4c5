"""
Event log reading.

Loads recorded token usage events from JSON or JSON Lines files.
"""

import json
import logging
from pathlib import Path
from typing import List

from team_usage.core.events import TokenUsageEvent, event_from_dict

logger = logging.getLogger(__name__)


def load_events(path: str) -> List[TokenUsageEvent]:
    """Load usage events from a file, preserving their order.

    The file is either a JSON array of event objects or JSON Lines with one
    event object per line. Blank lines are skipped.

    Args:
        path: Path to the event file

    Returns:
        Events in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file or an event in it is malformed
    """
    log_path = Path(path)
    if not log_path.exists():
        raise FileNotFoundError(f"Event file not found: {path}")

    with open(log_path, 'r', encoding='utf-8') as f:
        content = f.read()

    if content.lstrip().startswith("["):
        events = _parse_array(content, path)
    else:
        events = _parse_lines(content, path)

    logger.debug("Loaded %d usage events from %s", len(events), path)
    return events


def _parse_array(content: str, path: str) -> List[TokenUsageEvent]:
    try:
        raw_events = json.loads(content)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in event file {path}: {e}")

    events = []
    for index, raw in enumerate(raw_events):
        try:
            events.append(event_from_dict(raw))
        except ValueError as e:
            raise ValueError(f"Invalid event at index {index} in {path}: {e}")
    return events


def _parse_lines(content: str, path: str) -> List[TokenUsageEvent]:
    events = []
    for line_number, line in enumerate(content.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            events.append(event_from_dict(json.loads(line)))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON on line {line_number} of {path}: {e}")
        except ValueError as e:
            raise ValueError(f"Invalid event on line {line_number} of {path}: {e}")
    return events
