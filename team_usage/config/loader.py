"""
Configuration management and loading.

Handles report display settings.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Optional

import yaml

from team_usage.core.aggregation import TEAM_TOTAL_LABEL
from team_usage.core.breakdown import ROOT_LABEL

logger = logging.getLogger(__name__)

EMPTY_BREAKDOWN_TEXT = "No session usage yet"


class ReportLayout(Enum):
    """How the usage report is laid out."""
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


@dataclass(frozen=True)
class LabelConfig:
    """Text used for fixed report labels."""
    root: str = ROOT_LABEL
    team_total: str = TEAM_TOTAL_LABEL
    empty: str = EMPTY_BREAKDOWN_TEXT

    def __post_init__(self):
        """Validate labels are non-empty."""
        for name in ("root", "team_total", "empty"):
            if not getattr(self, name).strip():
                raise ValueError(f"label '{name}' cannot be empty")


@dataclass(frozen=True)
class ReportConfig:
    """Complete report configuration."""
    labels: LabelConfig = field(default_factory=LabelConfig)
    layout: ReportLayout = ReportLayout.VERTICAL
    highlight_active: bool = True


def load_report_config(path: Optional[str] = None) -> ReportConfig:
    """Load and validate report configuration from a YAML file.

    Every key is optional; an absent path gives the defaults. Unknown keys
    are rejected so that typos don't silently fall back to defaults.

    Args:
        path: Path to YAML configuration file, or None

    Returns:
        Validated ReportConfig object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
        ValueError: If configuration is invalid
    """
    if path is None:
        return ReportConfig()

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Report config file not found: {path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Invalid YAML in config file {path}: {e}")

    if raw_config is None:
        logger.debug("Config file %s is empty, using defaults", path)
        return ReportConfig()

    if not isinstance(raw_config, dict):
        raise ValueError("Configuration must be a dictionary")

    allowed_top_keys = {'labels', 'layout', 'highlight_active'}
    unknown_keys = set(raw_config.keys()) - allowed_top_keys
    if unknown_keys:
        raise ValueError(f"Unknown configuration keys: {unknown_keys}")

    labels = _parse_labels(raw_config.get('labels', {}))

    layout_str = raw_config.get('layout', ReportLayout.VERTICAL.value)
    if not isinstance(layout_str, str):
        raise ValueError("'layout' must be a string")
    try:
        layout = ReportLayout(layout_str.lower())
    except ValueError:
        valid_layouts = [layout.value for layout in ReportLayout]
        raise ValueError(f"'layout' must be one of: {valid_layouts}")

    highlight_active = raw_config.get('highlight_active', True)
    if not isinstance(highlight_active, bool):
        raise ValueError("'highlight_active' must be a boolean")

    return ReportConfig(
        labels=labels,
        layout=layout,
        highlight_active=highlight_active
    )


def _parse_labels(data: Dict) -> LabelConfig:
    """Parse and validate the labels section.

    Raises:
        ValueError: If the section is invalid
    """
    if not isinstance(data, dict):
        raise ValueError("'labels' must be a dictionary")

    allowed_keys = {'root', 'team_total', 'empty'}
    unknown_keys = set(data.keys()) - allowed_keys
    if unknown_keys:
        raise ValueError(f"Unknown keys in labels: {unknown_keys}")

    for key, value in data.items():
        if not isinstance(value, str):
            raise ValueError(f"'labels.{key}' must be a string")

    return LabelConfig(**data)
