"""
Configuration loading.

The pipeline is driven by config/config.yaml; scripts may override the
config path, the input file and the entity removed for the ASPL comparison
from the command line.
"""
import argparse
import copy
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from railnet.networks.county_network import COUNTY_POLICIES
from railnet.utils.paths import get_config_path

logger = logging.getLogger(__name__)

GRAPH_LEVELS = ("node", "county")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load and check the YAML configuration.

    Args:
        config_path: Path to config.yaml (default: config/config.yaml)

    Returns:
        Configuration dictionary
    """
    if config_path is None:
        config_path = get_config_path()
    with open(config_path) as f:
        config = yaml.safe_load(f) or {}
    validate_config(config)
    return config


def validate_config(config: Dict[str, Any]) -> None:
    """Raise ValueError on missing or invalid settings."""
    if "path" not in config.get("data", {}):
        raise ValueError("config.data.path is required")

    policy = config.get("networks", {}).get("county_policy", "last")
    if policy not in COUNTY_POLICIES:
        raise ValueError(f"Unknown county_policy: {policy} (expected one of {COUNTY_POLICIES})")

    levels = config.get("analysis", {}).get("levels", ["county"])
    unknown = [level for level in levels if level not in GRAPH_LEVELS]
    if unknown:
        raise ValueError(f"Unknown analysis levels: {unknown} (expected {GRAPH_LEVELS})")

    n_jobs = config.get("analysis", {}).get("n_jobs", 1)
    if not isinstance(n_jobs, int) or n_jobs < 1:
        raise ValueError(f"analysis.n_jobs must be a positive integer, got {n_jobs!r}")

    # Unquoted YAML ids lose leading zeros (01001 reads as the octal int 513)
    for key in ("removal_entity", "node_removal_entity"):
        entity = config.get("analysis", {}).get(key)
        if entity is not None and not isinstance(entity, str):
            raise ValueError(
                f"analysis.{key} must be a quoted string, got {entity!r}"
            )


def build_arg_parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    parser.add_argument("--data", type=Path, default=None, help="Override data.path")
    parser.add_argument("--entity", default=None, help="Override analysis.removal_entity")
    parser.add_argument("--loglevel", default="INFO", choices=LOG_LEVELS, type=str.upper)
    return parser


def apply_overrides(config: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    """Return a copy of `config` with command-line overrides applied."""
    config = copy.deepcopy(config)
    if getattr(args, "data", None) is not None:
        config.setdefault("data", {})["path"] = str(args.data)
        logger.info(f"Override: data.path = {args.data}")
    if getattr(args, "entity", None) is not None:
        config.setdefault("analysis", {})["removal_entity"] = args.entity
        logger.info(f"Override: analysis.removal_entity = {args.entity}")
    validate_config(config)
    return config


def analysis_levels(config: Dict[str, Any]) -> List[str]:
    return list(config.get("analysis", {}).get("levels", ["county"]))
