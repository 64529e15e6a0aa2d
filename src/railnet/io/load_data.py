"""
Data loading utilities for rail line datasets.

Reads the rail line CSV through a polars LazyFrame and turns it into the
ordered edge records consumed by the network builders.
"""
import polars as pl
from pathlib import Path
from typing import Dict, Any, Iterator, List, Optional
import logging

from railnet.networks.adjacency import EdgeRecord


logger = logging.getLogger(__name__)


# Source column names in the national rail lines export
DEFAULT_COLUMNS = {
    "from_node": "FRFRANODE",
    "to_node": "TOFRANODE",
    "county_fips": "STCNTYFIPS",
}


def resolve_columns(columns: Optional[Dict[str, str]] = None) -> Dict[str, str]:
    """Merge user column names over the defaults."""
    resolved = dict(DEFAULT_COLUMNS)
    if columns:
        unknown = set(columns) - set(DEFAULT_COLUMNS)
        if unknown:
            raise ValueError(f"Unknown column keys: {sorted(unknown)}")
        resolved.update(columns)
    return resolved


def scan_rail_csv(data_path: Path) -> pl.LazyFrame:
    """
    Lazily scan a rail line CSV with every column read as a string.

    Args:
        data_path: Path to the CSV file

    Returns:
        Polars LazyFrame
    """
    data_path = Path(data_path)
    if not data_path.is_file():
        raise FileNotFoundError(f"Rail data not found: {data_path}")

    lf = pl.scan_csv(
        data_path,
        infer_schema_length=0,
        truncate_ragged_lines=True,
    )
    logger.info(f"Loaded data from {data_path}")
    return lf


def clean_records(
    lf: pl.LazyFrame,
    columns: Optional[Dict[str, str]] = None
) -> pl.LazyFrame:
    """
    Select and normalize the edge columns.

    Values are whitespace-trimmed. Rows missing either endpoint are dropped;
    a missing county becomes the empty string.

    Args:
        lf: Raw LazyFrame from `scan_rail_csv`
        columns: Mapping of from_node/to_node/county_fips to source names

    Returns:
        LazyFrame with columns: from_node, to_node, county_fips
    """
    columns = resolve_columns(columns)
    missing = [src for src in columns.values() if src not in lf.collect_schema().names()]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")

    return (
        lf.select([
            pl.col(columns["from_node"]).str.strip_chars().alias("from_node"),
            pl.col(columns["to_node"]).str.strip_chars().alias("to_node"),
            pl.col(columns["county_fips"]).str.strip_chars().fill_null("").alias("county_fips"),
        ])
        .filter(
            pl.col("from_node").is_not_null()
            & pl.col("to_node").is_not_null()
            & (pl.col("from_node").str.len_chars() > 0)
            & (pl.col("to_node").str.len_chars() > 0)
        )
    )


def load_rail_records(
    data_path: Path,
    columns: Optional[Dict[str, str]] = None
) -> pl.DataFrame:
    """
    Load the edge table from a rail line CSV, in file order.

    Args:
        data_path: Path to the CSV file
        columns: Optional source column names

    Returns:
        DataFrame with columns: from_node, to_node, county_fips
    """
    lf = scan_rail_csv(data_path)
    n_raw = get_row_count(lf)
    df = clean_records(lf, columns).collect()

    dropped = n_raw - len(df)
    if dropped:
        logger.info(f"Dropped {dropped} rows without both endpoints")
    logger.info(f"Loaded {len(df)} edge records")
    return df


def iter_edge_records(df: pl.DataFrame) -> Iterator[EdgeRecord]:
    """Yield EdgeRecords in row order."""
    for from_node, to_node, county_fips in df.select(
        ["from_node", "to_node", "county_fips"]
    ).iter_rows():
        yield EdgeRecord(from_node, to_node, county_fips)


def get_schema_summary(lf: pl.LazyFrame) -> Dict[str, Any]:
    """
    Get schema information from a LazyFrame.

    Args:
        lf: Polars LazyFrame

    Returns:
        Dictionary with schema info (columns, types)
    """
    schema = lf.collect_schema()

    return {
        "columns": list(schema.names()),
        "dtypes": {name: str(dtype) for name, dtype in schema.items()},
        "n_columns": len(schema)
    }


def get_row_count(lf: pl.LazyFrame) -> int:
    """
    Get row count efficiently from LazyFrame.

    Args:
        lf: Polars LazyFrame

    Returns:
        Number of rows
    """
    return lf.select(pl.len()).collect().item()


def load_from_config(config: Dict[str, Any], project_root: Path) -> List[EdgeRecord]:
    """
    Load edge records using configuration dictionary.

    Args:
        config: Configuration dictionary with a data section
        project_root: Base for relative data paths

    Returns:
        List of EdgeRecords in file order
    """
    data_config = config["data"]
    data_path = Path(data_config["path"])
    if not data_path.is_absolute():
        data_path = project_root / data_path

    df = load_rail_records(data_path, columns=data_config.get("columns"))
    return list(iter_edge_records(df))
