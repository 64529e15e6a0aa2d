"""
Data validation module for rail line datasets.

Validates schema and data quality before the networks are built.
"""
import polars as pl
from pathlib import Path
from typing import Dict, Any, Iterable, List, Optional, Tuple
import logging

from railnet.io.load_data import clean_records, resolve_columns
from railnet.networks.adjacency import EdgeRecord
from railnet.networks.county_network import find_county_conflicts


logger = logging.getLogger(__name__)


def validate_schema(
    lf: pl.LazyFrame,
    columns: Optional[Dict[str, str]] = None
) -> Tuple[bool, List[str]]:
    """
    Validate that the source columns for the edge fields exist.

    Args:
        lf: Polars LazyFrame to validate
        columns: Source column names (defaults to the rail lines export)

    Returns:
        Tuple of (is_valid, list of error messages)
    """
    errors = []
    schema = lf.collect_schema()
    required = resolve_columns(columns)

    missing = set(required.values()) - set(schema.names())
    if missing:
        errors.append(f"Missing required columns: {sorted(missing)}")

    for field, col in required.items():
        if col in schema and str(schema[col]) not in ("Utf8", "String"):
            errors.append(f"Column {col} ({field}) has type {schema[col]}, expected String")

    is_valid = len(errors) == 0
    return is_valid, errors


def validate_constraints(
    lf: pl.LazyFrame,
    columns: Optional[Dict[str, str]] = None
) -> Dict[str, Any]:
    """
    Compute data quality metrics for the edge columns.

    Args:
        lf: Raw Polars LazyFrame (all columns as strings)
        columns: Source column names

    Returns:
        Dictionary with validation results and statistics
    """
    total_rows = lf.select(pl.len()).collect().item()
    edges = clean_records(lf, columns)

    validation = edges.select([
        pl.len().alias("valid_rows"),
        (pl.col("county_fips") == "").sum().alias("empty_county_rows"),
        (pl.col("from_node") == pl.col("to_node")).sum().alias("self_loop_rows"),
        pl.col("county_fips").filter(pl.col("county_fips") != "").n_unique().alias("n_unique_counties"),
    ]).collect()

    result = validation.to_dicts()[0]
    result["total_rows"] = total_rows
    result["dropped_rows"] = total_rows - result["valid_rows"]
    result["n_unique_nodes"] = (
        pl.concat([
            edges.select(pl.col("from_node").alias("node")),
            edges.select(pl.col("to_node").alias("node")),
        ])
        .select(pl.col("node").n_unique())
        .collect()
        .item()
    )

    valid = result["valid_rows"]
    result["empty_county_pct"] = 100.0 * result["empty_county_rows"] / valid if valid > 0 else 0
    result["dropped_pct"] = 100.0 * result["dropped_rows"] / total_rows if total_rows > 0 else 0

    return result


def validate_county_assignments(records: Iterable[EdgeRecord]) -> Dict[str, Any]:
    """
    Report nodes whose county code differs between records.

    Args:
        records: Edge records in file order

    Returns:
        Dictionary with the conflict count and a few examples
    """
    conflicts = find_county_conflicts(records)
    examples = [
        {"node": node, "counties": ",".join(counties)}
        for node, counties in sorted(conflicts.items())[:10]
    ]
    return {
        "n_conflicting_nodes": len(conflicts),
        "examples": examples,
    }


def run_full_validation(
    lf: pl.LazyFrame,
    output_dir: Path,
    columns: Optional[Dict[str, str]] = None
) -> Dict[str, Any]:
    """
    Run complete validation suite and save results.

    Args:
        lf: Polars LazyFrame to validate
        output_dir: Directory to save validation outputs
        columns: Source column names

    Returns:
        Combined validation results dictionary
    """
    logger.info("Starting data validation")

    schema_valid, schema_errors = validate_schema(lf, columns)
    logger.info(f"Schema validation: {'PASS' if schema_valid else 'FAIL'}")
    if schema_errors:
        for error in schema_errors:
            logger.error(f"  - {error}")

    if not schema_valid:
        return {
            "schema_valid": False,
            "schema_errors": schema_errors
        }

    logger.info("Validating constraints")
    constraints = validate_constraints(lf, columns)

    logger.info("Validating node -> county assignments")
    edges = clean_records(lf, columns).collect()
    records = (
        EdgeRecord(f, t, c)
        for f, t, c in edges.select(["from_node", "to_node", "county_fips"]).iter_rows()
    )
    county_check = validate_county_assignments(records)

    results = {
        "schema_valid": schema_valid,
        "schema_errors": schema_errors,
        "constraints": constraints,
        "county_assignments": county_check
    }

    summary_path = output_dir / "tables" / "data_validation_summary.csv"
    summary_path.parent.mkdir(parents=True, exist_ok=True)

    summary_df = pl.DataFrame([{
        "metric": k,
        "value": str(v)
    } for k, v in constraints.items()])
    summary_df.write_csv(summary_path)
    logger.info(f"Saved validation summary to {summary_path}")

    logger.info(f"Total rows: {constraints['total_rows']:,}")
    logger.info(f"Dropped rows: {constraints['dropped_rows']:,} ({constraints['dropped_pct']:.2f}%)")
    logger.info(f"Unique nodes: {constraints['n_unique_nodes']}, counties: {constraints['n_unique_counties']}")
    logger.info(f"Empty county rate: {constraints['empty_county_pct']:.2f}%")
    logger.info(f"Self-loop rows: {constraints['self_loop_rows']}")
    if county_check["n_conflicting_nodes"]:
        logger.warning(f"Nodes with conflicting counties: {county_check['n_conflicting_nodes']}")

    return results
