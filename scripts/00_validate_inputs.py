"""
Script 00: Validate input data.

Validates schema and data quality of the rail line CSV.
"""
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from railnet.utils.config import apply_overrides, build_arg_parser, load_config
from railnet.utils.logging import get_script_logger
from railnet.utils.paths import get_project_root, get_results_dir
from railnet.utils.manifests import create_run_manifest, compute_schema_hash, save_json
from railnet.io.load_data import scan_rail_csv, get_schema_summary, get_row_count
from railnet.io.validate_data import run_full_validation


def main():
    """Run data validation."""
    args = build_arg_parser("Validate the rail line CSV").parse_args()
    config = apply_overrides(load_config(args.config), args)

    project_root = get_project_root()
    results_dir = get_results_dir(config)
    logger = get_script_logger("00_validate_inputs", results_dir, level=args.loglevel)

    logger.info("="*80)
    logger.info("SCRIPT 00: VALIDATE INPUT DATA")
    logger.info("="*80)

    data_path = Path(config["data"]["path"])
    if not data_path.is_absolute():
        data_path = project_root / data_path

    logger.info(f"Loading data from {data_path}")
    try:
        lf = scan_rail_csv(data_path)
    except FileNotFoundError as e:
        logger.error(str(e))
        sys.exit(1)

    schema_info = get_schema_summary(lf)
    row_count = get_row_count(lf)

    logger.info(f"Dataset has {row_count:,} rows and {schema_info['n_columns']} columns")
    logger.info(f"Columns: {', '.join(schema_info['columns'][:10])}...")

    validation_results = run_full_validation(
        lf, output_dir=results_dir, columns=config["data"].get("columns")
    )

    fingerprint = {
        "file_path": str(data_path),
        "row_count": row_count,
        "n_columns": schema_info['n_columns'],
        "columns": schema_info['columns'],
        "schema_hash": compute_schema_hash(schema_info['columns']),
        "validation_passed": validation_results["schema_valid"]
    }

    fingerprint_path = results_dir / "logs" / "data_fingerprint.json"
    save_json(fingerprint, fingerprint_path)
    logger.info(f"Saved data fingerprint to {fingerprint_path}")

    create_run_manifest(
        script_name="00_validate_inputs",
        config=config,
        input_files=[data_path],
        output_files=[
            results_dir / "tables" / "data_validation_summary.csv",
            fingerprint_path
        ],
        metadata=validation_results,
        manifest_path=results_dir / "logs" / "00_validate_inputs_manifest.json"
    )

    if not validation_results["schema_valid"]:
        logger.error("VALIDATION FAILED - see errors above")
        sys.exit(1)
    logger.info("VALIDATION PASSED")


if __name__ == "__main__":
    main()
