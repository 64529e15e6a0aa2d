"""
Generate a synthetic toy rail line dataset for testing.

Creates a small, controlled edge table shaped like the rail lines export so
the loaders, builders and analyses can be tested without the real data.
"""

import polars as pl
from pathlib import Path


def generate_toy_dataset() -> pl.DataFrame:
    """
    Generate a small synthetic rail line dataset.

    Creates a dataset with:
    - 10 nodes on one connected line, 4 counties on a path
      18089 - 17031 - 17043 - 17097
    - a doubled segment (6-7), a self-loop (10-10)
    - two rows with an empty county and one row without a from node

    Returns
    -------
    pl.DataFrame
        Synthetic rail data with the export's column names
    """
    rows = [
        # (from, to, county of from)
        ("1", "2", "17031"),
        ("2", "3", "17031"),
        ("3", "4", "17031"),
        ("4", "5", "17043"),
        ("5", "6", "17043"),
        ("6", "7", "17097"),
        ("7", "6", "17097"),
        ("2", "8", "17031"),
        ("8", "9", "18089"),
        ("9", "10", None),
        (None, "11", "17031"),
        ("10", "10", None),
    ]
    n = len(rows)
    data = {
        "OBJECTID": [str(i + 1) for i in range(n)],
        "FRAARCID": [str(300000 + i) for i in range(n)],
        "FRFRANODE": [r[0] for r in rows],
        "TOFRANODE": [r[1] for r in rows],
        "STFIPS": [r[2][:2] if r[2] else None for r in rows],
        "CNTYFIPS": [r[2][2:] if r[2] else None for r in rows],
        "STCNTYFIPS": [r[2] for r in rows],
    }

    return pl.DataFrame(data, schema={col: pl.Utf8 for col in data})


def write_toy_csv(path: Path) -> Path:
    """Write the toy dataset as CSV and return the path."""
    generate_toy_dataset().write_csv(path)
    return path
