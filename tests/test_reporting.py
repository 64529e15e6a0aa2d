"""
Test result tables, console formatting and output writing.
"""
import json

import pytest
import polars as pl

from railnet.analysis.path_length import AsplResult
from railnet.analysis.reporting import (
    aspl_to_dict,
    format_aspl,
    format_ranking,
    ranking_to_frame,
    write_connectivity_outputs,
)


RANKING = [("17031", 2), ("17043", 2), ("17097", 1), ("18089", 1)]


def test_ranking_to_frame_keeps_order():
    df = ranking_to_frame(RANKING, "degree")
    assert df.columns == ["rank", "entity", "degree"]
    assert df["entity"].to_list() == ["17031", "17043", "17097", "18089"]
    assert df["rank"].to_list() == [1, 2, 3, 4]


def test_ranking_to_frame_empty():
    df = ranking_to_frame([], "remaining_lcc")
    assert len(df) == 0
    assert df.schema["remaining_lcc"] == pl.Int64


def test_format_ranking_top_k():
    lines = format_ranking(RANKING, "County", "Number of Neighbors", top_k=2)
    assert lines == [
        "County: 17031, Number of Neighbors: 2",
        "County: 17043, Number of Neighbors: 2",
    ]


def test_format_aspl():
    assert format_aspl(AsplResult(total_distance=8, reachable_pairs=6)) == "1.333"
    assert format_aspl(AsplResult(total_distance=0, reachable_pairs=0)) == "undefined"


def test_aspl_to_dict_undefined():
    data = aspl_to_dict(AsplResult(total_distance=0, reachable_pairs=0))
    assert data["aspl"] is None
    assert data["defined"] is False


def test_write_connectivity_outputs(tmp_path):
    degree_df = ranking_to_frame(RANKING, "degree")
    impact_df = ranking_to_frame(RANKING, "remaining_lcc")
    dist = pl.DataFrame({"degree": [1, 2], "count": [2, 2]})
    summary = {"lcc_size": 4, "aspl": aspl_to_dict(AsplResult(20, 12))}

    paths = write_connectivity_outputs(
        "county", degree_df, impact_df, dist, summary, tmp_path, overwrite=False
    )

    assert set(paths) == {"degree_ranking", "removal_impact", "degree_dist", "summary"}
    written = pl.read_csv(paths["degree_ranking"], schema_overrides={"entity": pl.Utf8})
    assert written["entity"].to_list() == ["17031", "17043", "17097", "18089"]
    with open(paths["summary"]) as f:
        assert json.load(f)["lcc_size"] == 4

    # existing files are kept without overwrite
    again = write_connectivity_outputs(
        "county", degree_df, impact_df, dist, summary, tmp_path, overwrite=False
    )
    assert again == {}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
