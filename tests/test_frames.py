"""
Test DataFrame Filtering - Orchestration Layer

Builds small polars frames inline and checks the accepted/rejected split.
"""

import logging

import polars as pl
import pytest

from stringfilter.transformation.exceptions import InvalidConfiguration
from stringfilter.orchestration.frames import (
    ERRORS_COLUMN,
    filter_frame,
    summarize_filtering,
)

# Setup logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

SPEC = {
    "symbol": ["strip-tags", ("string", {"min_length": 1, "max_length": 8})],
    "chain": [("translate", {"value_map": {"eth": "ethereum", "arb": "arbitrum"}})],
    "tokens": [("explode", {"delimiter": "|"})],
}


def create_sample_frame() -> pl.DataFrame:
    """Three valid rows, two invalid ones"""
    return pl.DataFrame(
        {
            "pool_id": ["p1", "p2", "p3", "p4", "p5"],
            "symbol": ["<b>USDC</b>", "WETH", "TOOLONGSYMBOL", None, "DAI"],
            "chain": ["eth", "arb", "eth", "eth", "eth"],
            "tokens": ["a|b", "c", "d", "e", ""],
            "tvl_usd": [1.0, 2.0, 3.0, 4.0, 5.0],
        }
    )


def test_filter_frame_splits_rows():
    accepted, rejected = filter_frame(create_sample_frame(), SPEC)

    assert accepted.height == 3
    assert rejected.height == 2
    assert accepted["pool_id"].to_list() == ["p1", "p2", "p5"]
    assert rejected["pool_id"].to_list() == ["p3", "p4"]


def test_filter_frame_applies_filters():
    accepted, _ = filter_frame(create_sample_frame(), SPEC)

    assert accepted["symbol"].to_list() == ["USDC", "WETH", "DAI"]
    assert accepted["chain"].to_list() == ["ethereum", "arbitrum", "ethereum"]
    assert accepted["tokens"].to_list() == [["a", "b"], ["c"], [""]]


def test_filter_frame_schema():
    df = create_sample_frame()
    accepted, rejected = filter_frame(df, SPEC)

    assert accepted.columns == df.columns
    assert accepted.schema["tokens"] == pl.List(pl.String())
    assert accepted.schema["symbol"] == pl.String()
    assert accepted.schema["tvl_usd"] == pl.Float64()

    assert rejected.columns == df.columns + [ERRORS_COLUMN]
    assert rejected.schema["tokens"] == pl.String()


def test_filter_frame_keeps_original_values_of_rejected_rows():
    _, rejected = filter_frame(create_sample_frame(), SPEC)

    first = rejected.row(0, named=True)
    assert first["symbol"] == "TOOLONGSYMBOL"
    assert first["chain"] == "eth"
    assert "length '13'" in first[ERRORS_COLUMN]

    second = rejected.row(1, named=True)
    assert "allow_null" in second[ERRORS_COLUMN]


def test_filter_frame_required_column_missing():
    df = pl.DataFrame({"symbol": ["A", "B"]})
    accepted, rejected = filter_frame(df, {"symbol": ["string"]}, required=["chain"])

    assert accepted.height == 0
    assert rejected.height == 2
    assert rejected[ERRORS_COLUMN].to_list() == [
        "Field 'chain' was required and not present"
    ] * 2


def test_filter_frame_all_rejected_keeps_schema():
    df = pl.DataFrame({"tokens": ["a,b"], "n": [1]})
    accepted, rejected = filter_frame(df, {"tokens": [("explode", {"delimiter": ","}), "string"]})

    assert accepted.height == 0
    assert accepted.columns == ["tokens", "n"]
    assert accepted.schema["n"] == pl.Int64()
    assert rejected.height == 1


def test_filter_frame_empty_input():
    df = pl.DataFrame(schema={"symbol": pl.String()})
    accepted, rejected = filter_frame(df, {"symbol": ["string"]})

    assert accepted.height == 0
    assert rejected.height == 0
    assert rejected.columns == ["symbol", ERRORS_COLUMN]


def test_summarize_filtering():
    accepted, rejected = filter_frame(create_sample_frame(), SPEC)
    summary = summarize_filtering(accepted, rejected)

    assert summary == {
        "total_records": 5,
        "accepted": 3,
        "rejected": 2,
        "rejection_rate": 0.4,
    }


def test_summarize_filtering_empty():
    empty = pl.DataFrame()
    assert summarize_filtering(empty, empty)["rejection_rate"] == 0.0


def test_filter_frame_translate_keeps_integer_values():
    df = pl.DataFrame({"flag": ["yes", "no"]})
    spec = {"flag": [("translate", {"value_map": {"yes": 1, "no": 0}})]}
    accepted, rejected = filter_frame(df, spec)

    assert accepted.schema["flag"] == pl.Int64()
    assert accepted["flag"].to_list() == [1, 0]
    assert rejected.height == 0


def test_filter_frame_translate_keeps_list_values():
    df = pl.DataFrame({"pair": ["ab", "cd"]})
    spec = {"pair": [("translate", {"value_map": {"ab": ["a", "b"], "cd": ["c", "d"]}})]}
    accepted, _ = filter_frame(df, spec)

    assert accepted.schema["pair"] == pl.List(pl.String())
    assert accepted["pair"].to_list() == [["a", "b"], ["c", "d"]]


def test_filter_frame_rejects_input_with_errors_column():
    df = pl.DataFrame({"name": [""], ERRORS_COLUMN: ["original"]})
    with pytest.raises(InvalidConfiguration, match=f"'{ERRORS_COLUMN}' column"):
        filter_frame(df, {"name": ["string"]})
