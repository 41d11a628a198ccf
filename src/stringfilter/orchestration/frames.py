"""
DataFrame Filtering

Applies record filter specs to every row of a polars DataFrame and splits
the rows into accepted and rejected frames. A bad row never aborts the run;
it lands in the rejected frame with its error messages.
"""

import logging
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

import polars as pl

from ..coreutils.logging import log_function_call
from ..transformation.strings import (
    concat,
    split,
    strip_markup,
    validate,
)
from ..transformation.exceptions import InvalidConfiguration
from .chain import parse_step, filter_record

logger = logging.getLogger(__name__)

ERRORS_COLUMN = "errors"

_STRING_FILTERS = (validate, concat, strip_markup)


def _output_dtype(steps: Sequence[Any]) -> Optional[pl.DataType]:
    """Known output dtype of a chain, or None when polars should infer it"""
    if not steps:
        return None
    func, _, _ = parse_step(steps[-1])
    if func is split:
        return pl.List(pl.String())
    if func in _STRING_FILTERS:
        return pl.String()
    return None


def filter_frame(
    df: pl.DataFrame,
    spec: Dict[str, Sequence[Any]],
    required: Iterable[str] = (),
) -> Tuple[pl.DataFrame, pl.DataFrame]:
    """
    Filter each row of a DataFrame through the given spec

    Columns without a chain in the spec are passed through unchanged.

    Args:
        df: Input DataFrame
        spec: Column name -> filter chain
        required: Columns every row must have

    Returns:
        Tuple[pl.DataFrame, pl.DataFrame]: (accepted rows with filtered
            values, rejected original rows plus an errors column)
    """
    if ERRORS_COLUMN in df.columns:
        raise InvalidConfiguration(
            f"Input already has a '{ERRORS_COLUMN}' column, rename it before filtering"
        )

    required = list(required)
    log_function_call("filter_frame", rows=df.height, columns=list(spec), required=required)

    accepted_rows = []
    rejected_rows = []

    for row in df.iter_rows(named=True):
        result = filter_record(spec, row, allow_unknowns=True, required=required)
        if result.success:
            accepted_rows.append({**row, **result.filtered_value})
        else:
            logger.warning(f"Rejected row: {'; '.join(result.errors)}")
            rejected_rows.append({**row, ERRORS_COLUMN: "; ".join(result.errors)})

    accepted_schema = {}
    for column, dtype in df.schema.items():
        if column in spec:
            dtype = _output_dtype(spec[column])
        accepted_schema[column] = dtype

    known = {column: dtype for column, dtype in accepted_schema.items() if dtype is not None}
    if accepted_rows:
        accepted_df = pl.DataFrame(
            accepted_rows,
            schema_overrides=known,
            infer_schema_length=None,
            strict=False,
        )
    else:
        accepted_df = pl.DataFrame(
            schema={
                column: dtype if dtype is not None else pl.Null()
                for column, dtype in accepted_schema.items()
            }
        )

    rejected_schema = {**dict(df.schema), ERRORS_COLUMN: pl.String()}
    rejected_df = pl.DataFrame(rejected_rows, schema=rejected_schema, strict=False)

    logger.info(
        f"✅ Filtered {df.height} rows: {accepted_df.height} accepted, {rejected_df.height} rejected"
    )
    return accepted_df, rejected_df


def summarize_filtering(accepted: pl.DataFrame, rejected: pl.DataFrame) -> Dict[str, Any]:
    """Counts of accepted and rejected rows for a filter_frame run"""
    total = accepted.height + rejected.height
    summary = {
        "total_records": total,
        "accepted": accepted.height,
        "rejected": rejected.height,
        "rejection_rate": round(rejected.height / total, 4) if total else 0.0,
    }
    logger.info(f"Filtering summary: {summary}")
    return summary
