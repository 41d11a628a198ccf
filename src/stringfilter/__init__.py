"""
stringfilter - string validation and transformation filters for data pipelines

- transformation: pure string filters and their exceptions
- orchestration: filter chains over records and polars DataFrames
- coreutils: logging and .env configuration
"""

from .orchestration.chain import FilterResult, apply_chain, filter_record
from .orchestration.frames import filter_frame
from .transformation.exceptions import (
    FilterError,
    InvalidConfiguration,
    ValidationError,
)
from .transformation.strings import (
    MAX_LENGTH,
    coerce_to_string,
    concat,
    split,
    strip_markup,
    translate,
    validate,
)

__version__ = "0.1.0"

__all__ = [
    "MAX_LENGTH",
    "FilterError",
    "FilterResult",
    "InvalidConfiguration",
    "ValidationError",
    "apply_chain",
    "coerce_to_string",
    "concat",
    "filter_frame",
    "filter_record",
    "split",
    "strip_markup",
    "translate",
    "validate",
]
