"""
Filter Chain Executor

Resolves filter names to the transformation filters and applies chains of
them to single values and to whole records (dicts of field -> value).

A chain is a list of steps. Each step is one of:
- a registered filter name: "strip-tags"
- a callable: str.strip
- a list/tuple of a name or callable followed by either one dict of
  keyword options, or positional arguments:
  ("string", {"min_length": 3}), ["explode", "|"]
"""

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from ..coreutils.env import DEFAULT_DELIMITER_VAR, env_get
from ..transformation.exceptions import InvalidConfiguration, ValidationError
from ..transformation.strings import (
    concat,
    split,
    strip_markup,
    translate,
    validate,
)

logger = logging.getLogger(__name__)

FILTER_ALIASES: Dict[str, Callable[..., Any]] = {
    "string": validate,
    "validate": validate,
    "explode": split,
    "split": split,
    "translate": translate,
    "concat": concat,
    "strip-tags": strip_markup,
    "strip_markup": strip_markup,
}


@dataclass
class FilterResult:
    """Outcome of filtering one record"""

    success: bool
    filtered_value: Optional[Dict[str, Any]]
    errors: List[str] = field(default_factory=list)
    unknowns: Dict[str, Any] = field(default_factory=dict)


def register_filter(name: str, func: Callable[..., Any]) -> None:
    """Register an extra filter under the given alias"""
    if not isinstance(name, str) or not name:
        raise InvalidConfiguration(f"Filter name {name!r} is not a non-empty string")
    if not callable(func):
        raise InvalidConfiguration(f"Filter '{name}' is not callable", func)
    FILTER_ALIASES[name] = func


def get_filter(name: str) -> Callable[..., Any]:
    """Resolve a filter alias to its function"""
    try:
        return FILTER_ALIASES[name]
    except (KeyError, TypeError):
        raise InvalidConfiguration(f"Unknown filter '{name}'", name) from None


def _resolve(target: Any) -> Callable[..., Any]:
    if callable(target):
        return target
    return get_filter(target)


def parse_step(step: Any) -> Tuple[Callable[..., Any], tuple, Dict[str, Any]]:
    """Split a step into (function, positional args, keyword options)"""
    if isinstance(step, (list, tuple)):
        if not step:
            raise InvalidConfiguration("Filter step is empty")
        target, *rest = step
        func = _resolve(target)
        if len(rest) == 1 and isinstance(rest[0], dict):
            return func, (), dict(rest[0])
        return func, tuple(rest), {}

    return _resolve(step), (), {}


def _run_step(value: Any, step: Any) -> Any:
    func, args, kwargs = parse_step(step)

    # explode without an explicit delimiter uses the configured default
    if func is split and not args and "delimiter" not in kwargs:
        kwargs["delimiter"] = env_get(DEFAULT_DELIMITER_VAR, ",")

    try:
        inspect.signature(func).bind(value, *args, **kwargs)
    except TypeError as e:
        raise InvalidConfiguration(
            f"Invalid options for filter {getattr(func, '__name__', func)!r}: {e}"
        ) from e
    except ValueError:
        # builtins without an introspectable signature
        pass

    return func(value, *args, **kwargs)


def apply_chain(value: Any, steps: Sequence[Any]) -> Any:
    """
    Run a value through a chain of filters in order

    Args:
        value: Input value
        steps: Filter steps, each fed the previous step's output

    Returns:
        Any: Output of the last step

    Raises:
        ValidationError: From the first step that rejects the value
        InvalidConfiguration: If a step is malformed
    """
    if isinstance(steps, (str, bytes)) or not isinstance(steps, Iterable):
        raise InvalidConfiguration(f"Filter chain {steps!r} is not a list of steps")

    for step in steps:
        value = _run_step(value, step)
    return value


def filter_record(
    spec: Dict[str, Sequence[Any]],
    record: Dict[str, Any],
    allow_unknowns: bool = False,
    required: Iterable[str] = (),
) -> FilterResult:
    """
    Apply a per-field filter chain to a record

    Validation failures are collected per field so that one bad field does
    not hide the others. Configuration errors propagate immediately.

    Args:
        spec: Field name -> filter chain
        record: Input record
        allow_unknowns: Accept fields that have no chain in the spec
        required: Fields that must be present in the record

    Returns:
        FilterResult: success flag, filtered fields, errors and unknown fields
    """
    errors = []
    filtered = {}

    for name in required:
        if name not in record:
            errors.append(f"Field '{name}' was required and not present")

    for name, steps in spec.items():
        if name not in record:
            continue
        try:
            filtered[name] = apply_chain(record[name], steps)
        except ValidationError as e:
            errors.append(f"Field '{name}': {e}")

    unknowns = {name: value for name, value in record.items() if name not in spec}
    if not allow_unknowns:
        for name, value in unknowns.items():
            errors.append(f"Field '{name}' with value {value!r} is unknown")

    if errors:
        logger.debug(f"Record rejected: {errors}")
        return FilterResult(False, None, errors, unknowns)

    return FilterResult(True, filtered, [], unknowns)
