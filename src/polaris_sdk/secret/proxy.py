"""Recursive value proxy used by redact.

The proxy classifies a value into one of the kinds in Kind and rebuilds it
through the matching proxy function. Every proxy function returns a new
value of the same type as its input; only String leaves are changed.
"""

import asyncio
import copy
import dataclasses
import functools
import inspect
import logging
import queue
import types
from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import BaseModel

from polaris_sdk.log import get_logger

from .marker import String
from .options import RedactOptions

logger = get_logger("secret", logging.DEBUG)

# id(original) -> (original, copy). Holding the original keeps its id from
# being reused while the traversal runs.
Memo = dict[int, tuple[Any, Any]]


class Kind(str, Enum):
    """Kinds of values the proxy knows how to rebuild."""

    ARRAY = "array"  # tuple
    CHANNEL = "channel"  # queues, generators
    FUNCTION = "function"  # routines, classes, partials
    MAP = "map"  # dict
    SET = "set"  # set, frozenset
    SLICE = "slice"  # list
    STRUCT = "struct"  # dataclass, pydantic model, namedtuple
    VALUE = "value"  # everything else


_CHANNEL_TYPES = (
    queue.Queue,
    queue.SimpleQueue,
    asyncio.Queue,
    types.GeneratorType,
    types.AsyncGeneratorType,
)


def is_public(name: str) -> bool:
    """Report whether a field name is part of the public contract."""
    return not name.startswith("_")


def classify(value: Any) -> Kind:
    """Return the kind of value."""
    if isinstance(value, (type, functools.partial)) or inspect.isroutine(value):
        return Kind.FUNCTION
    if isinstance(value, _CHANNEL_TYPES):
        return Kind.CHANNEL
    if dataclasses.is_dataclass(value) or isinstance(value, BaseModel):
        return Kind.STRUCT
    if isinstance(value, tuple):
        return Kind.STRUCT if hasattr(type(value), "_fields") else Kind.ARRAY
    if isinstance(value, list):
        return Kind.SLICE
    if isinstance(value, dict):
        return Kind.MAP
    if isinstance(value, (set, frozenset)):
        return Kind.SET
    return Kind.VALUE


def _type_name(value: Any) -> str:
    t = type(value)
    if t.__module__ == "builtins":
        return t.__qualname__
    return f"{t.__module__}.{t.__qualname__}"


def _debug(case: str, value: Any, options: RedactOptions) -> None:
    if options.debug_mode:
        logger.emit(logging.DEBUG, f"Proxy {case}", value_type=_type_name(value))


def _zero_value(field: dataclasses.Field) -> Any:
    if field.default is not dataclasses.MISSING:
        return field.default
    if field.default_factory is not dataclasses.MISSING:
        return field.default_factory()
    return None


def proxy_array(value: tuple, options: RedactOptions, memo: Memo) -> tuple:
    _debug("array", value, options)
    if id(value) in memo:
        return memo[id(value)][1]

    items = [proxy_value(v, options, memo) for v in value]
    pv = tuple(items) if type(value) is tuple else tuple.__new__(type(value), items)
    memo[id(value)] = (value, pv)
    return pv


def proxy_map(value: dict, options: RedactOptions, memo: Memo) -> dict:
    _debug("map", value, options)
    if id(value) in memo:
        return memo[id(value)][1]

    # A shallow copy keeps the mapping type and state such as a
    # defaultdict's default_factory.
    pv = copy.copy(value)
    pv.clear()
    memo[id(value)] = (value, pv)
    for k, v in value.items():
        pv[proxy_value(k, options, memo)] = proxy_value(v, options, memo)

    return pv


def proxy_set(value: set | frozenset, options: RedactOptions, memo: Memo) -> set | frozenset:
    _debug("set", value, options)
    if id(value) in memo:
        return memo[id(value)][1]

    if isinstance(value, frozenset):
        pv = type(value)(proxy_value(v, options, memo) for v in value)
        memo[id(value)] = (value, pv)
        return pv

    pv = copy.copy(value)
    pv.clear()
    memo[id(value)] = (value, pv)
    for v in value:
        pv.add(proxy_value(v, options, memo))

    return pv


def proxy_slice(value: list, options: RedactOptions, memo: Memo) -> list:
    _debug("slice", value, options)
    if id(value) in memo:
        return memo[id(value)][1]

    pv = copy.copy(value)
    pv.clear()
    memo[id(value)] = (value, pv)
    pv.extend(proxy_value(v, options, memo) for v in value)

    return pv


def _new_instance(value: Any) -> Any:
    # The class's own __new__ handles builtin bases such as Exception or dict;
    # copy.copy covers classes whose __new__ needs arguments.
    cls = type(value)
    try:
        return cls.__new__(cls)
    except TypeError:
        pass
    try:
        return copy.copy(value)
    except (TypeError, copy.Error):
        return None


def _proxy_builtin_base(value: Any, pv: Any, options: RedactOptions, memo: Memo) -> None:
    if isinstance(value, BaseException):
        pv.args = proxy_value(value.args, options, memo)
    if isinstance(value, dict):
        dict.clear(pv)
        for k, v in value.items():
            dict.__setitem__(pv, proxy_value(k, options, memo), proxy_value(v, options, memo))
    elif isinstance(value, list):
        list.clear(pv)
        list.extend(pv, [proxy_value(v, options, memo) for v in value])
    elif isinstance(value, set):
        set.clear(pv)
        set.update(pv, {proxy_value(v, options, memo) for v in value})


def _proxy_dataclass(value: Any, options: RedactOptions, memo: Memo) -> Any:
    # The copy is populated without running __init__ or __post_init__, the
    # same way a frozen dataclass is populated through object.__setattr__.
    pv = _new_instance(value)
    if pv is None:
        _debug("unsupported struct", value, options)
        memo[id(value)] = (value, value)
        return value

    memo[id(value)] = (value, pv)
    for field in dataclasses.fields(value):
        if not is_public(field.name):
            object.__setattr__(pv, field.name, _zero_value(field))
        elif hasattr(value, field.name):
            object.__setattr__(
                pv, field.name, proxy_value(getattr(value, field.name), options, memo)
            )
    _proxy_builtin_base(value, pv, options, memo)

    return pv


def _proxy_model(value: BaseModel, options: RedactOptions, memo: Memo) -> BaseModel:
    cls = type(value)
    # model_construct skips validation and resets private attributes to
    # their defaults. The copy is memoized before its fields are filled in
    # so models referencing themselves terminate.
    pv = cls.model_construct(_fields_set=set(value.model_fields_set))
    memo[id(value)] = (value, pv)

    pv.__dict__.update(
        {
            name: proxy_value(getattr(value, name), options, memo)
            for name in cls.model_fields
            if is_public(name) and hasattr(value, name)
        }
    )
    if value.model_extra is not None and pv.__pydantic_extra__ is not None:
        pv.__pydantic_extra__.update(
            {
                name: proxy_value(extra, options, memo)
                for name, extra in value.model_extra.items()
                if is_public(name)
            }
        )

    return pv


def _proxy_named_tuple(value: tuple, options: RedactOptions, memo: Memo) -> tuple:
    pv = type(value)._make(proxy_value(v, options, memo) for v in value)
    memo[id(value)] = (value, pv)
    return pv


def proxy_struct(value: Any, options: RedactOptions, memo: Memo) -> Any:
    _debug("struct", value, options)
    if id(value) in memo:
        return memo[id(value)][1]

    if isinstance(value, BaseModel):
        return _proxy_model(value, options, memo)
    if isinstance(value, tuple):
        return _proxy_named_tuple(value, options, memo)
    return _proxy_dataclass(value, options, memo)


def proxy_function(value: Any, options: RedactOptions, memo: Memo) -> Any:
    _debug("function", value, options)
    return value


def proxy_channel(value: Any, options: RedactOptions, memo: Memo) -> Any:
    _debug("channel", value, options)
    return value


def proxy_leaf(value: Any, options: RedactOptions, memo: Memo) -> Any:
    _debug("value", value, options)
    if type(value) is String:
        return String(options.redaction_text)
    return value


_PROXIES: dict[Kind, Callable[[Any, RedactOptions, Memo], Any]] = {
    Kind.ARRAY: proxy_array,
    Kind.CHANNEL: proxy_channel,
    Kind.FUNCTION: proxy_function,
    Kind.MAP: proxy_map,
    Kind.SET: proxy_set,
    Kind.SLICE: proxy_slice,
    Kind.STRUCT: proxy_struct,
    Kind.VALUE: proxy_leaf,
}


def proxy_value(value: Any, options: RedactOptions, memo: Memo | None = None) -> Any:
    """Return a copy of value with every String replaced by the redaction text.

    Args:
        value: Value to copy
        options: Redaction options
        memo: Containers already copied during this traversal

    Returns:
        Copy of value with the same type and shape
    """
    if memo is None:
        memo = {}
    return _PROXIES[classify(value)](value, options, memo)
