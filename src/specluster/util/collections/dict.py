__all__ = ["chain_item", "chain_get", "chain_item_typed", "chain_get_typed"]

from typing import Mapping, Optional, Type, TypeVar


def chain_item(d: Mapping, *keys):
    result = d
    for k in keys:
        if isinstance(result, Mapping) and k in result:
            result = result[k]
        else:
            raise KeyError(keys)
    return result


def chain_get(d: Mapping, *keys, default=None):
    result = d
    for k in keys:
        if isinstance(result, Mapping) and k in result:
            result = result.get(k, default)
        else:
            result = default
            break
    return result


T = TypeVar("T")


def _convert(value, t: Type[T]) -> T:
    # bool("false") is True
    if t is bool and isinstance(value, str):
        if value.lower() in {"true", "yes", "on", "1"}:
            return True  # type: ignore
        if value.lower() in {"false", "no", "off", "0"}:
            return False  # type: ignore
        raise ValueError(f"cannot convert {value!r} to bool")
    if t is int and isinstance(value, float) and not value.is_integer():
        raise ValueError(f"cannot convert {value!r} to int without truncation")
    return t(value)  # type: ignore


def chain_item_typed(d: Mapping, t: Type[T], *keys, allow_convert: bool = False) -> T:
    result = chain_item(d, *keys)
    if not isinstance(result, t):
        if allow_convert:
            result = _convert(result, t)
        else:
            raise TypeError(keys, f"{t} expected but {type(result)} found")
    return result


def chain_get_typed(
    d: Mapping,
    t: Type[T],
    *keys,
    default: Optional[T] = None,
    allow_convert: bool = False,
) -> Optional[T]:
    result = chain_get(d, *keys, default=default)
    if result is not None and not isinstance(result, t):
        if allow_convert:
            try:
                result = _convert(result, t)
            except (TypeError, ValueError):
                result = default
        else:
            result = default
    return result
