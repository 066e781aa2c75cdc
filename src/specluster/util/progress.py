__all__ = ["ProgressProto", "ProgressFactoryProto", "TqdmProgressFactory"]

from typing import Generic, Iterable, Protocol, TypeVar, Union, runtime_checkable

import tqdm

T = TypeVar("T", covariant=True)


@runtime_checkable
class ProgressProto(Generic[T], Iterable[T], Protocol):
    def update(self, n: Union[float, None] = 1) -> Union[bool, None]:
        ...

    def set_description(self, desc=None):
        ...


class ProgressFactoryProto(Protocol):
    def __call__(self, iterable: Iterable[T], *args, **kwds) -> ProgressProto[T]:
        ...


class TqdmProgressFactory:
    """Wraps iterables in tqdm progress bars, counting spectra by default."""

    def __init__(self, unit: str = "spectra", disable: bool = False):
        self.unit = unit
        self.disable = disable

    def __call__(self, iterable: Iterable[T], *args, **kwds) -> ProgressProto[T]:
        kwds.setdefault("unit", self.unit)
        kwds.setdefault("disable", self.disable)
        return tqdm.tqdm(iterable, *args, **kwds)
