__all__ = ["SpectrumReaderBase"]

import abc
from typing import Iterator, Optional

from .spec import Spectrum


class SpectrumReaderBase(abc.ABC):
    """Iterates spectra from a source until ``read_spectrum`` returns None."""

    num_spectra: int = 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __next__(self) -> Spectrum:
        spec = self.read_spectrum()
        if spec is None:
            raise StopIteration()
        self.num_spectra += 1
        return spec

    def __iter__(self) -> Iterator[Spectrum]:
        return self

    def close(self):
        pass

    @abc.abstractmethod
    def read_spectrum(self) -> Optional[Spectrum]:
        pass
