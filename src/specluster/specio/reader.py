__all__ = ["open_spectrum_reader", "read_spectra"]

import os
from typing import List, Optional

from ..util.io.files import zip_content
from .abs import SpectrumReaderBase
from .mgf import MgfReader
from .mzml import MzmlReader
from .spec import Spectrum


def open_spectrum_reader(file: str, format: Optional[str] = None) -> SpectrumReaderBase:
    if format is None:
        format = os.path.splitext(file)[1].lstrip(".")
    format = format.lower()

    if format == "mgf":
        return MgfReader(zip_content(file))
    elif format == "mzml":
        return MzmlReader(file)
    else:
        raise ValueError(f"unknown spectrum file format {format}")


def read_spectra(file: str, format: Optional[str] = None, progress_factory=None) -> List[Spectrum]:
    with open_spectrum_reader(file, format=format) as reader:
        spectra = reader
        if progress_factory:
            spectra = progress_factory(spectra, desc="Reading")
        return list(spectra)
