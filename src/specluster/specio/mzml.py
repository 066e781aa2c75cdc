__all__ = ["MzmlReader"]

import math
import re
from typing import Optional, Union, cast

import numpy as np
import pymzml.run
import pymzml.spec

from .abs import SpectrumReaderBase
from .spec import Spectrum


class MzmlReader(SpectrumReaderBase):
    """Reads MS2 spectra from mzML, taking pepmass from the first precursor."""

    def __init__(self, file, ms_level: int = 2):
        self.reader = pymzml.run.Reader(file)
        self.ms_level = ms_level

    def close(self):
        return self.reader.close()

    def read_spectrum(self) -> Optional[Spectrum]:
        spec: Union[None, pymzml.spec.Spectrum, pymzml.spec.Chromatogram]
        while True:
            spec = next(self.reader, None)
            if spec is None:
                return None
            if isinstance(spec, pymzml.spec.Spectrum) and spec.ms_level == self.ms_level:
                break

        mz = np.asarray(spec.mz, dtype=np.float64)
        intensity = np.asarray(spec.i, dtype=np.float64)
        order = np.argsort(mz, kind="stable")

        pepmass = math.nan
        charge = None
        precursors = spec.selected_precursors
        if precursors:
            pepmass = float(precursors[0].get("mz", math.nan))
            if precursors[0].get("charge") is not None:
                charge = int(precursors[0]["charge"])

        if spec.id_dict:
            scan_number = cast(int, spec.id_dict.get("scan"))
        else:
            scan_number = cast(int, spec.ID)
        spectrum_title = spec.get("MS:1000796", None)
        if spectrum_title is not None:
            title_match = re.search('^(.*) File:"(.*)",', spectrum_title)  # type: ignore
            if title_match is not None:
                spectrum_name = title_match.group(1)
            else:
                spectrum_name = cast(str, spectrum_title)
        else:
            spectrum_name = str(scan_number)

        return Spectrum(
            pepmass=pepmass,
            peaks=mz[order],
            intensities=intensity[order],
            spectrum_name=spectrum_name,
            charge=charge,
            scan_number=scan_number,
        )
