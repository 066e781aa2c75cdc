__all__ = ["Spectrum", "InvalidSpectrum", "check_spectrum", "check_spectra"]

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
import numpy.typing as npt

PeakArray = npt.NDArray[np.float64]
IntensityArray = npt.NDArray[np.float64]


class InvalidSpectrum(ValueError):
    pass


@dataclass(frozen=True)
class Spectrum:
    """An MS2 spectrum: precursor mass plus position-aligned peak arrays.

    ``peaks`` must be sorted by increasing mass. This is not checked here;
    use :func:`check_spectrum` where input is untrusted.
    """

    pepmass: float
    peaks: PeakArray
    intensities: IntensityArray
    spectrum_name: str = ""
    charge: Optional[int] = None
    scan_number: Optional[int] = None

    @property
    def num_peaks(self) -> int:
        return self.peaks.shape[0]

    def __post_init__(self):
        object.__setattr__(self, "pepmass", float(self.pepmass))
        object.__setattr__(self, "peaks", np.asarray(self.peaks, dtype=np.float64))
        object.__setattr__(
            self, "intensities", np.asarray(self.intensities, dtype=np.float64)
        )


def check_spectrum(spectrum: Spectrum):
    for name, f in [("peaks", spectrum.peaks), ("intensities", spectrum.intensities)]:
        if f.ndim != 1:
            raise InvalidSpectrum(f"invalid {name} array shape {f.shape}")
    if spectrum.peaks.shape[0] != spectrum.intensities.shape[0]:
        raise InvalidSpectrum(
            f"array length not match: {spectrum.peaks.shape[0]} peaks, "
            f"{spectrum.intensities.shape[0]} intensities"
        )
    if not np.all(np.isfinite(spectrum.peaks)):
        raise InvalidSpectrum("peaks not finite")
    if spectrum.num_peaks > 1 and not np.all(np.diff(spectrum.peaks) >= 0):
        raise InvalidSpectrum("peaks not sorted by mass")


def check_spectra(spectra: Sequence[Spectrum]):
    for i, spectrum in enumerate(spectra):
        try:
            check_spectrum(spectrum)
        except InvalidSpectrum as e:
            name = f" ({spectrum.spectrum_name})" if spectrum.spectrum_name else ""
            raise InvalidSpectrum(f"spectrum {i}{name}: {e}") from e
