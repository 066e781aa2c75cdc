__all__ = ["MgfReader"]

import io
import math
from typing import Optional, Union

import numpy as np

from .abs import SpectrumReaderBase
from .spec import Spectrum


class MgfReader(SpectrumReaderBase):
    """Reads ``BEGIN IONS``/``END IONS`` blocks from an MGF file.

    Peaks of each spectrum are sorted by mass on the way out.
    """

    def __init__(self, file):
        if isinstance(file, str):
            file = open(file, "r")
        elif not isinstance(file, io.TextIOBase):
            file = io.TextIOWrapper(file, encoding="utf-8")
        self.reader = file
        self.line_number = 0

    def close(self):
        return self.reader.close()

    def _error(self, message: str, line: str):
        return ValueError(f"[Line {self.line_number}] {message}: {line}")

    def read_spectrum(self) -> Optional[Spectrum]:
        spectrum: Union[None, dict] = None
        while True:
            line = self.reader.readline()
            self.line_number += 1
            if not line:
                if spectrum is not None:
                    raise ValueError("unexpected EOF")
                return None

            line = line.strip()
            if len(line) == 0 or line[0] in {"#", ";", "!", "/"}:
                continue

            if line == "BEGIN IONS":
                if spectrum is not None:
                    raise self._error("invalid format", line)
                spectrum = {
                    "pepmass": math.nan,
                    "peaks": [],
                    "intensities": [],
                }
                continue

            if line == "END IONS":
                if spectrum is None:
                    raise self._error("invalid format", line)
                peaks = np.array(spectrum.pop("peaks"), dtype=np.float64)
                intensities = np.array(spectrum.pop("intensities"), dtype=np.float64)
                order = np.argsort(peaks, kind="stable")
                return Spectrum(
                    peaks=peaks[order], intensities=intensities[order], **spectrum
                )

            if spectrum is None:
                continue

            s = line.split("=", 1)
            if len(s) == 2:
                self.parse_header(spectrum, s[0].upper(), s[1].strip())
                continue

            s = line.split()
            try:
                mz, intensity = float(s[0]), float(s[1])
            except (IndexError, ValueError):
                raise self._error("invalid peak", line) from None
            spectrum["peaks"].append(mz)
            spectrum["intensities"].append(intensity)

    def parse_header(self, spectrum: dict, key: str, value: str):
        try:
            if key == "PEPMASS":
                # PEPMASS=mz [intensity]
                spectrum["pepmass"] = float(value.split()[0])
            elif key == "CHARGE":
                charge = value.split(" ")[0].split(",")[0]
                sign = -1 if charge.endswith("-") else 1
                spectrum["charge"] = sign * int(charge.strip("+-"))
            elif key == "TITLE":
                spectrum["spectrum_name"] = value
            elif key == "SCANS":
                spectrum["scan_number"] = int(value.split("-")[0])
        except (IndexError, ValueError):
            raise self._error(f"invalid {key}", value) from None
