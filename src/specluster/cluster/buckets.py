__all__ = ["PeakBucketIndex", "format_bucket_key"]

import math
from typing import Dict, Iterable, List, Tuple

import numpy as np

from ..specio.spec import Spectrum
from .params import DEFAULT_PARAMETERS


def format_bucket_key(key: int) -> str:
    """Render a bucket key as the mass at the start of the bucket, e.g. ``50.00``."""
    return f"{key / 100:.2f}"


class PeakBucketIndex:
    """Maps coarse peak-mass buckets to the representatives having a low-mass peak there.

    Keys are bucket start masses in integer hundredths, aligned to multiples
    of the bucket width (``50.01`` lies in ``[50.00, 50.02)`` and maps to
    ``5000``). Peaks within the match tolerance of each other may still fall
    in neighbouring buckets.
    """

    def __init__(
        self,
        bucket_width: float = DEFAULT_PARAMETERS.bucket_width,
        probe_count: int = DEFAULT_PARAMETERS.bucket_probe_count,
    ):
        self.bucket_span = int(round(bucket_width * 100))
        if self.bucket_span < 1:
            raise ValueError(f"bucket width must be at least 0.01: {bucket_width}")
        if probe_count < 1:
            raise ValueError(f"probe count must be positive: {probe_count}")
        self.probe_count = probe_count
        self.buckets: Dict[int, List[int]] = {}

    @property
    def num_buckets(self) -> int:
        return len(self.buckets)

    def bucket_key(self, peak: float) -> int:
        hundredths = math.floor(peak * 100)
        return (hundredths // self.bucket_span) * self.bucket_span

    def candidate_keys(self, spectrum: Spectrum) -> List[int]:
        # peaks are sorted by mass, so these are the lowest-mass peaks
        probes = spectrum.peaks[: min(self.probe_count, spectrum.num_peaks)]
        # non-finite peaks have no bucket
        probes = probes[np.isfinite(probes)]
        return list(dict.fromkeys(self.bucket_key(p) for p in probes.tolist()))

    def register(self, spectrum: Spectrum, index: int):
        for key in self.candidate_keys(spectrum):
            bucket = self.buckets.setdefault(key, [])
            if not bucket or bucket[-1] != index:
                bucket.append(index)

    def lookup(self, spectrum: Spectrum) -> List[int]:
        candidates = set()
        for key in self.candidate_keys(spectrum):
            candidates.update(self.buckets.get(key, ()))
        return sorted(candidates)

    def items(self) -> Iterable[Tuple[int, List[int]]]:
        return sorted(self.buckets.items())

    def dump_buckets(self, logger):
        for key, indices in self.items():
            logger.debug(
                "key : %s\t%s", format_bucket_key(key), " ".join(map(str, indices))
            )
