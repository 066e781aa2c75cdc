__all__ = [
    "cosine_similarity",
    "is_identical_peak",
    "is_similar",
    "passes_pepmass_test",
    "is_clusterable",
]

import math

from ..specio.spec import Spectrum
from .params import DEFAULT_PARAMETERS, ClusteringParameters


def passes_pepmass_test(
    a: Spectrum,
    b: Spectrum,
    pepmass_tolerance: float = DEFAULT_PARAMETERS.pepmass_tolerance,
) -> bool:
    return abs(a.pepmass - b.pepmass) < pepmass_tolerance


def is_identical_peak(
    a: float, b: float, peak_tolerance: float = DEFAULT_PARAMETERS.peak_tolerance
) -> bool:
    return abs(a - b) < peak_tolerance


def cosine_similarity(
    a: Spectrum,
    b: Spectrum,
    peak_tolerance: float = DEFAULT_PARAMETERS.peak_tolerance,
) -> float:
    """Cosine score over peaks matched by a merge walk of the sorted peak lists.

    The walk stops as soon as either spectrum runs out of peaks, so the
    trailing peaks of the other spectrum count in neither the dot product
    nor the norms. Returns NaN when either norm is zero.
    """
    a_peaks = a.peaks.tolist()
    b_peaks = b.peaks.tolist()
    a_intensities = a.intensities.tolist()
    b_intensities = b.intensities.tolist()

    i, j = 0, 0
    score = 0.0
    a_den, b_den = 0.0, 0.0
    while i < len(a_peaks) and j < len(b_peaks):
        if abs(a_peaks[i] - b_peaks[j]) < peak_tolerance:
            score += a_intensities[i] * b_intensities[j]
            a_den += a_intensities[i] ** 2
            b_den += b_intensities[j] ** 2
            i += 1
            j += 1
        elif a_peaks[i] < b_peaks[j]:
            a_den += a_intensities[i] ** 2
            i += 1
        else:
            b_den += b_intensities[j] ** 2
            j += 1

    den = a_den * b_den
    if den == 0.0:
        return math.nan
    return score / math.sqrt(den)


def is_similar(
    a: Spectrum,
    b: Spectrum,
    similarity_threshold: float = DEFAULT_PARAMETERS.similarity_threshold,
    peak_tolerance: float = DEFAULT_PARAMETERS.peak_tolerance,
) -> bool:
    # NaN compares False
    return cosine_similarity(a, b, peak_tolerance) > similarity_threshold


def is_clusterable(
    a: Spectrum, b: Spectrum, parameters: ClusteringParameters = DEFAULT_PARAMETERS
) -> bool:
    return passes_pepmass_test(
        a, b, pepmass_tolerance=parameters.pepmass_tolerance
    ) and is_similar(
        a,
        b,
        similarity_threshold=parameters.similarity_threshold,
        peak_tolerance=parameters.peak_tolerance,
    )
