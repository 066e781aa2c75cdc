__all__ = [
    "initialize_clusters",
    "cluster_heuristic",
    "cluster_naive",
    "cluster_spectra",
    "SpectrumClusterer",
    "CLUSTERING_METHODS",
]

import logging
import os
import time
from logging import Logger
from typing import Optional, Sequence, Tuple, Union

import numpy as np
import numpy.typing as npt

from ..specio.spec import Spectrum, check_spectra
from ..util.config import Configurable
from ..util.progress import ProgressFactoryProto
from .buckets import PeakBucketIndex
from .params import DEFAULT_PARAMETERS, ClusteringParameters
from .report import count_clusters
from .similarity import is_clusterable

RepresentativeArray = npt.NDArray[np.int64]

CLUSTERING_METHODS = ("heuristic", "naive")


def initialize_clusters(size: int) -> RepresentativeArray:
    """Every spectrum starts as the representative of its own cluster."""
    return np.arange(size, dtype=np.int64)


def cluster_heuristic(
    representatives: RepresentativeArray,
    spectra: Sequence[Spectrum],
    parameters: ClusteringParameters = DEFAULT_PARAMETERS,
    progress_factory: Optional[ProgressFactoryProto] = None,
) -> PeakBucketIndex:
    """Assign each spectrum to the first matching representative sharing a peak bucket.

    Only representatives are registered in the bucket index, so candidates
    are always cluster roots. Returns the index built during the pass.
    """
    bucket_index = PeakBucketIndex(
        bucket_width=parameters.bucket_width,
        probe_count=parameters.bucket_probe_count,
    )

    indices = range(len(spectra))
    if progress_factory:
        indices = progress_factory(indices, desc="Clustering")

    for i in indices:
        spectrum = spectra[i]
        for candidate in bucket_index.lookup(spectrum):
            if is_clusterable(spectrum, spectra[candidate], parameters):
                representatives[i] = candidate
                break
        else:
            bucket_index.register(spectrum, i)

    return bucket_index


def cluster_naive(
    representatives: RepresentativeArray,
    spectra: Sequence[Spectrum],
    parameters: ClusteringParameters = DEFAULT_PARAMETERS,
    progress_factory: Optional[ProgressFactoryProto] = None,
):
    """Compare each spectrum against the representatives of all earlier spectra."""
    indices = range(1, len(spectra))
    if progress_factory:
        indices = progress_factory(indices, desc="Clustering")

    for i in indices:
        spectrum = spectra[i]
        seen_candidates = set()
        for j in range(i):
            candidate = int(representatives[j])
            if candidate in seen_candidates:
                continue
            if is_clusterable(spectrum, spectra[candidate], parameters):
                representatives[i] = candidate
                break
            seen_candidates.add(candidate)


def _run_clustering(
    spectra: Sequence[Spectrum],
    parameters: ClusteringParameters,
    method: str,
    validate: bool,
    progress_factory: Optional[ProgressFactoryProto],
) -> Tuple[RepresentativeArray, Optional[PeakBucketIndex]]:
    method = method.lower()
    if method not in CLUSTERING_METHODS:
        raise ValueError(f"unknown clustering method {method}")
    if validate:
        check_spectra(spectra)

    representatives = initialize_clusters(len(spectra))
    bucket_index = None
    if method == "heuristic":
        bucket_index = cluster_heuristic(
            representatives, spectra, parameters, progress_factory=progress_factory
        )
    else:
        cluster_naive(
            representatives, spectra, parameters, progress_factory=progress_factory
        )
    return representatives, bucket_index


def cluster_spectra(
    spectra: Sequence[Spectrum],
    parameters: ClusteringParameters = DEFAULT_PARAMETERS,
    method: str = "heuristic",
    validate: bool = True,
    progress_factory: Optional[ProgressFactoryProto] = None,
) -> RepresentativeArray:
    representatives, _ = _run_clustering(
        spectra, parameters, method, validate, progress_factory
    )
    return representatives


class SpectrumClusterer(Configurable):
    def __init__(
        self,
        configs: Union[str, dict, None] = None,
        logger: Optional[Logger] = None,
        progress_factory: Optional[ProgressFactoryProto] = None,
    ):
        super().__init__(
            configs,
            defaults=os.path.join(
                os.path.dirname(os.path.abspath(__file__)), "clustering.yaml"
            ),
        )
        self.logger = logger
        self.progress_factory = progress_factory

    @property
    def parameters(self) -> ClusteringParameters:
        return ClusteringParameters.from_configurable(self)

    @property
    def method(self) -> str:
        return self.get_config("method", typed=str).lower()

    def cluster_spectra(
        self, spectra: Sequence[Spectrum], method: Optional[str] = None
    ) -> RepresentativeArray:
        if method is None:
            method = self.method
        parameters = self.parameters

        if self.logger:
            self.logger.info(
                f"Clustering {len(spectra)} spectra ({method.lower()}) with {parameters}"
            )

        start_time = time.perf_counter()
        representatives, bucket_index = _run_clustering(
            spectra,
            parameters,
            method,
            validate=self.get_config("validate_spectra", typed=bool, allow_convert=True),
            progress_factory=self.progress_factory,
        )

        if self.logger:
            if bucket_index is not None and self.logger.isEnabledFor(logging.DEBUG):
                self.logger.debug(f"{bucket_index.num_buckets} peak buckets in use")
                bucket_index.dump_buckets(self.logger)
            self.logger.info(
                f"Clustering took {time.perf_counter() - start_time:.3f} seconds"
            )
            self.logger.info(
                f"The {len(spectra)} spectra could be clustered into "
                f"{count_clusters(representatives)} clusters"
            )
        return representatives
