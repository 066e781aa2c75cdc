__all__ = ["ClusteringParameters", "DEFAULT_PARAMETERS"]

from dataclasses import dataclass, fields


@dataclass(frozen=True)
class ClusteringParameters:
    # peaks closer than this are the same peak
    peak_tolerance: float = 0.02
    # spectra with precursor masses this far apart are never compared
    pepmass_tolerance: float = 2.0
    # cosine scores must exceed this to join a cluster
    similarity_threshold: float = 0.7
    # number of lowest-mass peaks used as bucket keys
    bucket_probe_count: int = 5
    bucket_width: float = 0.02

    @classmethod
    def from_configurable(cls, configurable) -> "ClusteringParameters":
        return cls(
            **{
                f.name: configurable.get_config(
                    f.name, typed=f.type, allow_convert=True
                )
                for f in fields(cls)
            }
        )


DEFAULT_PARAMETERS = ClusteringParameters()
