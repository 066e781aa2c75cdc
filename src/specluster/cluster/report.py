__all__ = ["count_clusters", "cluster_table", "cluster_sizes", "save_cluster_table"]

from typing import Optional, Sequence

import numpy as np
import pandas as pd

from ..specio.spec import Spectrum


def count_clusters(representatives) -> int:
    return len(np.unique(np.asarray(representatives)))


def cluster_table(
    representatives, spectra: Optional[Sequence[Spectrum]] = None
) -> pd.DataFrame:
    """One row per spectrum with its representative and a dense cluster id.

    Cluster ids are numbered 0, 1, ... in order of first appearance.
    """
    representatives = np.asarray(representatives, dtype=np.int64)
    positions = np.arange(len(representatives), dtype=np.int64)
    cluster_id, _ = pd.factorize(representatives)

    table = pd.DataFrame(
        {
            "index": positions,
            "representative": representatives,
            "cluster_id": cluster_id,
            "is_representative": representatives == positions,
        }
    )
    if spectra is not None:
        if len(spectra) != len(representatives):
            raise ValueError(
                f"{len(spectra)} spectra but {len(representatives)} representatives"
            )
        table["spectrum_name"] = [spec.spectrum_name for spec in spectra]
        table["pepmass"] = [spec.pepmass for spec in spectra]
    return table


def cluster_sizes(representatives) -> pd.DataFrame:
    representatives = np.asarray(representatives, dtype=np.int64)
    keys, counts = np.unique(representatives, return_counts=True)
    return pd.DataFrame({"representative": keys, "size": counts})


def save_cluster_table(table: pd.DataFrame, path: str):
    table.to_csv(path, sep="\t", index=False)
