import argparse
import os
import time

from specluster.cluster.clustering import CLUSTERING_METHODS, SpectrumClusterer
from specluster.cluster.report import cluster_table, save_cluster_table
from specluster.specio.reader import read_spectra
from specluster.util.di import Context
from specluster.util.log import get_logger
from specluster.util.progress import TqdmProgressFactory


def register_dependencies(**kwargs):
    ctx = Context()
    ctx.register("progress_factory", TqdmProgressFactory)
    ctx.register(
        "logger",
        get_logger,
        name=kwargs.get("log_name", None),
        file=kwargs.get("log_file", None),
        level=kwargs.get("log_level", "INFO"),
    )
    ctx.register(
        "clusterer",
        SpectrumClusterer,
        configs=kwargs.get("config", None),
    )
    return ctx


def cluster_spectra_file(spectra_file, dest_file=None, method=None, **kwargs):
    if kwargs.get("log_file", None) is None and dest_file is not None:
        kwargs["log_file"] = rf"{os.path.splitext(dest_file)[0]}.log"
    ctx = register_dependencies(**kwargs)

    logger = ctx.get("logger")
    progress_factory = ctx.get("progress_factory")
    clusterer: SpectrumClusterer = ctx.get("clusterer")

    logger.info(f"Use configs: {clusterer.get_configs()}")

    logger.info(f"Parsing file {spectra_file} ...")
    start_time = time.perf_counter()
    spectra = read_spectra(
        spectra_file,
        format=kwargs.get("format", None),
        progress_factory=progress_factory,
    )
    logger.info(f"Parsing took {time.perf_counter() - start_time:.3f} seconds")

    representatives = clusterer.cluster_spectra(spectra, method=method)

    if dest_file is not None:
        save_cluster_table(cluster_table(representatives, spectra), dest_file)
        logger.info(f"Cluster assignments saved to {dest_file}")

    return representatives


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Cluster MS2 spectra by cosine similarity of matched peaks."
    )
    parser.add_argument(
        "--in", dest="spectra_file", required=True, help="input MGF or mzML file"
    )
    parser.add_argument(
        "--out", dest="dest_file", help="output cluster assignment TSV file"
    )
    parser.add_argument("--config", help="config file")
    parser.add_argument(
        "--method",
        choices=CLUSTERING_METHODS,
        help="clustering method, overrides the config file",
    )
    parser.add_argument(
        "--format", choices=["mgf", "mzml"], help="input format, default by extension"
    )
    parser.add_argument("--log", dest="log_file", help="log file")
    parser.add_argument("--log-level", dest="log_level", default="INFO")

    args = parser.parse_args()

    cluster_spectra_file(**vars(args))
