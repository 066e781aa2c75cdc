from unittest import mock

import pytest

from specluster.cluster.buckets import PeakBucketIndex, format_bucket_key
from specluster.specio.spec import Spectrum


def spectrum(peaks):
    return Spectrum(pepmass=500.0, peaks=peaks, intensities=[1.0] * len(peaks))


class TestBucketKey:
    def test_even_hundredths(self):
        index = PeakBucketIndex()
        assert index.bucket_key(50.01) == 5000
        assert index.bucket_key(50.035) == 5002
        assert index.bucket_key(100.0) == 10000
        assert index.bucket_key(0.5) == 50

    def test_format(self):
        index = PeakBucketIndex()
        assert format_bucket_key(index.bucket_key(50.01)) == "50.00"
        assert format_bucket_key(index.bucket_key(123.4567)) == "123.44"

    def test_wider_bucket(self):
        index = PeakBucketIndex(bucket_width=0.05)
        assert index.bucket_key(100.07) == 10005
        assert index.bucket_key(100.04) == 10000

    def test_boundary_miss(self):
        index = PeakBucketIndex()
        # within the peak tolerance, different buckets
        assert abs(100.034 - 100.015) < 0.02
        assert index.bucket_key(100.015) != index.bucket_key(100.034)

    @pytest.mark.parametrize("width", [0.0, 0.001])
    def test_invalid_width(self, width):
        with pytest.raises(ValueError):
            PeakBucketIndex(bucket_width=width)

    def test_invalid_probe_count(self):
        with pytest.raises(ValueError):
            PeakBucketIndex(probe_count=0)


class TestCandidateKeys:
    def test_lowest_peaks_only(self):
        index = PeakBucketIndex()
        keys = index.candidate_keys(
            spectrum([100.0, 101.0, 102.0, 103.0, 104.0, 105.0, 106.0])
        )
        assert keys == [10000, 10100, 10200, 10300, 10400]

    def test_probe_count(self):
        index = PeakBucketIndex(probe_count=2)
        assert index.candidate_keys(spectrum([100.0, 101.0, 102.0])) == [10000, 10100]

    def test_fewer_peaks_than_probes(self):
        index = PeakBucketIndex()
        assert index.candidate_keys(spectrum([100.0, 200.0])) == [10000, 20000]
        assert index.candidate_keys(spectrum([])) == []

    def test_non_finite_peaks_skipped(self):
        index = PeakBucketIndex()
        assert index.candidate_keys(spectrum([float("nan")])) == []
        assert index.candidate_keys(spectrum([100.0, float("inf")])) == [10000]

    def test_deduplicated(self):
        index = PeakBucketIndex()
        assert index.candidate_keys(spectrum([100.0, 100.005, 100.011])) == [10000]


class TestRegisterLookup:
    def test_empty_index(self):
        index = PeakBucketIndex()
        assert index.lookup(spectrum([100.0])) == []
        assert index.num_buckets == 0

    def test_union_in_ascending_order(self):
        index = PeakBucketIndex()
        index.register(spectrum([100.0]), 3)
        index.register(spectrum([200.0]), 1)
        index.register(spectrum([100.0, 200.0]), 2)

        assert index.lookup(spectrum([100.0, 200.0])) == [1, 2, 3]
        assert index.lookup(spectrum([100.01])) == [2, 3]
        assert index.lookup(spectrum([300.0])) == []
        assert index.num_buckets == 2

    def test_register_once_per_bucket(self):
        index = PeakBucketIndex()
        index.register(spectrum([100.0, 100.01]), 0)
        assert dict(index.items()) == {10000: [0]}

    def test_only_probe_peaks_registered(self):
        index = PeakBucketIndex(probe_count=1)
        index.register(spectrum([100.0, 200.0]), 0)
        assert index.lookup(spectrum([200.0])) == []
        assert index.lookup(spectrum([100.0])) == [0]

    def test_dump_buckets(self):
        index = PeakBucketIndex()
        index.register(spectrum([100.0]), 0)
        index.register(spectrum([50.0, 100.0]), 2)
        logger = mock.MagicMock()

        index.dump_buckets(logger)

        assert logger.debug.call_args_list == [
            mock.call("key : %s\t%s", "50.00", "2"),
            mock.call("key : %s\t%s", "100.00", "0 2"),
        ]
