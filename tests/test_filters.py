import numpy as np
import pytest

from wavelet_variance import (
    Filter,
    UnsupportedFilterError,
    WaveletFilter,
    haar_filter,
    qmf,
    select_filter
)

INV_SQRT2 = 1.0 / np.sqrt(2.0)


class TestQMF:
    def test_inverse_negates_odd_positions(self):
        g = np.array([1.0, 2.0, 3.0, 4.0])
        # reversed: [4, 3, 2, 1]
        np.testing.assert_array_equal(qmf(g, inverse=True), [4.0, -3.0, 2.0, -1.0])

    def test_forward_negates_even_positions(self):
        g = np.array([1.0, 2.0, 3.0, 4.0])
        np.testing.assert_array_equal(qmf(g, inverse=False), [-4.0, 3.0, -2.0, 1.0])

    def test_default_is_inverse(self):
        g = np.array([0.3, -0.1, 0.8, 0.5])
        np.testing.assert_array_equal(qmf(g), qmf(g, inverse=True))

    @pytest.mark.parametrize("length", [2, 4, 6, 8])
    def test_inverse_then_forward_recovers_filter(self, length):
        g = np.random.default_rng(length).normal(size=length)
        np.testing.assert_allclose(qmf(qmf(g, True), False), g)

    def test_does_not_modify_input(self):
        g = np.array([1.0, 2.0])
        qmf(g)
        np.testing.assert_array_equal(g, [1.0, 2.0])

    def test_haar_forward_qmf(self):
        np.testing.assert_allclose(qmf([INV_SQRT2, INV_SQRT2], inverse=False),
                                   [-INV_SQRT2, INV_SQRT2])


class TestHaarFilter:
    def test_coefficients(self):
        haar = haar_filter()
        assert haar.name is WaveletFilter.HAAR
        assert haar.length == 2
        np.testing.assert_allclose(haar.scaling, [0.70710678, 0.70710678], atol=1e-8)
        np.testing.assert_allclose(haar.wavelet, [0.70710678, -0.70710678], atol=1e-8)

    def test_h_g_aliases(self):
        haar = haar_filter()
        np.testing.assert_array_equal(haar.h, haar.wavelet)
        np.testing.assert_array_equal(haar.g, haar.scaling)

    def test_wavelet_is_qmf_of_scaling(self):
        haar = haar_filter()
        np.testing.assert_array_equal(haar.wavelet, qmf(haar.scaling))

    def test_orthonormal_pair(self):
        haar = haar_filter()
        assert np.dot(haar.scaling, haar.scaling) == pytest.approx(1.0)
        assert np.dot(haar.wavelet, haar.wavelet) == pytest.approx(1.0)
        assert np.dot(haar.wavelet, haar.scaling) == pytest.approx(0.0)

    def test_coefficients_are_read_only(self):
        haar = haar_filter()
        with pytest.raises(ValueError):
            haar.scaling[0] = 1.0

    def test_modwt_rescaling(self):
        scaled = haar_filter().modwt()
        np.testing.assert_allclose(scaled.scaling, [0.5, 0.5])
        np.testing.assert_allclose(scaled.wavelet, [0.5, -0.5])
        assert scaled.length == 2

    def test_equality(self):
        assert haar_filter() == haar_filter()
        assert haar_filter() != haar_filter().modwt()
        assert hash(haar_filter()) == hash(haar_filter())

    def test_mismatched_lengths_rejected(self):
        with pytest.raises(ValueError):
            Filter(WaveletFilter.HAAR, [1.0, 2.0, 3.0], [1.0, 2.0])


class TestSelectFilter:
    @pytest.mark.parametrize("name", ["haar", WaveletFilter.HAAR])
    def test_haar(self, name):
        assert select_filter(name) == haar_filter()

    def test_default_is_haar(self):
        assert select_filter() == haar_filter()

    def test_filter_passthrough(self):
        haar = haar_filter()
        assert select_filter(haar) is haar

    @pytest.mark.parametrize("name", ["db4", "la8", "", "haar2", "HAAR", "Haar", None])
    def test_unsupported(self, name):
        with pytest.raises(UnsupportedFilterError):
            select_filter(name)

    def test_unsupported_is_value_error(self):
        with pytest.raises(ValueError):
            select_filter("db4")

    def test_returns_independent_values(self):
        assert select_filter("haar") is not select_filter("haar")
