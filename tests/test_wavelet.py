# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Unit tests for the wavelet transform module.
"""

import unittest

import numpy as np
import pywt

from wavelet_variance import (
    AlreadyTrimmedError,
    BoundaryMode,
    Decomposition,
    DiscreteWaveletTransform,
    InvalidLevelsError,
    MaximalOverlapDWT,
    TransformKind,
    UnsupportedBoundaryError,
    UnsupportedFilterError,
    boundary_counts,
    brick_wall,
    dwt,
    extend_signal,
    haar_filter,
    modwt
)


class TestBoundaryHandling(unittest.TestCase):
    """Test signal extension before the transforms."""

    def test_periodic_leaves_signal_unchanged(self):
        x = np.arange(5.0)
        np.testing.assert_array_equal(extend_signal(x, "periodic"), x)

    def test_reflection_appends_reversed_signal(self):
        x = np.array([1.0, 2.0, 3.0])
        np.testing.assert_array_equal(extend_signal(x, BoundaryMode.REFLECTION),
                                      [1.0, 2.0, 3.0, 3.0, 2.0, 1.0])

    def test_unsupported_boundary(self):
        with self.assertRaises(UnsupportedBoundaryError):
            extend_signal(np.arange(4.0), "circular")

    def test_multivariate_rejected(self):
        with self.assertRaises(ValueError):
            extend_signal(np.ones((4, 2)))


class TestDWT(unittest.TestCase):
    """Test the decimated pyramid transform."""

    def setUp(self):
        self.signal = np.arange(1.0, 17.0)

    def test_level_lengths(self):
        result = dwt(self.signal, "haar", nlevels=3, boundary="periodic")
        self.assertEqual(result.kind, TransformKind.DWT)
        self.assertEqual(result.lengths(), [8, 4, 2])
        for j, level in enumerate(result, start=1):
            self.assertEqual(len(level), 16 // 2 ** j)

    def test_haar_ramp_coefficients(self):
        a = 1.0 / np.sqrt(2.0)
        result = dwt(self.signal, "haar", nlevels=3)
        np.testing.assert_allclose(result[0], np.full(8, a))
        np.testing.assert_allclose(result[1], np.full(4, 2.0))
        np.testing.assert_allclose(result[2], np.full(2, 4.0 * np.sqrt(2.0)))

    def test_wraps_at_working_length(self):
        # With L = 2 and u = 2t + 1 no tap wraps, so the last coefficient
        # only sees its own pair
        x = np.zeros(8)
        x[-1] = 1.0
        result = dwt(x, "haar", nlevels=1)
        np.testing.assert_allclose(result[0], [0.0, 0.0, 0.0, 1.0 / np.sqrt(2.0)])

    def test_matches_pywavelets_periodization(self):
        x = np.random.default_rng(7).normal(size=64)
        result = dwt(x, "haar", nlevels=4)
        reference = pywt.wavedec(x, "haar", mode="periodization", level=4)
        # wavedec returns [cA4, cD4, cD3, cD2, cD1]; the Haar wavelet filter
        # here is qmf(g) = [a, -a], the opposite sign of pywt's dec_hi
        for j in range(1, 5):
            np.testing.assert_allclose(result[j - 1], -reference[-j], atol=1e-12)

    def test_energy_preserved_with_scaling(self):
        x = np.random.default_rng(3).normal(size=32)
        result = dwt(x, "haar", nlevels=5)
        energy = sum(np.dot(w, w) for w in result)
        # For J = log2(N) the only scaling coefficient left is sqrt(N) * mean
        self.assertAlmostEqual(energy + 32 * x.mean() ** 2, np.dot(x, x))

    def test_reflection_doubles_length(self):
        result = dwt(np.arange(1.0, 9.0), "haar", nlevels=2, boundary="reflection")
        self.assertEqual(result.signal_length, 16)
        self.assertEqual(result.lengths(), [8, 4])

    def test_unsupported_boundary(self):
        with self.assertRaises(UnsupportedBoundaryError):
            dwt(self.signal, "haar", nlevels=3, boundary="circular")

    def test_boundary_name_is_case_sensitive(self):
        for boundary in ("Periodic", "PERIODIC", "Reflection"):
            with self.assertRaises(UnsupportedBoundaryError):
                dwt(self.signal, "haar", nlevels=3, boundary=boundary)

    def test_levels_must_divide_length(self):
        with self.assertRaises(InvalidLevelsError):
            dwt(np.arange(12.0), "haar", nlevels=3)

    def test_levels_must_not_exceed_length(self):
        with self.assertRaises(InvalidLevelsError):
            dwt(self.signal, "haar", nlevels=5)

    def test_zero_levels_rejected(self):
        with self.assertRaises(InvalidLevelsError):
            dwt(self.signal, "haar", nlevels=0)

    def test_unsupported_filter(self):
        with self.assertRaises(UnsupportedFilterError):
            dwt(self.signal, "db4", nlevels=2)

    def test_input_not_modified(self):
        x = self.signal.copy()
        dwt(x, "haar", nlevels=3, boundary="reflection")
        np.testing.assert_array_equal(x, self.signal)


class TestMODWT(unittest.TestCase):
    """Test the non-decimated pyramid transform."""

    def setUp(self):
        self.signal = np.arange(1.0, 17.0)

    def test_level_lengths(self):
        result = modwt(self.signal, "haar", nlevels=3, boundary="periodic")
        self.assertEqual(result.kind, TransformKind.MODWT)
        self.assertEqual(len(result), 3)
        for level in result:
            self.assertEqual(len(level), 16)

    def test_reflection_level_lengths(self):
        result = modwt(self.signal, "haar", nlevels=3, boundary="reflection")
        for level in result:
            self.assertEqual(len(level), 32)

    def test_haar_first_level(self):
        result = modwt(self.signal, "haar", nlevels=1)
        expected = np.full(16, 0.5)
        expected[0] = 0.5 * (1.0 - 16.0)
        np.testing.assert_allclose(result[0], expected)

    def test_level_dependent_stride(self):
        # W_2[t] = 0.5 * (V_1[t] - V_1[t - 2]), V_1 is the two-point average
        result = modwt(self.signal, "haar", nlevels=2)
        np.testing.assert_allclose(result[1][:3], [-3.0, -7.0, -3.0])
        np.testing.assert_allclose(result[1][3:], np.full(13, 1.0))

    def test_energy_decomposition(self):
        # sum_j ||W_j||^2 + ||V_J||^2 = ||x||^2 and V_J is constant for J = log2(N)
        x = np.random.default_rng(11).normal(size=32)
        result = modwt(x, "haar", nlevels=5)
        energy = sum(np.dot(w, w) for w in result)
        self.assertAlmostEqual(energy + 32 * x.mean() ** 2, np.dot(x, x))

    def test_shift_equivariance(self):
        x = np.random.default_rng(5).normal(size=32)
        base = modwt(x, "haar", nlevels=3)
        shifted = modwt(np.roll(x, 3), "haar", nlevels=3)
        for w, w_shift in zip(base, shifted):
            np.testing.assert_allclose(np.roll(w, 3), w_shift, atol=1e-12)

    def test_length_need_not_be_dyadic(self):
        result = modwt(np.arange(12.0), "haar", nlevels=3)
        self.assertEqual(result.lengths(), [12, 12, 12])

    def test_levels_must_not_exceed_length(self):
        with self.assertRaises(InvalidLevelsError):
            modwt(self.signal, "haar", nlevels=5)

    def test_unsupported_boundary(self):
        with self.assertRaises(UnsupportedBoundaryError):
            modwt(self.signal, "haar", nlevels=2, boundary="zero")

    def test_boundary_name_is_case_sensitive(self):
        with self.assertRaises(UnsupportedBoundaryError):
            modwt(self.signal, "haar", nlevels=2, boundary="Periodic")

    def test_levels_are_read_only(self):
        result = modwt(self.signal, "haar", nlevels=2)
        with self.assertRaises(ValueError):
            result[0][0] = 1.0


class TestBrickWall(unittest.TestCase):
    """Test removal of boundary coefficients."""

    def setUp(self):
        self.signal = np.arange(1.0, 17.0)

    def test_modwt_counts_for_haar(self):
        self.assertEqual(boundary_counts(4, 2, "modwt"), [1, 3, 7, 15])

    def test_modwt_counts_general_length(self):
        self.assertEqual(boundary_counts(3, 4, TransformKind.MODWT), [3, 9, 21])

    def test_dwt_counts_for_haar_are_zero(self):
        self.assertEqual(boundary_counts(5, 2, "dwt"), [0, 0, 0, 0, 0])

    def test_dwt_counts_general_length(self):
        # ceil(6 * (1 - 1/2^j)) for L = 8
        self.assertEqual(boundary_counts(3, 8, "dwt"), [3, 5, 6])

    def test_modwt_trim(self):
        decomposition = modwt(self.signal, "haar", nlevels=3)
        trimmed = brick_wall(decomposition, haar_filter())
        self.assertTrue(trimmed.trimmed)
        self.assertEqual(trimmed.lengths(), [15, 13, 9])
        self.assertEqual(trimmed.untrimmed_lengths, (16, 16, 16))
        for full, cut in zip(decomposition, trimmed):
            np.testing.assert_array_equal(full[len(full) - len(cut):], cut)

    def test_modwt_trim_leaves_unaffected_coefficients(self):
        trimmed = brick_wall(modwt(self.signal, "haar", nlevels=3))
        np.testing.assert_allclose(trimmed[0], np.full(15, 0.5))
        np.testing.assert_allclose(trimmed[1], np.full(13, 1.0))
        np.testing.assert_allclose(trimmed[2], np.full(9, 2.0))

    def test_dwt_trim_is_noop_for_haar(self):
        decomposition = dwt(self.signal, "haar", nlevels=3)
        trimmed = brick_wall(decomposition, haar_filter(), "dwt")
        self.assertEqual(trimmed.lengths(), [8, 4, 2])
        for full, cut in zip(decomposition, trimmed):
            np.testing.assert_array_equal(full, cut)

    def test_method_defaults_to_transform(self):
        trimmed = brick_wall(dwt(self.signal, "haar", nlevels=3))
        self.assertEqual(trimmed.lengths(), [8, 4, 2])

    def test_trim_clamped_to_level_length(self):
        levels = [np.ones(4), np.ones(2)]
        trimmed = brick_wall(levels, "haar", "modwt")
        self.assertEqual(trimmed.lengths(), [3, 0])

    def test_input_not_modified(self):
        decomposition = modwt(self.signal, "haar", nlevels=3)
        brick_wall(decomposition)
        self.assertFalse(decomposition.trimmed)
        self.assertEqual(decomposition.lengths(), [16, 16, 16])

    def test_double_trim_rejected(self):
        trimmed = brick_wall(modwt(self.signal, "haar", nlevels=3))
        with self.assertRaises(AlreadyTrimmedError):
            brick_wall(trimmed)

    def test_plain_list_defaults_to_modwt_haar(self):
        trimmed = brick_wall([np.arange(8.0), np.arange(8.0)])
        self.assertEqual(trimmed.lengths(), [7, 5])
        self.assertIsInstance(trimmed, Decomposition)

    def test_unknown_method(self):
        with self.assertRaises(ValueError):
            brick_wall(modwt(self.signal, "haar", nlevels=2), method="swt")

    def test_method_name_is_case_sensitive(self):
        with self.assertRaises(ValueError):
            brick_wall(modwt(self.signal, "haar", nlevels=2), method="MODWT")

    def test_records_method_used(self):
        decomposition = dwt(self.signal, "haar", nlevels=3)
        trimmed = brick_wall(decomposition, method="modwt")
        self.assertEqual(trimmed.kind, TransformKind.MODWT)
        self.assertEqual(trimmed.lengths(), [7, 1, 0])

    def test_records_filter_used(self):
        haar = haar_filter()
        trimmed = brick_wall([np.arange(8.0)], haar)
        self.assertIs(trimmed.wave_filter, haar)
        self.assertEqual(trimmed.kind, TransformKind.MODWT)


class TestTransformObjects(unittest.TestCase):
    """Test the object interface of the transforms."""

    def setUp(self):
        self.signal = np.sin(np.linspace(0.0, 8.0 * np.pi, 128))

    def test_modwt_forward_matches_function(self):
        result = MaximalOverlapDWT("haar").forward(self.signal, 4)
        expected = modwt(self.signal, "haar", 4)
        for w, w_expected in zip(result, expected):
            np.testing.assert_array_equal(w, w_expected)

    def test_dwt_forward_matches_function(self):
        result = DiscreteWaveletTransform("haar").forward(self.signal, 3, BoundaryMode.REFLECTION)
        expected = dwt(self.signal, "haar", 3, "reflection")
        for w, w_expected in zip(result, expected):
            np.testing.assert_array_equal(w, w_expected)

    def test_analyze_without_plot(self):
        analysis = MaximalOverlapDWT().analyze(self.signal, levels=3, plot=False)
        self.assertEqual(analysis['decomposition'].lengths(), [128, 128, 128])
        self.assertEqual(analysis['trimmed'].lengths(), [127, 125, 121])
        self.assertEqual(analysis['energy'].shape, (3,))
        self.assertTrue(np.all(analysis['energy'] >= 0))

    def test_unsupported_filter(self):
        with self.assertRaises(UnsupportedFilterError):
            MaximalOverlapDWT("db4")


if __name__ == '__main__':
    unittest.main()
