# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Wavelet variance estimation.

This module turns a (brick-walled) wavelet decomposition into the
multiscale wavelet variance, attaches chi-square based "eta3" confidence
intervals and, on request, Gaussian intervals built from a diagonal
asymptotic covariance matrix. wavelet_variance() wires the whole pipeline
together for a raw signal.
"""

import logging
from enum import Enum

import numpy as np

from .config import (
    DEFAULT_COVARIANCE_MODE,
    DEFAULT_FILTER,
    DEFAULT_P,
    DEFAULT_VARIANCE_TYPE,
)
from .exceptions import InvalidLevelsError, UnsupportedVarianceTypeError
from .spectral import autocovariance
from .stats import DEFAULT_STATS
from .wavelet import BoundaryMode, Decomposition, brick_wall, modwt

logger = logging.getLogger("wavelet_variance.variance")


class VarianceType(Enum):
    """Enum defining confidence interval constructions for the wavelet variance."""
    ETA3 = "eta3"


class CovarianceMode(Enum):
    """Enum defining how the asymptotic covariance matrix is computed."""
    NO = "no"
    DIAG = "diag"
    FULL = "full"


def _as_variance_type(value):
    if isinstance(value, VarianceType):
        return value
    try:
        return VarianceType(value)
    except ValueError:
        raise UnsupportedVarianceTypeError(
            f"The wave variance type '{value}' is not supported. Please use: eta3"
        ) from None


def _as_covariance_mode(value):
    if isinstance(value, CovarianceMode):
        return value
    try:
        return CovarianceMode(value)
    except ValueError:
        logger.debug("Covariance mode %r not recognized, no Gaussian bounds computed", value)
        return CovarianceMode.NO


def _check_p(p):
    if not 0.0 < p < 0.5:
        raise ValueError(f"p must lie in (0, 0.5), got {p}")


def _levels_of(decomposition):
    if isinstance(decomposition, Decomposition):
        return decomposition.levels
    return [np.asarray(level, dtype=float) for level in decomposition]


class WaveletVarianceResult:
    """
    Wavelet variance estimate with its confidence intervals.

    Attributes:
        variance (numpy.ndarray): Wavelet variance per scale
        low (numpy.ndarray): Lower eta3 bound
        high (numpy.ndarray): Upper eta3 bound
        scales (numpy.ndarray): Scales 2^1, ..., 2^J
        covariance (numpy.ndarray): J x J asymptotic covariance matrix
        gaussian_upper (numpy.ndarray): Upper Gaussian bound (NaN if not computed)
        gaussian_lower (numpy.ndarray): Lower Gaussian bound (NaN if not computed)
        filter_name (str): Wavelet filter used
        p (float): Tail probability of the intervals
    """

    _FIELDS = ("variance", "low", "high", "scales", "covariance",
               "gaussian_upper", "gaussian_lower")

    def __init__(self, variance, low, high, scales, covariance,
                 gaussian_upper, gaussian_lower, filter_name=DEFAULT_FILTER, p=DEFAULT_P):
        for name, values in zip(self._FIELDS, (variance, low, high, scales, covariance,
                                               gaussian_upper, gaussian_lower)):
            arr = np.array(values, dtype=float)
            arr.flags.writeable = False
            object.__setattr__(self, name, arr)
        object.__setattr__(self, "filter_name", filter_name)
        object.__setattr__(self, "p", p)

    def __setattr__(self, name, value):
        raise AttributeError("WaveletVarianceResult is immutable")

    @property
    def levels(self):
        """Number of scales J."""
        return len(self.variance)

    def to_dict(self):
        """Return the result as a dictionary of numpy arrays."""
        out = {name: getattr(self, name) for name in self._FIELDS}
        out["filter_name"] = self.filter_name
        out["p"] = self.p
        return out

    def __repr__(self):
        return (f"WaveletVarianceResult(J={self.levels}, filter={self.filter_name!r}, "
                f"variance={np.array2string(self.variance, precision=4)})")


def ci_eta3(y, dims, p=DEFAULT_P, stats=None):
    """
    Compute the eta3 confidence interval.

    For level i (0-based, scale 2^(i+1)) the equivalent degrees of freedom
    are eta3 = max(dims[i] / 2^(i+1), 1) and the bounds are
    eta3 * y / chi2(1 - p) and eta3 * y / chi2(p).

    Args:
        y (array_like): Wavelet variance per level
        dims (array_like): Number of coefficients per level
        p (float): Tail probability, giving a (1 - 2p) interval
        stats (StatisticsProvider, optional): Quantile backend

    Returns:
        numpy.ndarray: (J, 3) array of [variance, lower, upper]
    """
    _check_p(p)
    stats = stats or DEFAULT_STATS
    y = np.asarray(y, dtype=float)
    dims = np.asarray(dims, dtype=float)
    if y.shape != dims.shape:
        raise ValueError("y and dims must have the same length")

    binary_power = 2.0 ** np.arange(1, len(y) + 1)
    eta3 = np.maximum(dims / binary_power, 1.0)

    out = np.empty((len(y), 3))
    out[:, 0] = y
    out[:, 1] = eta3 * y / stats.chi2_ppf(1.0 - p, eta3)
    out[:, 2] = eta3 * y / stats.chi2_ppf(p, eta3)
    return out


_CI_BUILDERS = {
    VarianceType.ETA3: ci_eta3,
}


def wave_variance(decomposition, type=DEFAULT_VARIANCE_TYPE, p=DEFAULT_P, dims=None, stats=None):
    """
    Multiscale variance of a brick-walled decomposition with confidence bounds.

    The variance at level j is the mean squared wavelet coefficient,
    dot(W_j, W_j) / len(W_j). A level emptied by the brick wall gives NaN.

    Args:
        decomposition (Decomposition or sequence): Trimmed wavelet coefficients
        type (str or VarianceType): Confidence interval type, only "eta3"
        p (float): Tail probability, giving a (1 - 2p) interval
        dims (array_like, optional): Level sizes for the degrees of freedom;
            defaults to the untrimmed level lengths of a Decomposition and
            to the supplied lengths otherwise
        stats (StatisticsProvider, optional): Quantile backend

    Returns:
        numpy.ndarray: (J, 3) array of [variance, lower, upper]

    Raises:
        UnsupportedVarianceTypeError: If type is not "eta3"
    """
    builder = _CI_BUILDERS[_as_variance_type(type)]
    levels = _levels_of(decomposition)

    y = np.empty(len(levels))
    for i, level in enumerate(levels):
        if len(level) == 0:
            logger.warning("Level %d has no coefficients left after trimming", i + 1)
            y[i] = np.nan
        else:
            y[i] = np.dot(level, level) / len(level)

    if dims is None:
        if isinstance(decomposition, Decomposition):
            dims = decomposition.untrimmed_lengths
        else:
            dims = [len(level) for level in levels]

    return builder(y, dims, p, stats)


def covariance_matrix(decomposition, mode=CovarianceMode.DIAG, reference_length=None):
    """
    Asymptotic covariance matrix of the wavelet variance.

    For "diag", level j contributes A_j = dot(acv, acv) - acv[0]^2 / 2 with
    acv the autocovariance of the trimmed coefficients, and
    V = diag(2 A_j / reference_length). All MODWT levels share the same
    untrimmed length, which is the default reference length.

    Args:
        decomposition (Decomposition or sequence): Trimmed wavelet coefficients
        mode (str or CovarianceMode): "diag", "full" or "no"
        reference_length (int, optional): Normalizing length. Defaults to the
            untrimmed level length of a Decomposition; required for plain
            lists of trimmed levels, whose original length is unknown

    Returns:
        numpy.ndarray: J x J covariance matrix (identity when mode is "no")

    Raises:
        NotImplementedError: For the "full" covariance matrix
        ValueError: For "diag" on a plain list without reference_length
    """
    mode = _as_covariance_mode(mode)
    levels = _levels_of(decomposition)
    nb_level = len(levels)

    if mode is CovarianceMode.FULL:
        raise NotImplementedError("The full asymptotic covariance matrix is not implemented")
    if mode is CovarianceMode.NO:
        return np.eye(nb_level)

    if reference_length is None:
        if not isinstance(decomposition, Decomposition):
            raise ValueError(
                "reference_length is required when the levels are not a Decomposition"
            )
        reference_length = decomposition.untrimmed_lengths[0]

    Aj = np.empty(nb_level)
    for i, level in enumerate(levels):
        acv = autocovariance(level)
        if len(acv) == 0:
            Aj[i] = np.nan
            continue
        Aj[i] = np.dot(acv, acv) - acv[0] * acv[0] / 2.0

    return np.diag(2.0 * Aj / reference_length)


def gaussian_bounds(y, V, p=DEFAULT_P, stats=None):
    """
    Gaussian confidence bounds y +/- z_(1-p) * sqrt(diag(V)).

    Returns:
        tuple: (upper, lower) arrays
    """
    _check_p(p)
    stats = stats or DEFAULT_STATS
    y = np.asarray(y, dtype=float)
    z = stats.norm_ppf(1.0 - p)
    sd = np.sqrt(np.diag(np.asarray(V, dtype=float)))
    return y + z * sd, y - z * sd


def wavelet_variance(signal, filter_name=DEFAULT_FILTER, variance_type=DEFAULT_VARIANCE_TYPE,
                     compute_v=DEFAULT_COVARIANCE_MODE, p=DEFAULT_P, stats=None):
    """
    Compute the (MODWT) wavelet variance of a signal.

    The number of scales is floor(log2(N)). The signal is decomposed with
    the MODWT (periodic boundary), boundary coefficients are removed, and
    the variance and its eta3 interval are estimated. When compute_v is
    "diag" Gaussian bounds are added from the diagonal covariance matrix;
    any unrecognized value leaves an identity covariance and NaN bounds.

    Args:
        signal (array_like): Univariate time series
        filter_name (str): Wavelet filter, only "haar"
        variance_type (str): Confidence interval type, only "eta3"
        compute_v (str): "no", "diag" or "full"
        p (float): Tail probability, giving a (1 - 2p) interval
        stats (StatisticsProvider, optional): Quantile backend

    Returns:
        WaveletVarianceResult: Variance, bounds, scales and covariance

    Raises:
        InvalidLevelsError: If the signal has fewer than two samples
        NotImplementedError: If compute_v is "full"
    """
    signal = np.asarray(signal, dtype=float)
    n_ts = len(signal)
    if n_ts < 2:
        raise InvalidLevelsError(f"At least two samples are required, got {n_ts}")

    _as_variance_type(variance_type)
    _check_p(p)
    mode = _as_covariance_mode(compute_v)
    if mode is CovarianceMode.FULL:
        raise NotImplementedError("The full asymptotic covariance matrix is not implemented")

    # floor(log2(n)) without floating point rounding
    nb_level = n_ts.bit_length() - 1

    signal_modwt = modwt(signal, filter_name, nb_level, BoundaryMode.PERIODIC)
    signal_modwt_bw = brick_wall(signal_modwt)

    vmod = wave_variance(signal_modwt_bw, variance_type, p, stats=stats)
    scales = signal_modwt.scales()

    if mode is CovarianceMode.DIAG:
        V = covariance_matrix(signal_modwt_bw, mode, reference_length=len(signal_modwt[0]))
        up_gauss, dw_gauss = gaussian_bounds(vmod[:, 0], V, p, stats)
    else:
        V = np.eye(nb_level)
        up_gauss = np.full(nb_level, np.nan)
        dw_gauss = np.full(nb_level, np.nan)

    logger.debug("Wavelet variance: N=%d, J=%d, compute_v=%s", n_ts, nb_level, mode.value)

    return WaveletVarianceResult(
        variance=vmod[:, 0],
        low=vmod[:, 1],
        high=vmod[:, 2],
        scales=scales,
        covariance=V,
        gaussian_upper=up_gauss,
        gaussian_lower=dw_gauss,
        filter_name=signal_modwt.wave_filter.name.value,
        p=p,
    )
