"""
Wavelet Variance Module

This package computes the multiscale (MODWT) wavelet variance of a
univariate signal together with its confidence intervals. It is the
numerical kernel called repeatedly by Generalized Method of Wavelet
Moments (GMWM) estimators.

Key components:
- Wavelet filter registry (Haar)
- Pyramidal DWT and MODWT
- Boundary coefficient removal ("brick wall")
- FFT-based autocovariance
- Wavelet variance with eta3 and Gaussian confidence intervals
- Latent time series simulation (WN, DR, QN, AR1, RW, MA1, ARMA)
"""

from .exceptions import (
    WaveletVarianceError,
    UnsupportedFilterError,
    UnsupportedBoundaryError,
    InvalidLevelsError,
    UnsupportedVarianceTypeError,
    AlreadyTrimmedError,
    NonStationaryModelError
)

from .filters import (
    WaveletFilter,
    Filter,
    qmf,
    haar_filter,
    select_filter
)

from .wavelet import (
    BoundaryMode,
    TransformKind,
    Decomposition,
    DiscreteWaveletTransform,
    MaximalOverlapDWT,
    extend_signal,
    dwt,
    modwt,
    boundary_counts,
    brick_wall
)

from .spectral import autocovariance

from .stats import StatisticsProvider, ScipyStatistics

from .variance import (
    VarianceType,
    CovarianceMode,
    WaveletVarianceResult,
    ci_eta3,
    wave_variance,
    covariance_matrix,
    gaussian_bounds,
    wavelet_variance
)

from .processes import (
    ModelComponent,
    gen_wn,
    gen_dr,
    gen_qn,
    gen_ar1,
    gen_rw,
    gen_ma1,
    gen_arma11,
    gen_arma,
    gen_model,
    gen_lts
)

# Version information
__version__ = '0.1.0'
