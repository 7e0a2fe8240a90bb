# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Exceptions raised by the wavelet variance package.

Every error derives from ValueError as well as the package base class, so
callers that only guard against bad arguments keep working.
"""


class WaveletVarianceError(Exception):
    """Base class for errors raised by this package."""


class UnsupportedFilterError(WaveletVarianceError, ValueError):
    """The requested wavelet filter is not in the registry."""


class UnsupportedBoundaryError(WaveletVarianceError, ValueError):
    """The boundary mode is neither periodic nor reflection."""


class InvalidLevelsError(WaveletVarianceError, ValueError):
    """The number of decomposition levels does not fit the signal length."""


class UnsupportedVarianceTypeError(WaveletVarianceError, ValueError):
    """The confidence interval type is not supported."""


class AlreadyTrimmedError(WaveletVarianceError, ValueError):
    """Boundary coefficients were already removed from the decomposition."""


class NonStationaryModelError(WaveletVarianceError, ValueError):
    """The AR polynomial of a simulated model has a root inside the unit circle."""
