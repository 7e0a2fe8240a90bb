# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Spectral helpers for the wavelet variance package.

Provides the FFT-based autocovariance estimator used to build the
asymptotic covariance of the wavelet variance.
"""

import logging

import numpy as np

logger = logging.getLogger("wavelet_variance.spectral")


def mod_squared(x: np.ndarray) -> np.ndarray:
    """Squared modulus |z|^2 of a complex array."""
    x = np.asarray(x)
    return np.real(x) ** 2 + np.imag(x) ** 2


def autocovariance(x: np.ndarray) -> np.ndarray:
    """Autocovariance function via the zero-padded FFT

    The sequence is zero-padded to twice its length so the circular
    correlation computed in the frequency domain equals the linear one
    for lags 0..n-1. The result is normalized by n (not 2n).

    Parameters
    ----------
    x : np.ndarray
        Real-valued input sequence of length n

    Returns
    -------
    np.ndarray
        Autocovariance at lags 0..n-1
    """
    x = np.asarray(x, dtype=float)
    if x.ndim != 1:
        raise ValueError("autocovariance expects a 1-D sequence")

    n = len(x)
    if n == 0:
        return np.zeros(0)

    padded = np.zeros(2 * n)
    padded[:n] = x

    spectrum = np.fft.fft(padded)
    power = mod_squared(spectrum).astype(complex)

    # Discard lags n..2n-1, they are wrap-around from the padding
    out = np.real(np.fft.ifft(power)) / n
    return out[:n]
