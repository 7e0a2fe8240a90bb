# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Wavelet filter registry.

Builds named wavelet/scaling filter pairs. Only the Haar filter is
provided; new families are added by extending WaveletFilter and the
constructor table below.
"""

import logging
from enum import Enum

import numpy as np

from .exceptions import UnsupportedFilterError

logger = logging.getLogger("wavelet_variance.filters")


class WaveletFilter(Enum):
    """Enum defining available wavelet filters."""
    HAAR = "haar"


def _readonly(values):
    arr = np.array(values, dtype=float)
    arr.flags.writeable = False
    return arr


class Filter:
    """
    Wavelet and scaling filter pair.

    Instances are immutable: the coefficient arrays are read-only, so a
    filter can be shared between threads without copying.

    Args:
        name (WaveletFilter): Filter family
        wavelet (array_like): Wavelet (high-pass) coefficients h
        scaling (array_like): Scaling (low-pass) coefficients g
    """

    __slots__ = ("_name", "_wavelet", "_scaling")

    def __init__(self, name, wavelet, scaling):
        wavelet = _readonly(wavelet)
        scaling = _readonly(scaling)
        if wavelet.ndim != 1 or wavelet.shape != scaling.shape:
            raise ValueError("Wavelet and scaling filters must be 1-D and of equal length")
        self._name = WaveletFilter(name)
        self._wavelet = wavelet
        self._scaling = scaling

    @property
    def name(self):
        return self._name

    @property
    def length(self):
        """Number of filter taps L."""
        return len(self._scaling)

    @property
    def wavelet(self):
        return self._wavelet

    @property
    def scaling(self):
        return self._scaling

    # Short aliases matching the usual h / g notation
    h = wavelet
    g = scaling

    def modwt(self):
        """Return the filter rescaled by 1/sqrt(2) for the MODWT."""
        factor = np.sqrt(2.0)
        return Filter(self._name, self._wavelet / factor, self._scaling / factor)

    def __eq__(self, other):
        if not isinstance(other, Filter):
            return NotImplemented
        return (self._name is other._name
                and np.array_equal(self._wavelet, other._wavelet)
                and np.array_equal(self._scaling, other._scaling))

    def __hash__(self):
        return hash((self._name, self._wavelet.tobytes(), self._scaling.tobytes()))

    def __repr__(self):
        return (f"Filter(name={self._name.value!r}, L={self.length}, "
                f"h={self._wavelet.tolist()}, g={self._scaling.tolist()})")


def qmf(g, inverse=True):
    """
    Quadrature mirror filter of an even-length series.

    The series is reversed and every element at index i with
    (i + (0 if inverse else 1)) odd is negated: odd positions for the
    inverse QMF, even positions for the forward QMF.

    Args:
        g (array_like): Filter coefficients
        inverse (bool): Compute the inverse QMF (default)

    Returns:
        numpy.ndarray: The mirrored filter
    """
    rev_g = np.asarray(g, dtype=float)[::-1].copy()
    offset = 0 if inverse else 1
    idx = np.arange(len(rev_g))
    rev_g[(idx + offset) % 2 != 0] *= -1
    return rev_g


def haar_filter():
    """Construct the Haar filter (L = 2)."""
    g = np.array([0.7071067811865475, 0.7071067811865475])
    h = qmf(g)
    return Filter(WaveletFilter.HAAR, h, g)


_FILTER_CONSTRUCTORS = {
    WaveletFilter.HAAR: haar_filter,
}


def _as_filter_name(name):
    if isinstance(name, WaveletFilter):
        return name
    try:
        return WaveletFilter(name)
    except ValueError:
        supported = ", ".join(f.value for f in WaveletFilter)
        raise UnsupportedFilterError(
            f"Wave filter '{name}' is not supported. Supported filters: {supported}"
        ) from None


def select_filter(name="haar"):
    """
    Look up a wavelet filter by name.

    Args:
        name (str or WaveletFilter): Filter name, e.g. "haar"

    Returns:
        Filter: The filter pair

    Raises:
        UnsupportedFilterError: If the name is not registered
    """
    if isinstance(name, Filter):
        return name
    key = _as_filter_name(name)
    wave_filter = _FILTER_CONSTRUCTORS[key]()
    logger.debug("Selected filter %s (L=%d)", key.value, wave_filter.length)
    return wave_filter
