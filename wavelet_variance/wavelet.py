# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Pyramidal wavelet transforms for the wavelet variance package.

This module provides the Discrete Wavelet Transform (DWT) and the
Maximal Overlap Discrete Wavelet Transform (MODWT) computed with the
pyramid algorithm, together with removal of the boundary-affected
coefficients ("brick wall").

Both transforms return a Decomposition holding the wavelet coefficients
W_1, ..., W_J (finest scale first). The final scaling coefficients are
not kept.
"""

import math
import logging
from enum import Enum

import numpy as np

from .config import DEFAULT_BOUNDARY, DEFAULT_FILTER, DEFAULT_LEVELS
from .exceptions import (
    AlreadyTrimmedError,
    InvalidLevelsError,
    UnsupportedBoundaryError,
)
from .filters import Filter, select_filter

logger = logging.getLogger("wavelet_variance.wavelet")


class BoundaryMode(Enum):
    """Enum defining boundary handling modes for wavelet transforms."""
    PERIODIC = "periodic"
    REFLECTION = "reflection"


class TransformKind(Enum):
    """Enum defining the pyramid transform that produced a decomposition."""
    MODWT = "modwt"
    DWT = "dwt"


def _as_boundary(mode):
    if isinstance(mode, BoundaryMode):
        return mode
    try:
        return BoundaryMode(mode)
    except ValueError:
        raise UnsupportedBoundaryError(
            f"Boundary '{mode}' is not supported. Choose either periodic or reflection."
        ) from None


def _as_kind(method):
    if isinstance(method, TransformKind):
        return method
    try:
        return TransformKind(method)
    except ValueError:
        raise ValueError(f"Unknown transform '{method}'. Choose either modwt or dwt.") from None


def _freeze(values):
    arr = np.array(values, dtype=float)
    arr.flags.writeable = False
    return arr


class Decomposition:
    """
    Wavelet coefficients of a multiresolution decomposition.

    Levels are ordered from the finest scale (j = 1) to the coarsest
    (j = J). The container and its arrays are read-only.

    Args:
        levels (sequence): Wavelet coefficients per level
        kind (TransformKind): Transform that produced the levels
        wave_filter (Filter): Filter used by the transform
        boundary (BoundaryMode): Boundary handling applied to the signal
        signal_length (int): Signal length after boundary handling
        trimmed (bool): Whether boundary coefficients were removed
        untrimmed_lengths (sequence): Level lengths before trimming
    """

    __slots__ = ("_levels", "_kind", "_filter", "_boundary", "_signal_length",
                 "_trimmed", "_untrimmed_lengths")

    def __init__(self, levels, kind=TransformKind.MODWT, wave_filter=None,
                 boundary=BoundaryMode.PERIODIC, signal_length=None,
                 trimmed=False, untrimmed_lengths=None):
        self._levels = tuple(_freeze(level) for level in levels)
        self._kind = _as_kind(kind)
        self._filter = wave_filter if wave_filter is not None else select_filter(DEFAULT_FILTER)
        self._boundary = _as_boundary(boundary)
        self._signal_length = signal_length
        self._trimmed = bool(trimmed)
        if untrimmed_lengths is None:
            untrimmed_lengths = [len(level) for level in self._levels]
        self._untrimmed_lengths = tuple(int(n) for n in untrimmed_lengths)

    @property
    def levels(self):
        return self._levels

    @property
    def kind(self):
        return self._kind

    @property
    def wave_filter(self):
        return self._filter

    @property
    def boundary(self):
        return self._boundary

    @property
    def signal_length(self):
        return self._signal_length

    @property
    def trimmed(self):
        return self._trimmed

    @property
    def untrimmed_lengths(self):
        return self._untrimmed_lengths

    @property
    def nlevels(self):
        return len(self._levels)

    def lengths(self):
        """Current length of each level."""
        return [len(level) for level in self._levels]

    def scales(self):
        """Scales 2^j associated with each level."""
        return 2.0 ** np.arange(1, self.nlevels + 1)

    def __len__(self):
        return len(self._levels)

    def __getitem__(self, index):
        return self._levels[index]

    def __iter__(self):
        return iter(self._levels)

    def __repr__(self):
        return (f"Decomposition(kind={self._kind.value}, J={self.nlevels}, "
                f"lengths={self.lengths()}, trimmed={self._trimmed})")


def extend_signal(signal, boundary=DEFAULT_BOUNDARY):
    """
    Apply boundary handling to a signal before transforming it.

    Args:
        signal (numpy.ndarray): Input signal
        boundary (str or BoundaryMode): "periodic" leaves the signal as is,
            "reflection" appends the reversed signal

    Returns:
        numpy.ndarray: Signal after boundary handling
    """
    mode = _as_boundary(boundary)
    signal = np.asarray(signal, dtype=float)
    if signal.ndim != 1:
        raise ValueError("Only univariate (1-D) signals are supported")

    if mode is BoundaryMode.REFLECTION:
        return np.concatenate([signal, signal[::-1]])
    return signal.copy()


def _check_levels(N, nlevels, require_divisible):
    if nlevels < 1:
        raise InvalidLevelsError(f"The number of levels must be at least 1, got {nlevels}")
    tau = 2 ** nlevels
    if tau > N:
        raise InvalidLevelsError(
            f"The number of levels [2^{nlevels} = {tau}] exceeds the sample size ({N}). "
            "Supply a lower number of levels."
        )
    if require_divisible and N % tau != 0:
        raise InvalidLevelsError(
            f"The sample size ({N}) must be divisible by 2^{nlevels} = {tau}. "
            "Either truncate or expand the number of samples."
        )


def _dwt_step(v, h, g):
    """One decimating pyramid step at the current working length M = len(v)."""
    M = len(v)
    t = np.arange(M // 2)
    taps = np.arange(len(h))
    # u starts at 2t + 1 and steps back one sample per tap, wrapping at M
    u = (2 * t[:, None] + 1 - taps[None, :]) % M
    block = v[u]
    return block @ h, block @ g


def _modwt_step(v, h, g, level):
    """One non-decimating pyramid step; taps are 2^(level-1) samples apart."""
    N = len(v)
    t = np.arange(N)
    taps = np.arange(len(h))
    k = (t[:, None] - taps[None, :] * 2 ** (level - 1)) % N
    block = v[k]
    return block @ h, block @ g


def _pyramid(x, nlevels, step):
    """Chain step over levels 1..J; step maps (V_{j-1}, j) to (W_j, V_j)."""
    def descend(v_prev, j):
        if j > nlevels:
            return []
        w_j, v_j = step(v_prev, j)
        return [w_j] + descend(v_j, j + 1)

    return descend(x, 1)


def dwt(signal, filter_name=DEFAULT_FILTER, nlevels=DEFAULT_LEVELS, boundary=DEFAULT_BOUNDARY):
    """
    Discrete Wavelet Transform computed with the pyramid algorithm.

    At level j the working signal of length M = N / 2^(j-1) is filtered
    circularly at its own length and decimated to M / 2 coefficients.

    Args:
        signal (array_like): Input signal
        filter_name (str or WaveletFilter): Wavelet filter, e.g. "haar"
        nlevels (int): Number of decomposition levels J
        boundary (str or BoundaryMode): "periodic" or "reflection"

    Returns:
        Decomposition: W_1, ..., W_J with len(W_j) = N / 2^j

    Raises:
        UnsupportedBoundaryError: Unknown boundary mode
        InvalidLevelsError: 2^J exceeds or does not divide N
        UnsupportedFilterError: Unknown filter
    """
    mode = _as_boundary(boundary)
    x = extend_signal(signal, mode)
    N = len(x)
    _check_levels(N, nlevels, require_divisible=True)

    wave_filter = select_filter(filter_name)
    h, g = wave_filter.wavelet, wave_filter.scaling

    levels = _pyramid(x, nlevels, lambda v, j: _dwt_step(v, h, g))
    logger.debug("DWT: N=%d, J=%d, lengths=%s", N, nlevels, [len(w) for w in levels])

    return Decomposition(levels, TransformKind.DWT, wave_filter, mode, N)


def modwt(signal, filter_name=DEFAULT_FILTER, nlevels=DEFAULT_LEVELS, boundary=DEFAULT_BOUNDARY):
    """
    Maximal Overlap Discrete Wavelet Transform.

    The filters are rescaled by 1/sqrt(2) and applied without decimation,
    so every level keeps the length of the (boundary-handled) signal.

    Args:
        signal (array_like): Input signal
        filter_name (str or WaveletFilter): Wavelet filter, e.g. "haar"
        nlevels (int): Number of decomposition levels J
        boundary (str or BoundaryMode): "periodic" or "reflection"

    Returns:
        Decomposition: W_1, ..., W_J with len(W_j) = N

    Raises:
        UnsupportedBoundaryError: Unknown boundary mode
        InvalidLevelsError: 2^J exceeds N
        UnsupportedFilterError: Unknown filter
    """
    mode = _as_boundary(boundary)
    x = extend_signal(signal, mode)
    N = len(x)
    _check_levels(N, nlevels, require_divisible=False)

    wave_filter = select_filter(filter_name)
    scaled = wave_filter.modwt()
    h, g = scaled.wavelet, scaled.scaling

    levels = _pyramid(x, nlevels, lambda v, j: _modwt_step(v, h, g, j))
    logger.debug("MODWT: N=%d, J=%d", N, nlevels)

    return Decomposition(levels, TransformKind.MODWT, wave_filter, mode, N)


def boundary_counts(nlevels, filter_length, method=TransformKind.MODWT):
    """
    Number of boundary-affected coefficients at each level.

    MODWT: n_j = (2^j - 1)(L - 1)
    DWT:   n_j = ceil((L - 2)(1 - 1/2^j))

    Args:
        nlevels (int): Number of levels J
        filter_length (int): Filter length L
        method (str or TransformKind): "modwt" or "dwt"

    Returns:
        list of int: n_1, ..., n_J
    """
    kind = _as_kind(method)
    m = int(filter_length)
    counts = []
    for j in range(1, nlevels + 1):
        binary_power = 2 ** j
        if kind is TransformKind.DWT:
            n = math.ceil((m - 2) * (1.0 - 1.0 / binary_power))
        else:
            n = (binary_power - 1) * (m - 1)
        counts.append(max(int(n), 0))
    return counts


def brick_wall(decomposition, wave_filter=None, method=None):
    """
    Remove the boundary-affected wavelet coefficients from each level.

    The first n_j coefficients of level j are dropped (see boundary_counts);
    n_j is clamped to the level length, leaving an empty level when every
    coefficient is affected.

    Args:
        decomposition (Decomposition or sequence): Output of modwt or dwt, or
            a plain list of coefficient arrays
        wave_filter (Filter or str, optional): Filter whose length sets the
            trim; defaults to the decomposition's filter
        method (str or TransformKind, optional): Formula to use; defaults to
            the decomposition's transform ("modwt" for plain lists)

    Returns:
        Decomposition: A new, trimmed decomposition, tagged with the
        transform kind and filter used for the trim

    Raises:
        AlreadyTrimmedError: The decomposition was already trimmed
    """
    if not isinstance(decomposition, Decomposition):
        decomposition = Decomposition(
            decomposition,
            kind=method if method is not None else TransformKind.MODWT,
            wave_filter=select_filter(wave_filter if wave_filter is not None else DEFAULT_FILTER),
        )

    if decomposition.trimmed:
        raise AlreadyTrimmedError(
            "Boundary coefficients were already removed from this decomposition"
        )

    if wave_filter is None:
        wave_filter = decomposition.wave_filter
    elif not isinstance(wave_filter, Filter):
        wave_filter = select_filter(wave_filter)
    kind = decomposition.kind if method is None else _as_kind(method)

    counts = boundary_counts(decomposition.nlevels, wave_filter.length, kind)
    trimmed = []
    for level, n in zip(decomposition.levels, counts):
        n = min(n, len(level))
        trimmed.append(level[n:])
    logger.debug("Brick wall (%s): removed %s coefficients", kind.value, counts)

    return Decomposition(
        trimmed,
        kind=kind,
        wave_filter=wave_filter,
        boundary=decomposition.boundary,
        signal_length=decomposition.signal_length,
        trimmed=True,
        untrimmed_lengths=decomposition.untrimmed_lengths,
    )


class _PyramidTransform:
    """Shared object interface for the pyramid transforms."""

    def __init__(self, filter_name=DEFAULT_FILTER):
        """
        Initialize a new transform object.

        Args:
            filter_name (str or WaveletFilter): The wavelet filter to use
        """
        self.wave_filter = select_filter(filter_name)

    def _transform(self, signal, levels, mode):
        raise NotImplementedError

    def forward(self, signal, levels=DEFAULT_LEVELS, mode=BoundaryMode.PERIODIC):
        """
        Perform the forward transform.

        Args:
            signal (numpy.ndarray): Input signal
            levels (int): Number of decomposition levels
            mode (BoundaryMode): Method for handling boundaries

        Returns:
            Decomposition: Wavelet coefficients per level
        """
        return self._transform(signal, levels, mode)

    def analyze(self, signal, levels=3, mode=BoundaryMode.PERIODIC, plot=True):
        """
        Decompose a signal, trim boundary coefficients and optionally plot.

        Args:
            signal (numpy.ndarray): Input signal
            levels (int): Number of decomposition levels
            mode (BoundaryMode): Method for handling boundaries
            plot (bool): Whether to plot the decomposition

        Returns:
            dict: Raw and trimmed decompositions and per-level energy
        """
        decomposition = self.forward(signal, levels, mode)
        trimmed = brick_wall(decomposition)
        energy = np.array([np.dot(w, w) for w in decomposition])

        if plot:
            from .visualization import plot_decomposition
            plot_decomposition(signal, decomposition)

        return {
            'decomposition': decomposition,
            'trimmed': trimmed,
            'energy': energy,
        }


class DiscreteWaveletTransform(_PyramidTransform):
    """
    Discrete Wavelet Transform (DWT) implementation.

    The DWT decomposes a signal into wavelet coefficients by circular
    filtering followed by downsampling, halving the length at each level.
    """

    def _transform(self, signal, levels, mode):
        return dwt(signal, self.wave_filter.name, levels, mode)


class MaximalOverlapDWT(_PyramidTransform):
    """
    Maximal Overlap Discrete Wavelet Transform (MODWT) implementation.

    The MODWT is a non-decimated wavelet transform that does not downsample,
    making it translation-invariant. It is the transform used for the
    wavelet variance.
    """

    def _transform(self, signal, levels, mode):
        return modwt(signal, self.wave_filter.name, levels, mode)
