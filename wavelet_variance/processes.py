# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Time series generators for simulating latent state-space models.

Each generator draws from a numpy Generator; pass a seed or a Generator
through ``rng`` for reproducible output. gen_model() sums the requested
components, gen_lts() also returns every component separately.
"""

import math
import logging
from enum import Enum
from typing import List, Optional, Sequence

import numpy as np
from scipy import signal as sp_signal

from .exceptions import NonStationaryModelError

logger = logging.getLogger("wavelet_variance.processes")


class ModelComponent(Enum):
    """Enum defining latent process types of a composite model."""
    AR1 = "AR1"
    GM = "GM"  # Gauss-Markov, simulated as an AR(1)
    WN = "WN"
    DR = "DR"
    QN = "QN"
    RW = "RW"
    ARMA = "ARMA"


def gen_wn(N: int, sigma2: float = 1.0, rng=None) -> np.ndarray:
    """White noise WN(sigma2)."""
    rng = np.random.default_rng(rng)
    return rng.normal(0.0, math.sqrt(sigma2), N)


def gen_dr(N: int, slope: float = 5.0, rng=None) -> np.ndarray:
    """Deterministic drift: slope, 2*slope, ..., N*slope."""
    return np.cumsum(np.full(N, float(slope)))


def gen_qn(N: int, q2: float = 0.1, rng=None) -> np.ndarray:
    """
    Quantization noise QN(q2).

    U_k = sqrt(12) * Uniform(0, 1) is drawn N + 1 times and the noise is
    x_k = sqrt(q2) * (U_{k+1} - U_k).
    """
    rng = np.random.default_rng(rng)
    gu = math.sqrt(12.0) * rng.uniform(0.0, 1.0, N + 1)
    return math.sqrt(q2) * np.diff(gu)


def gen_ar1(N: int, phi: float = 0.3, sigma2: float = 1.0, rng=None) -> np.ndarray:
    """AR(1): x_t = phi * x_{t-1} + w_t, started from x_0 = 0."""
    wn = gen_wn(N + 1, sigma2, rng)
    return sp_signal.lfilter([1.0], [1.0, -phi], wn[1:])


def gen_rw(N: int, sigma2: float = 1.0, rng=None) -> np.ndarray:
    """Random walk without drift."""
    return np.cumsum(gen_wn(N, sigma2, rng))


def gen_ma1(N: int, theta: float = 0.3, sigma2: float = 1.0, rng=None) -> np.ndarray:
    """MA(1): x_t = w_t + theta * w_{t-1}."""
    wn = gen_wn(N + 1, sigma2, rng)
    return wn[1:] + theta * wn[:-1]


def gen_arma11(N: int, phi: float = 0.1, theta: float = 0.3, sigma2: float = 1.0,
               rng=None) -> np.ndarray:
    """ARMA(1,1): x_t = phi * x_{t-1} + w_t + theta * w_{t-1}, started from x_0 = 0."""
    wn = gen_wn(N + 1, sigma2, rng)
    innov = wn[1:] + theta * wn[:-1]
    return sp_signal.lfilter([1.0], [1.0, -phi], innov)


def ar_min_root(ar: Sequence[float]) -> float:
    """Smallest root modulus of the AR polynomial 1 - ar_1 z - ... - ar_p z^p."""
    ar = np.asarray(ar, dtype=float)
    # np.roots wants the highest power first
    roots = np.roots(np.concatenate([-ar[::-1], [1.0]]))
    if len(roots) == 0:
        return math.inf
    return float(np.min(np.abs(roots)))


def gen_arma(N: int, ar: Sequence[float], ma: Sequence[float], sigma2: float = 1.5,
             n_start: int = 0, rng=None) -> np.ndarray:
    """
    ARMA(p, q) with Gaussian innovations.

    sigma2 is the innovation variance. The first n_start observations are
    a burn-in period and are discarded; with n_start = 0 the burn-in is
    p + q + ceil(6 / log(min_root)) when AR terms are present.

    Args:
        N: Number of observations
        ar: AR coefficients phi_1..phi_p
        ma: MA coefficients theta_1..theta_q
        sigma2: Innovation variance
        n_start: Burn-in length
        rng: Seed or numpy Generator

    Returns:
        numpy.ndarray: The simulated series

    Raises:
        NonStationaryModelError: If an AR root lies on or inside the unit circle
        ValueError: If the burn-in is shorter than p + q
    """
    rng = np.random.default_rng(rng)
    ar = np.atleast_1d(np.asarray(ar, dtype=float))
    ma = np.atleast_1d(np.asarray(ma, dtype=float))
    p, q = len(ar), len(ma)

    min_root = 1.0
    if p != 0:
        min_root = ar_min_root(ar)
        if min_root <= 1.0:
            raise NonStationaryModelError("Supplied model's AR component is NOT invertible!")

    if n_start == 0:
        burn = math.ceil(6.0 / math.log(min_root)) if p > 0 and math.isfinite(min_root) else 0
        n_start = p + q + burn
    if n_start < p + q:
        raise ValueError("burn-in 'n_start' must be as long as 'ar + ma'")

    sd = math.sqrt(sigma2)
    innov = rng.normal(0.0, sd, N)
    start_innov = rng.normal(0.0, sd, n_start)
    x = np.concatenate([start_innov, innov])

    if q > 0:
        # One-sided convolution; the first q values have no full history
        x = sp_signal.lfilter(np.concatenate([[1.0], ma]), [1.0], x)
        x[:q] = 0.0

    if p > 0:
        x = sp_signal.lfilter([1.0], np.concatenate([[1.0], -ar]), x)

    logger.debug("ARMA(%d,%d): burn-in %d", p, q, n_start)
    return x[n_start:]


def _as_component(name):
    if isinstance(name, ModelComponent):
        return name
    try:
        return ModelComponent(str(name).upper())
    except ValueError:
        supported = ", ".join(c.value for c in ModelComponent)
        raise ValueError(f"Unknown model component '{name}'. Supported: {supported}") from None


def _component_series(N, theta, desc, objdesc, rng):
    """Yield each component series, consuming theta in model order."""
    theta = np.asarray(theta, dtype=float)
    i_theta = 0

    for i, name in enumerate(desc):
        component = _as_component(name)

        if component in (ModelComponent.AR1, ModelComponent.GM):
            phi, sig2 = theta[i_theta], theta[i_theta + 1]
            i_theta += 2
            yield gen_ar1(N, phi, sig2, rng)
        elif component is ModelComponent.WN:
            yield gen_wn(N, theta[i_theta], rng)
            i_theta += 1
        elif component is ModelComponent.DR:
            yield gen_dr(N, theta[i_theta])
            i_theta += 1
        elif component is ModelComponent.QN:
            yield gen_qn(N, theta[i_theta], rng)
            i_theta += 1
        elif component is ModelComponent.RW:
            yield gen_rw(N, theta[i_theta], rng)
            i_theta += 1
        elif component is ModelComponent.ARMA:
            if objdesc is None or objdesc[i] is None:
                raise ValueError(f"ARMA component {i} needs its (p, q) orders in objdesc")
            p, q = int(objdesc[i][0]), int(objdesc[i][1])
            ar = theta[i_theta:i_theta + p]
            ma = theta[i_theta + p:i_theta + p + q]
            sig2 = theta[i_theta + p + q]
            i_theta += p + q + 1
            yield gen_arma(N, ar, ma, sig2, 0, rng)


def gen_model(N: int, theta: Sequence[float], desc: Sequence[str],
              objdesc: Optional[List[Sequence[int]]] = None, rng=None) -> np.ndarray:
    """
    Simulate the sum of latent processes described by desc.

    theta lists the parameters in model order: (phi, sigma2) for AR1/GM,
    one value for WN, DR, QN and RW, and p AR values, q MA values and
    sigma2 for ARMA, whose orders come from objdesc[i] = (p, q).

    Example:
        gen_model(1000, [0.9, 1.0, 2.0], ["AR1", "WN"])
    """
    rng = np.random.default_rng(rng)
    x = np.zeros(N)
    for series in _component_series(N, theta, desc, objdesc, rng):
        x += series
    return x


def gen_lts(N: int, theta: Sequence[float], desc: Sequence[str],
            objdesc: Optional[List[Sequence[int]]] = None, rng=None) -> np.ndarray:
    """
    Simulate a latent time series.

    Returns:
        numpy.ndarray: N x (k + 1) matrix with one column per component and
        their sum in the last column
    """
    rng = np.random.default_rng(rng)
    x = np.zeros((N, len(desc) + 1))
    for i, series in enumerate(_component_series(N, theta, desc, objdesc, rng)):
        x[:, i] = series
    x[:, -1] = x[:, :-1].sum(axis=1)
    return x
