# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Plotting helpers for wavelet decompositions and wavelet variance estimates.
"""

import numpy as np
import matplotlib.pyplot as plt


def plot_wavelet_variance(result, ax=None, show_gaussian=True, title=None):
    """
    Plot the wavelet variance against scale on log-log axes.

    The eta3 interval is drawn as a shaded band; the Gaussian interval is
    added as dashed lines when it was computed.

    Args:
        result (WaveletVarianceResult): Output of wavelet_variance()
        ax (matplotlib.axes.Axes, optional): Axes to draw on
        show_gaussian (bool): Whether to draw the Gaussian bounds
        title (str, optional): Plot title

    Returns:
        matplotlib.axes.Axes: The axes containing the plot
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 6))

    scales = result.scales
    ax.fill_between(scales, result.low, result.high, color="tab:blue", alpha=0.2,
                    label=f"CI({100 * (1 - 2 * result.p):.0f}%)")
    ax.plot(scales, result.variance, "o-", color="tab:blue", label="Wavelet variance")

    if show_gaussian and np.all(np.isfinite(result.gaussian_upper)):
        ax.plot(scales, result.gaussian_upper, "--", color="tab:orange", label="Gaussian CI")
        ax.plot(scales, result.gaussian_lower, "--", color="tab:orange")

    ax.set_xscale("log", base=2)
    ax.set_yscale("log")
    ax.set_xlabel(r"Scale $\tau$")
    ax.set_ylabel(r"Wavelet variance $\nu^2$")
    ax.set_title(title or f"Wavelet variance ({result.filter_name})")
    ax.grid(True, which="both", alpha=0.3)
    ax.legend()
    return ax


def plot_decomposition(signal, decomposition):
    """
    Plot a signal and its wavelet coefficients, one panel per level.

    Returns:
        matplotlib.figure.Figure: The created figure
    """
    levels = len(decomposition)
    fig, axes = plt.subplots(levels + 1, 1, figsize=(12, 2 * (levels + 1)), squeeze=False)

    axes[0, 0].plot(signal)
    axes[0, 0].set_title('Original Signal')
    axes[0, 0].grid(True)

    for j, coeffs in enumerate(decomposition, start=1):
        axes[j, 0].plot(coeffs)
        axes[j, 0].set_title(f'Level {j} Wavelet Coefficients')
        axes[j, 0].grid(True)

    fig.tight_layout()
    return fig
