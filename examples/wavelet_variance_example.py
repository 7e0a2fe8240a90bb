#!/usr/bin/env python3
# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Wavelet Variance Example Script

This script demonstrates the wavelet variance pipeline.

It shows:
1. MODWT and DWT decompositions of a simple ramp
2. Removal of boundary coefficients
3. Wavelet variance of simulated latent processes with eta3 and
   Gaussian confidence intervals
4. Timing of repeated calls, as done inside a GMWM estimator
"""

import os
import sys
import time
import numpy as np
import matplotlib.pyplot as plt

# Add parent directory to path to import wavelet_variance module
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from wavelet_variance import (
    brick_wall, dwt, modwt, wavelet_variance,
    gen_model, gen_wn, gen_rw
)
from wavelet_variance.config import configure_logging
from wavelet_variance.visualization import plot_wavelet_variance


def example_decomposition():
    """Decompose the ramp 1..16 with both transforms."""
    print("\nExample 1: Pyramid decompositions")
    signal = np.arange(1.0, 17.0)

    decomposition = modwt(signal, "haar", nlevels=3, boundary="periodic")
    trimmed = brick_wall(decomposition)
    print(f"MODWT lengths: {decomposition.lengths()} -> trimmed {trimmed.lengths()}")

    decimated = dwt(signal, "haar", nlevels=3, boundary="periodic")
    print(f"DWT lengths:   {decimated.lengths()}")
    for j, level in enumerate(decimated, start=1):
        print(f"  W_{j} = {np.round(level, 4)}")


def example_latent_processes():
    """Wavelet variance of simulated processes."""
    print("\nExample 2: Wavelet variance of latent processes")
    rng = np.random.default_rng(1336)
    N = 2 ** 14

    models = {
        'WN(1)': gen_wn(N, 1.0, rng),
        'RW(1e-3)': gen_rw(N, 1e-3, rng),
        'AR1(0.99, 0.1) + WN(1)': gen_model(N, [0.99, 0.1, 1.0], ["AR1", "WN"], rng=rng),
    }

    fig, axes = plt.subplots(1, len(models), figsize=(15, 5))
    for ax, (name, x) in zip(axes, models.items()):
        result = wavelet_variance(x, "haar", "eta3", compute_v="diag")
        plot_wavelet_variance(result, ax=ax, title=name)

        print(f"\n{name}")
        print(f"{'Scale':>8} {'Variance':>12} {'Low':>12} {'High':>12}")
        for tau, nu2, lo, hi in zip(result.scales, result.variance, result.low, result.high):
            print(f"{int(tau):>8} {nu2:>12.6f} {lo:>12.6f} {hi:>12.6f}")

    fig.tight_layout()


def performance_test():
    """Time repeated wavelet variance computations."""
    print("\nPerformance")
    print("=" * 50)
    print(f"{'Signal Length':<15} {'no':<12} {'diag':<12}")
    print("-" * 50)

    rng = np.random.default_rng(0)
    for length in [1024, 4096, 16384]:
        signal = rng.normal(size=length)
        times = []
        for mode in ("no", "diag"):
            start = time.time()
            for _ in range(10):
                wavelet_variance(signal, compute_v=mode)
            times.append((time.time() - start) / 10)
        print(f"{length:<15} {times[0]:<12.6f} {times[1]:<12.6f}")

    print("=" * 50)


if __name__ == "__main__":
    configure_logging()

    print("Wavelet Variance Examples")
    print("=" * 50)

    example_decomposition()
    example_latent_processes()
    performance_test()

    plt.show()
