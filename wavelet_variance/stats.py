# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Quantile functions used by the confidence interval engine.

The variance engine only talks to a StatisticsProvider, so another
numerical backend can be swapped in without touching it.
"""

from scipy import stats as sp_stats


class StatisticsProvider:
    """Interface for the lower-tail quantile functions the engine needs."""

    def chi2_ppf(self, q, df):
        """Chi-square inverse CDF at probability q with df degrees of freedom."""
        raise NotImplementedError

    def norm_ppf(self, q):
        """Standard normal inverse CDF at probability q."""
        raise NotImplementedError


class ScipyStatistics(StatisticsProvider):
    """Quantiles backed by scipy.stats."""

    def chi2_ppf(self, q, df):
        return sp_stats.chi2.ppf(q, df)

    def norm_ppf(self, q):
        return sp_stats.norm.ppf(q)


DEFAULT_STATS = ScipyStatistics()
