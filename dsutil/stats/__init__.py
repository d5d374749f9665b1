from .descriptive import get_corr, get_mean, get_percentile, get_percentiles

__all__ = ["get_corr", "get_mean", "get_percentile", "get_percentiles"]
