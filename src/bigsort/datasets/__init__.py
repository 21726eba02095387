"""
Datasets package public API.

Re-export the generators so callers can write:
    from bigsort.datasets import generate_distinct, make_dataset, SUPPORTED_DISTS
"""

from .generators import SUPPORTED_DISTS, generate_distinct, make_dataset

__all__ = ["SUPPORTED_DISTS", "generate_distinct", "make_dataset"]
