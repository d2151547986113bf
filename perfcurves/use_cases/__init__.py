from .evaluate import average_performance, compute_performance, make_prediction

__all__ = [
    "make_prediction",
    "compute_performance",
    "average_performance",
]
