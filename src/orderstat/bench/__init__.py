"""
Benchmark harness for the sort / select / median operations.

    python -m orderstat.bench.runner experiments/configs/quicksort_scaling.yaml
"""

from .measure import time_operation_call

__all__ = ["time_operation_call"]
