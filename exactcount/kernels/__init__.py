"""
Kernel layer.

This package groups the deterministic counting kernels used by `exactcount.core`.
- `exactcount/kernels/specs/` contains the domain-bound specs (.yaml).
- `exactcount/kernels/python/` contains the production Python kernels (integer and
  Fraction arithmetic only) that the core wraps with validation and bounds.
"""
