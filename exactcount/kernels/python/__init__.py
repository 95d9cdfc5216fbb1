"""
Production Python kernels.

These modules are designed to be:
- exact (int / Fraction only, never float),
- easy to audit (explicit intermediate tables),
- small surface-area (pure functions, frozen result types),
- parity-testable against exhaustive enumeration for bounded domains.
"""
