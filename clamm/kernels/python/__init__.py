"""
Production Python kernels.

These modules are designed to be:
- deterministic (integer-only, explicit rounding direction at every division),
- easy to audit (explicit intermediate variables),
- small surface-area (pure functions, frozen typed results),
- bit-for-bit compatible with the reference concentrated-liquidity libraries.
"""
