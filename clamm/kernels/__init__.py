"""
Kernel layer.

`clamm/kernels/python/` holds the integer-only pricing kernels. They are leaves:
nothing in here imports from `clamm.core`.
"""
