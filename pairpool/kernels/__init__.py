"""
Kernel layer.

Pure, integer-only functions with explicit rounding rules. Nothing in here
touches pool state or the transfer port; the engine in `pairpool.core` wires
these together.
"""
