"""Application service helpers."""

from .variants import BatchOptions, BatchResult, generate_variant_batch, pair_bindings, render_into

__all__ = [
    "BatchOptions",
    "BatchResult",
    "generate_variant_batch",
    "pair_bindings",
    "render_into",
]
