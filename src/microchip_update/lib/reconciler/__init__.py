"""Reconciler library public API."""

from microchip_update.lib.reconciler.engine import PASSES, ReconcileResult, ReconcileState, reconcile

__all__ = [
    "PASSES",
    "ReconcileResult",
    "ReconcileState",
    "reconcile",
]
