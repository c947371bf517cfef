"""HTTP adapters implementing the reconciliation ports."""
