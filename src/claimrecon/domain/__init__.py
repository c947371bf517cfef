"""Domain layer: snapshots, ports and the reconciliation core."""
