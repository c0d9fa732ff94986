"""Key-value persistence used for the catalog, slot log and snapshots."""
