"""Value types produced by the cluster access layer."""
