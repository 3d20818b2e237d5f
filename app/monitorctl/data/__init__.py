"""Bundled data files for monitorctl."""
