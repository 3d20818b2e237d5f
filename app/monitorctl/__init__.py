"""monitorctl - Manage monitored directories, drive mappings and exclusions."""

__version__ = "0.1.0"
