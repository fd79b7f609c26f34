"""Preview/commit services built on the parsing layer."""
