"""Helper utilities: console output, YAML I/O and workspace configuration."""
