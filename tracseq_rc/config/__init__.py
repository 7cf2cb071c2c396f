"""Configuration loading (YAML + JSON schema)."""
