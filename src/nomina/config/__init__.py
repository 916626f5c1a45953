"""YAML configuration for batch runs."""
