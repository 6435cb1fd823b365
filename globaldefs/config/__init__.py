"""Configuration record and tool settings."""
