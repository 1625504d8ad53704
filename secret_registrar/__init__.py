"""Batch registration of repository secrets from key=value files."""

__version__ = "0.1.0"
