"""Shared helpers used across the storage, versioning and registry packages."""
