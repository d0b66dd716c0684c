"""Shared utilities for sheetbind."""
