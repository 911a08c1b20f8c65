"""
Utils module - Shared utilities for showrank

This module provides common utilities used across the project:
- io_helpers: File I/O with proper encoding, JSON load/save
- logging_helper: Consistent logging setup
- paths: Common path definitions
"""
