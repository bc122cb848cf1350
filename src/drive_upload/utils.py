# -*- coding: utf-8 -*-
"""
Shared utility functions for Google Drive upload operations.

This module provides common helper functions used across multiple modules.
"""

import os


def is_debug_enabled():
    """
    Check if general debug mode is enabled.

    Debug mode is on when the DEBUG environment variable is 'true' (set by
    the action's `debug` input) or when the runner itself runs with step
    debug logging (RUNNER_DEBUG=1).

    Controls folder lookups, per-request Drive API details and other
    verbose output. Does not affect:
    - Input summary at startup
    - Per-file "Uploaded:" lines
    - Final summary statistics
    - Error messages

    Returns:
        bool: True if general debug mode is enabled, False otherwise
    """
    if os.environ.get('DEBUG', 'false').lower() == 'true':
        return True
    return os.environ.get('RUNNER_DEBUG', '0') == '1'


def format_bytes(bytes_value):
    """
    Convert bytes to human-readable format.

    Args:
        bytes_value (int): Number of bytes to format

    Returns:
        str: Human-readable string (e.g., "1.5 MB")
    """
    for unit in ['B', 'KB', 'MB', 'GB']:
        if bytes_value < 1024.0:
            return f"{bytes_value:.1f} {unit}"
        bytes_value /= 1024.0
    return f"{bytes_value:.1f} TB"
