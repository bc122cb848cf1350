# -*- coding: utf-8 -*-
"""
Local file handling for the Drive upload step.

This module provides MIME type lookup, recursive file discovery with
exclusion patterns, and relative path splitting for folder mirroring.
"""

import os
import fnmatch
from .utils import is_debug_enabled

DEFAULT_MIME_TYPE = 'application/octet-stream'

MIME_TYPES = {
    '.txt': 'text/plain',
    '.html': 'text/html',
    '.css': 'text/css',
    '.js': 'text/javascript',
    '.ts': 'text/typescript',
    '.json': 'application/json',
    '.xml': 'application/xml',
    '.pdf': 'application/pdf',
    '.doc': 'application/msword',
    '.docx': 'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    '.xls': 'application/vnd.ms-excel',
    '.xlsx': 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    '.ppt': 'application/vnd.ms-powerpoint',
    '.pptx': 'application/vnd.openxmlformats-officedocument.presentationml.presentation',
    '.zip': 'application/zip',
    '.tar': 'application/x-tar',
    '.gz': 'application/gzip',
    '.png': 'image/png',
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.gif': 'image/gif',
    '.svg': 'image/svg+xml',
    '.mp3': 'audio/mpeg',
    '.mp4': 'video/mp4',
    '.avi': 'video/x-msvideo',
    '.mov': 'video/quicktime',
}


def get_mime_type(file_path):
    """
    Look up a MIME type from the file extension (case-insensitive).

    Returns:
        str: MIME type, or 'application/octet-stream' for unknown extensions
    """
    ext = os.path.splitext(file_path)[1].lower()
    return MIME_TYPES.get(ext, DEFAULT_MIME_TYPE)


def should_exclude_path(path, exclude_patterns):
    """
    Check if a path should be skipped based on exclusion patterns.

    Args:
        path (str): Path relative to the upload root
        exclude_patterns (list): Patterns such as ['*.tmp', '__pycache__', 'log']

    Returns:
        bool: True if the path matches any pattern

    Pattern Matching:
        - Wildcards against the file name: '*.tmp', 'secret?.txt'
        - Wildcards against the whole relative path: 'build/*.o'
        - Bare names against any path component: '__pycache__', '.git'
        - Bare extensions: 'log' behaves like '*.log'

    Examples:
        >>> should_exclude_path('cache/__pycache__/m.pyc', ['__pycache__'])
        True
        >>> should_exclude_path('docs/report.pdf', ['*.tmp', 'log'])
        False
    """
    if not exclude_patterns:
        return False

    normalized_path = path.replace('\\', '/')
    basename = os.path.basename(normalized_path)
    path_components = normalized_path.split('/')

    for pattern in exclude_patterns:
        if fnmatch.fnmatchcase(basename, pattern):
            return True
        if fnmatch.fnmatchcase(normalized_path, pattern):
            return True

        has_wildcard = any(c in pattern for c in '*?[')
        if not has_wildcard and pattern in path_components:
            return True

        # 'log' -> '*.log'
        if not has_wildcard and not pattern.startswith('.') and '.' not in pattern:
            if fnmatch.fnmatchcase(basename, f'*.{pattern}'):
                return True

    return False


def _raise_walk_error(error):
    raise error


def discover_files(root_dir, exclude_patterns=None):
    """
    Find every regular file below `root_dir`, recursively.

    Directories that cannot be listed raise instead of being skipped, so a
    partial tree is never reported as a complete upload.

    Symlinked directories are not descended into. Entries are visited in
    sorted order per directory, so repeated runs over the same tree list
    files in the same order.

    Args:
        root_dir (str): Directory to walk
        exclude_patterns (list): Optional exclusion patterns (see should_exclude_path)

    Returns:
        tuple: (list of absolute-or-root-joined file paths, number of excluded files)

    Raises:
        OSError: If a directory below `root_dir` cannot be read
    """
    files = []
    excluded = 0

    for dirpath, dirnames, filenames in os.walk(root_dir, onerror=_raise_walk_error,
                                                followlinks=False):
        dirnames.sort()
        for filename in sorted(filenames):
            full_path = os.path.join(dirpath, filename)
            if not os.path.isfile(full_path):
                # Broken symlinks, sockets, FIFOs
                continue
            if exclude_patterns:
                rel_path = to_remote_path(os.path.relpath(full_path, root_dir))
                if should_exclude_path(rel_path, exclude_patterns):
                    excluded += 1
                    if is_debug_enabled():
                        print(f"[=] Excluded: {rel_path}")
                    continue
            files.append(full_path)

    return files, excluded


def to_remote_path(rel_path):
    """Normalize a relative path to forward slashes."""
    return rel_path.replace(os.sep, '/').replace('\\', '/')


def split_relative_path(rel_path):
    """
    Split a relative path into its folder segment chain and file name.

    Examples:
        >>> split_relative_path('file1.txt')
        ([], 'file1.txt')
        >>> split_relative_path('a/b/file2.txt')
        (['a', 'b'], 'file2.txt')

    Returns:
        tuple: (list of folder names from the root down, file name)
    """
    parts = [part for part in to_remote_path(rel_path).split('/') if part and part != '.']
    return parts[:-1], parts[-1]
