# -*- coding: utf-8 -*-
"""
Upload orchestration for the Drive upload step.

This module walks a local file or directory, mirrors its folder structure
onto Drive and drives the adapter (GoogleDriveService or
DryRunDriveService) one file at a time.

Failure handling: any error from the adapter or the filesystem propagates
immediately. Objects already created stay in Drive; re-running is the
recovery path, since folders are found again rather than duplicated.
"""

import json
import os
import stat

from .file_handler import (
    get_mime_type,
    discover_files,
    split_relative_path,
    to_remote_path
)


class UploadedFile:
    """One uploaded file: its local (or relative) path, Drive ID and Drive name."""

    def __init__(self, path, id, name):
        self.path = path
        self.id = id
        self.name = name

    def to_dict(self):
        return {'path': self.path, 'id': self.id, 'name': self.name}

    def __eq__(self, other):
        return isinstance(other, UploadedFile) and self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"UploadedFile(path={self.path!r}, id={self.id!r}, name={self.name!r})"


class UploadResult:
    """
    Outcome of one upload() call.

    Attributes:
        file_id (str | None): Set when the target was a single file
        folder_id (str | None): Set when the target was a directory
        uploaded_files (list): UploadedFile records in discovery order
    """

    def __init__(self, file_id=None, folder_id=None, uploaded_files=None):
        self.file_id = file_id
        self.folder_id = folder_id
        self.uploaded_files = uploaded_files if uploaded_files is not None else []

    def to_json(self):
        """Serialize uploaded_files as a JSON array of {path, id, name}."""
        return json.dumps([f.to_dict() for f in self.uploaded_files])


class Uploader:
    """Upload a local path to a Drive folder through a Drive adapter."""

    def __init__(self, drive_service, exclude_patterns=None, stats=None):
        """
        Args:
            drive_service: GoogleDriveService or DryRunDriveService
            exclude_patterns (list): Optional exclusion patterns for directory uploads
            stats (UploadStatistics): Optional statistics collector
        """
        self.drive_service = drive_service
        self.exclude_patterns = exclude_patterns or []
        self.stats = stats

    def upload(self, target_path, parent_folder_id, custom_name=None, overwrite=False):
        """
        Upload a file or a directory tree under `parent_folder_id`.

        Args:
            target_path (str): Local file or directory
            parent_folder_id (str): Destination Drive folder ID
            custom_name (str): Remote name for the file/root folder ('' or None keeps the local name)
            overwrite (bool): Update same-named files in place instead of adding duplicates

        Returns:
            UploadResult

        Raises:
            OSError: If the path cannot be inspected or read
            DriveApiError: If a Drive call fails
        """
        result = UploadResult()

        # Single inspection; raises FileNotFoundError for a missing path
        target_stat = os.stat(target_path)
        if stat.S_ISDIR(target_stat.st_mode):
            self._upload_directory(target_path, parent_folder_id, custom_name, overwrite, result)
        else:
            self._upload_single_file(target_path, parent_folder_id, custom_name, overwrite, result)

        return result

    def _upload_single_file(self, target_path, parent_folder_id, custom_name, overwrite, result):
        file_name = custom_name or os.path.basename(target_path)
        file_id = self._upload_content(target_path, file_name, parent_folder_id, overwrite)

        result.file_id = file_id
        result.uploaded_files.append(UploadedFile(target_path, file_id, file_name))
        print(f"Uploaded: {file_name} -> {file_id}")

    def _upload_directory(self, target_path, parent_folder_id, custom_name, overwrite, result):
        folder_name = custom_name or os.path.basename(os.path.normpath(target_path))
        root_folder_id = self.drive_service.create_folder(folder_name, parent_folder_id)
        result.folder_id = root_folder_id

        files, excluded = discover_files(target_path, self.exclude_patterns)
        if self.stats:
            self.stats.stats['excluded_files'] += excluded

        # Segment path -> folder ID, valid for this call only
        folder_ids = {}

        for local_file in files:
            rel_path = to_remote_path(os.path.relpath(local_file, target_path))
            segments, file_name = split_relative_path(rel_path)

            target_folder_id = self._ensure_folder_chain(root_folder_id, segments, folder_ids)
            file_id = self._upload_content(local_file, file_name, target_folder_id, overwrite)

            result.uploaded_files.append(UploadedFile(rel_path, file_id, file_name))
            print(f"Uploaded: {rel_path} -> {file_id}")

    def _ensure_folder_chain(self, root_folder_id, segments, folder_ids):
        """
        Walk the segment chain from the root folder, finding or creating each level.

        Returns:
            str: ID of the folder that should contain the file
        """
        current_id = root_folder_id
        for depth in range(len(segments)):
            key = tuple(segments[:depth + 1])
            if key not in folder_ids:
                folder_ids[key] = self.drive_service.create_folder(segments[depth], current_id)
            current_id = folder_ids[key]
        return current_id

    def _upload_content(self, local_path, file_name, parent_id, overwrite):
        mime_type = get_mime_type(local_path)
        with open(local_path, 'rb') as content:
            return self.drive_service.upload_file(
                file_name, mime_type, parent_id, content, overwrite
            )
