# -*- coding: utf-8 -*-
"""
Upload statistics tracking for the Drive upload step.
"""

from .utils import format_bytes


class UploadStatistics:
    """Track upload statistics for one run"""

    def __init__(self):
        """Initialize upload statistics"""
        self.stats = {
            'new_files': 0,
            'replaced_files': 0,
            'folders_created': 0,
            'folders_reused': 0,
            'excluded_files': 0,
            'bytes_uploaded': 0,
        }

    def record_file(self, size, replaced=False):
        """Count one uploaded file and its size."""
        if replaced:
            self.stats['replaced_files'] += 1
        else:
            self.stats['new_files'] += 1
        self.stats['bytes_uploaded'] += size

    def record_folder(self, reused=False):
        if reused:
            self.stats['folders_reused'] += 1
        else:
            self.stats['folders_created'] += 1

    def print_summary(self, dry_run=False):
        """
        Print final summary report of upload statistics.

        Args:
            dry_run (bool): Label counts as simulated
        """
        print()
        print("=" * 60)
        if dry_run:
            print("[✓] UPLOAD COMPLETED (DRY RUN - nothing was sent to Drive)")
        else:
            print("[✓] UPLOAD COMPLETED")
        print("=" * 60)
        print(f"[STATS] Upload Statistics:")
        print(f"   - New files uploaded:       {self.stats['new_files']:>6}")
        print(f"   - Files overwritten:        {self.stats['replaced_files']:>6}")
        print(f"   - Folders created:          {self.stats['folders_created']:>6}")
        print(f"   - Folders reused:           {self.stats['folders_reused']:>6}")
        if self.stats['excluded_files'] > 0:
            print(f"   - Files excluded:           {self.stats['excluded_files']:>6}")

        print(f"\n[DATA] Transfer Summary:")
        print(f"   - Data uploaded:   {format_bytes(self.stats['bytes_uploaded'])}")
