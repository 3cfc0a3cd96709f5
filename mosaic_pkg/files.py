"""
Filesystem access for Mosaic.

Reads degrade to an empty string and writes are skipped on failure; both are
logged and counted so the caller can report an overall build status.
"""

import os
import shutil
import logging


def join_under(base, *parts):
    """Join site-relative ``parts`` onto ``base``; leading slashes never escape ``base``."""
    return os.path.join(base, *(part.lstrip('/') for part in parts))


class FileStore:
    def __init__(self):
        self.logger = logging.getLogger('Mosaic.files')
        self.errors = 0

    def read_text(self, file_path):
        """Return the text of ``file_path``, or an empty string if it cannot be read."""
        self.logger.debug(f"Reading file: {file_path}")
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return f.read()
        except (IOError, OSError, PermissionError, UnicodeDecodeError) as e:
            self.errors += 1
            self.logger.error(f"Failed to read file {file_path}: {e}")
            return ''

    def write_text(self, file_path, contents):
        """Write ``contents`` to ``file_path``, creating parent directories as needed."""
        parent = os.path.dirname(file_path)
        try:
            if parent:
                os.makedirs(parent, exist_ok=True)
            with open(file_path, 'w', encoding='utf-8') as f:
                f.write(contents)
            self.logger.debug(f"Wrote file: {file_path}")
            return True
        except (IOError, OSError, PermissionError) as e:
            self.errors += 1
            self.logger.error(f"Failed to write file {file_path}: {e}")
            return False

    def copy_tree(self, source_dir, destination_dir):
        """Recursively copy a directory, keeping file modes and symlinks."""
        if not os.path.isdir(source_dir):
            self.errors += 1
            self.logger.error(f"Cannot copy folder {source_dir}: not a directory")
            return False
        try:
            shutil.copytree(source_dir, destination_dir, symlinks=True, dirs_exist_ok=True)
            self.logger.debug(f"Copied folder {source_dir} -> {destination_dir}")
            return True
        except (shutil.Error, IOError, OSError, PermissionError) as e:
            self.errors += 1
            self.logger.error(f"Failed to copy folder {source_dir}: {e}")
            return False
