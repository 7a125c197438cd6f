import os
import shutil
import tempfile
import unicodedata
import zipfile
from typing import BinaryIO, List, Optional, Tuple, Union
from pathlib import Path

from .logging_config import LoggerMixin
from .validation import (
    DirectoryValidator, FileValidator,
    DirectoryValidationError, FileValidationError,
    validate_inputs, handle_exceptions
)


def normalize_filename(filename: str) -> str:
    """
    Normalize a filename to NFC so the same name always yields the same
    document identifier regardless of how the filesystem composed it.
    """
    return unicodedata.normalize('NFC', filename)


def safe_filename_encode(filename: str) -> str:
    """Encode a filename so it can be logged without UnicodeEncodeError."""
    try:
        normalized = normalize_filename(filename)
        return normalized.encode('utf-8', errors='replace').decode('utf-8')
    except (UnicodeError, AttributeError):
        return repr(filename)


@handle_exceptions(default_return=list)
def find_text_files(directory_path: str) -> List[str]:
    """
    Recursively walk a directory tree and return full paths to all .txt files.

    Paths are returned sorted so the corpus order is the same on every run
    and platform.

    Args:
        directory_path: Path to directory to search

    Returns:
        Sorted list of text file paths

    Raises:
        DirectoryValidationError: If directory is invalid or inaccessible
    """
    import logging
    logger = logging.getLogger(__name__)

    validated_path = DirectoryValidator.validate_directory_path(directory_path, must_exist=True)

    safe_path = safe_filename_encode(str(validated_path))
    logger.info(f"Searching for text files in directory: {safe_path}", extra={'directory': safe_path})

    text_files = []

    def _raise_walk_error(error: OSError):
        raise error

    try:
        for root, dirs, files in os.walk(validated_path, onerror=_raise_walk_error):
            dirs.sort()
            for file in sorted(files):
                if not normalize_filename(file).lower().endswith('.txt'):
                    continue
                full_path = os.path.join(root, file)
                try:
                    FileValidator.validate_text_file(full_path)
                    text_files.append(full_path)
                    logger.debug(f"Found text file: {safe_filename_encode(full_path)}")
                except FileValidationError as e:
                    logger.warning(f"Skipping invalid text file {safe_filename_encode(full_path)}: {e.message}")
    except OSError as e:
        logger.error(f"Error accessing directory {safe_path}: {str(e)}")
        raise DirectoryValidationError(
            f"Cannot access directory: {str(e)}",
            field="directory_path",
            value=directory_path
        )

    logger.info(f"Found {len(text_files)} text files")
    return text_files


def extract_zip_archive(archive: Union[str, Path, BinaryIO],
                        previous_dir: Optional[str] = None) -> str:
    """
    Extract an uploaded ZIP of text files into a new temporary directory.

    Every upload gets its own directory, so files from two archives are
    never compared as one corpus. ``previous_dir``, the directory of the
    preceding upload, is deleted once the new archive has been extracted.

    Returns:
        Path of the new directory

    Raises:
        FileValidationError: If ``archive`` is not a valid ZIP file
    """
    import logging
    logger = logging.getLogger(__name__)

    upload_dir = tempfile.mkdtemp(prefix="uploaded_texts_")
    try:
        with zipfile.ZipFile(archive, 'r') as zip_ref:
            zip_ref.extractall(upload_dir)
    except zipfile.BadZipFile as e:
        shutil.rmtree(upload_dir, ignore_errors=True)
        raise FileValidationError(f"Not a valid ZIP archive: {str(e)}", field="archive")

    if previous_dir and os.path.isdir(previous_dir):
        shutil.rmtree(previous_dir, ignore_errors=True)
        logger.debug(f"Removed previous upload directory: {safe_filename_encode(previous_dir)}")

    logger.info(f"Extracted ZIP archive into {upload_dir}", extra={'directory': upload_dir})
    return upload_dir


class TextHandler(LoggerMixin):
    """
    Discovers the .txt files under a directory and reads them into
    ``(document_id, raw_text)`` pairs for the similarity engine.
    """

    @validate_inputs(
        dir_path=lambda x: DirectoryValidator.validate_directory_path(x, must_exist=True)
    )
    def __init__(self, dir_path: str):
        """
        Args:
            dir_path: Directory searched recursively for .txt files

        Raises:
            DirectoryValidationError: If directory is invalid or inaccessible
        """
        safe_dir_path = safe_filename_encode(str(dir_path))
        with self.log_operation("text_handler_init", directory=safe_dir_path):
            self.dir_path = Path(dir_path)
            self.text_files = find_text_files(str(self.dir_path))

            if not self.text_files:
                self.logger.warning(f"No text files found in directory: {safe_dir_path}")

    def get_file_count(self) -> int:
        return len(self.text_files)

    def _read_text(self, file_path: str) -> str:
        with open(file_path, 'r', encoding='utf-8', errors='replace') as f:
            return f.read()

    def load_documents(self) -> List[Tuple[str, str]]:
        """
        Read every discovered file.

        Returns:
            List of (normalized file name, text) pairs in discovery order.
            Files that cannot be read are logged and left out.
        """
        with self.log_operation("load_documents", document_count=len(self.text_files)):
            documents = []
            for file_path in self.text_files:
                name = normalize_filename(os.path.basename(file_path))
                try:
                    documents.append((name, self._read_text(file_path)))
                except OSError as e:
                    self.logger.error(f"Failed to read {safe_filename_encode(file_path)}: {str(e)}",
                                      extra={'file_path': safe_filename_encode(file_path)})
            self.logger.info(f"Loaded {len(documents)} of {len(self.text_files)} text files")
            return documents
