# SPDX-License-Identifier: Apache-2.0
"""Document minification for office documents.

Office documents (.docx, .pptx) are zip archives. Embedded media usually
makes up most of their size but is irrelevant for translation, so it can be
stripped before upload and put back after download:

1. Minification: the document is extracted into a temporary directory, every
   media file is moved to a backup directory (keeping its relative path) and
   replaced by a small placeholder, and the tree is zipped again.
2. Deminification: the translated document is extracted, the backed-up media
   is moved back over the placeholders, and the tree is zipped to the output.

A :class:`DocumentMinifier` holds the paths for exactly one document. Use a
new instance per document; concurrent use of one instance corrupts both
documents.

Example:
    minifier = DocumentMinifier()
    if DocumentMinifier.can_minify_file(input_path):
        minified = minifier.minify_document(input_path, cleanup=True)
        # ... translate ``minified`` into ``translated_path`` ...
        minifier.deminify_document(translated_path, output_path, cleanup=True)
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
import zipfile
from pathlib import Path

from deepl_client.errors import DocumentDeminificationError, DocumentMinificationError

logger = logging.getLogger(__name__)

SUPPORTED_DOCUMENT_TYPES = frozenset({".pptx", ".docx"})

SUPPORTED_MEDIA_FORMATS = frozenset(
    {
        # Images
        ".png",
        ".jpg",
        ".jpeg",
        ".emf",
        ".bmp",
        ".tiff",
        ".wdp",
        ".svg",
        ".gif",
        # Video, as supported by PowerPoint
        ".mp4",
        ".asf",
        ".avi",
        ".m4v",
        ".mpg",
        ".mpeg",
        ".wmv",
        ".mov",
        # Audio, as supported by PowerPoint
        ".aiff",
        ".au",
        ".mid",
        ".midi",
        ".mp3",
        ".m4a",
        ".wav",
        ".wma",
    }
)

EXTRACTED_DOC_DIR_NAME = "extracted_doc"
ORIGINAL_MEDIA_DIR_NAME = "original_media"
MINIFIED_DOC_FILE_BASE_NAME = "minifiedDoc"
MINIFIED_DOC_SIZE_LIMIT_WARNING = 5_000_000
MEDIA_PLACEHOLDER = b"DeepL Media Placeholder"


class DocumentMinifier:
    """Strips media from one office document and reinserts it later.

    Attributes:
        temp_dir: Working directory owned by this instance.
    """

    def __init__(self, temp_dir: str | os.PathLike[str] | None = None) -> None:
        """Initialize DocumentMinifier.

        Args:
            temp_dir: Working directory. Defaults to a fresh directory under
                the system temp directory. ``deminify_document(cleanup=True)``
                deletes it entirely, so never pass a directory holding other data.

        Raises:
            DocumentMinificationError: If the temporary directory cannot be created.
        """
        if temp_dir is None:
            try:
                temp_dir = tempfile.mkdtemp(prefix="document_minification_")
            except OSError as exc:
                raise DocumentMinificationError(
                    f"Failed creating temporary directory: {exc}", exc
                ) from exc
        self.temp_dir = Path(temp_dir)
        self._entry_order: list[str] = []

    @staticmethod
    def can_minify_file(input_path: str | os.PathLike[str] | None) -> bool:
        """Return True if the file type supports minification."""
        if input_path is None or not str(input_path).strip():
            return False
        return Path(input_path).suffix.lower() in SUPPORTED_DOCUMENT_TYPES

    def minified_doc_file(self, input_path: str | os.PathLike[str]) -> Path:
        """Path where the minified version of ``input_path`` is written."""
        return self.temp_dir / (MINIFIED_DOC_FILE_BASE_NAME + Path(input_path).suffix)

    @property
    def extracted_doc_directory(self) -> Path:
        return self.temp_dir / EXTRACTED_DOC_DIR_NAME

    @property
    def original_media_directory(self) -> Path:
        return self.temp_dir / ORIGINAL_MEDIA_DIR_NAME

    def minify_document(self, input_path: str | os.PathLike[str], cleanup: bool = False) -> Path:
        """Create a copy of the document with all media replaced by placeholders.

        The input file is not modified. Check :meth:`can_minify_file` first;
        this method does not.

        Args:
            input_path: Document to minify.
            cleanup: Delete the extracted tree afterwards, keeping only the
                media backup and the minified document.

        Returns:
            Path of the minified document.

        Raises:
            DocumentMinificationError: If any step fails.
        """
        extracted_dir = self.extracted_doc_directory
        media_dir = self.original_media_directory
        minified_path = self.minified_doc_file(input_path)

        try:
            self._extract_zip_to_directory(Path(input_path), extracted_dir)
        except (OSError, zipfile.BadZipFile) as exc:
            raise DocumentMinificationError(
                f"Error when extracting document: Failed to extract {input_path} "
                f"to {extracted_dir}. Error: {exc}",
                exc,
            ) from exc

        self._export_media_and_replace(extracted_dir, media_dir)

        try:
            self._create_zip_from_directory(extracted_dir, minified_path)
        except OSError as exc:
            raise DocumentMinificationError(
                f"Failed creating a zip file at {minified_path}. Error: {exc}", exc
            ) from exc

        if cleanup:
            try:
                shutil.rmtree(extracted_dir)
            except OSError as exc:
                raise DocumentMinificationError(
                    f"Failed to delete directory {extracted_dir}. Error: {exc}", exc
                ) from exc

        try:
            size = os.path.getsize(minified_path)
        except OSError as exc:
            raise DocumentMinificationError(
                f"Failed reading the size of {minified_path}. Error: {exc}", exc
            ) from exc
        if size > MINIFIED_DOC_SIZE_LIMIT_WARNING:
            logger.warning(
                "The input file could not be minified below 5 MB, likely a media type "
                "is missing. This might cause the translation to fail."
            )
        logger.debug("Minified %s to %s (%d bytes)", input_path, minified_path, size)
        return minified_path

    def deminify_document(
        self,
        input_path: str | os.PathLike[str],
        output_path: str | os.PathLike[str],
        cleanup: bool = False,
    ) -> None:
        """Reinsert the backed-up media into a (translated) minified document.

        ``input_path`` and ``output_path`` may be the same file.

        Args:
            input_path: Minified document, typically the translation result.
            output_path: Where to write the final document; replaced if it exists.
            cleanup: Delete the whole temporary directory afterwards.

        Raises:
            DocumentDeminificationError: If any step fails.
        """
        extracted_dir = self.extracted_doc_directory
        media_dir = self.original_media_directory
        output_path = Path(output_path)

        try:
            if extracted_dir.exists():
                shutil.rmtree(extracted_dir)
            extracted_dir.mkdir(parents=True)
        except OSError as exc:
            raise DocumentDeminificationError(
                f"Error when deminifying, could not create directory at {extracted_dir}. "
                f"Error: {exc}",
                exc,
            ) from exc

        try:
            self._extract_zip_to_directory(Path(input_path), extracted_dir)
        except (OSError, zipfile.BadZipFile) as exc:
            raise DocumentDeminificationError(
                f"Error when extracting document: Failed to extract {input_path} "
                f"to {extracted_dir}. Error: {exc}",
                exc,
            ) from exc

        self._replace_media_in_directory(extracted_dir, media_dir)

        try:
            output_path.unlink(missing_ok=True)
            self._create_zip_from_directory(extracted_dir, output_path)
        except OSError as exc:
            raise DocumentDeminificationError(
                f"Failed creating a zip file at {output_path}. Error: {exc}", exc
            ) from exc

        if cleanup:
            try:
                shutil.rmtree(self.temp_dir)
            except OSError as exc:
                raise DocumentDeminificationError(
                    f"Failed to delete directory {self.temp_dir}. Error: {exc}", exc
                ) from exc

    def _extract_zip_to_directory(self, zip_path: Path, extraction_dir: Path) -> None:
        extraction_dir.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(zip_path) as archive:
            self._entry_order = [info.filename for info in archive.infolist()]
            archive.extractall(extraction_dir)

    def _create_zip_from_directory(self, source_dir: Path, output_path: Path) -> None:
        """Zip every file below ``source_dir``.

        Entries present in the most recently extracted archive keep their
        original order, directory entries included; new files follow in
        sorted order.
        """
        files = {path.relative_to(source_dir).as_posix() for path in _iter_files(source_dir)}
        directories = {
            path.relative_to(source_dir).as_posix() + "/"
            for path in source_dir.rglob("*")
            if path.is_dir()
        }
        ordered = [name for name in self._entry_order if name in files or name in directories]
        ordered += sorted(files.difference(ordered))

        with zipfile.ZipFile(output_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for name in ordered:
                archive.write(source_dir / name, arcname=name)

    def _export_media_and_replace(self, input_dir: Path, media_dir: Path) -> None:
        """Move supported media below ``input_dir`` into ``media_dir``.

        Relative paths are preserved ("input/foo/bar.png" becomes
        "media/foo/bar.png") and each moved file is replaced by the placeholder.

        Raises:
            DocumentMinificationError: If a file cannot be moved or replaced.
        """
        for file_path in _iter_files(input_dir):
            if file_path.suffix.lower() not in SUPPORTED_MEDIA_FORMATS:
                continue
            media_path = media_dir / file_path.relative_to(input_dir)
            try:
                media_path.parent.mkdir(parents=True, exist_ok=True)
                shutil.move(file_path, media_path)
                file_path.write_bytes(MEDIA_PLACEHOLDER)
            except OSError as exc:
                raise DocumentMinificationError(
                    f"Error when exporting and replacing media file {file_path}", exc
                ) from exc

    def _replace_media_in_directory(self, input_dir: Path, media_dir: Path) -> None:
        """Move every backed-up media file back to its relative path in ``input_dir``.

        Raises:
            DocumentDeminificationError: If a file cannot be moved back.
        """
        if not media_dir.is_dir():
            return
        for media_path in _iter_files(media_dir):
            if media_path.suffix.lower() not in SUPPORTED_MEDIA_FORMATS:
                continue
            target = input_dir / media_path.relative_to(media_dir)
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise DocumentDeminificationError(
                    f"Error when reinserting media. Failed to create directory at {target.parent}.",
                    exc,
                ) from exc
            try:
                os.replace(media_path, target)
            except OSError as exc:
                raise DocumentDeminificationError(
                    f"Error when reinserting media. Failed to move media back to {target}", exc
                ) from exc


def _iter_files(directory: Path) -> list[Path]:
    """All regular files below ``directory``, in a stable order."""
    return sorted(path for path in directory.rglob("*") if path.is_file())
