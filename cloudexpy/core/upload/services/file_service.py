"""
File validation and reading services.

Single Responsibility: Each class handles one specific task.
"""
from pathlib import Path
from typing import Tuple, Optional, Union

import aiofiles

from ...exceptions import FileReadError, InvalidInputError, UploadFileNotFoundError
from ...logging import get_logger


class FileValidator:
    """
    Validates files before upload.

    Runs before any network activity so a missing file never costs a
    request.
    """

    def validate(self, file_path: Union[str, Path]) -> Tuple[Path, int]:
        """
        Validate a file for upload.

        Args:
            file_path: Path to the file

        Returns:
            Tuple of (validated Path, file size in bytes)

        Raises:
            UploadFileNotFoundError: If file doesn't exist
            InvalidInputError: If path is not a regular file
            FileReadError: If the file cannot be inspected
        """
        path = Path(file_path) if isinstance(file_path, str) else file_path

        try:
            exists = path.exists()
            is_file = exists and path.is_file()
            size = path.stat().st_size if is_file else 0
        except FileNotFoundError as e:
            raise UploadFileNotFoundError(str(file_path)) from e
        except OSError as e:
            raise FileReadError(str(file_path), e) from e

        if not exists:
            raise UploadFileNotFoundError(str(file_path))

        if not is_file:
            raise InvalidInputError(f"Path is not a file: {path}", source=str(file_path))

        return path, size


class AsyncFileReader:
    """
    Asynchronous file reader for chunk-based reading.

    Uses aiofiles for non-blocking I/O operations. Keeps the handle open
    between chunks when open_file() was called, so one reader serves one
    upload at a time.
    """

    def __init__(self):
        """Initialize file reader."""
        self._logger = get_logger('cloudexpy.upload.file')
        self._file_handle = None
        self._current_file_path: Optional[Path] = None

    async def open_file(self, file_path: Path) -> None:
        """
        Open file for reading. Call this before reading chunks.

        Args:
            file_path: Path to the file to open

        Raises:
            UploadFileNotFoundError: If the file vanished since validation
            FileReadError: If the file cannot be opened
        """
        if self._file_handle is not None and self._current_file_path == file_path:
            return

        if self._file_handle is not None:
            await self.close_file()

        try:
            self._file_handle = await aiofiles.open(file_path, 'rb')
        except OSError as e:
            raise self._read_error(file_path, e) from e
        self._current_file_path = file_path

    async def close_file(self) -> None:
        """Close the currently open file."""
        if self._file_handle is not None:
            await self._file_handle.close()
            self._file_handle = None
            self._current_file_path = None

    async def read_chunk(
        self,
        file_path: Path,
        start: int,
        end: int
    ) -> bytes:
        """
        Read the bytes ``[start, end)`` of a file.

        Reuses the open handle when the file was opened with open_file().

        Raises:
            UploadFileNotFoundError: If the file vanished since validation
            FileReadError: On any other I/O failure
        """
        length = end - start
        try:
            if self._file_handle is not None and self._current_file_path == file_path:
                await self._file_handle.seek(start)
                data = await self._file_handle.read(length)
            else:
                async with aiofiles.open(file_path, 'rb') as f:
                    await f.seek(start)
                    data = await f.read(length)
        except OSError as e:
            raise self._read_error(file_path, e) from e

        self._logger.debug(f"Read chunk: {start}-{end} ({len(data)} bytes)")
        return data

    async def read_file(self, file_path: Path) -> bytes:
        """
        Read entire file.

        Raises:
            UploadFileNotFoundError: If the file vanished since validation
            FileReadError: On any other I/O failure
        """
        try:
            async with aiofiles.open(file_path, 'rb') as f:
                return await f.read()
        except OSError as e:
            raise self._read_error(file_path, e) from e

    def _read_error(self, file_path: Path, error: OSError) -> Exception:
        self._logger.error(f"Reading {file_path} failed: {error}")
        if isinstance(error, FileNotFoundError):
            return UploadFileNotFoundError(str(file_path))
        return FileReadError(str(file_path), error)
