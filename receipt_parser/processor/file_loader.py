import mimetypes
from pathlib import Path

from receipt_parser.processor.exceptions import UnsupportedFileTypeError
from receipt_parser.processor.models import UploadItem


class FileLoader:
    """Reads receipt images from disk into UploadItems."""

    def load(self, path: Path) -> UploadItem:
        """Read an image file.

        Raises:
            FileNotFoundError: if the file does not exist.
            UnsupportedFileTypeError: if the file is not an image.
        """
        mime_type = self._guess_mime_type(path)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        return UploadItem(
            content=path.read_bytes(),
            mime_type=mime_type,
            filename=path.name,
            preview_handle=path.resolve().as_uri(),
        )

    def load_all(self, paths: list[Path]) -> list[UploadItem]:
        return [self.load(path) for path in paths]

    @staticmethod
    def _guess_mime_type(path: Path) -> str:
        mime_type, _encoding = mimetypes.guess_type(path.name)
        if mime_type is None or not mime_type.startswith("image/"):
            raise UnsupportedFileTypeError(
                f"'{path.name}' is not a supported image file ({mime_type or 'unknown type'})"
            )
        return mime_type
