"""
Asset store - writes encoded assets to the assets directory.
"""

import base64
import binascii
import logging
import re
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

_DATA_URL_PREFIX = re.compile(r"^data:image/\w+;base64,")


class InvalidFilenameError(ValueError):
    """Raised for filenames that could escape the assets directory."""
    pass


def validate_filename(filename: str) -> str:
    """Reject empty names and anything with path separators or '..'."""
    if not filename:
        raise InvalidFilenameError("Filename is required")
    if ".." in filename or "/" in filename or "\\" in filename:
        raise InvalidFilenameError(f"Invalid filename: {filename}")
    return filename


def decode_payload(data: str) -> bytes:
    """Decode base64 image data, with or without a data: URL prefix."""
    payload = _DATA_URL_PREFIX.sub("", data.strip())
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid base64 image data: {e}") from e


def encode_payload(data: bytes, mime_type: str = "image/png") -> str:
    """Encode bytes as a data: URL."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


class AssetStore:
    """Flat directory of asset files."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def path_for(self, filename: str) -> Path:
        return self.root / validate_filename(filename)

    def save(self, filename: str, data: Union[bytes, str]) -> Path:
        """
        Write an asset, creating the directory if needed.

        Args:
            filename: Bare file name (no directories)
            data: Raw bytes, or base64 / data URL text

        Returns:
            Path of the written file.
        """
        path = self.path_for(filename)
        if isinstance(data, str):
            data = decode_payload(data)

        self.root.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.info("Saved asset: %s (%d bytes)", filename, len(data))
        return path

    def load(self, filename: str) -> bytes:
        return self.path_for(filename).read_bytes()

    def exists(self, filename: str) -> bool:
        return self.path_for(filename).exists()
