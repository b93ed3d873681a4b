"""Download filename helpers for relayed transcripts."""

from __future__ import annotations

import re
from typing import Final
from urllib.parse import quote

_EXTENSION_PATTERN: Final = re.compile(r"\.[^/.]+$")
_UNSAFE_HEADER_CHARS: Final = re.compile(r'["\\\x00-\x1f\x7f]')

# Formats whose file extension differs from the format name.
_FORMAT_EXTENSIONS: Final[dict[str, str]] = {"text": "txt"}


def extension_for_format(response_format: str) -> str:
    """Map a ``response_format`` value to the extension of the downloaded file."""

    return _FORMAT_EXTENSIONS.get(response_format, response_format)


def derive_download_filename(original_name: str, response_format: str) -> str:
    """Swap the upload's extension for the one matching ``response_format``.

    ``speech.wav`` + ``text`` gives ``speech.txt``; ``clip.wav`` + ``srt``
    gives ``clip.srt``. Names without an extension keep their full base.
    """

    base = _EXTENSION_PATTERN.sub("", original_name)
    return f"{base}.{extension_for_format(response_format)}"


def build_content_disposition(filename: str) -> str:
    """Return an ``attachment`` disposition header value for ``filename``.

    Non-ASCII names get an ASCII ``filename`` fallback plus an RFC 5987
    ``filename*`` parameter carrying the exact UTF-8 name.
    """

    safe_name = _UNSAFE_HEADER_CHARS.sub("_", filename)
    if safe_name.isascii():
        return f'attachment; filename="{safe_name}"'

    fallback = "".join(char if char.isascii() else "_" for char in safe_name)
    encoded = quote(safe_name, safe="")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{encoded}"


__all__ = [
    "build_content_disposition",
    "derive_download_filename",
    "extension_for_format",
]
