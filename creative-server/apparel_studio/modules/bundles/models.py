"""Archive layout and naming rules for order bundles."""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass
from urllib.parse import unquote, urlsplit

ADMIN_FINALS = "Admin_Finals"
CLIENT_BRIEFS = "Client_Briefs"
BRAND_IDENTITY = "Brand_Identity"
BUNDLE_FOLDERS = (ADMIN_FINALS, CLIENT_BRIEFS, BRAND_IDENTITY)

BUNDLE_SUFFIX = "_Bundle"
ARCHIVE_EXTENSION = ".zip"
LOGO_ENTRY_NAME = "logo"
FALLBACK_TITLE = "Order"

_WHITESPACE = re.compile(r"\s+")
_PATH_SEPARATORS = re.compile(r"[/\\]")


def sanitize_title(title: str) -> str:
    """Replace whitespace runs (and path separators) in an order title with ``_``."""
    cleaned = _PATH_SEPARATORS.sub("_", _WHITESPACE.sub("_", title))
    return cleaned or FALLBACK_TITLE


def bundle_root(title: str) -> str:
    return f"{sanitize_title(title)}{BUNDLE_SUFFIX}"


def archive_filename(title: str) -> str:
    return f"{bundle_root(title)}{ARCHIVE_EXTENSION}"


def sanitize_entry_name(name: str | None) -> str:
    """Flatten a display name into a single archive path component."""
    if not name:
        return ""
    cleaned = _PATH_SEPARATORS.sub("_", name.replace("\0", "")).strip()
    if cleaned in {".", ".."}:
        return ""
    return cleaned


def url_basename(url: str) -> str:
    """Last non-query path segment of ``url``, percent-decoded ("" when absent)."""
    try:
        path = urlsplit(url).path
    except ValueError:
        return ""
    return sanitize_entry_name(unquote(path.rsplit("/", 1)[-1]))


@dataclass(frozen=True, slots=True)
class AssetSlot:
    """One remote asset and the archive entry reserved for it before fetching."""

    folder: str
    name: str
    url: str

    def entry_path(self, root: str) -> str:
        return f"{root}/{self.folder}/{self.name}"


class FolderNames:
    """Hands out unique entry names inside each bundle folder."""

    def __init__(self) -> None:
        self._taken: dict[str, set[str]] = {folder: set() for folder in BUNDLE_FOLDERS}

    def reserve(self, folder: str, name: str) -> str:
        taken = self._taken[folder]
        candidate = name
        if candidate in taken:
            stem, ext = posixpath.splitext(name)
            counter = 2
            while f"{stem}_{counter}{ext}" in taken:
                counter += 1
            candidate = f"{stem}_{counter}{ext}"
        taken.add(candidate)
        return candidate
