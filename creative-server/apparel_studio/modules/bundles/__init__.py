"""Order asset bundling: fetch every asset of an order and pack it into one zip."""

from .delivery import ArchiveDelivery, DeliveredArchive, FileArchiveDelivery, InMemoryArchiveDelivery
from .exceptions import BundleError
from .models import (
    ADMIN_FINALS,
    BRAND_IDENTITY,
    BUNDLE_FOLDERS,
    CLIENT_BRIEFS,
    LOGO_ENTRY_NAME,
    AssetSlot,
    archive_filename,
    bundle_root,
    sanitize_title,
)
from .service import AssetBundler, plan_assets

__all__ = [
    "ADMIN_FINALS",
    "BRAND_IDENTITY",
    "BUNDLE_FOLDERS",
    "CLIENT_BRIEFS",
    "LOGO_ENTRY_NAME",
    "ArchiveDelivery",
    "AssetBundler",
    "AssetSlot",
    "BundleError",
    "DeliveredArchive",
    "FileArchiveDelivery",
    "InMemoryArchiveDelivery",
    "archive_filename",
    "bundle_root",
    "plan_assets",
    "sanitize_title",
]
