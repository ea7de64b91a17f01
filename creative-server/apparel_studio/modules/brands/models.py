"""Brand domain models."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class Brand:
    id: str
    customer_id: str
    name: str
    description: str = ""
    tagline: Optional[str] = None
    color_palette: list[str] = field(default_factory=list)
    is_primary: bool = False
    logo_url: Optional[str] = None
    reference_assets: list[str] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(slots=True)
class BrandCreateInput:
    customer_id: str
    name: str
    description: str = ""
    tagline: Optional[str] = None
    color_palette: list[str] = field(default_factory=list)
    is_primary: bool = False
    logo_url: Optional[str] = None
    reference_assets: list[str] = field(default_factory=list)


# Sentinel used to differentiate between "not provided" and explicit None.
UNSET = object()


@dataclass(slots=True)
class BrandUpdateInput:
    name: str | object = UNSET
    tagline: Optional[str] | object = UNSET
    description: str | object = UNSET
    color_palette: list[str] | object = UNSET
    is_primary: bool | object = UNSET
    logo_url: Optional[str] | object = UNSET
    reference_assets: list[str] | object = UNSET

    def changes(self) -> dict[str, object]:
        return {
            item.name: getattr(self, item.name)
            for item in fields(self)
            if getattr(self, item.name) is not UNSET
        }
