"""Display colours for categories, priorities and statuses.

The store accepts any string for these fields; values outside the palette
get the neutral badge.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class Badge:
    label: str
    bg: str
    text: str
    border: str = "border-gray-200"

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


def _b(bg: str, text: str, border: str = "border-gray-200") -> Dict[str, str]:
    return {"bg": bg, "text": text, "border": border}


CATEGORY_COLORS = {
    "Hardware Integrations": _b("bg-blue-100", "text-blue-800", "border-blue-200"),
    "Hardware Comparisons": _b("bg-indigo-100", "text-indigo-800", "border-indigo-200"),
    "Software Comparisons": _b("bg-purple-100", "text-purple-800", "border-purple-200"),
    "Platform Guides": _b("bg-pink-100", "text-pink-800", "border-pink-200"),
    "Industry Guides": _b("bg-orange-100", "text-orange-800", "border-orange-200"),
    "Skills & Techniques": _b("bg-green-100", "text-green-800", "border-green-200"),
    "Script Writing": _b("bg-yellow-100", "text-yellow-800", "border-yellow-200"),
    "Production & Setup": _b("bg-red-100", "text-red-800", "border-red-200"),
}

PRIORITY_COLORS = {
    "High": _b("bg-red-100", "text-red-800"),
    "Medium": _b("bg-yellow-100", "text-yellow-800"),
    "Low": _b("bg-green-100", "text-green-800"),
}

STATUS_COLORS = {
    "planned": _b("bg-gray-100", "text-gray-800"),
    "in_progress": _b("bg-blue-100", "text-blue-800"),
    "written": _b("bg-yellow-100", "text-yellow-800"),
    "published": _b("bg-green-100", "text-green-800"),
}

NEUTRAL = _b("bg-gray-100", "text-gray-800")


def badge(colors: Dict[str, Dict[str, str]], value: Optional[str]) -> Badge:
    label = value or ""
    return Badge(label=label, **colors.get(label, NEUTRAL))
