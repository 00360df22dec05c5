"""Built-in plan used to seed an empty store, and shown as-is when the store is unreachable.

Entries use the seed spelling (`id` for the natural key, `wordCount`), the
same shape accepted by `POST /api/articles/bulk`.
"""
from __future__ import annotations

import copy
from typing import Any, Dict, Iterable, List

from content_planner.schemas import ArticleIn, ArticleRead

FALLBACK_ARTICLES: List[Dict[str, Any]] = [
    {
        "id": "A01",
        "title": "How to Connect a Teleprompter to Your DSLR Rig",
        "keyword": "teleprompter dslr setup",
        "intent": "Informational",
        "funnel": "TOFU",
        "description": "Step-by-step mounting, cabling and monitor mirroring for common DSLR and mirrorless bodies.",
        "priority": "High",
        "wordCount": 1800,
        "category": "Hardware Integrations",
        "week": 1,
    },
    {
        "id": "A02",
        "title": "Best Beam-Splitter Glass for Home Studios",
        "keyword": "beam splitter glass",
        "intent": "Commercial",
        "funnel": "MOFU",
        "description": "Comparing 60/40 and 70/30 glass, coatings and sizes for small rooms.",
        "priority": "Medium",
        "wordCount": 2200,
        "category": "Hardware Comparisons",
        "week": 1,
    },
    {
        "id": "A03",
        "title": "Teleprompter Apps Compared: Desktop vs Tablet",
        "keyword": "teleprompter app comparison",
        "intent": "Commercial",
        "funnel": "MOFU",
        "description": "Feature-by-feature look at scrolling control, remote support and pricing.",
        "priority": "High",
        "wordCount": 2500,
        "category": "Software Comparisons",
        "week": 2,
    },
    {
        "id": "A04",
        "title": "Using a Prompter with Zoom and Teams Calls",
        "keyword": "teleprompter for zoom",
        "intent": "Informational",
        "funnel": "TOFU",
        "description": "Keep eye contact on video calls by placing your script over the webcam.",
        "priority": "High",
        "wordCount": 1500,
        "category": "Platform Guides",
        "week": 3,
    },
    {
        "id": "A05",
        "title": "Teleprompters for Church Livestreams",
        "keyword": "church livestream teleprompter",
        "intent": "Informational",
        "funnel": "TOFU",
        "description": "Budget setups for sermons, announcements and multi-camera services.",
        "priority": "Medium",
        "wordCount": 1600,
        "category": "Industry Guides",
        "week": 5,
    },
    {
        "id": "A06",
        "title": "How to Read a Teleprompter Without Looking Like It",
        "keyword": "how to read a teleprompter",
        "intent": "Informational",
        "funnel": "TOFU",
        "description": "Pacing, eye movement and scroll speed drills for natural delivery.",
        "priority": "High",
        "wordCount": 2000,
        "category": "Skills & Techniques",
        "week": 6,
    },
    {
        "id": "A07",
        "title": "Writing Scripts That Sound Spoken, Not Read",
        "keyword": "video script writing tips",
        "intent": "Informational",
        "funnel": "TOFU",
        "description": "Sentence length, contractions and breath marks for on-camera scripts.",
        "priority": "Medium",
        "wordCount": 1700,
        "category": "Script Writing",
        "week": 8,
    },
    {
        "id": "A08",
        "title": "Lighting a Teleprompter Setup Without Glare",
        "keyword": "teleprompter lighting",
        "intent": "Informational",
        "funnel": "MOFU",
        "description": "Key light placement and hoods that keep reflections off the glass.",
        "priority": "Low",
        "wordCount": 1400,
        "category": "Production & Setup",
        "week": 10,
    },
    {
        "id": "A09",
        "title": "Remote Controls and Foot Pedals for Self-Recording",
        "keyword": "teleprompter remote control",
        "intent": "Commercial",
        "funnel": "BOFU",
        "description": "Bluetooth remotes, pedals and voice scroll options reviewed.",
        "priority": "Low",
        "wordCount": 1300,
        "category": "Hardware Comparisons",
        "week": 13,
    },
    {
        "id": "A10",
        "title": "Teleprompter Setup Checklist for Corporate Video Teams",
        "keyword": "corporate video teleprompter",
        "intent": "Transactional",
        "funnel": "BOFU",
        "description": "A repeatable checklist from script lock to final take.",
        "priority": "Medium",
        "wordCount": 1200,
        "category": "Industry Guides",
        "week": 14,
    },
]


def fallback_articles() -> List[Dict[str, Any]]:
    """A fresh copy of the seed payloads, safe for callers to mutate."""
    return copy.deepcopy(FALLBACK_ARTICLES)


def as_records(payloads: Iterable[Dict[str, Any]]) -> List[ArticleRead]:
    """Seed payloads as display records (no store ids), ordered like the store orders them."""
    records = [
        ArticleRead.model_validate(ArticleIn.model_validate(a).model_dump(exclude_none=True))
        for a in payloads
    ]
    return sorted(records, key=lambda r: (r.week if r.week is not None else 0, r.article_id))
