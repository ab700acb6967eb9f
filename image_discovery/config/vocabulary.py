"""Static vocabulary tables for keyword extraction, themes, and scoring.

# ─── PURPOSE ───────────────────────────────────────────────────────────
#
# Hand-curated word lists that drive the deterministic parts of the
# engine.  Articles are written in Italian or English, so the stop-word
# list covers both languages.
#
#   - STOP_WORDS          dropped by the keyword extractor
#   - THEME_TABLE         keyword substrings -> thematic category (level 2)
#   - TRUSTED_IMAGE_HOSTS the only hosts a candidate URL may come from
#   - SOURCE_BONUSES      extra relevance for the big free-stock libraries
#   - GENERIC_TERMS       low-specificity stock-photo vocabulary (penalised)
#
# Everything here is immutable and built once at import time.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from image_discovery.models.image import ThemeCategory

# ═════════════════════════════════════════════════════════════════════════
# 1. STOP WORDS (Italian + English)
# ═════════════════════════════════════════════════════════════════════════
# Short words are already removed by the length filter (> 3 characters);
# the longer entries are the ones that matter in practice.

STOP_WORDS: frozenset[str] = frozenset({
    # Italian
    "il", "la", "le", "lo", "gli", "un", "una", "del", "della", "dei", "delle",
    "per", "con", "su", "tra", "fra", "di", "da", "in", "a", "ad", "al", "alla",
    "che", "chi", "come", "quando", "dove", "perché", "se", "ma", "però", "quindi",
    "anche", "ancora", "già", "più", "molto", "tutto", "ogni", "altro", "stesso",
    "questo", "quello", "questi", "quelli", "essere", "avere", "fare", "dire",
    "sono", "nella", "nelle", "negli", "dalla", "dalle", "degli", "alle", "agli",
    "questa", "quella", "queste", "quelle", "loro", "sempre", "solo", "tutti",
    "tutte", "cosa", "mentre", "oppure", "senza", "sulla", "sulle", "anni",
    # English
    "the", "and", "or", "but", "on", "at", "to", "for", "of", "with", "by",
    "is", "are", "was", "were", "be", "been", "have", "has", "had", "do", "does",
    "did", "will", "would", "could", "should", "may", "might", "can", "must",
    "this", "that", "these", "those", "from", "into", "about", "their", "there",
    "they", "them", "what", "which", "when", "where", "while", "also", "than",
    "then", "more", "most", "some", "such", "only", "other", "over", "your",
})

# ═════════════════════════════════════════════════════════════════════════
# 2. THEME TABLE
# ═════════════════════════════════════════════════════════════════════════
# A keyword belongs to a theme when it *contains* any of the theme's
# substrings.  Declaration order is the output order of the inferencer.

THEME_TABLE: tuple[tuple[ThemeCategory, tuple[str, ...]], ...] = (
    (ThemeCategory.TECHNOLOGY, (
        "tech", "software", "digital", "computer", "internet", "ai", "algoritmo",
    )),
    (ThemeCategory.BUSINESS, (
        "business", "azienda", "mercato", "economia", "finanza", "startup",
    )),
    (ThemeCategory.HEALTH, (
        "salute", "medicina", "medico", "cura", "benessere", "fitness",
    )),
    (ThemeCategory.ENVIRONMENT, (
        "ambiente", "natura", "sostenibile", "energia", "clima", "verde",
    )),
    (ThemeCategory.EDUCATION, (
        "educazione", "scuola", "università", "formazione", "apprendimento",
    )),
    (ThemeCategory.ARTS, (
        "arte", "design", "creativo", "cultura", "museo", "artista",
    )),
)

FALLBACK_THEMES: tuple[ThemeCategory, ...] = (
    ThemeCategory.GENERAL,
    ThemeCategory.PROFESSIONAL,
)

# ═════════════════════════════════════════════════════════════════════════
# 3. TRUSTED SOURCES
# ═════════════════════════════════════════════════════════════════════════
# A candidate host must equal one of these or be a subdomain of one.

TRUSTED_IMAGE_HOSTS: tuple[str, ...] = (
    "images.unsplash.com",
    "cdn.pixabay.com",
    "images.pexels.com",
    "img.freepik.com",
)

# Substring of the candidate host -> score bonus.
SOURCE_BONUSES: tuple[tuple[str, int], ...] = (
    ("unsplash.com", 10),
    ("pexels.com", 8),
    ("pixabay.com", 6),
)

# ═════════════════════════════════════════════════════════════════════════
# 4. GENERIC STOCK-PHOTO TERMS
# ═════════════════════════════════════════════════════════════════════════

GENERIC_TERMS: tuple[str, ...] = (
    "business",
    "people",
    "background",
    "abstract",
    "concept",
)

IMAGE_EXTENSIONS: tuple[str, ...] = ("jpg", "jpeg", "png", "webp", "gif")
