# routes/bible_api.py
"""
API endpoints for Bible lookup and reference detection.

Provides access to:
- Verse, range and chapter lookup from a loaded translation
- Random verse selection
- Reference detection in text
- Translation listing
"""

import logging
import threading
from typing import Dict, Optional

from flask import Blueprint, request, jsonify

from services.bible import (
    BibleService,
    TranslationManager,
    BibleError,
    NotFound,
    InvalidRange,
    RangeOutOfBounds,
    AmbiguousName,
    ReferenceParseError,
    TranslationError,
    TranslationLoadError,
)
from utils.errors import (
    error_response,
    missing_field,
    invalid_field,
    not_found,
    server_error,
    validation_error,
)

logger = logging.getLogger(__name__)

bible_bp = Blueprint("bible_api", __name__, url_prefix="/api/bible")

# Lazily initialized instances; one service per translation code.
# The None key holds the configured default translation.
_services: Dict[Optional[str], BibleService] = {}
_services_lock = threading.Lock()
_manager = None


def get_manager() -> TranslationManager:
    """Get or create TranslationManager instance."""
    global _manager
    if _manager is None:
        _manager = TranslationManager()
    return _manager


def get_service(translation: Optional[str] = None) -> BibleService:
    """
    Get or create the BibleService for a translation.

    Loading a full translation takes a moment, so each one is loaded once
    and kept for the life of the process.
    """
    key = translation.upper() if translation else None
    with _services_lock:
        if key not in _services:
            manager = get_manager()
            if key is None:
                _services[key] = BibleService.from_config(manager.storage)
            else:
                _services[key] = BibleService.from_translation(manager.get_translation(key))
        return _services[key]


def _bible_error(e: BibleError):
    """Map a Bible service exception to an error response."""
    if isinstance(e, NotFound):
        return not_found("reference", str(e))
    if isinstance(e, InvalidRange):
        return validation_error("invalid_range", str(e))
    if isinstance(e, RangeOutOfBounds):
        return validation_error("range_out_of_bounds", str(e))
    if isinstance(e, ReferenceParseError):
        return validation_error("invalid_reference", str(e))
    if isinstance(e, AmbiguousName):
        return validation_error("ambiguous_book", str(e))
    if isinstance(e, TranslationLoadError):
        logger.error(f"Translation failed to load: {e}")
        return server_error("translation_load_failed", str(e))
    if isinstance(e, TranslationError):
        return error_response("translation_unavailable", 404, str(e))
    return server_error(detail=str(e))


def _flag(name: str) -> bool:
    return request.args.get(name, "").lower() in ("1", "true", "yes")


# =============================================================================
# Lookup Endpoints
# =============================================================================

@bible_bp.get("/lookup")
def lookup_reference():
    """
    Look up a verse, range or chapter.

    Query params:
        ref: Reference string (required) e.g., "Luke 23:39-43"
        translation: Translation code (optional, default from config)
        superscripts: Include verse number superscripts (optional, default false)

    Returns:
        {
            "ref": "Luke 23:39-43",
            "translation": "King James Version",
            "reference": {"kind": "range", "book": "Luke", ...},
            "text": "And one of the malefactors..."
        }
    """
    ref = request.args.get("ref")
    if not ref:
        return missing_field("ref")

    try:
        service = get_service(request.args.get("translation"))
        reference = service.parse(ref)
        text = service.lookup(reference, include_superscripts=_flag("superscripts"))
        return jsonify({
            "ref": str(reference),
            "translation": service.translation_name,
            "reference": reference.to_dict(),
            "text": text,
        })
    except BibleError as e:
        return _bible_error(e)


@bible_bp.get("/chapter")
def get_chapter():
    """
    Get the full text of a chapter.

    Query params:
        book: Book name or alias (required)
        chapter: Chapter number (required)
        translation: Translation code (optional)
        superscripts: Include verse number superscripts (optional, default true)

    Returns:
        {
            "book": "Psalms",
            "chapter": 23,
            "verse_count": 6,
            "text": "¹ The LORD is my shepherd..."
        }
    """
    book = request.args.get("book")
    if not book:
        return missing_field("book")

    chapter = request.args.get("chapter", type=int)
    if chapter is None:
        return invalid_field("chapter", "chapter must be an integer")

    superscripts = request.args.get("superscripts", "true").lower() in ("1", "true", "yes")

    try:
        service = get_service(request.args.get("translation"))
        book_id = service.store.book_id(book)
        text = service.get_chapter(book_id, chapter, include_superscripts=superscripts)
        return jsonify({
            "book": book_id.name,
            "chapter": chapter,
            "verse_count": service.max_verse(book_id, chapter),
            "text": text,
        })
    except BibleError as e:
        return _bible_error(e)


@bible_bp.get("/random")
def random_verse():
    """
    Get a uniformly random verse.

    Query params:
        translation: Translation code (optional)

    Returns:
        {
            "ref": "Proverbs 3:5",
            "reference": {...},
            "text": "Trust in the LORD with all thine heart..."
        }
    """
    try:
        service = get_service(request.args.get("translation"))
        reference = service.random_verse()
        return jsonify({
            "ref": str(reference),
            "translation": service.translation_name,
            "reference": reference.to_dict(),
            "text": service.lookup(reference, include_superscripts=_flag("superscripts")),
        })
    except BibleError as e:
        return _bible_error(e)


@bible_bp.post("/detect")
def detect_references():
    """
    Find scripture references in text.

    Request body:
        {
            "text": "Read John 3:16 and Romans 8:28 for encouragement.",
            "translation": "KJV",       (optional)
            "include_text": false       (optional)
        }

    Returns:
        {
            "references": [
                {"ref": "John 3:16", "book": "John", "chapter": 3,
                 "start": 5, "end": 14, "original": "John 3:16", ...},
                ...
            ]
        }
    """
    data = request.json or {}
    text = data.get("text")

    if not text:
        return missing_field("text")

    include_text = bool(data.get("include_text"))

    try:
        service = get_service(data.get("translation"))
        results = []
        for found in service.find_references(text):
            item = found.reference.to_dict()
            item.update({
                "start": found.start,
                "end": found.end,
                "original": found.text,
            })
            if include_text:
                item["text"] = service.lookup(found.reference)
            results.append(item)
        return jsonify({"references": results})
    except BibleError as e:
        return _bible_error(e)


# =============================================================================
# Structure and Translation Endpoints
# =============================================================================

@bible_bp.get("/books")
def list_books():
    """
    List the books of a translation with their chapter counts.

    Returns:
        {
            "translation": "King James Version",
            "books": [{"name": "Genesis", "chapters": 50, "aliases": [...]}, ...]
        }
    """
    try:
        service = get_service(request.args.get("translation"))
        store = service.store
        return jsonify({
            "translation": service.translation_name,
            "books": [
                {
                    "name": book.name,
                    "chapters": book.chapter_count,
                    "aliases": list(book.aliases),
                }
                for book in (store.book(b) for b in store.book_ids())
            ],
        })
    except BibleError as e:
        return _bible_error(e)


@bible_bp.get("/translations")
def list_translations():
    """
    List catalogue translations and their install state.

    Returns:
        {
            "default": "KJV",
            "translations": [
                {"code": "KJV", "name": "King James Version", "installed": true, ...},
                ...
            ],
            "custom": {"My Bible": "/path/to/file.txt"}
        }
    """
    manager = get_manager()
    return jsonify({
        "default": manager.storage.get_default_translation(),
        "translations": manager.list_available(),
        "custom": manager.storage.get_custom_translations(),
    })
