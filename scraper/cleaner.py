"""
Turns raw listing records into plain dicts.

Raw records are deeply nested positional arrays. Any path that is missing in
a record yields None instead of failing the whole batch.
"""

from typing import Any, Dict, List, Optional

import structlog

logger = structlog.get_logger(__name__)


def _dig(value: Any, *path: int) -> Any:
    for index in path:
        if not isinstance(value, list) or not 0 <= index < len(value):
            return None
        value = value[index]
    return value


def _clean_image(image: Any) -> Dict[str, Any]:
    return {
        "id": _dig(image, 0),
        "url": _dig(image, 1, 6, 0),
        "size": {
            "width": _dig(image, 1, 6, 2, 0),
            "height": _dig(image, 1, 6, 2, 1),
        },
        "location": {
            "friendly": _dig(image, 1, 21, 3, 7, 0),
            "lat": _dig(image, 1, 8, 0, 2),
            "long": _dig(image, 1, 8, 0, 1),
        },
        "caption": _dig(image, 1, 21, 3, 5, 0),
    }


def _clean_response(review: Any) -> Optional[Dict[str, Any]]:
    text = _dig(review, 3, 14, 0, 0)
    if not text:
        return None
    return {
        "text": text,
        "time": {
            "published": _dig(review, 3, 1),
            "last_edited": _dig(review, 3, 2),
        },
    }


def clean_review(record: Any) -> Dict[str, Any]:
    review = _dig(record, 0)
    images = _dig(review, 2, 2)

    return {
        "review_id": _dig(review, 0),
        "time": {
            "published": _dig(review, 1, 2),
            "last_edited": _dig(review, 1, 3),
        },
        "author": {
            "name": _dig(review, 1, 4, 5, 0),
            "profile_url": _dig(review, 1, 4, 5, 1),
            "url": _dig(review, 1, 4, 5, 2, 0),
            "id": _dig(review, 1, 4, 5, 3),
        },
        "review": {
            "rating": _dig(review, 2, 0, 0),
            "text": _dig(review, 2, 15, 0, 0),
            "language": _dig(review, 2, 14, 0),
        },
        "images": [_clean_image(image) for image in images] if isinstance(images, list) else None,
        "source": _dig(review, 1, 13, 0),
        "response": _clean_response(review),
    }


async def clean_reviews(records: List[Any]) -> List[Dict[str, Any]]:
    """Clean the full accumulated result in one pass, preserving order."""
    cleaned = [clean_review(record) for record in records]
    logger.info("reviews_cleaned", count=len(cleaned))
    return cleaned
