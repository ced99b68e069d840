"""
Catalog Store (v1.0.0)
In-memory clothing catalog, look suggestions and feedback.

Nothing is persisted: all three lists are rebuilt empty on restart
(and re-seeded with sample items in development).
"""
import time
import secrets
import string
import logging
import threading
from dataclasses import replace
from typing import Optional, List, Dict, Any, Iterable

from fashion_ai.core.exceptions import DuplicateIdError
from fashion_ai.core.models import (
    RATINGS,
    CatalogStats,
    ClothingItem,
    Feedback,
    LookSuggestion,
    utc_now,
)

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits

# Fields callers may set on a clothing item; id and created_at are store-owned.
ITEM_FIELDS = ("image_url", "type", "colors", "styles", "season", "occasion", "description")


def generate_id(prefix: str) -> str:
    """Build ids like item_1718000000000_k3j9x0a2b."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"{prefix}_{int(time.time() * 1000)}_{suffix}"


def _any_substring_match(wanted: Iterable[str], values: Iterable[str]) -> bool:
    """True when any wanted value is a case-insensitive substring of any item value."""
    values = [v.lower() for v in values]
    return any(w.lower() in v for w in wanted for v in values)


def _copy_item(item: ClothingItem) -> ClothingItem:
    return replace(
        item,
        colors=list(item.colors),
        styles=list(item.styles),
        season=list(item.season),
        occasion=list(item.occasion),
    )


def _copy_look(suggestion: LookSuggestion) -> LookSuggestion:
    return replace(suggestion, items=list(suggestion.items), tips=list(suggestion.tips))


class FashionStore:
    """
    Thread-safe in-memory store.

    Records go in and come out as copies, so callers can never change
    stored state without going through the store.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._clothing_items: List[ClothingItem] = []
        self._look_suggestions: List[LookSuggestion] = []
        self._feedbacks: List[Feedback] = []

    # ==================== CLOTHING ITEMS ====================

    def add_clothing_item(self, **fields) -> ClothingItem:
        unknown = set(fields) - set(ITEM_FIELDS)
        if unknown:
            raise ValueError(f"Unknown clothing item fields: {', '.join(sorted(unknown))}")

        item = _copy_item(ClothingItem(id=generate_id("item"), created_at=utc_now(), **fields))
        with self._lock:
            self._clothing_items.append(_copy_item(item))

        logger.info(f"Clothing item added: {item.id} ({item.type})")
        return item

    def get_all_clothing_items(self) -> List[ClothingItem]:
        with self._lock:
            return [_copy_item(item) for item in self._clothing_items]

    def get_clothing_item_by_id(self, item_id: str) -> Optional[ClothingItem]:
        with self._lock:
            item = next((item for item in self._clothing_items if item.id == item_id), None)
            return _copy_item(item) if item else None

    def update_clothing_item(self, item_id: str, updates: Dict[str, Any]) -> Optional[ClothingItem]:
        """
        Merge updates into an item.

        Returns:
            Updated item, or None if the id is unknown

        Raises:
            ValueError: If updates name a field that is not editable
        """
        unknown = set(updates) - set(ITEM_FIELDS)
        if unknown:
            raise ValueError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")

        with self._lock:
            for index, item in enumerate(self._clothing_items):
                if item.id == item_id:
                    updated = _copy_item(replace(item, **updates))
                    self._clothing_items[index] = updated
                    logger.info(f"Clothing item updated: {item_id} ({', '.join(updates)})")
                    return _copy_item(updated)
        return None

    def delete_clothing_item(self, item_id: str) -> bool:
        with self._lock:
            for index, item in enumerate(self._clothing_items):
                if item.id == item_id:
                    del self._clothing_items[index]
                    logger.info(f"Clothing item deleted: {item_id}")
                    return True
        return False

    def filter_clothing_items(
        self,
        type: Optional[str] = None,
        styles: Optional[List[str]] = None,
        colors: Optional[List[str]] = None,
        season: Optional[List[str]] = None,
        occasion: Optional[List[str]] = None,
    ) -> List[ClothingItem]:
        """
        Filter the catalog.

        type matches exactly (case-insensitive). Each list filter passes when
        any of its values is contained in any of the item's values for that
        field. Empty filters are ignored; all given filters must pass.
        """
        list_filters = [
            ("styles", styles),
            ("colors", colors),
            ("season", season),
            ("occasion", occasion),
        ]

        def matches(item: ClothingItem) -> bool:
            if type and item.type.lower() != type.lower():
                return False
            for field_name, wanted in list_filters:
                if wanted and not _any_substring_match(wanted, getattr(item, field_name)):
                    return False
            return True

        with self._lock:
            return [_copy_item(item) for item in self._clothing_items if matches(item)]

    # ==================== LOOK SUGGESTIONS ====================

    def add_look_suggestion(self, suggestion: LookSuggestion) -> LookSuggestion:
        with self._lock:
            if any(s.id == suggestion.id for s in self._look_suggestions):
                raise DuplicateIdError(f"Look suggestion {suggestion.id} already exists")
            self._look_suggestions.append(_copy_look(suggestion))

        logger.info(f"Look suggestion added: {suggestion.id} ({len(suggestion.items)} items)")
        return suggestion

    def has_look_suggestion(self, look_id: str) -> bool:
        return self.get_look_suggestion_by_id(look_id) is not None

    def get_all_look_suggestions(self) -> List[LookSuggestion]:
        with self._lock:
            return [_copy_look(s) for s in self._look_suggestions]

    def get_look_suggestion_by_id(self, look_id: str) -> Optional[LookSuggestion]:
        with self._lock:
            suggestion = next((s for s in self._look_suggestions if s.id == look_id), None)
            return _copy_look(suggestion) if suggestion else None

    # ==================== FEEDBACK ====================

    def add_feedback(self, look_id: str, rating: str, comments: str = "") -> Feedback:
        if rating not in RATINGS:
            raise ValueError(f"rating must be one of: {', '.join(RATINGS)}")

        feedback = Feedback(
            id=generate_id("feedback"),
            look_id=look_id,
            rating=rating,
            comments=comments or "",
            timestamp=utc_now(),
        )
        with self._lock:
            self._feedbacks.append(replace(feedback))

        logger.info(f"Feedback added: {look_id} - {rating}")
        return feedback

    def get_feedbacks_for_look(self, look_id: str) -> List[Feedback]:
        with self._lock:
            return [replace(f) for f in self._feedbacks if f.look_id == look_id]

    def get_all_feedbacks(self) -> List[Feedback]:
        with self._lock:
            return [replace(f) for f in self._feedbacks]

    def get_look_feedback_summary(self, look_id: str) -> Dict[str, Any]:
        """Approve/reject counts for a single look."""
        feedbacks = self.get_feedbacks_for_look(look_id)
        approved = sum(1 for f in feedbacks if f.rating == "approve")
        total = len(feedbacks)
        return {
            "lookId": look_id,
            "totalFeedbacks": total,
            "approved": approved,
            "rejected": total - approved,
            "approvalRate": (approved / total) * 100 if total > 0 else 0,
        }

    # ==================== STATISTICS ====================

    def get_stats(self) -> CatalogStats:
        with self._lock:
            items = list(self._clothing_items)
            total_suggestions = len(self._look_suggestions)
            feedbacks = list(self._feedbacks)

        approved = sum(1 for f in feedbacks if f.rating == "approve")
        rejected = sum(1 for f in feedbacks if f.rating == "reject")

        style_distribution: Dict[str, int] = {}
        type_distribution: Dict[str, int] = {}
        for item in items:
            for style in item.styles:
                style_distribution[style] = style_distribution.get(style, 0) + 1
            type_distribution[item.type] = type_distribution.get(item.type, 0) + 1

        return CatalogStats(
            total_items=len(items),
            total_suggestions=total_suggestions,
            total_feedbacks=len(feedbacks),
            approved_suggestions=approved,
            rejected_suggestions=rejected,
            approval_rate=(approved / len(feedbacks)) * 100 if feedbacks else 0,
            style_distribution=style_distribution,
            type_distribution=type_distribution,
        )

    # ==================== MAINTENANCE ====================

    def clear_all(self):
        """Drop every record (for testing)."""
        with self._lock:
            self._clothing_items = []
            self._look_suggestions = []
            self._feedbacks = []

    def seed_sample_data(self) -> List[ClothingItem]:
        items = [self.add_clothing_item(**sample) for sample in SAMPLE_ITEMS]
        logger.info(f"Seeded {len(items)} sample clothing items")
        return items


SAMPLE_ITEMS = [
    {
        "image_url": "/api/placeholder/300/400",
        "type": "Camisa",
        "colors": ["Branco", "Azul"],
        "styles": ["Casual", "Clássico"],
        "season": ["Primavera", "Verão"],
        "occasion": ["Trabalho", "Casual"],
        "description": "Camisa social branca com detalhes azuis",
    },
    {
        "image_url": "/api/placeholder/300/400",
        "type": "Calça",
        "colors": ["Preto"],
        "styles": ["Clássico", "Minimalista"],
        "season": ["Outono", "Inverno"],
        "occasion": ["Trabalho", "Formal"],
        "description": "Calça social preta slim fit",
    },
    {
        "image_url": "/api/placeholder/300/400",
        "type": "Tênis",
        "colors": ["Branco", "Preto"],
        "styles": ["Streetwear", "Casual"],
        "season": ["Primavera", "Verão", "Outono"],
        "occasion": ["Casual", "Esportivo"],
        "description": "Tênis branco com detalhes pretos",
    },
]


# Global instance
store = FashionStore()
