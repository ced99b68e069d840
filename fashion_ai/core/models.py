"""
Catalog Models (v1.0.0)
Clothing items, classifications, look suggestions and feedback records.

All to_dict() payloads use the camelCase keys the web client reads.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Dict


RATINGS = ("approve", "reject")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _iso(value: datetime) -> str:
    return value.isoformat().replace("+00:00", "Z")


@dataclass
class ClassificationResult:
    """Attributes the model extracted from a clothing photo."""
    type: str
    colors: List[str]
    styles: List[str]
    season: List[str]
    occasion: List[str]
    confidence: float
    description: str

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "colors": list(self.colors),
            "styles": list(self.styles),
            "season": list(self.season),
            "occasion": list(self.occasion),
            "confidence": self.confidence,
            "description": self.description,
        }


@dataclass
class ClothingItem:
    """A classified piece stored in the catalog."""
    id: str
    image_url: str
    type: str
    colors: List[str] = field(default_factory=list)
    styles: List[str] = field(default_factory=list)
    season: List[str] = field(default_factory=list)
    occasion: List[str] = field(default_factory=list)
    description: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "imageUrl": self.image_url,
            "type": self.type,
            "colors": list(self.colors),
            "styles": list(self.styles),
            "season": list(self.season),
            "occasion": list(self.occasion),
            "description": self.description,
            "createdAt": _iso(self.created_at),
        }

    def to_prompt_line(self) -> str:
        """One catalog line as shown to the look generator."""
        return (
            f"ID: {self.id}, Tipo: {self.type}, "
            f"Cores: {', '.join(self.colors)}, "
            f"Estilos: {', '.join(self.styles)}, "
            f"Descrição: {self.description or 'N/A'}"
        )


@dataclass
class LookContext:
    """Situation a look is generated for."""
    occasion: str
    season: str
    weather: Optional[str] = None
    preferred_styles: Optional[List[str]] = None
    exclude_items: Optional[List[str]] = None

    def to_dict(self) -> dict:
        return {
            "occasion": self.occasion,
            "season": self.season,
            "weather": self.weather,
            "preferredStyles": list(self.preferred_styles or []),
            "excludeItems": list(self.exclude_items or []),
        }


@dataclass
class LookSuggestion:
    """An outfit composed by the model from catalog item ids."""
    id: str
    title: str
    description: str
    items: List[str]
    reasoning: str
    tips: List[str]
    confidence: float
    created_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "items": list(self.items),
            "reasoning": self.reasoning,
            "tips": list(self.tips),
            "confidence": self.confidence,
            "createdAt": _iso(self.created_at),
        }


@dataclass
class Feedback:
    """A user's rating of a generated look."""
    id: str
    look_id: str
    rating: str
    comments: str = ""
    timestamp: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "lookId": self.look_id,
            "rating": self.rating,
            "comments": self.comments,
            "timestamp": _iso(self.timestamp),
        }


@dataclass
class CatalogStats:
    total_items: int
    total_suggestions: int
    total_feedbacks: int
    approved_suggestions: int
    rejected_suggestions: int
    approval_rate: float
    style_distribution: Dict[str, int]
    type_distribution: Dict[str, int]

    def to_dict(self) -> dict:
        return {
            "totalItems": self.total_items,
            "totalSuggestions": self.total_suggestions,
            "totalFeedbacks": self.total_feedbacks,
            "approvedSuggestions": self.approved_suggestions,
            "rejectedSuggestions": self.rejected_suggestions,
            "approvalRate": self.approval_rate,
            "styleDistribution": dict(self.style_distribution),
            "typeDistribution": dict(self.type_distribution),
        }

    def feedback_dict(self) -> dict:
        """Subset shown next to the feedback form."""
        return {
            "totalFeedbacks": self.total_feedbacks,
            "approvedSuggestions": self.approved_suggestions,
            "rejectedSuggestions": self.rejected_suggestions,
            "approvalRate": self.approval_rate,
        }
