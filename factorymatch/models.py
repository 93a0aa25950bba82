"""
Domain records shared by the matching and duplicate-detection pipelines.

Rows fetched from storage are loose dictionaries (optional fields, legacy
comma-joined list columns). They are converted once, here, into strict
records; scoring and comparison code only ever sees these types.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .normalize import normalize_approved, normalize_field, normalize_list


@dataclass
class FactoryRecord:
    """A candidate manufacturer from the roster."""

    id: Any
    name: str = ""
    email: str = ""
    phone: str = ""
    country: str = ""
    city: str = ""
    industries: List[str] = field(default_factory=list)
    materials: List[str] = field(default_factory=list)
    capabilities: str = ""
    notes: str = ""
    scale: str = ""
    approved: bool = False
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "FactoryRecord":
        """
        Build a record from a storage row.

        Args:
            row: Dictionary as returned by the factory repository. ``industry``
                and ``industries`` are both accepted, as lists or comma-joined
                strings.

        Returns:
            FactoryRecord with every text field a string and every list
            field a list of strings.

        Raises:
            ValueError: If the row has no id
        """
        if row.get("id") is None:
            raise ValueError(f"Factory row has no id: {row.get('name')!r}")
        industries = row.get("industries")
        if industries is None:
            industries = row.get("industry")
        return cls(
            id=row.get("id"),
            name=normalize_field(row.get("name")),
            email=normalize_field(row.get("email")),
            phone=normalize_field(row.get("phone")),
            country=normalize_field(row.get("country")),
            city=normalize_field(row.get("city")),
            industries=normalize_list(industries),
            materials=normalize_list(row.get("materials")),
            capabilities=normalize_field(row.get("capabilities")),
            notes=normalize_field(row.get("notes")),
            scale=normalize_field(row.get("scale")),
            approved=normalize_approved(row.get("approved"), row.get("factory_status")),
            created_at=row.get("created_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "country": self.country,
            "city": self.city,
            "industry": list(self.industries),
            "materials": list(self.materials),
            "capabilities": self.capabilities,
            "notes": self.notes,
            "scale": self.scale,
            "approved": self.approved,
            "created_at": self.created_at.isoformat() if isinstance(self.created_at, datetime) else self.created_at,
        }


@dataclass
class InventionQuery:
    """The project description submitted through the intake form."""

    name: str
    description: str
    type: str = ""
    country: str = ""
    materials: List[str] = field(default_factory=list)
    industry: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InventionQuery":
        return cls(
            name=normalize_field(data.get("name")),
            description=normalize_field(data.get("description")),
            type=normalize_field(data.get("type")),
            country=normalize_field(data.get("country")),
            materials=normalize_list(data.get("materials")),
            industry=normalize_field(data.get("industry")),
        )

    @property
    def text(self) -> str:
        return f"{self.description} {self.name}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "type": self.type,
            "country": self.country,
            "materials": list(self.materials),
            "industry": self.industry,
        }


@dataclass(frozen=True)
class Weights:
    """Points awarded by each scoring rule."""

    industry: int = 40
    keywords: int = 40
    type: int = 10
    country: int = 10


DEFAULT_WEIGHTS = Weights()


@dataclass
class ScoreResult:
    score: int
    reasons: List[str]


@dataclass
class MatchResult:
    """A factory augmented with its match evidence for one ranking call."""

    factory: FactoryRecord
    match_score: int
    match_reasons: List[str]
    explanation: str
    stability_index: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.factory.to_dict(),
            "match_score": self.match_score,
            "match_reasons": list(self.match_reasons),
            "explanation": self.explanation,
            "stability_index": self.stability_index,
        }


@dataclass
class Suspect:
    factory: FactoryRecord
    score: int
    reason: str


@dataclass
class DuplicateGroup:
    """A primary record and the records suspected to duplicate it."""

    primary: FactoryRecord
    suspects: List[Suspect] = field(default_factory=list)

    @property
    def suspect_ids(self) -> List[Any]:
        return [s.factory.id for s in self.suspects]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "primary": self.primary.to_dict(),
            "suspects": [
                {"factory": s.factory.to_dict(), "score": s.score, "reason": s.reason}
                for s in self.suspects
            ],
        }
