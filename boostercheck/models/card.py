"""
Scryfall records consumed by the range audit, and the audit output.

Cards are never persisted; only the audit issues are written to disk.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ScryfallCard(BaseModel):
    """The subset of a Scryfall card object the audit needs."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    collector_number: str = Field(..., description="Printed collector number")
    name: str = ""
    rarity: str = ""
    promo_types: list[str] = Field(default_factory=list)
    frame_effects: list[str] = Field(default_factory=list)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "ScryfallCard":
        return cls.model_validate(data)


class ScryfallSet(BaseModel):
    """The subset of a Scryfall set object used for card-count checks."""

    model_config = ConfigDict(extra="ignore")

    code: str = ""
    name: str = ""
    card_count: int = 0


class SuspiciousCard(BaseModel):
    """A booster card outside every declared range, with no exclusion tag."""

    cn: str
    name: str
    rarity: str
    promos: str = ""
    frames: str = ""

    @classmethod
    def from_card(cls, card: ScryfallCard) -> "SuspiciousCard":
        return cls(
            cn=card.collector_number,
            name=card.name,
            rarity=card.rarity,
            promos=",".join(card.promo_types),
            frames=",".join(card.frame_effects),
        )

    @property
    def tags(self) -> str:
        return " | ".join(t for t in (self.promos, self.frames) if t)


class AuditIssue(BaseModel):
    """Per-set audit record written to the results file."""

    model_config = ConfigDict(populate_by_name=True)

    set: str
    name: str
    ranges: list[str]
    cards: list[SuspiciousCard]
    filtered_count: int = Field(0, alias="filteredCount")

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
