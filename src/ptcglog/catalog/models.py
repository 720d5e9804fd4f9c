"""Data models for the static card catalog."""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class ArchetypeRule:
    """A deck archetype matched by unit-name tokens."""
    id: str
    label: str
    must_include: tuple[str, ...]
    aliases: tuple[str, ...] = ()
    sprite: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "ArchetypeRule":
        return cls(
            id=data["id"],
            label=data["label"],
            must_include=tuple(data["must_include"]),
            aliases=tuple(data.get("aliases", ())),
            sprite=data.get("sprite"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "label": self.label,
            "must_include": list(self.must_include),
            "aliases": list(self.aliases),
            "sprite": self.sprite,
        }


@dataclass(frozen=True)
class Catalog:
    """Static reference data consumed by the analyzer.

    Archetype rules are evaluated in list order, so more specific rules
    must come before generic ones.
    """
    ace_specs: tuple[str, ...]
    archetype_rules: tuple[ArchetypeRule, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.archetype_rules)

    def get_rule(self, rule_id: str) -> Optional[ArchetypeRule]:
        for rule in self.archetype_rules:
            if rule.id == rule_id:
                return rule
        return None

    def get_ids(self) -> List[str]:
        """Get all archetype IDs in priority order."""
        return [r.id for r in self.archetype_rules]
