"""Deck archetype classification from observed Pokemon."""
import logging
from typing import Iterable, Optional

from ..data.lines import normalize_name
from .models import ArchetypeRule, Catalog

logger = logging.getLogger(__name__)


def _slugify(value: str) -> str:
    return normalize_name(value).replace(" ", "-")


class ArchetypeClassifier:
    """Match a side's observed Pokemon against the archetype rule table.

    Rules are tried in priority order and the first rule whose every
    token appears in some observed name wins.
    """

    def __init__(self, catalog: Catalog):
        self.rules: tuple[ArchetypeRule, ...] = catalog.archetype_rules

    def classify(self, main_unit: str, other_units: Iterable[str] = ()) -> Optional[str]:
        """Return the archetype ID for a side, or None if no rule matches."""
        names = [normalize_name(n) for n in [main_unit, *other_units] if isinstance(n, str)]
        names = [n for n in names if n]
        if not names:
            return None

        for rule in self.rules:
            tokens = [normalize_name(t) for t in rule.must_include]
            if all(any(t in n for n in names) for t in tokens):
                logger.debug(f"Matched archetype {rule.id} for {main_unit}")
                return rule.id
        return None

    def infer_for_summary(
        self,
        user_main_attacker: str,
        user_other_pokemon: Iterable[str],
        opponent_main_attacker: str,
        opponent_other_pokemon: Iterable[str],
    ) -> tuple[Optional[str], Optional[str]]:
        """Infer (user, opponent) archetypes for a game."""
        return (
            self.classify(user_main_attacker, user_other_pokemon),
            self.classify(opponent_main_attacker, opponent_other_pokemon),
        )

    def canonicalize(self, value: Optional[str]) -> Optional[str]:
        """Resolve an ID, label, alias or slug to a rule ID."""
        if not value:
            return None
        raw = value.strip()
        if not raw:
            return None

        for rule in self.rules:
            if rule.id == raw:
                return rule.id

        norm = normalize_name(raw)
        for rule in self.rules:
            if normalize_name(rule.label) == norm:
                return rule.id
        for rule in self.rules:
            if any(normalize_name(a) == norm for a in rule.aliases):
                return rule.id

        slug = _slugify(raw)
        for rule in self.rules:
            if _slugify(rule.label) == slug:
                return rule.id
        return None

    def format_label(self, value: Optional[str]) -> str:
        """Human-readable label for an archetype ID or free-form name."""
        if not value or not value.strip():
            return "Unknown"
        rule_id = self.canonicalize(value)
        if rule_id:
            return next(r.label for r in self.rules if r.id == rule_id)
        return " ".join(w[:1].upper() + w[1:] for w in value.strip().replace("-", " ").split())
