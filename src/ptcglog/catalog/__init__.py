"""Static card catalog and archetype rules."""
from .models import ArchetypeRule, Catalog
from .loader import DEFAULT_ACE_SPECS, default_catalog, load_catalog, get_catalog
from .archetypes import ArchetypeClassifier

__all__ = [
    "ArchetypeRule",
    "Catalog",
    "DEFAULT_ACE_SPECS",
    "default_catalog",
    "load_catalog",
    "get_catalog",
    "ArchetypeClassifier",
]
