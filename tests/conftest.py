"""Pytest configuration and shared fixtures."""

import pytest

from ptcglog.catalog.models import ArchetypeRule, Catalog


MINIMAL_LOG = """Alice drew 7 cards for the opening hand.
Bob drew 7 cards for the opening hand.
Turn #1
Alice played Pikachu to the Active Spot.
Turn #2
Bob played Eevee to the Active Spot.
Turn #3
Alice's Pikachu used Thunder Shock for 30 damage.
Eevee was Knocked Out!
Alice took a Prize card.
Alice wins.
"""

FULL_LOG = """Setup
Ash chose heads for the opening coin flip.
Gary won the coin toss.
Gary decided to go first.
Ash drew 7 cards for the opening hand.
- 7 drawn cards.
   • Pikachu, Charmander, Master Ball, Basic Lightning Energy
Gary drew 7 cards for the opening hand.
- 7 drawn cards.
Ash played Pikachu to the Active Spot.
Gary played Eevee to the Active Spot.
Gary played Squirtle to the Bench.

Turn # 1 - Gary's Turn
Gary drew a card.
Gary played Prime Catcher.
- Gary's Eevee is now in the Active Spot.
Gary drew Bulbasaur and played it to the Bench.
Gary ended their turn.

Turn # 2 - Ash's Turn
Ash drew a card.
Ash played Charmander onto the Bench.
Ash's Pikachu used Thunderbolt on Gary's Eevee for 250 damage.
   • Damage breakdown:
   • It's super effective!
Gary's Eevee was Knocked Out!
Ash took a Prize card.
Gary's Squirtle is now in the Active Spot.

Turn # 3 - Gary's Turn
Gary's Squirtle used Water Gun on Ash's Pikachu for 260 damage.
Ash's Pikachu was Knocked Out!
Gary took 2 Prize cards.
Ash's Charmander is now in the Active Spot.

Turn # 4 - Ash's Turn
Ash's Charmander used Ember on Gary's Squirtle for 40 damage.
Gary conceded. Ash wins.
"""


@pytest.fixture
def minimal_log():
    """Return the smallest complete game log."""
    return MINIMAL_LOG


@pytest.fixture
def full_log():
    """Return a game log with setup, bullets, switches and a concession."""
    return FULL_LOG


@pytest.fixture
def small_catalog():
    """Return a catalog with a handful of rules for testing."""
    return Catalog(
        ace_specs=("Master Ball", "Prime Catcher"),
        archetype_rules=(
            ArchetypeRule(id="pikachu-charmander", label="Pikachu / Charmander",
                          must_include=("pikachu", "charmander")),
            ArchetypeRule(id="pikachu-box", label="Pikachu Box", must_include=("pikachu",),
                          aliases=("Pika Box",)),
            ArchetypeRule(id="eevee-squirtle", label="Eevee / Squirtle",
                          must_include=("eevee", "squirtle")),
        ),
    )
