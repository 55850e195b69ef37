"""
Shared fixtures for the test suite.
"""
import sys
from pathlib import Path

import pytest

# Ensure project root is importable
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from services.models import Ability, EvolutionNode, Move, Pokemon, Stat  # noqa: E402


def make_pokemon(pid, name, types=('normal',), total=300, abilities=(), generation='generation-i',
                 legendary=False, mythical=False, **extra):
    """Record with `total` split over two stats so the base stat total is exact."""
    half = total // 2
    return Pokemon(
        id=pid,
        name=name,
        types=tuple(types),
        abilities=tuple(Ability(a) for a in abilities),
        stats=(Stat('hp', half), Stat('attack', total - half)),
        generation=generation,
        is_legendary=legendary,
        is_mythical=mythical,
        **extra,
    )


@pytest.fixture
def starters():
    return (
        make_pokemon(1, 'bulbasaur', ('grass', 'poison'), 318, ('overgrow', 'chlorophyll')),
        make_pokemon(4, 'charmander', ('fire',), 309, ('blaze', 'solar-power')),
        make_pokemon(6, 'charizard', ('fire', 'flying'), 534, ('blaze',)),
        make_pokemon(7, 'squirtle', ('water',), 314, ('torrent', 'rain-dish')),
        make_pokemon(144, 'articuno', ('ice', 'flying'), 580, ('pressure',), legendary=True),
        make_pokemon(151, 'mew', ('psychic',), 600, ('synchronize',), mythical=True),
        make_pokemon(152, 'chikorita', ('grass',), 318, ('overgrow',), generation='generation-ii'),
    )


@pytest.fixture
def detailed_pokemon():
    return make_pokemon(
        2, 'ivysaur', ('grass', 'poison'), 405, ('overgrow',),
        height=10, weight=130,
        moves=(
            Move('vine-whip', 'level-up', 9),
            Move('tackle', 'level-up', 1),
            Move('swords-dance', 'machine', None),
            Move('cut', 'machine', None),
        ),
        evolution_chain=(
            EvolutionNode(1, 'bulbasaur', 0),
            EvolutionNode(2, 'ivysaur', 1),
            EvolutionNode(3, 'venusaur', 2),
        ),
        locations=('kanto route 2',),
    )
