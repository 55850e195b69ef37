import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from .core import DATA_PATH, MOVES_DISPLAY_LIMIT
from .models import EvolutionNode, Move, Pokemon, Stat
from .text_utils import (
    format_generation_name,
    format_height,
    format_pokemon_id,
    format_weight,
    humanize,
)

log = logging.getLogger(__name__)


def load_pokemon(path=None) -> Tuple[Pokemon, ...]:
    """Read the dataset JSON array and return the records sorted by id.
    A missing file raises FileNotFoundError naming the expected path.
    """
    p = Path(path or DATA_PATH)
    if not p.exists():
        raise FileNotFoundError(f"Pokémon dataset not found at {p}; run fetch_pokemon_data.py first")
    with p.open('r', encoding='utf-8') as f:
        raw = json.load(f)
    records = sorted((Pokemon.from_dict(d) for d in raw), key=lambda x: x.id)
    log.info('Loaded %d Pokémon from %s', len(records), p)
    return tuple(records)


def get_base_stat_total(stats: Iterable[Stat]) -> int:
    return sum(s.value for s in stats)


def get_all_types(pokemon: Iterable[Pokemon]) -> List[str]:
    return sorted({t for p in pokemon for t in p.types})


def get_all_generations(pokemon: Iterable[Pokemon]) -> List[str]:
    # 'generation-ii' style tags sort wrong alphabetically, so order by first appearance in id order
    seen = {}
    for p in sorted(pokemon, key=lambda x: x.id):
        if p.generation and p.generation not in seen:
            seen[p.generation] = p.id
    return list(seen)


@dataclass(frozen=True)
class Catalogue:
    """Everything derived from one loaded dataset. Built once, then read-only."""
    pokemon: Tuple[Pokemon, ...]
    types: Tuple[str, ...]
    generations: Tuple[str, ...]
    by_name: Dict[str, Pokemon] = field(repr=False, compare=False)

    @classmethod
    def build(cls, pokemon: Iterable[Pokemon]) -> 'Catalogue':
        records = tuple(sorted(pokemon, key=lambda x: x.id))
        return cls(
            pokemon=records,
            types=tuple(get_all_types(records)),
            generations=tuple(get_all_generations(records)),
            by_name={p.name: p for p in records},
        )

    def get_pokemon_by_name(self, name: str) -> Optional[Pokemon]:
        return self.by_name.get((name or '').strip().lower())


def group_evolution_chain(chain: Iterable[EvolutionNode]) -> List[List[EvolutionNode]]:
    """Bucket chain nodes by stage; index i holds every node at stage i."""
    groups: List[List[EvolutionNode]] = []
    for node in chain:
        while len(groups) <= node.stage:
            groups.append([])
        groups[node.stage].append(node)
    return groups


def featured_moves(moves: Iterable[Move], limit: int = MOVES_DISPLAY_LIMIT) -> List[Move]:
    moves = list(moves)
    level_up = sorted((m for m in moves if m.level_learned_at is not None),
                      key=lambda m: m.level_learned_at)
    other = sorted((m for m in moves if m.level_learned_at is None), key=lambda m: m.name)
    return (level_up + other)[:limit]


def status_label(p: Pokemon) -> str:
    if p.is_legendary:
        return 'Legendary'
    if p.is_mythical:
        return 'Mythical'
    return 'Standard'


def summarize(p: Pokemon) -> dict:
    """Card-sized view used by browse and autocomplete responses."""
    return {
        'id': p.id,
        'name': p.name,
        'displayName': humanize(p.name),
        'formattedId': format_pokemon_id(p.id),
        'types': list(p.types),
        'primaryType': p.primary_type,
        'image': p.image,
        'generation': p.generation,
        'statTotal': get_base_stat_total(p.stats),
    }


def describe(p: Pokemon) -> dict:
    """Full record plus the derived fields a detail page renders."""
    detail = p.to_dict()
    detail.update({
        'displayName': humanize(p.name),
        'formattedId': format_pokemon_id(p.id),
        'primaryType': p.primary_type,
        'statTotal': get_base_stat_total(p.stats),
        'status': status_label(p),
        'generationName': format_generation_name(p.generation) if p.generation else 'Unknown generation',
        'formattedHeight': format_height(p.height),
        'formattedWeight': format_weight(p.weight),
        'evolutionStages': [[n.to_dict() for n in stage] for stage in group_evolution_chain(p.evolution_chain)],
        'featuredMoves': [m.to_dict() for m in featured_moves(p.moves)],
    })
    return detail
