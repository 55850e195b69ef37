"""
Record types for the Pokédex dataset.

The JSON dataset uses camelCase keys; these frozen dataclasses mirror it and
convert both ways. Lists become tuples so a loaded collection cannot be
mutated by the query layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class Ability:
    name: str
    hidden: bool = False

    @classmethod
    def from_dict(cls, d: dict) -> Ability:
        return cls(name=d.get('name') or '', hidden=bool(d.get('hidden')))

    def to_dict(self) -> dict:
        return {'name': self.name, 'hidden': self.hidden}


@dataclass(frozen=True)
class Stat:
    name: str
    value: int = 0

    @classmethod
    def from_dict(cls, d: dict) -> Stat:
        return cls(name=d.get('name') or '', value=int(d.get('value') or 0))

    def to_dict(self) -> dict:
        return {'name': self.name, 'value': self.value}


@dataclass(frozen=True)
class Move:
    name: str
    method: str = 'unknown'
    level_learned_at: Optional[int] = None

    @classmethod
    def from_dict(cls, d: dict) -> Move:
        return cls(
            name=d.get('name') or '',
            method=d.get('method') or 'unknown',
            level_learned_at=d.get('levelLearnedAt'),
        )

    def to_dict(self) -> dict:
        return {'name': self.name, 'method': self.method, 'levelLearnedAt': self.level_learned_at}


@dataclass(frozen=True)
class SpriteVariants:
    default: Optional[str] = None
    shiny: Optional[str] = None

    @classmethod
    def from_dict(cls, d: Optional[dict]) -> SpriteVariants:
        d = d or {}
        return cls(default=d.get('default'), shiny=d.get('shiny'))

    def to_dict(self) -> dict:
        return {'default': self.default, 'shiny': self.shiny}


@dataclass(frozen=True)
class EvolutionNode:
    """One species in an evolution chain. `stage` 0 is the base form."""
    id: Optional[int]
    name: str
    stage: int = 0

    @classmethod
    def from_dict(cls, d: dict) -> EvolutionNode:
        return cls(id=d.get('id'), name=d.get('name') or '', stage=int(d.get('stage') or 0))

    def to_dict(self) -> dict:
        return {'id': self.id, 'name': self.name, 'stage': self.stage}


@dataclass(frozen=True)
class Pokemon:
    id: int
    name: str
    height: int = 0
    weight: int = 0
    base_experience: Optional[int] = None
    types: Tuple[str, ...] = ()
    abilities: Tuple[Ability, ...] = ()
    stats: Tuple[Stat, ...] = ()
    moves: Tuple[Move, ...] = ()
    image: Optional[str] = None
    sprite_variants: SpriteVariants = field(default_factory=SpriteVariants)
    generation: Optional[str] = None
    habitat: Optional[str] = None
    is_legendary: bool = False
    is_mythical: bool = False
    flavor_text: str = ''
    evolution_chain: Tuple[EvolutionNode, ...] = ()
    locations: Tuple[str, ...] = ()

    @property
    def primary_type(self) -> Optional[str]:
        return self.types[0] if self.types else None

    @classmethod
    def from_dict(cls, d: dict) -> Pokemon:
        """Build a record from its dataset JSON form. `id` and `name` are required."""
        return cls(
            id=int(d['id']),
            name=d['name'],
            height=d.get('height') or 0,
            weight=d.get('weight') or 0,
            base_experience=d.get('baseExperience'),
            types=tuple(d.get('types') or ()),
            abilities=tuple(Ability.from_dict(a) for a in d.get('abilities') or ()),
            stats=tuple(Stat.from_dict(s) for s in d.get('stats') or ()),
            moves=tuple(Move.from_dict(m) for m in d.get('moves') or ()),
            image=d.get('image'),
            sprite_variants=SpriteVariants.from_dict(d.get('spriteVariants')),
            generation=d.get('generation'),
            habitat=d.get('habitat'),
            is_legendary=bool(d.get('isLegendary')),
            is_mythical=bool(d.get('isMythical')),
            flavor_text=d.get('flavorText') or '',
            evolution_chain=tuple(EvolutionNode.from_dict(n) for n in d.get('evolutionChain') or ()),
            locations=tuple(d.get('locations') or ()),
        )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'height': self.height,
            'weight': self.weight,
            'baseExperience': self.base_experience,
            'types': list(self.types),
            'abilities': [a.to_dict() for a in self.abilities],
            'stats': [s.to_dict() for s in self.stats],
            'moves': [m.to_dict() for m in self.moves],
            'image': self.image,
            'spriteVariants': self.sprite_variants.to_dict(),
            'generation': self.generation,
            'habitat': self.habitat,
            'isLegendary': self.is_legendary,
            'isMythical': self.is_mythical,
            'flavorText': self.flavor_text,
            'evolutionChain': [n.to_dict() for n in self.evolution_chain],
            'locations': list(self.locations),
        }
