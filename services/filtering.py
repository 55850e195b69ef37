"""
Browse engine: filter + sort, and name autocomplete, over a loaded collection.

Both functions are pure. They never mutate the records they are given and
always return a fresh list.
"""

from __future__ import annotations

import locale
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Mapping, Sequence, Tuple

from .models import Pokemon
from .pokemon import get_base_stat_total

ALL = 'all'


class LegendaryFilter(str, Enum):
    ALL = 'all'
    LEGENDARY = 'legendary'
    MYTHICAL = 'mythical'
    NON_LEGENDARY = 'non-legendary'


class SortOption(str, Enum):
    ID_ASC = 'id-asc'
    ID_DESC = 'id-desc'
    NAME_ASC = 'name-asc'
    STAT_TOTAL_DESC = 'stat-total-desc'


@dataclass(frozen=True)
class FilterState:
    search_term: str = ''
    selected_types: Tuple[str, ...] = ()
    generation: str = ALL
    legendary: LegendaryFilter = LegendaryFilter.ALL
    sort_by: SortOption = SortOption.ID_ASC

    def __post_init__(self):
        # Coerce plain strings; unknown options raise ValueError here, not in the engine.
        types = self.selected_types
        if isinstance(types, str):
            types = (types,)
        object.__setattr__(self, 'selected_types', tuple(types))
        object.__setattr__(self, 'legendary', LegendaryFilter(self.legendary))
        object.__setattr__(self, 'sort_by', SortOption(self.sort_by))

    @classmethod
    def from_args(cls, args: Mapping[str, str]) -> FilterState:
        """Build from query-string style values.
        `types` is a comma separated list; blank values fall back to defaults.
        """
        types = [t.strip().lower() for t in (args.get('types') or '').split(',') if t.strip()]
        return cls(
            search_term=args.get('q') or '',
            selected_types=tuple(types),
            generation=(args.get('generation') or ALL).strip() or ALL,
            legendary=(args.get('legendary') or LegendaryFilter.ALL.value).strip().lower(),
            sort_by=(args.get('sort') or SortOption.ID_ASC.value).strip().lower(),
        )


def _normalize_query(term) -> str:
    return (term or '').strip().lower()


def _matches_search(p: Pokemon, term: str) -> bool:
    if not term:
        return True
    if term in p.name.lower():
        return True
    if any(term in t.lower() for t in p.types):
        return True
    return any(term in a.name.lower() for a in p.abilities)


def _matches_legendary(p: Pokemon, legendary: LegendaryFilter) -> bool:
    if legendary is LegendaryFilter.LEGENDARY:
        return p.is_legendary
    if legendary is LegendaryFilter.MYTHICAL:
        return p.is_mythical
    if legendary is LegendaryFilter.NON_LEGENDARY:
        return not p.is_legendary and not p.is_mythical
    return True


def _name_key(name: str) -> str:
    # Follows LC_COLLATE; code-point order unless configure_locale() has run.
    return locale.strxfrm(name.casefold())


def _sort(items: List[Pokemon], sort_by: SortOption) -> List[Pokemon]:
    if sort_by is SortOption.ID_DESC:
        return sorted(items, key=lambda p: -p.id)
    if sort_by is SortOption.NAME_ASC:
        return sorted(items, key=lambda p: (_name_key(p.name), p.id))
    if sort_by is SortOption.STAT_TOTAL_DESC:
        return sorted(items, key=lambda p: (-get_base_stat_total(p.stats), p.id))
    return sorted(items, key=lambda p: p.id)


def filter_and_sort_pokemon(pokemon: Iterable[Pokemon], filters: FilterState) -> List[Pokemon]:
    term = _normalize_query(filters.search_term)
    wanted = set(filters.selected_types)
    matched = [
        p for p in pokemon
        if _matches_search(p, term)
        and wanted.issubset(p.types)
        and (filters.generation == ALL or p.generation == filters.generation)
        and _matches_legendary(p, filters.legendary)
    ]
    return _sort(matched, filters.sort_by)


def get_autocomplete_suggestions(pokemon: Sequence[Pokemon], query, limit: int) -> List[Pokemon]:
    """Names containing the query, in collection order, at most `limit` of them.
    A blank query suggests nothing.
    """
    q = _normalize_query(query)
    if not q or limit <= 0:
        return []
    out = []
    for p in pokemon:
        if q in p.name.lower():
            out.append(p)
            if len(out) >= limit:
                break
    return out
