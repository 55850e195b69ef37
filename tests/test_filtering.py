"""Unit tests for services.filtering – browse filters, sorting, autocomplete."""
import pytest

from services.filtering import (
    FilterState, LegendaryFilter, SortOption,
    filter_and_sort_pokemon, get_autocomplete_suggestions,
)
from conftest import make_pokemon


def names(items):
    return [p.name for p in items]


class TestFilterState:
    def test_defaults(self):
        f = FilterState()
        assert f.search_term == ''
        assert f.selected_types == ()
        assert f.generation == 'all'
        assert f.legendary is LegendaryFilter.ALL
        assert f.sort_by is SortOption.ID_ASC

    def test_plain_strings_coerced(self):
        f = FilterState(legendary='mythical', sort_by='name-asc', selected_types=['fire'])
        assert f.legendary is LegendaryFilter.MYTHICAL
        assert f.sort_by is SortOption.NAME_ASC
        assert f.selected_types == ('fire',)

    def test_bare_string_type(self):
        assert FilterState(selected_types='fire').selected_types == ('fire',)

    def test_unknown_sort_rejected(self):
        with pytest.raises(ValueError):
            FilterState(sort_by='random')

    def test_unknown_legendary_rejected(self):
        with pytest.raises(ValueError):
            FilterState(legendary='shiny')

    def test_from_args(self):
        f = FilterState.from_args({
            'q': 'char', 'types': 'Fire, flying,', 'generation': 'generation-i',
            'legendary': 'non-legendary', 'sort': 'stat-total-desc',
        })
        assert f.search_term == 'char'
        assert f.selected_types == ('fire', 'flying')
        assert f.generation == 'generation-i'
        assert f.legendary is LegendaryFilter.NON_LEGENDARY
        assert f.sort_by is SortOption.STAT_TOTAL_DESC

    def test_from_args_blank_values(self):
        assert FilterState.from_args({'sort': '', 'generation': ' '}) == FilterState()

    def test_frozen(self):
        f = FilterState()
        with pytest.raises(AttributeError):
            f.search_term = 'x'


class TestSearch:
    def test_name_substring(self, starters):
        out = filter_and_sort_pokemon(starters, FilterState(search_term='char'))
        assert names(out) == ['charmander', 'charizard']

    def test_only_charmander_not_squirtle(self):
        fixture = [make_pokemon(4, 'charmander', ('fire',)), make_pokemon(7, 'squirtle', ('water',))]
        out = filter_and_sort_pokemon(fixture, FilterState(search_term='char'))
        assert names(out) == ['charmander']

    def test_case_and_whitespace_ignored(self, starters):
        out = filter_and_sort_pokemon(starters, FilterState(search_term='  SQUIRT '))
        assert names(out) == ['squirtle']

    def test_matches_type(self, starters):
        out = filter_and_sort_pokemon(starters, FilterState(search_term='flying'))
        assert names(out) == ['charizard', 'articuno']

    def test_matches_ability(self, starters):
        out = filter_and_sort_pokemon(starters, FilterState(search_term='torrent'))
        assert names(out) == ['squirtle']

    def test_empty_term_matches_all(self, starters):
        assert len(filter_and_sort_pokemon(starters, FilterState(search_term='   '))) == len(starters)


class TestTypeFilter:
    def test_single_type_as_string(self, starters):
        out = filter_and_sort_pokemon(starters, FilterState(selected_types='water'))
        assert names(out) == ['squirtle']

    def test_conjunctive(self, starters):
        out = filter_and_sort_pokemon(starters, FilterState(selected_types=('fire', 'flying')))
        assert names(out) == ['charizard']

    def test_every_result_is_superset(self, starters):
        for selection in [('grass',), ('flying',), ('grass', 'poison'), ('ice', 'flying')]:
            out = filter_and_sort_pokemon(starters, FilterState(selected_types=selection))
            assert out
            for p in out:
                assert set(selection) <= set(p.types)

    def test_no_match(self, starters):
        assert filter_and_sort_pokemon(starters, FilterState(selected_types=('fire', 'water'))) == []


class TestGenerationAndLegendary:
    def test_generation_exact(self, starters):
        out = filter_and_sort_pokemon(starters, FilterState(generation='generation-ii'))
        assert names(out) == ['chikorita']

    def test_generation_all(self, starters):
        assert len(filter_and_sort_pokemon(starters, FilterState(generation='all'))) == len(starters)

    def test_legendary(self, starters):
        out = filter_and_sort_pokemon(starters, FilterState(legendary='legendary'))
        assert names(out) == ['articuno']

    def test_mythical(self, starters):
        out = filter_and_sort_pokemon(starters, FilterState(legendary='mythical'))
        assert names(out) == ['mew']

    def test_non_legendary_excludes_both(self, starters):
        out = filter_and_sort_pokemon(starters, FilterState(legendary='non-legendary'))
        assert 'articuno' not in names(out)
        assert 'mew' not in names(out)
        assert all(not p.is_legendary and not p.is_mythical for p in out)

    def test_clauses_combine(self, starters):
        f = FilterState(search_term='a', selected_types=('flying',), legendary='non-legendary')
        assert names(filter_and_sort_pokemon(starters, f)) == ['charizard']


class TestSorting:
    def test_id_desc(self, starters):
        out = filter_and_sort_pokemon(starters, FilterState(sort_by='id-desc'))
        assert [p.id for p in out] == [152, 151, 144, 7, 6, 4, 1]

    def test_id_asc_from_shuffled_input(self, starters):
        shuffled = list(reversed(starters))
        out = filter_and_sort_pokemon(shuffled, FilterState())
        assert [p.id for p in out] == sorted(p.id for p in starters)

    def test_name_asc(self, starters):
        out = filter_and_sort_pokemon(starters, FilterState(sort_by='name-asc'))
        assert names(out) == sorted(names(starters))

    def test_name_asc_case_insensitive(self):
        fixture = [make_pokemon(1, 'Zubat'), make_pokemon(2, 'abra'), make_pokemon(3, 'Mew')]
        out = filter_and_sort_pokemon(fixture, FilterState(sort_by='name-asc'))
        assert names(out) == ['abra', 'Mew', 'Zubat']

    def test_stat_total_desc(self):
        fixture = [make_pokemon(1, 'a', total=300), make_pokemon(2, 'b', total=500), make_pokemon(3, 'c', total=400)]
        out = filter_and_sort_pokemon(fixture, FilterState(sort_by='stat-total-desc'))
        assert [p.id for p in out] == [2, 3, 1]

    def test_stat_total_ties_by_id(self):
        fixture = [make_pokemon(9, 'x', total=400), make_pokemon(3, 'y', total=400), make_pokemon(5, 'z', total=500)]
        out = filter_and_sort_pokemon(fixture, FilterState(sort_by='stat-total-desc'))
        assert [p.id for p in out] == [5, 3, 9]

    def test_input_not_mutated(self, starters):
        before = list(starters)
        filter_and_sort_pokemon(before, FilterState(sort_by='id-desc'))
        assert before == list(starters)

    def test_deterministic(self, starters):
        f = FilterState(search_term='a', sort_by='name-asc')
        assert filter_and_sort_pokemon(starters, f) == filter_and_sort_pokemon(starters, f)


class TestAutocomplete:
    @pytest.fixture
    def pis(self):
        return [make_pokemon(i, n) for i, n in
                [(16, 'pidgey'), (17, 'pidgeotto'), (18, 'pidgeot'), (25, 'pikachu'), (172, 'pichu')]]

    def test_empty_query(self, starters):
        assert get_autocomplete_suggestions(starters, '', 8) == []

    def test_whitespace_query(self, starters):
        assert get_autocomplete_suggestions(starters, '   ', 8) == []

    def test_capped_in_id_order(self, pis):
        out = get_autocomplete_suggestions(pis, 'pi', 2)
        assert [p.id for p in out] == [16, 17]

    def test_substring_match(self, pis):
        assert names(get_autocomplete_suggestions(pis, 'CHU', 8)) == ['pikachu', 'pichu']

    def test_name_only(self, starters):
        # 'blaze' is an ability, 'fire' a type: neither is suggested
        assert get_autocomplete_suggestions(starters, 'blaze', 8) == []
        assert get_autocomplete_suggestions(starters, 'fire', 8) == []

    def test_zero_limit(self, pis):
        assert get_autocomplete_suggestions(pis, 'pi', 0) == []
