import logging

from flask import Blueprint, current_app, jsonify, request

from services.core import AUTOCOMPLETE_LIMIT
from services.filtering import FilterState, filter_and_sort_pokemon, get_autocomplete_suggestions
from services.pokemon import describe, summarize
from services.text_utils import format_generation_name, humanize

bp = Blueprint('pokedex', __name__, url_prefix='/api')

log = logging.getLogger(__name__)


def _catalogue():
    return current_app.config['CATALOGUE']


@bp.route('/pokemon')
def browse():
    try:
        filters = FilterState.from_args(request.args)
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    try:
        matches = filter_and_sort_pokemon(_catalogue().pokemon, filters)
        return jsonify({
            'count': len(matches),
            'results': [summarize(p) for p in matches],
        })
    except Exception as e:
        log.exception('Browse failed')
        return jsonify({"error": str(e)}), 500


@bp.route('/pokemon/suggest')
def suggest():
    q = (request.args.get('q') or '').strip()
    try:
        limit = int(request.args.get('limit', AUTOCOMPLETE_LIMIT))
    except ValueError:
        return jsonify({"error": "limit must be an integer"}), 400
    if limit <= 0:
        limit = AUTOCOMPLETE_LIMIT
    suggestions = get_autocomplete_suggestions(_catalogue().pokemon, q, limit)
    return jsonify([summarize(p) for p in suggestions])


@bp.route('/pokemon/<name>')
def detail(name):
    pokemon = _catalogue().get_pokemon_by_name(name)
    if pokemon is None:
        return jsonify({"error": f"Pokémon '{name}' not found"}), 404
    return jsonify(describe(pokemon))


@bp.route('/types')
def types():
    return jsonify([{'name': t, 'label': humanize(t)} for t in _catalogue().types])


@bp.route('/generations')
def generations():
    return jsonify([{'name': g, 'label': format_generation_name(g)} for g in _catalogue().generations])
