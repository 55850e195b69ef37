"""
Offline dataset builder.

Pulls the first N Pokémon from PokeAPI, fans the per-item detail fetches out
over a fixed-size thread pool, and writes the sorted records to a JSON file
consumed by the web app.
"""

import argparse
import json
import logging
import queue
import re
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from pathlib import Path

import requests

from .core import (
    CONCURRENCY,
    DATA_PATH,
    LIMIT,
    MAX_LEVEL_UP_MOVES,
    MAX_LOCATIONS,
    MAX_OTHER_MOVES,
    POKEAPI_BASE,
    PROGRESS_EVERY,
    REQUEST_TIMEOUT,
    RETRY_BACKOFF,
    THROTTLE,
    USER_AGENT,
)
from .text_utils import format_name, normalize_text

log = logging.getLogger(__name__)

# Errors a malformed or unreachable payload can raise
ITEM_ERRORS = (requests.RequestException, ValueError, KeyError, TypeError, AttributeError)

_TRAILING_ID = re.compile(r'/(\d+)/?$')


def make_session() -> requests.Session:
    s = requests.Session()
    s.headers.update({'User-Agent': USER_AGENT})
    return s


def fetch_json(session, url: str):
    r = session.get(url, timeout=REQUEST_TIMEOUT)
    r.raise_for_status()
    return r.json()


def fetch_index(session, limit: int = LIMIT):
    """Return the index page: a list of { 'name', 'url' } dicts."""
    data = fetch_json(session, f"{POKEAPI_BASE}/pokemon?limit={limit}")
    return data.get('results') or []


def _id_from_url(url):
    m = _TRAILING_ID.search(url or '')
    return int(m.group(1)) if m else None


def extract_evolution_chain(data):
    """Flatten an evolution-chain payload into [{id, name, stage}] in pre-order.
    Nodes missing a species are kept with id None and an empty name.
    """
    if not data or not data.get('chain'):
        return []
    chain = []
    stack = [(data['chain'], 0)]
    while stack:
        node, stage = stack.pop()
        species = node.get('species') or {}
        chain.append({
            'id': _id_from_url(species.get('url')),
            'name': species.get('name') or '',
            'stage': stage,
        })
        # reversed so the first branch is visited first
        for child in reversed(node.get('evolves_to') or []):
            if child:
                stack.append((child, stage + 1))
    return chain


def extract_locations(encounters):
    locations = {}  # insertion-ordered set
    for entry in encounters or []:
        area = (entry.get('location_area') or {}).get('name')
        if area:
            locations[format_name(area)] = None
        if len(locations) >= MAX_LOCATIONS:
            break
    return list(locations)


def extract_moves(moves):
    """Level-up moves sorted by level (capped), then other moves in API order (capped)."""
    level_up, other = [], []
    for move in moves or []:
        name = (move.get('move') or {}).get('name') or ''
        if not name:
            continue
        details = move.get('version_group_details') or []
        lvl = next((d for d in details if (d.get('move_learn_method') or {}).get('name') == 'level-up'), None)
        if lvl is not None:
            method = 'level-up'
        elif details:
            method = (details[0].get('move_learn_method') or {}).get('name') or 'unknown'
        else:
            method = 'unknown'
        level = lvl.get('level_learned_at') if lvl is not None else None
        entry = {'name': name, 'method': method, 'levelLearnedAt': level}
        if level is not None:
            level_up.append(entry)
        else:
            other.append(entry)
    level_up.sort(key=lambda m: m['levelLearnedAt'])
    return level_up[:MAX_LEVEL_UP_MOVES] + other[:MAX_OTHER_MOVES]


def extract_stats(stats):
    return [{'name': (s.get('stat') or {}).get('name') or '', 'value': s.get('base_stat') or 0}
            for s in stats or []]


def extract_abilities(abilities):
    return [{'name': (a.get('ability') or {}).get('name') or '', 'hidden': bool(a.get('is_hidden'))}
            for a in abilities or []]


def _english_flavor(species):
    for e in species.get('flavor_text_entries') or []:
        if (e.get('language') or {}).get('name') == 'en' and e.get('flavor_text'):
            return normalize_text(e['flavor_text'])
    return ''


def _image(sprites):
    art = ((sprites.get('other') or {}).get('official-artwork') or {}).get('front_default')
    return art or sprites.get('front_default')


def fetch_pokemon_detail(session, entry):
    """Build one dataset record. Four round trips, strictly in sequence:
    base -> species -> evolution chain -> location encounters.
    """
    base = fetch_json(session, entry['url'])
    species_url = (base.get('species') or {}).get('url')
    species = fetch_json(session, species_url) if species_url else {}
    chain_url = (species.get('evolution_chain') or {}).get('url')
    evolution_chain = extract_evolution_chain(fetch_json(session, chain_url)) if chain_url else []
    encounters_url = base.get('location_area_encounters')
    locations = extract_locations(fetch_json(session, encounters_url)) if encounters_url else []

    sprites = base.get('sprites') or {}
    return {
        'id': base['id'],
        'name': base['name'],
        'height': base.get('height'),
        'weight': base.get('weight'),
        'baseExperience': base.get('base_experience'),
        'types': [t['type']['name'] for t in base.get('types') or [] if (t.get('type') or {}).get('name')],
        'abilities': extract_abilities(base.get('abilities')),
        'stats': extract_stats(base.get('stats')),
        'moves': extract_moves(base.get('moves')),
        'image': _image(sprites),
        'spriteVariants': {
            'default': sprites.get('front_default'),
            'shiny': sprites.get('front_shiny'),
        },
        'generation': (species.get('generation') or {}).get('name'),
        'habitat': (species.get('habitat') or {}).get('name'),
        'isLegendary': bool(species.get('is_legendary')),
        'isMythical': bool(species.get('is_mythical')),
        'flavorText': _english_flavor(species),
        'evolutionChain': evolution_chain,
        'locations': locations,
    }


def build_dataset(entries, fetch_detail, concurrency=CONCURRENCY, backoff=RETRY_BACKOFF, throttle=THROTTLE):
    """Fetch every index entry with `fetch_detail(entry)` on a bounded pool.

    Each item gets one retry after `backoff` seconds; an item that fails twice
    is left out. Returns the successful records sorted by id.
    """
    total = len(entries)
    if total == 0:
        return []
    results = [None] * total
    work = queue.Queue()
    for item in enumerate(entries):
        work.put(item)
    progress = {'done': 0}
    progress_lock = threading.Lock()

    def worker(worker_id):
        while True:
            try:
                idx, entry = work.get_nowait()
            except queue.Empty:
                return
            name = entry.get('name')
            try:
                results[idx] = fetch_detail(entry)
                log.debug('Fetched %s (%d/%d)', name, idx + 1, total)
            except Exception as e:
                log.warning('Worker %d failed for %s: %s', worker_id, name, e)
                time.sleep(backoff)
                try:
                    results[idx] = fetch_detail(entry)
                except Exception as retry_error:
                    log.error('Worker %d retry failed for %s: %s', worker_id, name, retry_error)
                    results[idx] = None
            with progress_lock:
                progress['done'] += 1
                done = progress['done']
            if done % PROGRESS_EVERY == 0:
                log.info('Progress: %.1f%%', done / total * 100)
            time.sleep(throttle)

    size = max(1, min(concurrency, total))
    with ThreadPoolExecutor(max_workers=size, thread_name_prefix='ingest') as pool:
        futures = [pool.submit(worker, i + 1) for i in range(size)]
        for f in futures:
            f.result()

    return sorted((r for r in results if r is not None), key=lambda r: r['id'])


def write_dataset(records, path=DATA_PATH):
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open('w', encoding='utf-8') as f:
        json.dump(records, f, indent=2, ensure_ascii=False)
    return p


def run(limit=LIMIT, concurrency=CONCURRENCY, output=DATA_PATH, session=None):
    """Fetch the index, build the dataset and write it. Index failures propagate."""
    session = session or make_session()
    log.info('Fetching data for %d Pokémon...', limit)
    entries = fetch_index(session, limit)
    records = build_dataset(entries, partial(fetch_pokemon_detail, session), concurrency=concurrency)
    p = write_dataset(records, output)
    log.info('Saved %d Pokémon entries to %s', len(records), p)
    return records


def main(argv=None):
    parser = argparse.ArgumentParser(description='Build the Pokédex dataset from PokeAPI.')
    parser.add_argument('--limit', type=int, default=LIMIT)
    parser.add_argument('--concurrency', type=int, default=CONCURRENCY)
    parser.add_argument('--output', type=Path, default=DATA_PATH)
    args = parser.parse_args(argv)
    try:
        run(limit=args.limit, concurrency=args.concurrency, output=args.output)
    except ITEM_ERRORS as e:
        log.error('Failed to build Pokémon dataset: %s', e)
        raise SystemExit(1)
    return 0
