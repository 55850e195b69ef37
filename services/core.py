import locale
import logging
import os
from pathlib import Path

# Constants
POKEAPI_BASE = 'https://pokeapi.co/api/v2'
ROOT_DIR = Path(__file__).resolve().parent.parent

# Dataset location shared by the ingestion script and the web app
DATA_PATH = Path(os.environ.get('POKEMON_DATA_PATH') or ROOT_DIR / 'data' / 'pokemon.json')

# Ingestion tuning (overridable from the environment)
LIMIT = int(os.environ.get('POKEMON_LIMIT', '251'))
CONCURRENCY = int(os.environ.get('POKEMON_CONCURRENCY', '8'))

REQUEST_TIMEOUT = 20  # seconds, every PokeAPI call
RETRY_BACKOFF = 0.5  # seconds before the single per-item retry
THROTTLE = 0.1  # seconds each worker sleeps after every claimed item
PROGRESS_EVERY = 10

USER_AGENT = 'pokedex-explorer/1.0 (+dataset builder)'

# Ingestion caps
MAX_LEVEL_UP_MOVES = 30
MAX_OTHER_MOVES = 20
MAX_LOCATIONS = 12

# Presentation
AUTOCOMPLETE_LIMIT = 8
MOVES_DISPLAY_LIMIT = 16

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()


def configure_logging(level=None):
    logging.basicConfig(
        level=level or LOG_LEVEL,
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )


def configure_locale():
    """Adopt the environment's collation so name sorting follows the user's locale."""
    try:
        locale.setlocale(locale.LC_COLLATE, '')
    except locale.Error as e:
        logging.getLogger(__name__).warning('Falling back to C collation: %s', e)
