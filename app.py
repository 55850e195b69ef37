import os
from flask import Flask

from views.pokedex import bp as pokedex_bp
from services.core import DATA_PATH, configure_locale, configure_logging
from services.pokemon import Catalogue, load_pokemon


def create_app(catalogue=None, data_path=None):
    """Build the Flask app around one immutable catalogue.
    The dataset is read once here and never reloaded for the process lifetime.
    """
    app = Flask(__name__)
    app.json.sort_keys = False
    if catalogue is None:
        catalogue = Catalogue.build(load_pokemon(data_path or DATA_PATH))
    app.config['CATALOGUE'] = catalogue
    app.register_blueprint(pokedex_bp)
    return app


if __name__ == '__main__':
    configure_logging()
    configure_locale()
    port = int(os.environ.get('PORT', 5000))
    create_app().run(host='0.0.0.0', port=port, debug=True)
