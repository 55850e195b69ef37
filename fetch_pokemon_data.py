from services.core import configure_logging
from services.ingest import main

if __name__ == '__main__':
    configure_logging()
    raise SystemExit(main())
