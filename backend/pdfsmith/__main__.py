"""Process entry point: `python -m pdfsmith` / `pdfsmith`.

Invariants:
    - Missing DATABASE_URL: diagnostic on stderr, exit status 1, port never bound
    - Unreachable log store: lifespan startup fails, uvicorn exits non-zero before binding
"""

import sys

import uvicorn

from pdfsmith.config import get_settings
from pdfsmith.core.errors import ConfigurationError
from pdfsmith.main import create_app


def main() -> None:
    try:
        settings = get_settings()
    except ConfigurationError as e:
        print(f"pdfsmith: refusing to start: {e.message}", file=sys.stderr)
        sys.exit(1)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        lifespan="on",
        log_config=None,
    )


if __name__ == "__main__":
    main()
