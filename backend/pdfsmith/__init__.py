"""pdfsmith: text-to-PDF service with best-effort request logging.

Invariants:
    - Package root has no import side-effects (constants only)
"""

__version__ = "1.0.0"
