"""PDF Document Generator: renders text onto a single fixed-geometry page.

Invariants:
    - One call = one fresh uuid4 identifier = one new file `<id>.pdf`
    - Files are created with exclusive-create ("xb"): never overwritten
    - Text is rendered unmodified; overflow past the page is accepted, not an error
    - Characters the core font cannot encode are drawn as MISSING_GLYPH, never raised
    - Any rendering or IO failure surfaces as ArtifactError
    - No interaction with the log store

Design Decisions:
    - fpdf2 core font (Helvetica) at a fixed origin: no font files to ship
    - windows-1252 for core fonts: matches their WinAnsiEncoding, so curly quotes,
      dashes and the euro sign draw as themselves
    - Render + write run in a worker thread so the event loop keeps accepting requests
"""

import asyncio
import logging
import uuid
from pathlib import Path

from fpdf import FPDF
from fpdf.errors import FPDFException

from pdfsmith.core.domain_types import ARTIFACT_SUFFIX, Artifact, ArtifactId
from pdfsmith.core.errors import ArtifactError, ErrorContext

logger = logging.getLogger(__name__)

# Fixed placement, points from the top-left corner
TEXT_X: float = 72.0
TEXT_Y: float = 72.0

CORE_FONT_ENCODING = "windows-1252"
MISSING_GLYPH = "?"


def split_runs(text: str, encoding: str = CORE_FONT_ENCODING) -> list[tuple[str, bool]]:
    """Split text into runs of (substring, drawable) by core font coverage."""
    runs: list[tuple[str, bool]] = []
    current = ""
    current_drawable = True
    for ch in text:
        try:
            ch.encode(encoding)
            drawable = True
        except UnicodeEncodeError:
            drawable = False
        if drawable != current_drawable and current:
            runs.append((current, current_drawable))
            current = ""
        current += ch
        current_drawable = drawable
    if current:
        runs.append((current, current_drawable))
    return runs


class PdfDocumentGenerator:
    """DocumentGenerator writing PDFs under output_dir."""

    def __init__(
        self,
        output_dir: str | Path,
        page_format: str = "A4",
        font_family: str = "Helvetica",
        font_size: int = 12,
        compress: bool = True,
    ):
        self.output_dir = Path(output_dir)
        self.page_format = page_format
        self.font_family = font_family
        self.font_size = font_size
        self.compress = compress

    async def generate(self, text: str) -> Artifact:
        artifact_id = ArtifactId(uuid.uuid4().hex)
        return await asyncio.to_thread(self._render_and_write, artifact_id, text)

    def render(self, text: str) -> bytes:
        """Render text into PDF bytes. Pure apart from fpdf2 state."""
        pdf = FPDF(orientation="P", unit="pt", format=self.page_format)
        pdf.set_compression(self.compress)
        pdf.set_creator("pdfsmith")
        pdf.add_page()
        pdf.core_fonts_encoding = CORE_FONT_ENCODING
        pdf.set_font(self.font_family, size=self.font_size)
        x = TEXT_X
        for run, drawable in split_runs(text):
            shown = run if drawable else MISSING_GLYPH * len(run)
            pdf.text(x, TEXT_Y, shown)
            x += pdf.get_string_width(shown)
        return bytes(pdf.output())

    def _render_and_write(self, artifact_id: ArtifactId, text: str) -> Artifact:
        path = self.output_dir / f"{artifact_id}{ARTIFACT_SUFFIX}"
        ctx = ErrorContext(artifact_id=artifact_id)
        try:
            data = self.render(text)
        except FPDFException as e:
            logger.error(
                f"PDF rendering failed: {e}",
                extra={"artifact_id": artifact_id},
            )
            raise ArtifactError("Document rendering failed", ctx) from e
        try:
            with open(path, "xb") as fh:
                fh.write(data)
        except OSError as e:
            logger.error(
                f"PDF write failed: {e}",
                extra={"artifact_id": artifact_id},
            )
            raise ArtifactError("Document could not be stored", ctx) from e
        return Artifact(
            identifier=artifact_id,
            location=str(path.resolve()),
            size_bytes=len(data),
        )
