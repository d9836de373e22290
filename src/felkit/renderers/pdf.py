"""Conversione HTML → PDF con un browser headless.

IT: Usa playwright (Chromium headless), dipendenza opzionale:
    pip install felkit[pdf] && playwright install chromium
EN: Uses playwright (headless Chromium), an optional dependency.
"""

from __future__ import annotations

import logging

from felkit.conf import get_setting
from felkit.errors import TransformationFailed
from felkit.renderers.base import BasePDFRenderer

logger = logging.getLogger(__name__)


class PlaywrightPDFRenderer(BasePDFRenderer):
    """Stampa l'HTML della fattura in PDF con Chromium headless.

    IT: Formato pagina, margini e timeout provengono dalla configurazione
        (FELKIT_PDF_FORMAT, FELKIT_PDF_MARGIN, FELKIT_PDF_TIMEOUT_MS).
    EN: Page format, margins and timeout come from the configuration.
    """

    def __init__(
        self,
        page_format: str | None = None,
        margin: str | None = None,
        timeout_ms: int | None = None,
    ) -> None:
        self.page_format = page_format or str(get_setting("PDF_FORMAT"))
        self.margin = margin or str(get_setting("PDF_MARGIN"))
        self.timeout_ms = timeout_ms if timeout_ms is not None else int(get_setting("PDF_TIMEOUT_MS"))

    async def render(self, html: str) -> bytes:
        """Converte l'HTML in PDF.

        Raises:
            ImportError: Se playwright non è installato.
            TransformationFailed: Se il PDF prodotto è vuoto.
        """
        try:
            from playwright.async_api import async_playwright
        except ImportError:
            msg = (
                "playwright non trovato. Installarlo con :\n"
                "  pip install felkit[pdf] && playwright install chromium\n"
                "oppure usare to_html() e gestire la stampa autonomamente."
            )
            raise ImportError(msg)

        margins = {side: self.margin for side in ("top", "bottom", "left", "right")}
        async with async_playwright() as playwright:
            browser = await playwright.chromium.launch(headless=True)
            try:
                page = await browser.new_page()
                await page.set_content(html, wait_until="networkidle", timeout=self.timeout_ms)
                pdf_bytes = await page.pdf(
                    format=self.page_format,
                    margin=margins,
                    print_background=True,
                )
            finally:
                await browser.close()

        if not pdf_bytes:
            msg = "Conversione PDF fallita : il browser ha restituito un documento vuoto"
            raise TransformationFailed(msg)
        logger.info("PDF generato (%d byte, formato %s)", len(pdf_bytes), self.page_format)
        return pdf_bytes
