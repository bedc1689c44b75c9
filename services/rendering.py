"""
Collaborators that turn a view model into PDF bytes.

- Template registry: document kind name -> template path relative to the base uri.
- View generator: Jinja2 template at a full path + view model -> HTML.
- PDF generator: HTML + layout options -> PDF bytes via fpdf2.

The document generator only depends on the get / generate_from_path /
generate_from_html methods, so any object providing them can stand in.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol

from fpdf import FPDF
from jinja2 import Environment, FileSystemLoader, select_autoescape
from pydantic import BaseModel

from config import Settings, settings as default_settings
from schemas.documents import HeaderOptions, HeaderRepeat, PageNumbers, PdfOptions
from services.exceptions import TemplateNotFoundError

logger = logging.getLogger(__name__)

FILE_SCHEME = "file://"
FONT_FAMILY = "DejaVuSans"


class TemplatePathProvider(Protocol):
    def get(self, name: str) -> str: ...


class ViewGenerator(Protocol):
    def generate_from_path(self, path: str, model: BaseModel) -> str: ...


class PdfGenerator(Protocol):
    def generate_from_html(self, html: str, options: PdfOptions) -> bytes: ...


class SettingsPathProvider:
    """Template registry backed by the configured kind name -> path mapping."""

    def __init__(self, template_paths: dict[str, str]):
        self._template_paths = dict(template_paths)

    def get(self, name: str) -> str:
        try:
            return self._template_paths[name]
        except KeyError:
            raise TemplateNotFoundError(
                f"No template registered for '{name}'", template_name=name
            ) from None


class JinjaViewGenerator:
    """Renders a Jinja2 template file; the view model is exposed to it as `model`."""

    def generate_from_path(self, path: str, model: BaseModel) -> str:
        if path.startswith(FILE_SCHEME):
            path = path[len(FILE_SCHEME):]
        template_path = Path(path)
        env = Environment(
            loader=FileSystemLoader(str(template_path.parent)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        logger.debug("Rendering template %s", template_path)
        template = env.get_template(template_path.name)
        return template.render(model=model)


class _ApplicationPdf(FPDF):
    def __init__(self, options: PdfOptions, font_path: Path, bold_font_path: Path):
        super().__init__(format="A4")
        self._options = options
        # Core fonts only cover Latin-1; applicant names may not
        self.add_font(FONT_FAMILY, "", fname=str(font_path))
        self.add_font(FONT_FAMILY, "B", fname=str(bold_font_path))
        self.add_font(FONT_FAMILY, "I", fname=str(font_path))
        self.add_font(FONT_FAMILY, "BI", fname=str(bold_font_path))
        self.set_font(FONT_FAMILY, size=11)

    def write_document_html(self, html: str) -> None:
        self.write_html(html, font_family=FONT_FAMILY)

    def header(self) -> None:
        header = self._options.header_options
        if header.header_html and header.header_repeat == HeaderRepeat.EVERY_PAGE:
            self.write_document_html(header.header_html)
            self.ln(4)

    def footer(self) -> None:
        if self._options.page_numbers != PageNumbers.NUMERIC:
            return
        self.set_y(-15)
        self.set_font(FONT_FAMILY, size=8)
        self.cell(0, 10, str(self.page_no()), align="C")


class FpdfGenerator:
    """HTML to PDF using fpdf2's write_html (headings, paragraphs, lists, simple tables)."""

    def __init__(self, font_path: Optional[Path] = None, bold_font_path: Optional[Path] = None):
        self._font_path = font_path or default_settings.font_path
        self._bold_font_path = bold_font_path or default_settings.bold_font_path

    def generate_from_html(self, html: str, options: PdfOptions) -> bytes:
        pdf = _ApplicationPdf(options, self._font_path, self._bold_font_path)
        pdf.set_margins(15, 15, 15)
        pdf.set_auto_page_break(auto=True, margin=20)
        pdf.add_page()
        header = options.header_options
        if header.header_html and header.header_repeat == HeaderRepeat.FIRST_PAGE_ONLY:
            pdf.write_document_html(header.header_html)
        pdf.write_document_html(html)
        return bytes(pdf.output())


def default_pdf_options(settings: Settings) -> PdfOptions:
    """Numeric page numbers, configured header shown on the first page only."""
    return PdfOptions(
        page_numbers=PageNumbers.NUMERIC,
        header_options=HeaderOptions(
            header_repeat=HeaderRepeat.FIRST_PAGE_ONLY,
            header_html=settings.pdf_header_html,
        ),
    )
