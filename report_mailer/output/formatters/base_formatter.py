# Path: report_mailer/output/formatters/base_formatter.py
"""
Base Formatter and Formatter Registry

Abstract base class for output formatters and a registry
to look them up by OutputFormat.

To add a new format:
1. Subclass BaseFormatter
2. Implement format_report()
3. Register via FormatterRegistry.register()
"""

import base64
import hashlib
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Dict, List, Optional, Type

from ...config_loader import ConfigLoader
from ...constants import (
    CHART_IMAGE_MIME,
    CID_DOMAIN,
    DOCUMENT_HEADING,
    OutputFormat,
    PAYLOAD_ENCODING,
    QUERY_HEADING,
)
from ...exceptions import RenderError
from ..charts import render_section
from ..report_models import ChartSection, Document, InlineImage, RenderedPayload


def content_id(data: bytes) -> str:
    """Deterministic Content-ID for an image."""
    return f"{hashlib.sha256(data).hexdigest()[:32]}@{CID_DOMAIN}"


def data_uri(image: InlineImage) -> str:
    """Inline data: URI for an image."""
    encoded = base64.b64encode(image.data).decode('ascii')
    return f"data:{image.mime};base64,{encoded}"


def format_number(value) -> str:
    """Stable text for a chart magnitude."""
    if isinstance(value, Decimal):
        return format(value, 'f')
    return str(value)


class BaseFormatter(ABC):
    """
    Abstract base for document formatters.

    Each subclass renders a Document into one format. Charts are
    rasterized through embed_chart(), which records the image so it
    travels with the payload.
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        self.config = config
        self._images: List[InlineImage] = []

    @property
    @abstractmethod
    def format_name(self) -> OutputFormat:
        """OutputFormat produced by this formatter."""

    @abstractmethod
    def format_report(self, document: Document) -> str:
        """
        Render document to string.

        Args:
            document: Document to render

        Returns:
            Formatted string representation
        """

    def render(self, document: Document) -> RenderedPayload:
        """
        Render document to a payload.

        Args:
            document: Document to render

        Returns:
            RenderedPayload with UTF-8 content and embedded images

        Raises:
            RenderError: If any part of the document cannot be rendered
        """
        self._images = []
        try:
            content = self.format_report(document)
            encoded = content.encode(PAYLOAD_ENCODING)
        except RenderError:
            raise
        except (ValueError, TypeError, KeyError, UnicodeError) as e:
            raise RenderError(
                f"{self.format_name.value} rendering failed: {e}"
            ) from e

        return RenderedPayload(
            content=encoded,
            format=self.format_name,
            images=tuple(self._images),
        )

    def embed_chart(self, section: ChartSection) -> InlineImage:
        """Rasterize a chart and attach it to the payload being built."""
        data = render_section(section, self.config)
        image = InlineImage(cid=content_id(data), mime=CHART_IMAGE_MIME, data=data)
        if all(existing.cid != image.cid for existing in self._images):
            self._images.append(image)
        return image

    def document_heading(self, document: Document) -> str:
        return DOCUMENT_HEADING.format(title=document.title)

    def query_heading(self, title: str) -> str:
        return QUERY_HEADING.format(title=title)


class FormatterRegistry:
    """
    Registry of available formatters.

    Lookup by OutputFormat. render() uses this to find the formatter
    for the requested format.
    """

    _formatters: Dict[OutputFormat, Type[BaseFormatter]] = {}

    @classmethod
    def register(cls, formatter_class: Type[BaseFormatter]) -> None:
        """Register a formatter class."""
        instance = formatter_class()
        cls._formatters[instance.format_name] = formatter_class

    @classmethod
    def get(
        cls,
        output_format: OutputFormat,
        config: Optional[ConfigLoader] = None,
    ) -> Optional[BaseFormatter]:
        """Get a formatter instance by format."""
        formatter_class = cls._formatters.get(output_format)
        if formatter_class:
            return formatter_class(config)
        return None

    @classmethod
    def get_available(cls) -> list[OutputFormat]:
        """Return list of registered formats."""
        return list(cls._formatters.keys())

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations (for testing)."""
        cls._formatters.clear()


__all__ = [
    'BaseFormatter',
    'FormatterRegistry',
    'content_id',
    'data_uri',
    'format_number',
]
