# src/refrag/loaders/pypdf_loader.py
"""PDF loader using pypdf - lightweight, pure Python."""

from pathlib import Path

from loguru import logger
from pypdf import PdfReader
from pypdf.errors import PyPdfError

from refrag.exceptions import LoadError
from refrag.loaders.base import Loader
from refrag.models import Page


class PyPDFLoader(Loader):
    """Load PDF files using pypdf, one Page per PDF page.

    Pages without extractable text are kept with empty text so that page
    numbers stay contiguous and match the PDF.
    """

    SUPPORTED_EXTENSIONS = {".pdf"}

    def supports(self, path: str) -> bool:
        """Check if this loader supports the given file."""
        return Path(path).suffix.lower() in self.SUPPORTED_EXTENSIONS

    def load(self, path: str, source_id: str | None = None) -> list[Page]:
        """Load a PDF file and return its pages.

        Args:
            path: Path to the PDF file
            source_id: Optional custom source identifier. If not provided,
                      the file name will be used as the source.

        Returns:
            List of Page objects, one per PDF page

        Raises:
            LoadError: If the file does not exist, is not a PDF, or cannot be parsed
        """
        file_path = Path(path)
        if not file_path.is_file():
            raise LoadError(f"File not found: {path}")
        if not self.supports(path):
            raise LoadError(f"Unsupported file type (expected .pdf): {path}")

        source = source_id or file_path.name

        try:
            reader = PdfReader(file_path)
            pages = [
                Page(
                    text=(page.extract_text() or "").strip(),
                    page_number=page_number,
                    source=source,
                )
                for page_number, page in enumerate(reader.pages, start=1)
            ]
        except (PyPdfError, OSError, ValueError) as e:
            raise LoadError(f"Could not read PDF {path}: {e}") from e

        logger.info(f"Loaded {len(pages)} pages from {source}")
        return pages
