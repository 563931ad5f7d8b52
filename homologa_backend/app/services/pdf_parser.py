import logging
from io import BytesIO

from pypdf import PdfReader
from pypdf.errors import DependencyError, PdfReadError

logger = logging.getLogger("app.transcripts")


def extract_text_from_pdf(data: bytes) -> str:
    """Return the concatenated page text, or "" when the PDF cannot be read."""
    try:
        reader = PdfReader(BytesIO(data))
    except (PdfReadError, DependencyError, ValueError) as exc:
        logger.warning("unreadable transcript PDF: %s", exc)
        return ""
    if reader.is_encrypted:
        try:
            reader.decrypt("")
        except (PdfReadError, DependencyError, NotImplementedError) as exc:
            logger.warning("encrypted transcript PDF could not be opened: %s", exc)
            return ""
    texts = []
    try:
        for page in reader.pages:
            texts.append(page.extract_text() or "")
    except (PdfReadError, DependencyError) as exc:
        logger.warning("failed extracting transcript PDF text: %s", exc)
        return ""
    return "\n".join(texts).strip()
