"""Handler for the ``docs://`` content retrieval scheme.

Every request either returns the raw asset bytes with a MIME type inferred
from the file extension, or a locally generated 404 error document. The
handler never raises, so the content surface is never left without a
document to show.
"""

import html
from dataclasses import dataclass
from typing import Dict, Optional
from urllib.parse import unquote, urlsplit

from loguru import logger

from core.types import Theme
from interfaces.content_engine import ContentEngine
from services.url_resolver import CONTENT_SCHEME

MIME_TYPES: Dict[str, str] = {
    ".svg": "image/svg+xml",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".html": "text/html",
    ".css": "text/css",
    ".js": "text/javascript",
    ".json": "application/json",
    ".txt": "text/plain",
}


@dataclass(frozen=True)
class ContentResponse:
    body: bytes
    status: int = 200
    content_type: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == 200

    @property
    def headers(self) -> Dict[str, str]:
        if self.content_type is None:
            return {}
        return {"Content-Type": self.content_type}


def mime_type_for(path: str) -> Optional[str]:
    """Infer a MIME type from a path's extension; None when unrecognized."""
    lowered = path.lower()
    for extension, mime_type in MIME_TYPES.items():
        if lowered.endswith(extension):
            return mime_type
    return None


def error_document(url: str, message: str) -> bytes:
    """Render the inline error page shown for failed fetches and bad links."""
    return (
        '<!DOCTYPE html>\n<html lang="en"><h1>Error</h1><p>Error while fetching '
        f'{html.escape(url)}</p><p>{html.escape(message)}</p></html>'
    ).encode("utf-8")


def read_content(
    engine: ContentEngine,
    identifier: str,
    path: str,
    theme: Theme = Theme.LIGHT
) -> ContentResponse:
    """Read one asset of a chest.

    ``path`` is taken literally: it is already decoded and is never split
    on ``?`` or ``#``.

    Args:
        engine: Content engine to read from
        identifier: Chest identifier
        path: Decoded chest-relative asset path
        theme: Active color theme, which selects theme-specific assets

    Returns:
        ContentResponse with status 200, or 404 and an HTML error document
    """
    path = path.lstrip("/")
    try:
        body = engine.read(identifier, path, theme)
        return ContentResponse(body=bytes(body), status=200, content_type=mime_type_for(path))

    except Exception as e:
        url = f"{CONTENT_SCHEME}://{identifier}/{path}"
        logger.warning(f"Failed to fetch {url}: {e}")
        return ContentResponse(body=error_document(url, str(e)), status=404, content_type="text/html")


def fetch_content(engine: ContentEngine, url: str, theme: Theme = Theme.LIGHT) -> ContentResponse:
    """Fetch the asset a ``docs://<identifier>/<path>`` URL names.

    The query and fragment are ignored and the path is percent-decoded once.
    """
    try:
        parts = urlsplit(url)
        if parts.scheme != CONTENT_SCHEME:
            raise ValueError(f"Not a {CONTENT_SCHEME}:// URL")
        if not parts.netloc:
            raise ValueError("URL does not name a chest")
    except ValueError as e:
        logger.warning(f"Failed to fetch {url}: {e}")
        return ContentResponse(body=error_document(url, str(e)), status=404, content_type="text/html")

    return read_content(engine, parts.netloc, unquote(parts.path), theme)
