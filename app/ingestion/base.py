"""Abstract source interface for ingestion."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

import httpx
from lxml import etree

from app.core.config import settings
from app.core.errors import FetchError
from app.schemas.normalized import NOT_AVAILABLE, SanctionRecord


class BaseSource(ABC):
    """Abstract base class for sanctions list sources.

    A source downloads its document, turns it into a list of
    ``SanctionRecord`` and raises ``FetchError``, ``DecodeError`` or
    ``ParseError`` when any step fails.
    """

    name: str
    default_url: str

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url or self.default_url
        self.timeout = timeout if timeout is not None else settings.FETCH_TIMEOUT_SECONDS
        self.transport = transport

    @abstractmethod
    async def fetch(self) -> List[SanctionRecord]:
        """Download and normalize the full list."""

    async def download(self) -> bytes:
        """GET the source URL and return the raw body bytes.

        ``timeout`` bounds the whole request including the body read, not
        just each socket operation.
        """
        try:
            return await asyncio.wait_for(self._get(), timeout=self.timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            raise FetchError(f"{self.name}: request timed out after {self.timeout}s") from exc
        except httpx.HTTPStatusError as exc:
            raise FetchError(f"{self.name}: HTTP {exc.response.status_code} from {self.url}") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FetchError(f"{self.name}: {exc.__class__.__name__}: {exc}") from exc

    async def _get(self) -> bytes:
        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            transport=self.transport,
        ) as client:
            resp = await client.get(self.url)
            resp.raise_for_status()
            return resp.content


def strip_namespaces(root: etree._Element) -> etree._Element:
    """Drop XML namespaces in place so lookups can use bare tag names."""
    for el in root.iter():
        if isinstance(el.tag, str):
            el.tag = etree.QName(el).localname
    etree.cleanup_namespaces(root)
    return root


def clean_text(value: Optional[str]) -> str:
    return (value or "").strip()


def join_or_na(values: Iterable[Optional[str]], sep: str = ", ") -> str:
    """Join non-empty values; an empty sequence renders as ``N/A``."""
    parts = [v for v in (clean_text(x) for x in values) if v]
    return sep.join(parts) if parts else NOT_AVAILABLE


def or_na(value: Optional[str]) -> str:
    return clean_text(value) or NOT_AVAILABLE
