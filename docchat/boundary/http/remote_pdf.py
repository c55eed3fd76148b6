"""
Remote PDF fetcher.

Downloads a PDF from an arbitrary URL with a browser User-Agent (some hosts
refuse unknown agents) and rejects responses that are clearly not PDFs.

Dependencies: httpx, docchat.core.exceptions
System role: Server side of the PDF proxy
"""

import logging
from dataclasses import dataclass

import httpx

from docchat.core.exceptions import RemoteFetchError

logger = logging.getLogger(__name__)

ACCEPTED_CONTENT_TYPES = ("application/pdf", "octet-stream")


@dataclass
class FetchedPdf:
    """Raw bytes of a fetched PDF and the content type it was served with."""

    data: bytes
    content_type: str


class RemotePdfFetcher:
    """Fetches PDF bytes over HTTP."""

    def __init__(
        self,
        user_agent: str,
        timeout: float = 30.0,
        max_bytes: int | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._headers = {"User-Agent": user_agent}
        self._timeout = timeout
        self._max_bytes = max_bytes
        self._client = client

    async def fetch(self, url: str) -> FetchedPdf:
        """
        Download a PDF.

        Args:
            url: Address of the PDF

        Returns:
            FetchedPdf: Bytes and content type

        Raises:
            RemoteFetchError: Upstream error status (same status), non-PDF
                content type (400), oversize body (413) or transport failure (502)
        """
        logger.info(f"{__name__}:fetch - Proxying PDF request for {url}")
        try:
            if self._client is not None:
                response = await self._get(self._client, url)
            else:
                async with httpx.AsyncClient(follow_redirects=True) as client:
                    response = await self._get(client, url)
        except httpx.HTTPError as e:
            raise RemoteFetchError(f"Failed to fetch PDF: {e}", url=url, status_code=502) from e

        if response.is_error:
            raise RemoteFetchError(
                f"Failed to fetch PDF: {response.status_code} {response.reason_phrase}",
                url=url,
                status_code=response.status_code,
            )

        content_type = response.headers.get("content-type")
        if content_type and not any(accepted in content_type for accepted in ACCEPTED_CONTENT_TYPES):
            raise RemoteFetchError(
                "The URL did not return a PDF file",
                url=url,
                status_code=400,
                details={"content_type": content_type},
            )

        data = response.content
        if self._max_bytes is not None and len(data) > self._max_bytes:
            raise RemoteFetchError(
                f"PDF exceeds the {self._max_bytes} byte limit",
                url=url,
                status_code=413,
            )

        return FetchedPdf(data=data, content_type=content_type or "application/pdf")

    async def _get(self, client: httpx.AsyncClient, url: str) -> httpx.Response:
        return await client.get(url, headers=self._headers, timeout=self._timeout)
