"""
PDF proxy HTTP client.

URL intake goes through the PDF proxy rather than fetching directly, so the
fetch runs wherever the proxy is deployed. The proxy answers with base64 data.

Dependencies: httpx, docchat.core.exceptions
System role: Outbound call for URL intake
"""

import base64
import binascii
import logging

import httpx

from docchat.core.exceptions import RemoteFetchError

logger = logging.getLogger(__name__)


class PdfProxyClient:
    """Posts {url} to the PDF proxy and decodes the returned bytes."""

    def __init__(
        self,
        proxy_url: str,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.proxy_url = proxy_url
        self._timeout = timeout
        self._client = client

    async def fetch(self, url: str) -> bytes:
        """
        Fetch a remote PDF through the proxy.

        Args:
            url: Address of the PDF

        Returns:
            bytes: Decoded PDF bytes

        Raises:
            RemoteFetchError: Proxy error, empty payload or undecodable data
        """
        try:
            if self._client is not None:
                response = await self._client.post(self.proxy_url, json={"url": url}, timeout=self._timeout)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.post(self.proxy_url, json={"url": url}, timeout=self._timeout)
        except httpx.HTTPError as e:
            raise RemoteFetchError(f"Failed to fetch PDF: {e}", url=url) from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_error:
            message = body.get("error") if isinstance(body, dict) else None
            raise RemoteFetchError(
                f"Failed to fetch PDF: {message or response.status_code}",
                url=url,
                status_code=response.status_code,
            )

        if not isinstance(body, dict) or not body.get("data"):
            raise RemoteFetchError("No data received from proxy", url=url)

        try:
            data = base64.b64decode(body["data"], validate=True)
        except (binascii.Error, ValueError) as e:
            raise RemoteFetchError("Failed to process PDF data", url=url) from e

        logger.info(f"{__name__}:fetch - PDF fetched successfully ({len(data)} bytes)")
        return data
