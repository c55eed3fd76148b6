"""
Answer proxy HTTP client.

Posts {question, documentIds} to the answer proxy and hands the raw
response back. Classification of failures belongs to the gateway.

Dependencies: httpx
System role: Outbound call from the generation gateway
"""

import logging

import httpx

logger = logging.getLogger(__name__)


class AnswerProxyClient:
    """Thin httpx wrapper around the answer proxy endpoint."""

    def __init__(
        self,
        proxy_url: str,
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize client.

        Args:
            proxy_url: Full URL of the generate-ai-response endpoint
            timeout: Request timeout in seconds
            client: Optional preconfigured AsyncClient (tests, app-wide pooling)
        """
        self.proxy_url = proxy_url
        self._timeout = timeout
        self._client = client

    async def request_answer(self, question: str, document_ids: list[str]) -> httpx.Response:
        """
        Send a question to the answer proxy.

        Args:
            question: User's question
            document_ids: Ids of the active documents

        Returns:
            httpx.Response: Proxy response, any status

        Raises:
            httpx.HTTPError: Connection failure, timeout or undecodable body
            httpx.InvalidURL: Malformed proxy URL
        """
        payload = {"question": question, "documentIds": document_ids}
        logger.debug(
            f"{__name__}:request_answer - POST {self.proxy_url} with {len(document_ids)} document ids"
        )
        if self._client is not None:
            return await self._client.post(self.proxy_url, json=payload, timeout=self._timeout)
        async with httpx.AsyncClient() as client:
            return await client.post(self.proxy_url, json=payload, timeout=self._timeout)
