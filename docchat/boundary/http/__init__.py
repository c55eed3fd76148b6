"""
HTTP boundary layer.

Outbound httpx clients for the answer proxy and the PDF proxy, and the
fetcher the PDF proxy itself uses.

Dependencies: httpx
System role: External HTTP integrations
"""

from docchat.boundary.http.answer_proxy_client import AnswerProxyClient
from docchat.boundary.http.pdf_proxy_client import PdfProxyClient
from docchat.boundary.http.remote_pdf import FetchedPdf, RemotePdfFetcher

__all__ = [
    "AnswerProxyClient",
    "PdfProxyClient",
    "FetchedPdf",
    "RemotePdfFetcher",
]
