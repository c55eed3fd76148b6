"""
Test suite for GenerationGateway.

The answer proxy is replaced by httpx.MockTransport; every failure path must
still yield a bot message.

System role: Verification of response generation gateway
"""

import logging

import httpx
import pytest

from docchat.application.services.generation_gateway import (
    FAILURE_MESSAGES,
    NO_DOCUMENTS_MESSAGE,
    GenerationGateway,
    classify_response,
)
from docchat.boundary.http.answer_proxy_client import AnswerProxyClient
from docchat.core.exceptions import FailureKind
from docchat.core.generation_state import GenerationState
from docchat.models.chat import Sender


def make_gateway(handler) -> GenerationGateway:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GenerationGateway(AnswerProxyClient("http://proxy.test/generate", client=client))


def respond(status: int, **kwargs):
    return lambda request: httpx.Response(status, **kwargs)


class TestAsk:
    """Test suite for GenerationGateway.ask() and generate()."""

    async def test_empty_documents_should_not_touch_network(self) -> None:
        """Test no request is made and the upload prompt is returned."""
        # Arrange
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json={"text": "unexpected"})

        gateway = make_gateway(handler)

        # Act
        result = await gateway.generate("Anything?", [], session_id="s1")

        # Assert
        assert calls == []
        assert result.message.text == NO_DOCUMENTS_MESSAGE
        assert result.message.sender is Sender.BOT
        assert result.state is GenerationState.IDLE
        assert result.ok

    async def test_success_should_return_bot_message_with_citations(self, make_document) -> None:
        """Test text and citation fields are carried onto the message."""
        # Arrange
        gateway = make_gateway(
            respond(
                200,
                json={
                    "text": "Plants make sugar.",
                    "sourceDocuments": ["bio.pdf"],
                    "pageNumber": "7",
                },
            )
        )

        # Act
        result = await gateway.generate("How?", [make_document()], session_id="s1")

        # Assert
        assert result.state is GenerationState.DELIVERED
        assert result.message.text == "Plants make sugar."
        assert result.message.session_id == "s1"
        assert result.message.source_info.source_documents == ["bio.pdf"]
        assert result.message.source_info.page_number == "7"
        assert result.message.source_info.section_info == ""

    async def test_success_without_citations_should_have_no_source_info(self) -> None:
        """Test a bare {text} payload is enough."""
        # Arrange
        gateway = make_gateway(respond(200, json={"text": "Yes."}))

        # Act
        message = await gateway.ask("Is it?", ["d1"])

        # Assert
        assert message.text == "Yes."
        assert message.source_info is None

    async def test_quota_failure_should_mention_quota_and_billing(self) -> None:
        """Test quota errors yield text naming the quota/billing problem."""
        # Arrange
        gateway = make_gateway(respond(402, json={"error": "You exceeded your current quota"}))

        # Act
        result = await gateway.generate("Why?", ["d1"])

        # Assert
        assert result.failure is FailureKind.QUOTA_EXCEEDED
        assert result.state is GenerationState.FAILED
        assert "quota" in result.message.text.lower()
        assert "billing" in result.message.text.lower()
        assert result.message.sender is Sender.BOT

    async def test_rate_limit_should_suggest_waiting(self) -> None:
        """Test 429 text suggests retry timing."""
        # Arrange
        gateway = make_gateway(respond(429, json={"error": "Too many requests"}))

        # Act
        result = await gateway.generate("Why?", ["d1"])

        # Assert
        assert result.failure is FailureKind.RATE_LIMITED
        assert "minute" in result.message.text

    async def test_missing_key_should_name_the_key(self) -> None:
        """Test configuration failures name what is missing."""
        # Arrange
        gateway = make_gateway(
            respond(
                503,
                json={"error": "GOOGLE_AI_API_KEY not configured", "kind": "misconfigured_credentials"},
            )
        )

        # Act
        result = await gateway.generate("Why?", ["d1"])

        # Assert
        assert result.failure is FailureKind.MISCONFIGURED_CREDENTIALS
        assert "GOOGLE_AI_API_KEY" in result.message.text

    async def test_transport_error_should_yield_fallback_text(self) -> None:
        """Test connection failures still produce a bot message."""
        # Arrange
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        gateway = make_gateway(handler)

        # Act
        result = await gateway.generate("Why?", ["d1"])

        # Assert
        assert result.failure is FailureKind.TRANSPORT_ERROR
        assert result.message.text == FAILURE_MESSAGES[FailureKind.TRANSPORT_ERROR]

    async def test_undecodable_body_should_yield_fallback_text(self) -> None:
        """Test a body that fails Content-Encoding decoding is a transport error."""
        # Arrange
        gateway = make_gateway(
            respond(200, headers={"Content-Encoding": "gzip"}, content=b"not gzip")
        )

        # Act
        result = await gateway.generate("Why?", ["d1"], session_id="s1")

        # Assert
        assert result.failure is FailureKind.TRANSPORT_ERROR
        assert result.state is GenerationState.FAILED
        assert result.message.sender is Sender.BOT

    async def test_malformed_proxy_url_should_yield_fallback_text(self) -> None:
        """Test a proxy URL httpx cannot parse still produces a bot message."""
        # Arrange
        gateway = GenerationGateway(AnswerProxyClient("http://[::1"))

        # Act
        message = await gateway.ask("Why?", ["d1"])

        # Assert
        assert message.sender is Sender.BOT
        assert message.text == FAILURE_MESSAGES[FailureKind.TRANSPORT_ERROR]

    async def test_wrongly_typed_citations_should_be_malformed(self) -> None:
        """Test a 200 with unusable citation fields is classified, not raised."""
        # Arrange
        gateway = make_gateway(respond(200, json={"text": "hi", "sourceDocuments": 5}))

        # Act
        result = await gateway.generate("Why?", ["d1"])

        # Assert
        assert result.failure is FailureKind.MALFORMED_RESPONSE
        assert result.message.text == FAILURE_MESSAGES[FailureKind.MALFORMED_RESPONSE]

    async def test_numeric_page_number_should_be_accepted(self) -> None:
        """Test numbers are valid citation values and are stored as text."""
        # Arrange
        gateway = make_gateway(
            respond(200, json={"text": "hi", "sourceDocuments": "bio.pdf", "pageNumber": 7})
        )

        # Act
        result = await gateway.generate("Why?", ["d1"])

        # Assert
        assert result.ok
        assert result.message.source_info.source_documents == ["bio.pdf"]
        assert result.message.source_info.page_number == "7"

    async def test_failure_should_be_logged_with_kind(self, caplog) -> None:
        """Test a structured generation_failure record is emitted."""
        # Arrange
        gateway = make_gateway(respond(200, text="not json"))

        # Act
        with caplog.at_level(logging.WARNING):
            result = await gateway.generate("Why?", ["d1"])

        # Assert
        assert result.failure is FailureKind.MALFORMED_RESPONSE
        records = [r for r in caplog.records if "generation_failure" in r.getMessage()]
        assert records
        assert records[0].failure_kind == "malformed_response"


class TestClassifyResponse:
    """Test suite for classify_response()."""

    @pytest.mark.parametrize(
        "response, kind",
        [
            (httpx.Response(200, json={"answer": "wrong key"}), FailureKind.MALFORMED_RESPONSE),
            (httpx.Response(200, json={"text": "   "}), FailureKind.NO_RESPONSE),
            (httpx.Response(200, content=b""), FailureKind.NO_RESPONSE),
            (httpx.Response(200, json=["text"]), FailureKind.MALFORMED_RESPONSE),
            (httpx.Response(500, json={"error": "No response generated from AI model"}), FailureKind.NO_RESPONSE),
            (httpx.Response(500, text="Internal Server Error"), FailureKind.TRANSPORT_ERROR),
            (httpx.Response(401, json={"error": "bad key"}), FailureKind.MISCONFIGURED_CREDENTIALS),
            (httpx.Response(200, json={"text": "hi", "sourceDocuments": 5}), FailureKind.MALFORMED_RESPONSE),
            (httpx.Response(200, json={"text": "hi", "sourceDocuments": ["a.pdf", 3]}), FailureKind.MALFORMED_RESPONSE),
            (httpx.Response(200, json={"text": "hi", "pageNumber": {"n": 1}}), FailureKind.MALFORMED_RESPONSE),
            (httpx.Response(200, json={"text": "hi", "sectionInfo": ["intro"]}), FailureKind.MALFORMED_RESPONSE),
            (httpx.Response(200, json={"text": "hi", "paragraphInfo": True}), FailureKind.MALFORMED_RESPONSE),
        ],
    )
    def test_classification(self, response: httpx.Response, kind: FailureKind) -> None:
        """Test each failure shape maps to its kind."""
        # Act
        payload, error = classify_response(response)

        # Assert
        assert payload is None
        assert error.kind is kind

    def test_declared_kind_should_win(self) -> None:
        """Test the proxy's own classification is trusted."""
        # Act
        _, error = classify_response(httpx.Response(500, json={"error": "x", "kind": "rate_limited"}))

        # Assert
        assert error.kind is FailureKind.RATE_LIMITED
