import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_completion_requester
from api.main import create_app
from api.routes.mock_api import MANUAL_ADJUSTMENT_SUGGESTION
from conftest import FakeRequester
from mockapi_core.config import Settings
from mockapi_core.exceptions import UpstreamError, UpstreamRateLimitedError
from mockapi_core.llm_client import CompletionRequester


@pytest.fixture
def make_client():
    """Crea un TestClient con el requester reemplazado por un doble."""

    def _make(requester, settings=None):
        app = create_app(settings or Settings(openai_api_key=""))
        app.dependency_overrides[get_completion_requester] = lambda: requester
        return TestClient(app)

    return _make


def test_health(make_client):
    client = make_client(FakeRequester())

    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert client.get("/").json()["status"] == "ok"


def test_success_returns_recovered_spec_verbatim(make_client):
    requester = FakeRequester(text='Here it is: {"results": [{"id": 1, "price": 9.99}], "extra": null}')
    client = make_client(requester)

    resp = client.post("/generate-mock-api", json={"description": "a shop"})
    assert resp.status_code == 200, resp.text
    assert resp.json() == {"results": [{"id": 1, "price": 9.99}], "extra": None}
    assert requester.descriptions == ["a shop"]


@pytest.mark.parametrize(
    "body",
    [{}, {"description": ""}, {"description": None}, {"description": 5}, ["a"]],
)
def test_missing_description_is_400_without_outbound_call(make_client, body):
    requester = FakeRequester(text="{}")
    client = make_client(requester)

    resp = client.post("/generate-mock-api", json=body)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Description is required"}
    assert requester.descriptions == []


def test_whitespace_description_is_forwarded(make_client):
    requester = FakeRequester(text='{"results": []}')
    client = make_client(requester)

    resp = client.post("/generate-mock-api", json={"description": "   "})
    assert resp.status_code == 200
    assert requester.descriptions == ["   "]


def test_absent_body_is_400(make_client):
    requester = FakeRequester(text="{}")
    client = make_client(requester)

    resp = client.post("/generate-mock-api")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Description is required"}
    assert requester.descriptions == []


def test_malformed_json_body_is_400(make_client):
    requester = FakeRequester(text="{}")
    client = make_client(requester)

    resp = client.post(
        "/generate-mock-api",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid request body"
    assert requester.descriptions == []


def test_provider_rate_limit_is_429(make_client):
    client = make_client(FakeRequester(error=UpstreamRateLimitedError()))

    resp = client.post("/generate-mock-api", json={"description": "a shop"})
    assert resp.status_code == 429
    body = resp.json()
    assert body["error"] == "Rate limit exceeded"
    assert "rate limit" in body["message"]


def test_provider_failure_is_500_with_details(make_client):
    client = make_client(FakeRequester(error=UpstreamError("Connection error.")))

    resp = client.post("/generate-mock-api", json={"description": "a shop"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to generate mock API", "details": "Connection error."}


def test_unparseable_model_text_is_500_with_raw_response(make_client):
    raw = "Sorry, I can only describe the API in words."
    client = make_client(FakeRequester(text=raw))

    resp = client.post("/generate-mock-api", json={"description": "a shop"})
    assert resp.status_code == 500
    body = resp.json()
    assert body["error"].startswith("Failed to parse API specification")
    assert body["rawResponse"] == raw
    assert body["suggestion"] == MANUAL_ADJUSTMENT_SUGGESTION


def test_unexpected_error_is_still_json(make_client):
    client = make_client(FakeRequester(error=RuntimeError("boom")))

    resp = client.post("/generate-mock-api", json={"description": "a shop"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to generate mock API", "details": "boom"}


def test_missing_api_key_is_500(make_client):
    client = make_client(CompletionRequester(settings=Settings(openai_api_key="")))

    resp = client.post("/generate-mock-api", json={"description": "a shop"})
    assert resp.status_code == 500
    assert resp.json()["error"] == "Failed to generate mock API"
    assert "OPENAI_API_KEY" in resp.json()["details"]


def test_cors_headers_present(make_client):
    client = make_client(FakeRequester(text="{}"))

    resp = client.post(
        "/generate-mock-api",
        json={"description": "a shop"},
        headers={"Origin": "http://example.com"},
    )
    assert resp.headers["access-control-allow-origin"] == "*"


def test_deeply_nested_model_text_returns_raw_response(make_client):
    raw = '{"a":' + "[" * 100000 + "}"
    client = make_client(FakeRequester(text=raw))

    resp = client.post("/generate-mock-api", json={"description": "a shop"})
    assert resp.status_code == 500
    body = resp.json()
    assert body["rawResponse"] == raw
    assert body["suggestion"] == MANUAL_ADJUSTMENT_SUGGESTION


def test_openapi_documents_every_error_shape(make_client):
    client = make_client(FakeRequester())

    schema = client.get("/openapi.json").json()
    responses = schema["paths"]["/generate-mock-api"]["post"]["responses"]
    error_500 = responses["500"]["content"]["application/json"]["schema"]
    refs = {item["$ref"].rsplit("/", 1)[-1] for item in error_500["anyOf"]}
    assert refs == {"UnparseableSpecResponse", "ErrorResponse"}

    # details puede ser string o lista
    details = schema["components"]["schemas"]["ErrorResponse"]["properties"]["details"]
    assert "type" not in details
