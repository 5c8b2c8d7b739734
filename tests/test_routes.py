"""HTTP-level tests for the FastAPI surface."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from chat_gateway.domain.entities import ChatExchange
from chat_gateway.domain.exceptions import UpstreamError
from chat_gateway.infrastructure.config import Settings
from chat_gateway.interface.app import create_app
from chat_gateway.interface.dependencies import get_gateway
from chat_gateway.services.completion_gateway import CompletionGateway


def _settings(**overrides) -> Settings:
    values = {"openai_api_key": None, "database_url": "sqlite+aiosqlite:///:memory:"}
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def client(gateway):
    app = create_app(_settings())
    app.dependency_overrides[get_gateway] = lambda: gateway
    return TestClient(app)


# ── POST /trivia ────────────────────────────────────────────────────────────


def test_trivia_returns_generated_questions(client, llm):
    questions = [
        {
            "question": "¿Planeta más grande?",
            "options": [
                {"text": "Marte", "isCorrect": False},
                {"text": "Júpiter", "isCorrect": True},
                {"text": "Venus", "isCorrect": False},
                {"text": "Tierra", "isCorrect": False},
            ],
        }
    ]
    llm.reply = json.dumps({"questions": questions})

    resp = client.post("/trivia", json={"topic": "Space"})

    assert resp.status_code == 200
    assert resp.json() == {"questions": questions}


def test_trivia_malformed_output_returns_fallback(client, llm):
    llm.reply = "not json"

    resp = client.post("/trivia", json={"topic": "Space"})

    assert resp.status_code == 200
    (question,) = resp.json()["questions"]
    assert question["question"] == "¿Pregunta de ejemplo sobre Space?"
    assert [o["isCorrect"] for o in question["options"]] == [False, True, False, False]


def test_trivia_non_standard_json_constant_returns_fallback(client, llm):
    llm.reply = '{"questions": [NaN]}'

    resp = client.post("/trivia", json={"topic": "Space"})

    assert resp.status_code == 200
    (question,) = resp.json()["questions"]
    assert question["question"] == "¿Pregunta de ejemplo sobre Space?"


@pytest.mark.parametrize("body", [{}, {"topic": ""}, {"topic": None}])
def test_trivia_missing_topic_is_400(client, llm, body):
    resp = client.post("/trivia", json=body)

    assert resp.status_code == 400
    assert resp.json() == {"error": "El tema es requerido"}
    assert llm.calls == []


def test_trivia_wrong_type_is_400(client):
    resp = client.post("/trivia", json={"topic": ["a", "b"]})

    assert resp.status_code == 400
    assert "topic" in resp.json()["details"]


def test_trivia_upstream_failure_is_500_with_details(client, llm):
    llm.error = UpstreamError("Connection error.")

    resp = client.post("/trivia", json={"topic": "Space"})

    assert resp.status_code == 500
    assert resp.json() == {
        "error": "Error al procesar la solicitud",
        "details": "Connection error.",
    }


# ── POST /chat ──────────────────────────────────────────────────────────────


def test_chat_returns_response_and_persists(client, llm, store):
    llm.reply = "Hi 👋"

    resp = client.post("/chat", json={"prompt": "Hello"})

    assert resp.status_code == 200
    assert resp.json() == {"response": "Hi 👋"}
    assert [(e.prompt, e.response) for e in store.exchanges] == [("Hello", "Hi 👋")]


def test_chat_missing_prompt_is_400(client, store):
    resp = client.post("/chat", json={})

    assert resp.status_code == 400
    assert resp.json() == {"error": "El prompt es requerido"}
    assert store.exchanges == []


def test_chat_storage_failure_is_500(client, llm, store):
    llm.reply = "Hi"
    store.fail = True

    resp = client.post("/chat", json={"prompt": "Hello"})

    assert resp.status_code == 500
    assert resp.json()["error"] == "Error al procesar la solicitud"
    assert resp.json()["details"] == "disk full"


# ── Unconfigured LLM ────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    ("path", "body"),
    [("/chat", {"prompt": "Hello"}), ("/trivia", {"topic": "Space"})],
)
def test_unconfigured_llm_is_500(store, path, body):
    app = create_app(_settings())
    app.dependency_overrides[get_gateway] = lambda: CompletionGateway(llm=None, store=store)
    client = TestClient(app)

    resp = client.post(path, json=body)

    assert resp.status_code == 500
    assert resp.json() == {
        "error": "No se ha configurado correctamente la API de OpenAI",
        "details": "Error interno del servidor al configurar OpenAI",
    }
    assert store.exchanges == []


# ── GET /history ────────────────────────────────────────────────────────────


def test_history_returns_newest_first(client, store):
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    for i in range(12):
        store.exchanges.append(
            ChatExchange(id=i + 1, prompt=f"p{i}", response=f"r{i}", created_at=base + timedelta(hours=i))
        )

    resp = client.get("/history")

    assert resp.status_code == 200
    body = resp.json()
    assert len(body) == 10
    assert body[0]["prompt"] == "p11"
    assert body[0]["id"] == 12
    assert set(body[0]) == {"id", "prompt", "response", "createdAt"}


def test_history_storage_failure_is_500(client, store):
    store.fail = True

    resp = client.get("/history")

    assert resp.status_code == 500
    assert resp.json()["details"] == "Error al obtener el historial de conversaciones"


# ── Full lifespan wiring ────────────────────────────────────────────────────


def test_lifespan_wires_real_adapters_without_api_key():
    with TestClient(create_app(_settings())) as client:
        assert client.get("/health").json() == {"status": "ok"}
        assert client.get("/history").json() == []

        resp = client.post("/trivia", json={"topic": "Space"})
        assert resp.status_code == 500
        assert resp.json()["error"] == "No se ha configurado correctamente la API de OpenAI"


def test_history_from_sqlite_carries_utc_offset(llm):
    llm.reply = "Hi 👋"
    app = create_app(_settings())

    with TestClient(app) as client:
        store = app.state.resources.store
        app.dependency_overrides[get_gateway] = lambda: CompletionGateway(llm=llm, store=store)

        assert client.post("/chat", json={"prompt": "Hello"}).status_code == 200
        (entry,) = client.get("/history").json()

    created_at = datetime.fromisoformat(entry["createdAt"].replace("Z", "+00:00"))
    assert created_at.tzinfo is not None
    assert created_at.utcoffset() == timedelta(0)
