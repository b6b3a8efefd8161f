from __future__ import annotations

import io

from fastapi.testclient import TestClient

from xmlview.api.server import ServiceConfig, create_app, load_service_config

DOC = b"""<catalog>
  <book id="b1"><title>dune</title><price>9</price></book>
  <book id="b2"><title>emma</title><price>7</price></book>
  <owner-name>ada</owner-name>
</catalog>
"""


def _client(**cfg) -> TestClient:
    return TestClient(create_app(ServiceConfig(**cfg)))


def _upload(payload: bytes = DOC):
    return {"file": ("catalog.xml", io.BytesIO(payload), "application/xml")}


def test_health_and_request_id_header():
    client = _client()

    r = client.get("/health")

    assert r.status_code == 200
    assert r.json()["ok"] is True
    assert r.headers.get("x-request-id")

    r2 = client.get("/health", headers={"X-Request-ID": "abc123"})
    assert r2.headers.get("x-request-id") == "abc123"


def test_policies_lists_registered_names():
    r = _client().get("/policies")

    assert r.status_code == 200
    body = r.json()
    assert "list" in body["casts"]
    assert "upper" in body["transformers"]


def test_convert_applies_casts_transforms_and_optimize():
    r = _client().post(
        "/convert",
        files=_upload(),
        data={"casts": "book=list", "transforms": "owner-name=upper", "optimize": "camelcase"},
    )

    assert r.status_code == 200, r.text
    body = r.json()
    assert body["filename"] == "catalog.xml"
    assert body["count"] == 2
    assert body["root_keys"] == ["book", "ownerName"]
    assert body["applied"] == [
        "cast:book=list",
        "transform:owner-name=upper",
        "optimize:camelcase",
    ]
    assert body["data"]["ownerName"] == "ADA"
    assert body["data"]["book"][1]["title"] == "emma"


def test_convert_error_mapping():
    client = _client()

    bad_xml = client.post("/convert", files=_upload(b"<catalog>"))
    assert bad_xml.status_code == 400
    assert bad_xml.json()["detail"]["error"] == "invalid_xml"

    missing = client.post("/convert", files=_upload(), data={"casts": "nope=list"})
    assert missing.status_code == 422
    assert missing.json()["detail"]["error"] == "key_not_found"

    policy = client.post("/convert", files=_upload(), data={"transforms": "book=shout"})
    assert policy.status_code == 422
    assert policy.json()["detail"]["error"] == "invalid_policy"

    coercion = client.post("/convert", files=_upload(), data={"casts": "owner-name=int"})
    assert coercion.status_code == 422
    assert coercion.json()["detail"]["error"] == "coercion_failed"

    spec = client.post("/convert", files=_upload(), data={"casts": "book"})
    assert spec.status_code == 422
    assert spec.json()["detail"]["error"] == "invalid_spec"

    mode = client.post("/convert", files=_upload(), data={"optimize": "kebab"})
    assert mode.status_code == 422
    assert mode.json()["detail"]["error"] == "invalid_optimize"


def test_convert_rejects_large_uploads():
    r = _client(max_upload_bytes=16).post("/convert", files=_upload())

    assert r.status_code == 413
    assert r.json()["detail"] == "upload_too_large"


def test_service_config_from_env(monkeypatch):
    monkeypatch.setenv("XMLVIEW_MAX_UPLOAD_BYTES", "2048")
    monkeypatch.setenv("XMLVIEW_OPTIMIZE", "SnakeCase")

    cfg = load_service_config()

    assert cfg.max_upload_bytes == 2048
    assert cfg.default_optimize == "snakecase"

    monkeypatch.setenv("XMLVIEW_OPTIMIZE", "bogus")
    assert load_service_config().default_optimize is None


def test_service_config_falls_back_on_bad_upload_limit(monkeypatch):
    monkeypatch.setenv("XMLVIEW_MAX_UPLOAD_BYTES", "lots")
    monkeypatch.setenv("XMLVIEW_MAX_XML_DEPTH", "12")

    cfg = load_service_config()

    assert cfg.max_upload_bytes == ServiceConfig().max_upload_bytes
    assert cfg.parser_limits.max_depth == 12
