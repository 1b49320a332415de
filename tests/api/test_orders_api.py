"""Order submission, listing and status update scenarios."""

import json
import time
from urllib.parse import parse_qs, urlparse

import httpx
import respx
from helpers import COOKIE_NAME, SESSION_SECRET, STORE_URL, SUBMIT_URL

from palapizza.core.modules.session.tokens import issue_token

ORDER_FORM = {
    "nome": "Mario",
    "telefono": "327 123 4567",
    "tipo": "consegna",
    "data": "2024-05-02",
    "ora": "20:30",
    "ordine": "2 Margherita",
    "indirizzo": "Via Roma 1",
}

STORE_ROWS = [
    {"ID": "b", "Nome": "Luca", "Telefono": "333", "Tipo": "TAVOLO", "Data": "2024-05-02", "Ora": "21:00"},
    {
        "ID": "a",
        "Nome": "Mario",
        "Telefono": "327 123 4567",
        "Tipo": "CONSEGNA",
        "Data": "2024-05-02",
        "Ora": "20:30",
        "Ordine": "2 Margherita",
        "Indirizzo": "Via Roma 1",
        "Stato": "NUOVA",
    },
]


def login(client) -> None:
    client.cookies.set(COOKIE_NAME, issue_token(SESSION_SECRET))


class TestSubmitOrder:
    """Tests for POST /api/orders."""

    @respx.mock
    def test_order_forwarded(self, client):
        route = respx.post(SUBMIT_URL).mock(return_value=httpx.Response(200, json={"ok": True, "id": "ord-9"}))

        response = client.post("/api/orders", json=ORDER_FORM)

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["message"] == "Ricevuto ✅"
        assert body["response"] == {"ok": True, "id": "ord-9"}

        forwarded = json.loads(route.calls.last.request.content)
        assert forwarded["tipo"] == "CONSEGNA"
        assert forwarded["stato"] == "NUOVO"
        assert forwarded["canale"] == "APP"
        assert forwarded["secret"] == "store-shared-secret"

    @respx.mock
    def test_honeypot_skips_store(self, client):
        route = respx.post(SUBMIT_URL).mock(return_value=httpx.Response(200, json={"ok": True}))

        response = client.post("/api/orders", json={**ORDER_FORM, "honeypot": "buy now"})

        assert response.json()["ok"] is True
        assert response.json()["skipped"] is True
        assert not route.called

    def test_invalid_order(self, client):
        response = client.post("/api/orders", json={**ORDER_FORM, "indirizzo": ""})

        assert response.status_code == 400
        assert response.json()["type"] == "validation_error"
        assert "indirizzo" in response.json()["message"]

    @respx.mock
    def test_store_failure(self, client):
        respx.post(SUBMIT_URL).mock(return_value=httpx.Response(500, text="boom"))

        response = client.post("/api/orders", json=ORDER_FORM)

        assert response.status_code == 502
        assert response.json()["type"] == "upstream_error"
        assert response.json()["details"] == "boom"

    def test_store_not_configured(self, make_client):
        with make_client(store_url="", submit_url="") as client:
            response = client.post("/api/orders", json=ORDER_FORM)

        assert response.status_code == 500
        assert response.json()["type"] == "configuration_error"

    def test_ping(self, client):
        assert client.get("/api/orders").json() == {"ok": True}


class TestListBookings:
    """Tests for GET /api/bookings."""

    def test_no_cookie(self, client):
        assert client.get("/api/bookings").status_code == 401

    def test_expired_token(self, client):
        client.cookies.set(COOKIE_NAME, issue_token(SESSION_SECRET, now=int(time.time()) - 8 * 24 * 3600))
        assert client.get("/api/bookings").status_code == 401

    def test_tampered_token(self, client):
        token = issue_token(SESSION_SECRET)
        client.cookies.set(COOKIE_NAME, token.replace(".", ".f", 1)[:-1])
        assert client.get("/api/bookings").status_code == 401

    def test_oversized_timestamp_token(self, client):
        client.cookies.set(COOKIE_NAME, "9" * 5000 + ".abcdef")
        assert client.get("/api/bookings").status_code == 401

    def test_token_from_other_secret(self, client):
        client.cookies.set(COOKIE_NAME, issue_token("not-the-server-secret"))
        assert client.get("/api/bookings").status_code == 401

    @respx.mock
    def test_valid_token_forwards_to_store(self, client):
        route = respx.get(url__startswith=STORE_URL).mock(
            return_value=httpx.Response(200, json={"ok": True, "rows": STORE_ROWS, "count": 2})
        )
        login(client)

        response = client.get("/api/bookings", params={"limit": 50})

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["count"] == 2
        assert [row["id"] for row in body["rows"]] == ["a", "b"]
        assert body["rows"][0]["status"] == "NUOVO"
        assert body["rows"][0]["type"] == "CONSEGNA"
        assert route.calls.last.request.url.params["limit"] == "50"

    @respx.mock
    def test_admin_alias_and_limit_clamp(self, client):
        route = respx.get(url__startswith=STORE_URL).mock(return_value=httpx.Response(200, json={"ok": True}))
        login(client)

        response = client.get("/api/admin/bookings", params={"limit": 0})

        assert response.status_code == 200
        assert response.json() == {"ok": True, "rows": [], "count": 0}
        assert route.calls.last.request.url.params["limit"] == "1"

    @respx.mock
    def test_default_limit(self, client):
        route = respx.get(url__startswith=STORE_URL).mock(return_value=httpx.Response(200, json={"ok": True}))
        login(client)

        client.get("/api/bookings")

        assert route.calls.last.request.url.params["limit"] == "300"

    @respx.mock
    def test_store_not_json(self, client):
        respx.get(url__startswith=STORE_URL).mock(return_value=httpx.Response(200, text="<html>"))
        login(client)

        response = client.get("/api/bookings")

        assert response.status_code == 502
        assert response.json()["message"] == "Risposta non JSON"

    def test_store_not_configured_checked_before_token(self, make_client):
        with make_client(store_url="") as client:
            response = client.get("/api/bookings")

        assert response.status_code == 500
        assert response.json()["type"] == "configuration_error"

    def test_secret_not_configured_is_server_error(self, make_client):
        with make_client(admin_session_secret="") as client:
            response = client.get("/api/bookings")

        assert response.status_code == 500


class TestUpdateStatus:
    """Tests for POST /api/orders/status."""

    def test_no_cookie(self, client):
        response = client.post("/api/orders/status", json={"id": "a", "status": "CONFIRMED"})
        assert response.status_code == 401

    @respx.mock
    def test_update(self, client):
        route = respx.post(STORE_URL).mock(return_value=httpx.Response(200, json={"ok": True}))
        login(client)

        response = client.post("/api/orders/status", json={"id": " a ", "status": "confirmed"})

        assert response.status_code == 200
        assert response.json() == {"ok": True, "status": "CONFERMATO", "result": {"ok": True}, "whatsapp_url": None}
        forwarded = json.loads(route.calls.last.request.content)
        assert forwarded["id"] == "a"
        assert forwarded["stato"] == "CONFERMATO"

    @respx.mock
    def test_italian_field_name_accepted(self, client):
        respx.post(STORE_URL).mock(return_value=httpx.Response(200, json={"ok": True}))
        login(client)

        response = client.post("/api/orders/status", json={"id": "a", "stato": "ANNULLATO"})

        assert response.json()["status"] == "ANNULLATO"

    def test_missing_id(self, client):
        login(client)
        response = client.post("/api/orders/status", json={"status": "CONFIRMED"})

        assert response.status_code == 400
        assert response.json()["message"] == "Manca id"

    def test_invalid_status(self, client):
        login(client)
        response = client.post("/api/orders/status", json={"id": "a", "status": "IN FORNO"})

        assert response.status_code == 400
        assert response.json()["message"] == "Stato non valido"

    def test_empty_status(self, client):
        login(client)
        assert client.post("/api/orders/status", json={"id": "a", "status": ""}).status_code == 400

    @respx.mock
    def test_store_rejects(self, client):
        respx.post(STORE_URL).mock(return_value=httpx.Response(200, json={"ok": False, "error": "ID non trovato"}))
        login(client)

        response = client.post("/api/orders/status", json={"id": "zzz", "status": "DELIVERED"})

        assert response.status_code == 502
        assert response.json()["message"] == "ID non trovato"

    @respx.mock
    def test_notify_returns_whatsapp_link(self, client):
        respx.post(STORE_URL).mock(return_value=httpx.Response(200, json={"ok": True}))
        respx.get(url__startswith=STORE_URL).mock(
            return_value=httpx.Response(200, json={"ok": True, "rows": STORE_ROWS, "count": 2})
        )
        login(client)

        response = client.post(
            "/api/orders/status",
            json={"id": "a", "status": "CONFIRMED", "notify": True},
            headers={"User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64)"},
        )

        assert response.status_code == 200
        url = urlparse(response.json()["whatsapp_url"])
        assert url.netloc == "web.whatsapp.com"
        query = parse_qs(url.query)
        assert query["phone"] == ["393271234567"]
        assert query["text"][0].startswith("✅ CONFERMATO!\nCiao Mario!")

    @respx.mock
    def test_notify_mobile_link(self, client):
        respx.post(STORE_URL).mock(return_value=httpx.Response(200, json={"ok": True}))
        respx.get(url__startswith=STORE_URL).mock(
            return_value=httpx.Response(200, json={"ok": True, "rows": STORE_ROWS, "count": 2})
        )
        login(client)

        response = client.post(
            "/api/orders/status",
            json={"id": "a", "status": "DELIVERED", "notify": True},
            headers={"User-Agent": "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X)"},
        )

        assert response.json()["whatsapp_url"].startswith("https://wa.me/393271234567?text=")

    @respx.mock
    def test_notify_unknown_order(self, client):
        update_route = respx.post(STORE_URL).mock(return_value=httpx.Response(200, json={"ok": True}))
        respx.get(url__startswith=STORE_URL).mock(return_value=httpx.Response(200, json={"ok": True, "rows": []}))
        login(client)

        response = client.post("/api/orders/status", json={"id": "ghost", "status": "CONFIRMED", "notify": True})

        assert response.status_code == 404
        assert not update_route.called

    @respx.mock
    def test_notify_lookup_failure_leaves_status_untouched(self, client):
        update_route = respx.post(STORE_URL).mock(return_value=httpx.Response(200, json={"ok": True}))
        respx.get(url__startswith=STORE_URL).mock(return_value=httpx.Response(500, text="boom"))
        login(client)

        response = client.post("/api/orders/status", json={"id": "a", "status": "CONFIRMED", "notify": True})

        assert response.status_code == 502
        assert not update_route.called

    @respx.mock
    def test_notify_new_status_skips_lookup(self, client):
        respx.post(STORE_URL).mock(return_value=httpx.Response(200, json={"ok": True}))
        list_route = respx.get(url__startswith=STORE_URL).mock(return_value=httpx.Response(200, json={"ok": True}))
        login(client)

        response = client.post("/api/orders/status", json={"id": "a", "status": "NUOVO", "notify": True})

        assert response.status_code == 200
        assert response.json()["whatsapp_url"] == ""
        assert not list_route.called
