"""
End-to-end tests through the HTTP API against the in-memory database set up in conftest.py.
"""
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from fastapi.testclient import TestClient
from jinja2 import TemplateNotFound

from config import BASE_DIR
from main import app
from services.rendering import JinjaViewGenerator


def _payload(**overrides):
    body = {
        "referenceNumber": "REF-1",
        "state": "Pending",
        "date": "2024-01-01",
        "person": {"firstName": "Jane", "surname": "Doe"},
    }
    body.update(overrides)
    return body


PORTFOLIO = [
    {"name": "Retirement Annuity", "funds": [{"name": "Balanced Fund", "amount": "100", "fees": "10"}]},
    {"name": "Savings", "funds": []},
]


class TestApplicationsApi(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls._client_cm = TestClient(app)
        cls.client = cls._client_cm.__enter__()

    @classmethod
    def tearDownClass(cls):
        cls._client_cm.__exit__(None, None, None)

    def _create(self, **overrides):
        resp = self.client.post("/api/applications", json=_payload(**overrides))
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def test_health(self):
        self.assertEqual(self.client.get("/health").json(), {"status": "ok"})

    def test_create_and_get_application(self):
        created = self._create(
            referenceNumber="REF-API-1",
            state="Activated",
            isLegalEntity=True,
            legalEntity={"companyName": "Acme (Pty) Ltd"},
            products=PORTFOLIO,
        )
        self.assertTrue(created["id"].startswith("app-"))

        resp = self.client.get(f"/api/applications/{created['id']}")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["referenceNumber"], "REF-API-1")
        self.assertEqual(body["state"], "Activated")
        self.assertEqual(body["person"], {"firstName": "Jane", "surname": "Doe"})
        self.assertEqual(body["legalEntity"]["companyName"], "Acme (Pty) Ltd")
        self.assertEqual([p["name"] for p in body["products"]], ["Retirement Annuity", "Savings"])
        self.assertEqual(body["products"][0]["funds"][0]["name"], "Balanced Fund")

    def test_get_unknown_application(self):
        self.assertEqual(self.client.get("/api/applications/app-missing").status_code, 404)

    def test_pending_document(self):
        created = self._create()
        resp = self.client.get(f"/api/applications/{created['id']}/document")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.headers["content-type"], "application/pdf")
        self.assertTrue(resp.content.startswith(b"%PDF-"))

    def test_activated_document(self):
        created = self._create(state="Activated", products=PORTFOLIO)
        resp = self.client.get(f"/api/applications/{created['id']}/document")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertTrue(resp.content.startswith(b"%PDF-"))

    def test_in_review_document(self):
        created = self._create(state="InReview", products=PORTFOLIO, currentReview={"reason": "bank mismatch"})
        resp = self.client.get(f"/api/applications/{created['id']}/document")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertTrue(resp.content.startswith(b"%PDF-"))

    def test_in_review_without_review_is_rejected(self):
        created = self._create(state="InReview")
        resp = self.client.get(f"/api/applications/{created['id']}/document")
        self.assertEqual(resp.status_code, 422)
        self.assertIn(created["id"], resp.json()["detail"])

    def test_document_for_unknown_application(self):
        resp = self.client.get("/api/applications/app-missing/document")
        self.assertEqual(resp.status_code, 404)

    def test_document_for_unsupported_state(self):
        created = self._create(state="Closed")
        resp = self.client.get(f"/api/applications/{created['id']}/document")
        self.assertEqual(resp.status_code, 404)

    def test_document_for_name_outside_latin1(self):
        created = self._create(person={"firstName": "Łukasz", "surname": "Wiśniewski"})
        resp = self.client.get(f"/api/applications/{created['id']}/document")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertTrue(resp.content.startswith(b"%PDF-"))

    def test_document_uses_caller_base_uri(self):
        """base_uri query parameter replaces the configured template location."""
        created = self._create()
        with tempfile.TemporaryDirectory() as tmp:
            templates = Path(tmp) / "custom"
            shutil.copytree(BASE_DIR / "templates", templates)
            with mock.patch.object(
                JinjaViewGenerator,
                "generate_from_path",
                autospec=True,
                side_effect=JinjaViewGenerator.generate_from_path,
            ) as render:
                resp = self.client.get(
                    f"/api/applications/{created['id']}/document",
                    params={"base_uri": f"{templates}/"},
                )
        self.assertEqual(resp.status_code, 200, resp.text)
        render.assert_called_once()
        self.assertEqual(render.call_args.args[1], f"{templates}/pending_application.html")

    def test_document_defaults_to_configured_base_uri(self):
        created = self._create()
        with mock.patch.object(
            JinjaViewGenerator,
            "generate_from_path",
            autospec=True,
            side_effect=JinjaViewGenerator.generate_from_path,
        ) as render:
            resp = self.client.get(f"/api/applications/{created['id']}/document")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(render.call_args.args[1], f"{BASE_DIR / 'templates'}/pending_application.html")

    def test_document_with_missing_base_uri_templates_fails(self):
        created = self._create()
        with self.assertRaises(TemplateNotFound):
            self.client.get(
                f"/api/applications/{created['id']}/document",
                params={"base_uri": "/nonexistent/"},
            )


if __name__ == "__main__":
    unittest.main()
