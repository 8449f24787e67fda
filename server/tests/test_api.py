"""
Tests for the code-fix HTTP endpoints.
"""

import pytest
import os
from unittest.mock import patch
from fastapi.testclient import TestClient

COMPONENT = """import {Component} from '@angular/core';

@Component({
  selector: 'app-root',
  imports: [One, Two, Three],
  template: '',
})
export class App {}
"""

UNUSED_IMPORTS = -998113
FIX_ID = "fixUnusedStandaloneImports"


def _fix_all_payload(related=None, file="app.component.ts"):
    diagnostic = {
        "code": UNUSED_IMPORTS,
        "file": file,
        "start": COMPONENT.index("imports"),
        "length": len("imports"),
    }
    if related is not None:
        diagnostic["relatedInformation"] = related
    return {
        "fixId": FIX_ID,
        "files": [{"fileName": "app.component.ts", "text": COMPONENT}],
        "diagnostics": [diagnostic],
    }


def _related(element, file="app.component.ts"):
    return {"file": file, "start": COMPONENT.index(element), "length": len(element)}


class TestCodeFixApi:
    """Test the fix-all and at-position endpoints."""

    @pytest.fixture
    def client(self, adapter):
        """Client with no API keys configured (dev mode)."""
        with patch.dict(os.environ, {"NG_CODEFIX_API_KEYS_RAW": ""}, clear=False):
            from app.settings import Settings
            settings = Settings()

            with patch("app.main.settings", settings):
                with patch("app.auth.settings", settings):
                    from app.main import app
                    yield TestClient(app)

    @pytest.fixture
    def client_with_auth(self, adapter):
        """Client with API keys configured."""
        with patch.dict(os.environ, {"NG_CODEFIX_API_KEYS_RAW": "test-key-1,test-key-2"}, clear=False):
            from app.settings import Settings
            settings = Settings()

            with patch("app.main.settings", settings):
                with patch("app.auth.settings", settings):
                    from app.main import app
                    yield TestClient(app)

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["fix_ids"] == [FIX_ID]
        assert data["auth_required"] is False

    def test_list_code_fixes(self, client):
        response = client.get("/codefixes")

        assert response.status_code == 200
        assert response.json() == [{"fixIds": [FIX_ID], "errorCodes": [UNUSED_IMPORTS]}]

    def test_fix_all_removes_named_imports(self, client):
        response = client.post("/codefixes/fix-all", json=_fix_all_payload([_related("Two"), _related("Three")]))

        assert response.status_code == 200
        assert response.json() == {
            "changes": [{
                "fileName": "app.component.ts",
                "textChanges": [{
                    "span": {"start": COMPONENT.index("[One"), "length": len("[One, Two, Three]")},
                    "newText": "[One]",
                }],
            }]
        }

    def test_fix_all_without_related_information_empties(self, client):
        response = client.post("/codefixes/fix-all", json=_fix_all_payload())

        assert response.status_code == 200
        assert response.json()["changes"][0]["textChanges"][0]["newText"] == "[]"

    def test_related_information_in_unsent_file_is_ignored(self, client):
        payload = _fix_all_payload([_related("Two", file="other.component.ts"), _related("One")])

        response = client.post("/codefixes/fix-all", json=payload)

        assert response.json()["changes"][0]["textChanges"][0]["newText"] == "[Two, Three]"

    def test_format_options_in_request(self, client):
        code = COMPONENT.replace("[One, Two, Three]", "[\n    One,\n    Two,\n  ]")
        payload = {
            "fixId": FIX_ID,
            "files": [{"fileName": "app.component.ts", "text": code}],
            "diagnostics": [{
                "code": UNUSED_IMPORTS,
                "file": "app.component.ts",
                "start": code.index("imports"),
                "length": len("imports"),
                "relatedInformation": [{"file": "app.component.ts", "start": code.index("Two"), "length": 3}],
            }],
            "formatOptions": {"indentSize": 2, "newLineCharacter": "\r\n"},
        }

        response = client.post("/codefixes/fix-all", json=payload)

        assert response.json()["changes"][0]["textChanges"][0]["newText"] == "[\r\n  One\r\n]"

    def test_other_error_codes_are_ignored(self, client):
        payload = _fix_all_payload()
        payload["diagnostics"][0]["code"] = 2304

        response = client.post("/codefixes/fix-all", json=payload)

        assert response.status_code == 200
        assert response.json() == {"changes": []}

    def test_unknown_fix_id(self, client):
        payload = _fix_all_payload()
        payload["fixId"] = "fixSomethingElse"

        response = client.post("/codefixes/fix-all", json=payload)

        assert response.status_code == 404

    def test_diagnostic_for_unknown_file(self, client):
        response = client.post("/codefixes/fix-all", json=_fix_all_payload(file="missing.ts"))

        assert response.status_code == 422
        assert "missing.ts" in response.json()["detail"]

    def test_non_typescript_file_rejected(self, client):
        payload = _fix_all_payload()
        payload["files"][0]["fileName"] = "app.component.html"

        response = client.post("/codefixes/fix-all", json=payload)

        assert response.status_code == 422

    def test_at_position_offers_no_actions(self, client):
        payload = {
            "fileName": "app.component.ts",
            "start": COMPONENT.index("imports"),
            "end": COMPONENT.index("imports") + len("imports"),
            "errorCodes": [UNUSED_IMPORTS],
            "files": [{"fileName": "app.component.ts", "text": COMPONENT}],
        }

        response = client.post("/codefixes/at-position", json=payload)

        assert response.status_code == 200
        assert response.json() == {"fixes": []}

    def test_fix_all_requires_auth_when_configured(self, client_with_auth):
        response = client_with_auth.post("/codefixes/fix-all", json=_fix_all_payload())

        assert response.status_code == 401
        assert "Missing API key" in response.json()["detail"]

    def test_fix_all_invalid_key(self, client_with_auth):
        response = client_with_auth.post(
            "/codefixes/fix-all", json=_fix_all_payload(), headers={"X-API-Key": "wrong"}
        )

        assert response.status_code == 401

    def test_fix_all_with_valid_key(self, client_with_auth):
        response = client_with_auth.post(
            "/codefixes/fix-all", json=_fix_all_payload(), headers={"X-API-Key": "test-key-2"}
        )

        assert response.status_code == 200
        assert response.json()["changes"][0]["textChanges"][0]["newText"] == "[]"

    def test_bearer_token_accepted(self, client_with_auth):
        response = client_with_auth.get("/codefixes", headers={"Authorization": "Bearer test-key-1"})

        assert response.status_code == 200

    def test_offsets_are_utf16_code_units(self, client):
        code = COMPONENT.replace("app-root", "app-\U0001F680")

        def utf16(index):
            return len(code[:index].encode("utf-16-le")) // 2

        payload = {
            "fixId": FIX_ID,
            "files": [{"fileName": "app.component.ts", "text": code}],
            "diagnostics": [{
                "code": UNUSED_IMPORTS,
                "file": "app.component.ts",
                "start": utf16(code.index("imports")),
                "length": len("imports"),
                "relatedInformation": [
                    {"file": "app.component.ts", "start": utf16(code.index("Two")), "length": 3},
                ],
            }],
        }

        response = client.post("/codefixes/fix-all", json=payload)

        text_change = response.json()["changes"][0]["textChanges"][0]
        assert text_change["span"] == {"start": utf16(code.index("[One")), "length": len("[One, Two, Three]")}
        assert text_change["span"]["start"] == code.index("[One") + 1
        assert text_change["newText"] == "[One, Three]"
