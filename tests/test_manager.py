"""Tests for the SecretManager handle."""

import json

import pytest
import respx
from httpx import Response
from gcsecretmanager import init
from gcsecretmanager.clients.secretmanager import encode_payload
from gcsecretmanager.config.resolver import SecretManagerConfig
from gcsecretmanager.config.settings import get_settings
from gcsecretmanager.errors import (
    ConfigurationError,
    PermissionDeniedError,
    UnexpectedResponseError,
)
from gcsecretmanager.manager import SecretManager

API = "https://secretmanager.googleapis.com/v1"
CREATE_URL = f"{API}/projects/my-project/secrets"
ADD_VERSION_URL = f"{API}/projects/my-project/secrets/new-secret:addVersion"


def access_url(key, version="latest", project="my-project"):
    return f"{API}/projects/{project}/secrets/{key}/versions/{version}:access"


class TestHandleConfiguration:
    """Tests for handle construction and chaining."""

    def test_setters_return_same_handle(self, client):
        manager = init(client=client)

        assert manager.set_project("p") is manager
        assert manager.set_version(2) is manager
        assert manager.config == SecretManagerConfig(project="p", version=2)

    def test_config_is_a_snapshot(self, client):
        manager = init(project="p", client=client)
        snapshot = manager.config
        snapshot.project = "other"

        assert manager.config.project == "p"

    def test_accepts_config_object(self, client):
        manager = SecretManager(SecretManagerConfig(project="p", version="4"), client=client)
        assert manager.config == SecretManagerConfig(project="p", version="4")

    def test_keyword_values_win_over_config(self, client):
        manager = init({"project": "a", "version": "1"}, project="b", client=client)
        assert manager.config == SecretManagerConfig(project="b", version="1")

    def test_repr(self, client):
        assert repr(init(project="p", client=client)) == "SecretManager(project='p', version=None)"


class TestGet:
    """Tests for SecretManager.get."""

    def test_without_project_makes_no_request(self, client):
        with respx.mock(assert_all_called=False) as respx_mock:
            route = respx_mock.route().mock(return_value=Response(200))

            with pytest.raises(ConfigurationError, match="project is required"):
                init(client=client).get("does-not-exist")

        assert route.call_count == 0

    def test_permission_denied(self, client):
        with respx.mock:
            respx.get(access_url("secret-key")).mock(return_value=Response(403))

            with pytest.raises(PermissionDeniedError):
                init(project="my-project", client=client).get("secret-key")

    def test_secret(self, client):
        with respx.mock:
            respx.get(access_url("k", project="p")).mock(
                return_value=Response(200, json={"payload": {"data": "c2VjcmV0"}})
            )

            assert init(project="p", client=client).get("k") == "secret"

    def test_chaining_before_get(self, client):
        with respx.mock:
            route = respx.get(access_url("does-not-exist", version=3)).mock(
                return_value=Response(404)
            )

            result = init(client=client).set_project("my-project").set_version(3).get(
                "does-not-exist"
            )

            assert result is None
            assert route.call_count == 1
            assert route.calls.last.request.url.path.endswith("/versions/3:access")

    def test_call_version_overrides_handle(self, client):
        manager = init(project="my-project", version="2", client=client)

        with respx.mock:
            route = respx.get(access_url("k", version="1")).mock(
                return_value=Response(200, json={"payload": {"data": "c2VjcmV0"}})
            )

            assert manager.get("k", version="1") == "secret"
            assert route.call_count == 1

        assert manager.config.version == "2"

    def test_call_project_overrides_handle(self, client):
        manager = init(project="my-project", client=client)

        with respx.mock:
            respx.get(access_url("k", project="other")).mock(return_value=Response(404))

            assert manager.get("k", project="other") is None

        assert manager.config.project == "my-project"

    def test_environment_defaults(self, client, monkeypatch):
        monkeypatch.setenv("GCSM_PROJECT", "env-project")
        monkeypatch.setenv("GCSM_VERSION", "5")
        get_settings.cache_clear()

        with respx.mock:
            route = respx.get(access_url("k", version="5", project="env-project")).mock(
                return_value=Response(404)
            )

            assert init(client=client).get("k") is None
            assert route.call_count == 1


class TestSet:
    """Tests for the two-step SecretManager.set protocol."""

    def test_creates_secret_then_version(self, client):
        with respx.mock:
            create = respx.post(CREATE_URL).mock(return_value=Response(200))
            add = respx.post(ADD_VERSION_URL).mock(return_value=Response(200))

            result = init(project="my-project", client=client).set("new-secret", "new-value")

            assert result is None
            assert create.call_count == 1
            assert add.call_count == 1

            first, second = respx.calls
            assert first.request.url.params["secretId"] == "new-secret"
            assert second.request.url.path.endswith("/secrets/new-secret:addVersion")
            body = json.loads(second.request.content)
            assert body["payload"]["data"] == encode_payload("new-value")

    def test_existing_secret_still_adds_version(self, client):
        with respx.mock:
            respx.post(CREATE_URL).mock(return_value=Response(409))
            add = respx.post(ADD_VERSION_URL).mock(return_value=Response(200))

            init(project="my-project", client=client).set("new-secret", "new-value")

            assert add.call_count == 1

    def test_create_failure_stops_before_version(self, client):
        with respx.mock(assert_all_called=False) as respx_mock:
            respx_mock.post(CREATE_URL).mock(return_value=Response(500))
            add = respx_mock.post(ADD_VERSION_URL).mock(return_value=Response(200))

            with pytest.raises(UnexpectedResponseError) as exc_info:
                init(project="my-project", client=client).set("new-secret", "new-value")

            assert add.call_count == 0

        assert exc_info.value.status_code == 500
        assert exc_info.value.operation == "create_secret"

    def test_create_permission_denied_is_unexpected(self, client):
        with respx.mock(assert_all_called=False) as respx_mock:
            respx_mock.post(CREATE_URL).mock(return_value=Response(403))
            respx_mock.post(ADD_VERSION_URL).mock(return_value=Response(200))

            with pytest.raises(UnexpectedResponseError):
                init(project="my-project", client=client).set("new-secret", "new-value")

    def test_version_failure_raises(self, client):
        with respx.mock:
            respx.post(CREATE_URL).mock(return_value=Response(200))
            respx.post(ADD_VERSION_URL).mock(return_value=Response(400, text="bad payload"))

            with pytest.raises(UnexpectedResponseError) as exc_info:
                init(project="my-project", client=client).set("new-secret", "new-value")

        assert exc_info.value.status_code == 400
        assert exc_info.value.operation == "add_version"
        assert exc_info.value.body == "bad payload"

    def test_retry_after_partial_failure(self, client):
        manager = init(project="my-project", client=client)

        with respx.mock:
            respx.post(CREATE_URL).mock(side_effect=[Response(200), Response(409)])
            respx.post(ADD_VERSION_URL).mock(side_effect=[Response(503), Response(200)])

            with pytest.raises(UnexpectedResponseError):
                manager.set("new-secret", "new-value")
            manager.set("new-secret", "new-value")

    def test_without_project_makes_no_request(self, client):
        with respx.mock(assert_all_called=False) as respx_mock:
            route = respx_mock.route().mock(return_value=Response(200))

            with pytest.raises(ConfigurationError):
                init(client=client).set("new-secret", "new-value")

        assert route.call_count == 0

    def test_project_override(self, client):
        with respx.mock:
            create = respx.post(f"{API}/projects/other/secrets").mock(
                return_value=Response(200)
            )
            respx.post(f"{API}/projects/other/secrets/new-secret:addVersion").mock(
                return_value=Response(200)
            )

            init(project="my-project", client=client).set(
                "new-secret", "new-value", project="other"
            )

            assert create.call_count == 1
