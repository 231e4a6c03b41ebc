import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from asal.exceptions import ConfigurationError
from edge.middleware.access import (
    PASS,
    AccessRules,
    RedirectTo,
    Reject,
    decide,
    host_matches,
    install_access_middleware,
    is_matched_path,
)

RULES = AccessRules(primary_host_marker="example.com")


@pytest.mark.unit
def test_admin_host_root_redirects_to_admin():
    assert decide("admin.example.com", "/", False, RULES) == RedirectTo("/admin")
    assert decide("admin.example.com", "/", True, RULES) == RedirectTo("/admin")


@pytest.mark.unit
@pytest.mark.parametrize("path", ["/admin", "/admin/x", "/auth/login", "/auth/login/reset"])
def test_public_host_hides_admin_surface(path):
    assert decide("example.com", path, True, RULES) == Reject(404)
    assert decide("www.example.com", path, False, RULES) == Reject(404)


@pytest.mark.unit
def test_admin_path_without_cookie_redirects_to_login():
    decision = decide("admin.example.com", "/admin/x", False, RULES)
    assert decision == RedirectTo("/auth/login", {"redirect": "/admin/x"})


@pytest.mark.unit
def test_admin_path_with_cookie_passes():
    assert decide("admin.example.com", "/admin/x", True, RULES) is PASS


@pytest.mark.unit
def test_unknown_host_still_requires_cookie_for_admin():
    assert decide("localhost:3000", "/admin", False, RULES) == RedirectTo("/auth/login", {"redirect": "/admin"})
    assert decide("localhost:3000", "/auth/login", False, RULES) is PASS


@pytest.mark.unit
@pytest.mark.parametrize(
    "host,path",
    [
        ("example.com", "/"),
        ("example.com", "/services"),
        ("admin.example.com", "/auth/login"),
        ("admin.example.com", "/about"),
    ],
)
def test_other_requests_pass(host, path):
    assert decide(host, path, False, RULES) is PASS


@pytest.mark.unit
def test_substring_matching_is_default():
    assert host_matches("myadmin.other.net", "admin.") is True
    assert host_matches("example.com.evil.net", "example.com") is True
    assert host_matches("EXAMPLE.COM:443", "example.com") is True
    assert host_matches("", "example.com") is False


@pytest.mark.unit
def test_strict_matching():
    assert host_matches("admin.example.com", "admin.", strict=True) is True
    assert host_matches("myadmin.other.net", "admin.", strict=True) is False
    assert host_matches("www.example.com", "example.com", strict=True) is True
    assert host_matches("example.com:8443", "example.com", strict=True) is True
    assert host_matches("example.com.evil.net", "example.com", strict=True) is False
    assert host_matches("[::1]:8000", "[::1]", strict=True) is True


@pytest.mark.unit
def test_strict_rules_change_decisions():
    strict = AccessRules(primary_host_marker="example.com", strict_host_matching=True)
    assert decide("example.com.evil.net", "/admin/x", True, strict) is PASS
    assert decide("example.com.evil.net", "/admin/x", True, RULES) == Reject(404)


@pytest.mark.unit
@pytest.mark.parametrize(
    "path,matched",
    [
        ("/", True),
        ("/admin/x", True),
        ("/auth/login", True),
        ("/api/foo", False),
        ("/apiary", False),
        ("/_next/static/chunk.js", False),
        ("/_next/image", False),
        ("/favicon.ico", False),
        ("/_next/data/x.json", True),
    ],
)
def test_matcher(path, matched):
    assert is_matched_path(path) is matched


@pytest.mark.unit
def test_invalid_rules_raise_configuration_error():
    with pytest.raises(ConfigurationError):
        AccessRules(admin_path_prefix="admin")
    with pytest.raises(ConfigurationError):
        AccessRules(login_path="auth/login")
    with pytest.raises(ConfigurationError):
        AccessRules(primary_host_marker="  ")


def _client(rules: AccessRules = RULES) -> TestClient:
    app = FastAPI()
    install_access_middleware(app, rules)

    @app.get("/")
    def home():
        return {"page": "home"}

    @app.get("/admin/{rest:path}")
    def admin(rest: str):
        return {"page": "admin", "rest": rest}

    @app.get("/api/foo")
    def api():
        return {"page": "api"}

    return TestClient(app)


@pytest.mark.unit
def test_middleware_redirects_admin_host_root():
    resp = _client().get("/", headers={"host": "admin.example.com"}, follow_redirects=False)
    assert resp.status_code == 307
    assert resp.headers["location"] == "http://admin.example.com/admin"


@pytest.mark.unit
def test_middleware_redirects_to_login_with_destination():
    resp = _client().get("/admin/x", headers={"host": "admin.example.com"}, follow_redirects=False)
    assert resp.status_code == 307
    assert resp.headers["location"] == "http://admin.example.com/auth/login?redirect=%2Fadmin%2Fx"


@pytest.mark.unit
def test_middleware_hides_admin_on_public_host():
    resp = _client().get("/admin/x", headers={"host": "example.com"})
    assert resp.status_code == 404
    assert resp.text == "Not Found"


@pytest.mark.unit
def test_middleware_passes_with_cookie():
    client = _client()
    client.cookies.set("token", "abc")
    resp = client.get("/admin/x", headers={"host": "admin.example.com"})
    assert resp.status_code == 200
    assert resp.json() == {"page": "admin", "rest": "x"}


@pytest.mark.unit
def test_middleware_ignores_blank_cookie():
    client = _client()
    client.cookies.set("token", "")
    resp = client.get("/admin/x", headers={"host": "admin.example.com"}, follow_redirects=False)
    assert resp.status_code == 307


@pytest.mark.unit
def test_middleware_skips_api_paths():
    resp = _client().get("/api/foo", headers={"host": "example.com"})
    assert resp.status_code == 200
    assert resp.json() == {"page": "api"}


@pytest.mark.unit
def test_middleware_uses_configured_cookie_name():
    client = _client(AccessRules(primary_host_marker="example.com", auth_cookie_name="session"))
    client.cookies.set("token", "abc")
    assert client.get("/admin/x", headers={"host": "admin.example.com"}, follow_redirects=False).status_code == 307
    client.cookies.set("session", "abc")
    assert client.get("/admin/x", headers={"host": "admin.example.com"}).status_code == 200
