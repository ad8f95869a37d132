import datetime
from unittest.mock import MagicMock, patch

import pytest
import pytz
import requests

from hpecom_settings.comTransports import ComTokenStore, ComTransport


@pytest.fixture
def rft(config, adapter, monkeypatch):
    monkeypatch.setenv("HPECOM_CLIENT_ID", "test-client")
    monkeypatch.setenv("HPECOM_CLIENT_SECRET", "test-secret")
    transport = ComTransport(rhost="us-west-api.compute.cloud.hpe.com", config=config)
    transport.session.mount("https://", adapter)
    return transport


def tokenRequests(adapter):
    return [x for x in adapter.sent if x.url.endswith("/as/token.oauth2")]


def test_root_url_uses_https_for_the_region(rft):
    assert rft.rootUrl == "https://us-west-api.compute.cloud.hpe.com/"
    assert rft.rfFormUrl("/compute-ops-mgmt/v1beta1/settings") == \
        "https://us-west-api.compute.cloud.hpe.com/compute-ops-mgmt/v1beta1/settings"


def test_simulator_mode_uses_http(config):
    config.isSimulator = True
    transport = ComTransport(rhost=config.simulatorNetloc, config=config)
    assert transport.rootUrl == "http://127.0.0.1:5050/"
    assert transport.ssoTokenUrl == "http://127.0.0.1:5050/as/token.oauth2"


def test_token_login_happens_once(rft, adapter):
    rc, r, j, d = rft.rfSendRecvRequest("GET", "/compute-ops-mgmt/v1beta1/settings")
    assert rc == 0
    rc, r, j, d = rft.rfSendRecvRequest("GET", "/compute-ops-mgmt/v1beta1/settings")
    assert rc == 0
    assert len(tokenRequests(adapter)) == 1
    assert adapter.sent[-1].headers["Authorization"].startswith("Bearer ")
    assert rft.tokenStore.tokenExpires > datetime.datetime.now(pytz.utc)


def test_expired_token_is_renewed(rft, adapter):
    rft.rfSendRecvRequest("GET", "/compute-ops-mgmt/v1beta1/settings")
    rft.tokenStore.tokenExpires = datetime.datetime.now(pytz.utc) - datetime.timedelta(seconds=1)
    rc, r, j, d = rft.rfSendRecvRequest("GET", "/compute-ops-mgmt/v1beta1/settings")
    assert rc == 0
    assert len(tokenRequests(adapter)) == 2


def test_passed_in_token_skips_login(config, adapter, simState):
    simState.tokens.add("preissued")
    transport = ComTransport(rhost="us-west-api.compute.cloud.hpe.com", config=config,
                             tokenStore=ComTokenStore(accessToken="preissued"))
    transport.session.mount("https://", adapter)
    rc, r, j, d = transport.rfSendRecvRequest("GET", "/compute-ops-mgmt/v1beta1/settings")
    assert rc == 0
    assert tokenRequests(adapter) == []


def test_missing_credentials_returns_401(config, monkeypatch):
    monkeypatch.delenv("HPECOM_CLIENT_ID", raising=False)
    monkeypatch.delenv("HPECOM_CLIENT_SECRET", raising=False)
    transport = ComTransport(rhost="us-west-api.compute.cloud.hpe.com", config=config)
    rc, r, j, d = transport.rfSendRecvRequest("GET", "/compute-ops-mgmt/v1beta1/settings")
    assert rc == 401
    assert r is None


def test_rejected_credentials_return_token_status(config, monkeypatch):
    monkeypatch.setenv("HPECOM_CLIENT_ID", "someone")
    monkeypatch.setenv("HPECOM_CLIENT_SECRET", "wrong")
    from hpecom_settings.comSimulator import createApp
    from conftest import FlaskAdapter
    strictAdapter = FlaskAdapter(createApp(clients={"someone": "right"}))
    transport = ComTransport(rhost="us-west-api.compute.cloud.hpe.com", config=config)
    transport.session.mount("https://", strictAdapter)
    rc, r, j, d = transport.rfSendRecvRequest("GET", "/compute-ops-mgmt/v1beta1/settings")
    assert rc == 401
    assert transport.tokenStore.accessToken is None


def test_credentials_file_is_read(config, tmp_path, monkeypatch):
    monkeypatch.delenv("HPECOM_CLIENT_ID", raising=False)
    monkeypatch.delenv("HPECOM_CLIENT_SECRET", raising=False)
    credFile = tmp_path / "credentials"
    credFile.write_text("my-client:my:secret\n")
    config.credentialsPath = str(credFile)
    transport = ComTransport(rhost="us-west-api.compute.cloud.hpe.com", config=config)
    assert transport.tokenStore.clientId == "my-client"
    assert transport.tokenStore.clientSecret == "my:secret"


def test_collection_pages_are_concatenated(rft, adapter, simState):
    regionDb = simState.regionSettings("us-west")
    for i in range(5):
        regionDb[str(i)] = {"id": str(i), "name": "s{}".format(i), "category": "OS"}
    rc, r, j, d = rft.rfSendRecvRequest("GET", "/compute-ops-mgmt/v1beta1/settings")
    assert rc == 0
    assert j is True
    assert [x["name"] for x in d["items"]] == ["s0", "s1", "s2", "s3", "s4"]
    assert d["count"] == 5
    # token + 3 pages of 2
    assert len(adapter.sent) == 4


def test_not_found_returns_status_code(rft):
    rc, r, j, d = rft.rfSendRecvRequest("GET", "/compute-ops-mgmt/v1beta1/settings/missing")
    assert rc == 404
    assert r.status_code == 404
    assert d is None


def test_no_content_returns_none(rft, simState):
    simState.regionSettings("us-west")["abc"] = {"id": "abc", "name": "x", "category": "OS"}
    rc, r, j, d = rft.rfSendRecvRequest("DELETE", "/compute-ops-mgmt/v1beta1/settings/abc")
    assert rc == 0
    assert r.status_code == 204
    assert d is None


@pytest.mark.parametrize("exc,expectedRc", [
    (requests.exceptions.ConnectTimeout(), 5),
    (requests.exceptions.ReadTimeout(), 7),
    (requests.exceptions.ConnectionError(), 8),
    (requests.exceptions.TooManyRedirects(), 9),
])
def test_requests_exceptions_map_to_rc(config, exc, expectedRc):
    transport = ComTransport(rhost="us-west-api.compute.cloud.hpe.com", config=config,
                             tokenStore=ComTokenStore(accessToken="abc"))
    with patch.object(transport.session, "request", side_effect=exc):
        rc, r, j, d = transport.rfSendRecvRequest("GET", "/compute-ops-mgmt/v1beta1/settings")
    assert rc == expectedRc
    assert d is None


def test_bad_json_returns_rc_10(config):
    transport = ComTransport(rhost="us-west-api.compute.cloud.hpe.com", config=config,
                             tokenStore=ComTokenStore(accessToken="abc"))
    resp = MagicMock(status_code=200, text="<html>not json</html>")
    with patch.object(transport.session, "request", return_value=resp):
        rc, r, j, d = transport.rfSendRecvRequest("GET", "/compute-ops-mgmt/v1beta1/settings")
    assert rc == 10


def test_401_drops_the_token(config):
    transport = ComTransport(rhost="us-west-api.compute.cloud.hpe.com", config=config,
                             tokenStore=ComTokenStore(accessToken="revoked"))
    resp = MagicMock(status_code=401, text="")
    with patch.object(transport.session, "request", return_value=resp):
        rc, r, j, d = transport.rfSendRecvRequest("GET", "/compute-ops-mgmt/v1beta1/settings")
    assert rc == 401
    assert transport.tokenStore.accessToken is None


def test_headers_for_patch_can_be_overridden(rft):
    hdrs = rft.rfGetHeaders("PATCH", {"Content-Type": "application/merge-patch+json"})
    assert hdrs == {"Content-Type": "application/merge-patch+json", "Accept": "application/json"}
    assert rft.rfGetHeaders("GET") == {"Accept": "application/json"}
