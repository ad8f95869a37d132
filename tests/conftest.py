from urllib.parse import urlparse

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from hpecom_settings.comConfig import ComConfig
from hpecom_settings.comRoot import ComRoot
from hpecom_settings.comSimulator import createApp


class FlaskAdapter(BaseAdapter):
    """Routes requests sent through a requests.Session into a Flask test client."""

    def __init__(self, app):
        super().__init__()
        self.client = app.test_client()
        self.sent = []

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.sent.append(request)
        url = urlparse(request.url)
        # a Host header set by the transport names the virtual host, as it would for a real server
        host = request.headers.get("Host", url.netloc)
        headers = {k: v for k, v in request.headers.items() if k.lower() not in ("content-length", "host")}
        resp = self.client.open(url.path, method=request.method, base_url="{}://{}".format(url.scheme, host),
                                query_string=url.query, headers=headers, data=request.body)
        r = requests.Response()
        r.status_code = resp.status_code
        r._content = resp.get_data()
        r.headers = CaseInsensitiveDict(resp.headers)
        r.url = request.url
        r.request = request
        r.reason = resp.status.split(" ", 1)[1] if " " in resp.status else ""
        r.encoding = "utf-8"
        return r

    def close(self):
        pass


@pytest.fixture
def simApp():
    # a small page size so collection paging is exercised
    return createApp(pageLimit=2)


@pytest.fixture
def adapter(simApp):
    return FlaskAdapter(simApp)


@pytest.fixture
def config():
    cfg = ComConfig()
    cfg.regions = ["us-west", "eu-central"]
    cfg.credentialsPath = None
    cfg.isLocal = True
    cfg.printLogMsgs = False
    return cfg


@pytest.fixture
def rdr(config, adapter, monkeypatch):
    monkeypatch.setenv("HPECOM_CLIENT_ID", "test-client")
    monkeypatch.setenv("HPECOM_CLIENT_SECRET", "test-secret")
    return mountAdapter(ComRoot(config), adapter)


# route every transport the root creates through the simulator adapter
def mountAdapter(root, adapter):
    origGetTransport = root.getTransport

    def getTransport(region):
        rft = origGetTransport(region)
        rft.session.mount("https://", adapter)
        rft.session.mount("http://", adapter)
        return rft

    root.getTransport = getTransport
    return root


@pytest.fixture
def simState(simApp):
    return simApp.config["COM_STATE"]


@pytest.fixture
def simRdr(config, adapter, monkeypatch):
    # every region's transport targets the one simulator netloc
    monkeypatch.setenv("HPECOM_CLIENT_ID", "test-client")
    monkeypatch.setenv("HPECOM_CLIENT_SECRET", "test-secret")
    config.isSimulator = True
    return mountAdapter(ComRoot(config), adapter)
