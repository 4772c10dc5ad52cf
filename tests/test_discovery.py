import httpx
import pytest

from hornbill_apilib import get_url_from_name
from hornbill_apilib.adapters.discovery import fetch_zoneinfo, zoneinfo_urls

PRIMARY = "files.hornbill.com"
BACKUP = "files.hornbill.co"


def zoneinfo(**fields):
    data = {
        "clusterFqn": "hhq-p02",
        "releaseStream": "live",
        "endpoint": "https://x/",
        "message": "Success",
    }
    data.update(fields)
    return {"zoneinfo": data}


class Hosts:
    """Routes discovery requests by host and records every URL hit."""

    def __init__(self, **responses):
        self.responses = responses
        self.seen: list[httpx.Request] = []

    def __call__(self, request):
        self.seen.append(request)
        response = self.responses[request.url.host.replace(".", "_")]
        if isinstance(response, Exception):
            raise response
        # Fresh copy: the reachability check and the lookup may hit the same host.
        return httpx.Response(response.status_code, headers=response.headers, content=response.content)

    def transport(self):
        return httpx.MockTransport(self)


def test_zoneinfo_urls():
    assert zoneinfo_urls("demo") == (
        "https://files.hornbill.com/instances/demo/zoneinfo",
        "https://files.hornbill.co/instances/demo/zoneinfo",
    )


def test_primary_timeout_falls_back_to_backup():
    hosts = Hosts(
        files_hornbill_com=httpx.ConnectTimeout("timed out"),
        files_hornbill_co=httpx.Response(200, json=zoneinfo()),
    )

    assert get_url_from_name("demo", transport=hosts.transport()) == "https://x/xmlmc/"
    assert [r.url.host for r in hosts.seen] == [PRIMARY, BACKUP]
    assert hosts.seen[-1].url.path == "/instances/demo/zoneinfo"


def test_primary_non_200_falls_back_to_backup():
    hosts = Hosts(
        files_hornbill_com=httpx.Response(503),
        files_hornbill_co=httpx.Response(200, json=zoneinfo(apiEndpoint="https://api.x/demo/xmlmc/")),
    )

    assert get_url_from_name("demo", transport=hosts.transport()) == "https://api.x/demo/xmlmc/"


def test_healthy_primary_is_used():
    hosts = Hosts(files_hornbill_com=httpx.Response(200, json=zoneinfo(apiEndpoint="https://api.x/xmlmc/")))

    assert get_url_from_name("demo", transport=hosts.transport()) == "https://api.x/xmlmc/"
    assert [r.url.host for r in hosts.seen] == [PRIMARY, PRIMARY]
    assert hosts.seen[-1].headers["User-Agent"] == "hornbill-apilib-discovery/1.1"


def test_old_document_without_optional_fields():
    document = {"zoneinfo": {"endpoint": "https://x/", "message": "Success"}}
    hosts = Hosts(files_hornbill_com=httpx.Response(200, json=document))

    assert get_url_from_name("demo", transport=hosts.transport()) == "https://x/xmlmc/"


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json=zoneinfo(message="Instance not found")),
        httpx.Response(200, text="not json"),
        httpx.Response(200, json={"unexpected": True}),
    ],
)
def test_unusable_document_is_none(response):
    hosts = Hosts(files_hornbill_com=response)

    assert get_url_from_name("demo", transport=hosts.transport()) is None


def test_both_hosts_down_is_none():
    hosts = Hosts(
        files_hornbill_com=httpx.ConnectError("refused"),
        files_hornbill_co=httpx.ConnectError("refused"),
    )

    assert get_url_from_name("demo", transport=hosts.transport()) is None


def test_fetch_zoneinfo_exposes_document():
    hosts = Hosts(files_hornbill_com=httpx.Response(200, json=zoneinfo()))

    document = fetch_zoneinfo("demo", transport=hosts.transport())

    assert document is not None
    assert document.zoneinfo.cluster_fqn == "hhq-p02"
    assert document.zoneinfo.release_stream == "live"
    assert document.zoneinfo.ok


def test_redirected_primary_is_followed():
    def handler(request):
        if request.url.host == BACKUP:
            return httpx.Response(200, json=zoneinfo(endpoint="https://b/"))
        if request.url.path == "/moved/demo":
            return httpx.Response(200, json=zoneinfo(endpoint="https://p/"))
        return httpx.Response(301, headers={"Location": "https://files.hornbill.com/moved/demo"})

    assert get_url_from_name("demo", transport=httpx.MockTransport(handler)) == "https://p/xmlmc/"


def test_invalid_environment_settings_give_none(monkeypatch):
    monkeypatch.setenv("HORNBILL_DISCOVERY_TIMEOUT_SECONDS", "-1")
    hosts = Hosts(files_hornbill_com=httpx.Response(200, json=zoneinfo()))

    assert get_url_from_name("demo", transport=hosts.transport()) is None
    assert hosts.seen == []
