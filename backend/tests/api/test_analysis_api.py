import pytest
from fastapi.testclient import TestClient

from fakes import FakePage, make_session
from pageaudit.api import deps
from pageaudit.core.analyzer import PageAnalyzer
from pageaudit.core.config import Settings
from pageaudit.core.errors import NavigationFailed
from pageaudit.main import app

PAGE_HTML = "<html lang='en'><head><title>Hi</title></head><body><h1>Hi</h1></body></html>"


class FailingAnalyzer:
    def __init__(self, error):
        self.error = error

    async def analyze(self, target_url, quick_mode=False):
        raise self.error


@pytest.fixture
def client():
    # Created without the context manager so startup does not launch a browser
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_analyze_returns_report(client):
    session = make_session(lambda: FakePage(html=PAGE_HTML))
    config = Settings(SETTLE_DELAY=0, QUICK_SETTLE_DELAY=0)
    app.dependency_overrides[deps.get_analyzer] = lambda: PageAnalyzer(session, config=config)

    response = client.post("/analyze", json={"targetUrl": "example.com", "quickMode": True})

    assert response.status_code == 200
    data = response.json()
    assert data["url"] == "https://example.com"
    assert data["seo"]["title"] == "Hi"
    assert data["seoScore"]["score"] == 100 - 15 - 5 - 5 - 5 - 10
    assert data["meta"]["quickMode"] is True
    assert isinstance(data["screenshot"], str)


@pytest.mark.parametrize("body", [{"targetUrl": "   "}, {"targetUrl": None}, {}])
def test_analyze_requires_url(client, body):
    response = client.post("/analyze", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "URL required"}


def test_analyze_reports_timeout(client):
    error = NavigationFailed(
        "https://slow.example/",
        [("networkidle", "Timeout 30000ms exceeded."), ("load", "Timeout 30000ms exceeded.")],
    )
    app.dependency_overrides[deps.get_analyzer] = lambda: FailingAnalyzer(error)

    response = client.post("/analyze", json={"targetUrl": "slow.example"})

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Timeout Error"
    assert "networkidle: Timeout 30000ms exceeded." in body["technicalDetails"]


def test_analyze_reports_dns_error(client):
    error = NavigationFailed("https://nope.invalid/", [("load", "net::ERR_NAME_NOT_RESOLVED")])
    app.dependency_overrides[deps.get_analyzer] = lambda: FailingAnalyzer(error)

    response = client.post("/analyze", json={"targetUrl": "nope.invalid"})

    assert response.status_code == 500
    assert response.json()["error"] == "DNS Error"


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["browserActive"] is False
    assert body["uptime"] >= 0
