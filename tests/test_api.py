"""
API tests with dependency overrides (no network, temp-file SQLite).

The lifespan is not entered: Redis and the app database are never touched.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from coindash.db.database import get_db
from coindash.db.models import Base
from coindash.main import app
from coindash.schemas.insights import AIRiskAnalysis
from coindash.services.base import ExternalAPIError, RateLimitError, ServiceError
from coindash.services.dashboard import DashboardSession, get_dashboard_session, select_asset
from coindash.services.data_ingestion import get_market_data_service
from coindash.services.llm import get_risk_analysis_service

from tests.conftest import FakeMarketDataService, make_history


class FakeAnalysisService:
    def __init__(self, error: ServiceError = None):
        self.error = error
        self.calls = []

    async def execute(self, stats):
        self.calls.append(stats.id)
        if self.error:
            raise self.error
        return AIRiskAnalysis(
            asset_id=stats.id,
            risk_level="Medium",
            return_potential="High",
            justification="Large and liquid.",
            model="fake-model",
            generated_at="2024-06-01T00:00:00Z",
        )


def sqlite_dependency(path):
    async def _get_db():
        engine = create_async_engine(f"sqlite+aiosqlite:///{path}")
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        maker = async_sessionmaker(engine, expire_on_commit=False)
        async with maker() as session:
            yield session
            await session.commit()
        await engine.dispose()

    return _get_db


@pytest.fixture
def market():
    return FakeMarketDataService(history=make_history(range(1, 101)))


@pytest.fixture
def analysis():
    return FakeAnalysisService()


@pytest.fixture
def dashboard():
    return DashboardSession()


@pytest.fixture
def client(market, analysis, dashboard, tmp_path):
    app.dependency_overrides[get_market_data_service] = lambda: market
    app.dependency_overrides[get_dashboard_session] = lambda: dashboard
    app.dependency_overrides[get_risk_analysis_service] = lambda: analysis
    app.dependency_overrides[get_db] = sqlite_dependency(tmp_path / "test.db")
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["cache"] == "memory"
    assert isinstance(data["ai_insights"], bool)


# =============================================================================
# MARKET
# =============================================================================


def test_bootstrap(client):
    data = client.get("/api/v1/market/bootstrap").json()

    assert [a["id"] for a in data["assets"]] == ["bitcoin", "ethereum", "dogecoin"]
    assert len(data["markets"]) == 3
    assert data["errors"] == []


def test_history_passes_period(client, market):
    response = client.get("/api/v1/market/bitcoin/history", params={"period": "7"})

    assert response.status_code == 200
    assert market.history_calls[-1] == ("bitcoin", "7")


def test_history_default_period_is_one_year(client, market):
    client.get("/api/v1/market/bitcoin/history")

    assert market.history_calls[-1] == ("bitcoin", "365")


def test_invalid_period_rejected(client):
    assert client.get("/api/v1/market/bitcoin/history", params={"period": "14"}).status_code == 422


def test_rate_limit_maps_to_429(client, market):
    market.error = RateLimitError("CoinGecko", "API rate limit reached, try again shortly")

    response = client.get("/api/v1/market/markets")

    assert response.status_code == 429
    assert response.json()["detail"] == "API rate limit reached, try again shortly"


def test_provider_error_maps_to_502(client, market):
    market.error = ExternalAPIError("CoinGecko", "coin not found")

    response = client.get("/api/v1/market/bitcoin/history")

    assert response.status_code == 502
    assert response.json()["detail"] == "coin not found"


# =============================================================================
# INDICATORS / RISK
# =============================================================================


def test_indicators(client):
    data = client.get("/api/v1/indicators/bitcoin").json()

    snapshot = data["snapshot"]
    assert data["period"] == "365"
    assert len(snapshot["sma20"]) == 81
    assert len(snapshot["sma50"]) == 51
    assert len(snapshot["rsi"]) == 86
    assert snapshot["support"] == 11.0
    assert snapshot["resistance"] == 100.0
    assert [d["label"] for d in data["chart"]["datasets"]] == [
        "Price",
        "SMA 20",
        "SMA 50",
        "RSI",
        "Volume",
    ]


def test_levels(client):
    data = client.get("/api/v1/indicators/bitcoin/levels").json()

    assert data == {
        "asset_id": "bitcoin",
        "support": 11.0,
        "resistance": 100.0,
        "current_price": 100.0,
    }


def test_levels_empty_series(client, market):
    market.history = None

    data = client.get("/api/v1/indicators/dogecoin/levels", params={"period": "1"}).json()

    assert data == {
        "asset_id": "dogecoin",
        "support": None,
        "resistance": None,
        "current_price": None,
    }
    assert market.history_calls[-1] == ("dogecoin", "1")


def test_risk_return(client):
    data = client.get("/api/v1/risk/risk-return").json()

    assert [p["name"] for p in data] == ["Bitcoin", "Ethereum", "New Coin"]
    assert data[0]["x"] == pytest.approx(0.025 * 365**0.5)
    assert data[2] == {"x": 0.0, "y": 0.0, "name": "New Coin", "image": None}


# =============================================================================
# FAVORITES
# =============================================================================


def test_favorites_flow(client):
    assert client.get("/api/v1/favorites/").json() == {"ids": [], "details": []}

    client.post("/api/v1/favorites/bitcoin/toggle")
    data = client.post("/api/v1/favorites/dogecoin/toggle").json()

    assert data["ids"] == ["bitcoin", "dogecoin"]
    assert data["details"][0]["image"] == "https://img/btc.png"
    assert data["details"][1]["id"] == "dogecoin"

    data = client.delete("/api/v1/favorites/bitcoin").json()
    assert data["ids"] == ["dogecoin"]

    data = client.post("/api/v1/favorites/dogecoin/toggle").json()
    assert data["ids"] == []


def test_favorites_survive_catalog_failure(client, market):
    client.post("/api/v1/favorites/bitcoin/toggle")
    market.error = ExternalAPIError("CoinGecko", "Network error: down")

    data = client.get("/api/v1/favorites/").json()

    assert data == {"ids": ["bitcoin"], "details": []}


# =============================================================================
# INSIGHTS
# =============================================================================


def test_insight(client, analysis):
    response = client.post("/api/v1/insights/bitcoin")

    assert response.status_code == 200
    data = response.json()
    assert data["analysis"]["risk_level"] == "Medium"
    assert data["is_mock_history"] is True
    price = data["chart"]["datasets"][0]
    assert price["label"] == "Price"
    assert price["data"][-1]["y"] == 64000.0
    assert analysis.calls == ["bitcoin"]


def test_insight_unknown_asset(client, analysis):
    response = client.post("/api/v1/insights/not-a-coin")

    assert response.status_code == 404
    assert analysis.calls == []


def test_insight_failure_message(client, analysis):
    analysis.error = ServiceError("RiskAnalysisService", "Failed to get AI analysis. Please try again.")

    response = client.post("/api/v1/insights/ethereum")

    assert response.status_code == 502
    assert response.json()["detail"] == "Failed to get AI analysis. Please try again."


def test_blank_favorite_rejected(client):
    response = client.post("/api/v1/favorites/%20/toggle")

    assert response.status_code == 422
    assert response.json()["detail"] == "Asset id must not be empty"


# =============================================================================
# DASHBOARD
# =============================================================================


class SelectionChangingMarketService(FakeMarketDataService):
    """Switches the dashboard to ethereum while a history fetch is running."""

    def __init__(self, dashboard: DashboardSession, **kwargs):
        super().__init__(**kwargs)
        self.dashboard = dashboard

    async def get_history(self, asset_id, period):
        self.dashboard.apply(select_asset(self.dashboard.state, "ethereum"))
        return await super().get_history(asset_id, period)


def test_dashboard_defaults(client):
    data = client.get("/api/v1/dashboard/").json()

    assert data == {
        "theme": "dark",
        "selected_asset": "bitcoin",
        "period": "365",
        "favorites": [],
        "is_favorite": False,
    }


def test_dashboard_theme_and_selection_drive_chart(client, market):
    assert client.post("/api/v1/dashboard/theme/toggle").json()["theme"] == "light"

    data = client.put(
        "/api/v1/dashboard/selection", params={"asset_id": "ethereum", "period": "7"}
    ).json()
    assert (data["theme"], data["selected_asset"], data["period"]) == ("light", "ethereum", "7")

    chart = client.get("/api/v1/dashboard/chart").json()
    assert market.history_calls[-1] == ("ethereum", "7")
    assert (chart["asset_id"], chart["period"]) == ("ethereum", "7")
    assert chart["chart"]["datasets"][0]["label"] == "Price"


def test_dashboard_period_only_keeps_asset(client):
    data = client.put("/api/v1/dashboard/selection", params={"period": "30"}).json()

    assert (data["selected_asset"], data["period"]) == ("bitcoin", "30")


def test_dashboard_favorites_share_the_store(client):
    data = client.post("/api/v1/dashboard/favorite/toggle").json()
    assert data["favorites"] == ["bitcoin"]
    assert data["is_favorite"] is True
    assert client.get("/api/v1/favorites/").json()["ids"] == ["bitcoin"]

    client.post("/api/v1/favorites/ethereum/toggle")
    assert client.get("/api/v1/dashboard/").json()["favorites"] == ["bitcoin", "ethereum"]

    data = client.delete("/api/v1/dashboard/favorites/bitcoin").json()
    assert data["favorites"] == ["ethereum"]
    assert data["is_favorite"] is False
    assert client.get("/api/v1/favorites/").json()["ids"] == ["ethereum"]


def test_dashboard_chart_discarded_when_selection_changes(client, dashboard):
    app.dependency_overrides[get_market_data_service] = lambda: SelectionChangingMarketService(
        dashboard, history=make_history(range(1, 101))
    )

    response = client.get("/api/v1/dashboard/chart")

    assert response.status_code == 409
    assert response.json()["detail"] == "Selection changed to ethereum (365) while loading"
    assert dashboard.state.selected_asset == "ethereum"


def test_dashboard_chart_provider_error(client, market):
    market.error = RateLimitError("CoinGecko", "API rate limit reached, try again shortly")

    assert client.get("/api/v1/dashboard/chart").status_code == 429


def test_dashboard_rejects_bad_selection(client):
    blank = client.put("/api/v1/dashboard/selection", params={"asset_id": " "})
    bad_period = client.put("/api/v1/dashboard/selection", params={"period": "14"})

    assert blank.status_code == 422
    assert bad_period.status_code == 422
    assert client.get("/api/v1/dashboard/").json()["selected_asset"] == "bitcoin"
