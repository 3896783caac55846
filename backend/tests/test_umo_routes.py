from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from ridealert.exceptions import BadRequest, NotFound, UpstreamError
from ridealert.main import app
from ridealert.services.normalizers import normalize_bundles, normalize_route, normalize_stop, to_stop_match


@patch("ridealert.core.singleton.transit_service.get_predictions", new_callable=AsyncMock)
def test_predictions_endpoint_returns_camel_case_bundles(mock_get_predictions, client):
    mock_get_predictions.return_value = normalize_bundles([{
        "serverTimestamp": 1700000000000,
        "route": {"id": "A", "title": "A Line"},
        "stop": {"id": "1234", "name": "Silo"},
        "values": [{"minutes": 3, "direction": {"destinationName": "Downtown"}}],
    }])

    response = client.get("/umo_routes/predictions", params={"stop": "1234"})

    assert response.status_code == 200
    mock_get_predictions.assert_awaited_once_with("1234", None)
    body = response.json()
    assert isinstance(body, list)
    assert body[0]["serverTimestamp"] == 1700000000000
    assert body[0]["predictions"][0]["direction"]["destinationName"] == "Downtown"
    assert body[0]["predictions"][0]["affectedByLayover"] is False
    assert body[0]["nextMinutes"] == 3


@patch("ridealert.core.singleton.transit_service.get_predictions", new_callable=AsyncMock)
def test_predictions_endpoint_passes_route(mock_get_predictions, client):
    mock_get_predictions.return_value = []
    response = client.get("/umo_routes/predictions", params={"stop": "1234", "route": "A"})
    assert response.status_code == 200
    mock_get_predictions.assert_awaited_once_with("1234", "A")


def test_predictions_endpoint_missing_stop_is_400(client):
    response = client.get("/umo_routes/predictions")
    assert response.status_code == 400
    assert response.json() == {"error": "Missing stop parameter"}


@patch("ridealert.core.singleton.transit_service.get_predictions_near", new_callable=AsyncMock)
def test_predictions_near_endpoint(mock_near, client):
    mock_near.return_value = []
    response = client.get("/umo_routes/predictions/near", params={"lat": "38.542100", "lon": "-121.749500", "limit": 5})
    assert response.status_code == 200
    assert response.json() == []
    mock_near.assert_awaited_once_with(38.5421, -121.7495, 5)


def test_predictions_near_missing_coordinate_is_400(client):
    response = client.get("/umo_routes/predictions/near", params={"lat": "38.54"})
    assert response.status_code == 400


@patch("ridealert.core.singleton.transit_service.list_routes", new_callable=AsyncMock)
def test_routes_endpoint(mock_list_routes, client):
    mock_list_routes.return_value = [normalize_route({"id": "A", "color": "ff0000"})]
    response = client.get("/umo_routes/routes")
    assert response.status_code == 200
    assert response.json() == [{
        "id": "A",
        "title": "Unknown",
        "description": None,
        "color": "ff0000",
        "textColor": None,
        "hidden": False,
        "timestamp": None,
    }]


@patch("ridealert.core.singleton.transit_service.list_stops", new_callable=AsyncMock)
def test_route_stops_endpoint(mock_list_stops, client):
    mock_list_stops.return_value = [normalize_stop({"id": "22273", "name": "MU"}, route_id="A")]
    response = client.get("/umo_routes/routes/A/stops")
    assert response.status_code == 200
    assert response.json()[0]["route"] == "A"
    assert response.json()[0]["showDestinationSelector"] is False
    mock_list_stops.assert_awaited_once_with("A")


@patch("ridealert.core.singleton.transit_service.search_stops", new_callable=AsyncMock)
def test_search_endpoint(mock_search, client):
    mock_search.return_value = [to_stop_match(normalize_stop({"id": "1", "name": "Silo"}, route_id="B"))]
    response = client.get("/umo_routes/stops/search", params={"query": "silo"})
    assert response.status_code == 200
    assert response.json() == [{"id": "1", "name": "Silo", "code": None, "route": "B"}]


def test_search_endpoint_missing_query_is_400(client):
    response = client.get("/umo_routes/stops/search")
    assert response.status_code == 400
    assert response.json() == {"error": "Missing query parameter"}


@patch("ridealert.core.singleton.transit_service.get_agency", new_callable=AsyncMock)
def test_agency_not_found_is_404(mock_get_agency, client):
    mock_get_agency.side_effect = NotFound("Unitrans agency not found")
    response = client.get("/umo_routes/agency")
    assert response.status_code == 404
    assert response.json() == {"error": "Unitrans agency not found"}


@patch("ridealert.core.singleton.transit_service.list_routes", new_callable=AsyncMock)
def test_upstream_error_is_502_with_details(mock_list_routes, client):
    mock_list_routes.side_effect = UpstreamError(503, "Service Unavailable")
    response = client.get("/umo_routes/routes")
    assert response.status_code == 502
    body = response.json()
    assert body["error"] == "UmoIQ error 503: Service Unavailable"
    assert body["details"] == {"status": 503, "body": "Service Unavailable"}


@patch("ridealert.core.singleton.transit_service.list_stops", new_callable=AsyncMock)
def test_bad_request_from_service_is_400(mock_list_stops, client):
    mock_list_stops.side_effect = BadRequest("Missing route parameter")
    response = client.get("/umo_routes/routes/%20/stops")
    assert response.status_code == 400


def test_health_and_test_endpoints(client):
    assert client.get("/health").json() == {"ok": True}
    assert client.get("/test").json() == {"message": "Test OK"}
    assert client.get("/").text == "API running"


def test_predictions_near_non_numeric_coordinate_is_400(client):
    response = client.get("/umo_routes/predictions/near", params={"lat": "abc", "lon": "-121.7495"})
    assert response.status_code == 400
    body = response.json()
    assert "detail" not in body
    assert "lat" in body["error"]


def test_predictions_near_zero_limit_is_400(client):
    response = client.get("/umo_routes/predictions/near", params={"lat": "38.54", "lon": "-121.75", "limit": 0})
    assert response.status_code == 400
    assert "limit" in response.json()["error"]


@patch("ridealert.main.cleanup_db")
def test_shutdown_releases_database_engine(mock_cleanup):
    with TestClient(app) as client:
        assert client.get("/health").status_code == 200
        mock_cleanup.assert_not_called()
    mock_cleanup.assert_called_once_with()
