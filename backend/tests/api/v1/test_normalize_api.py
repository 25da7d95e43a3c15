from waste_intake.domain.normalize import ITEMS_MISSING, normalize_request
from tests.request_scenario_factory import CATALOG_LOCATIONS, RequestScenarioFactory


class TestNormalizeAPI:
    def test_normalize_api_complete_payload(self, client):
        payload = RequestScenarioFactory.complete()

        r = client.post("/v1/normalize", json=payload)
        data = r.json()

        assert r.status_code == 200
        assert data["warnings"] == []
        assert data["request"] == payload

    def test_normalize_api_matches_domain_result(self, client):
        payload = RequestScenarioFactory.partial_location()

        r = client.post("/v1/normalize", params={"seed": "s1"}, json=payload)

        assert r.status_code == 200
        assert r.json() == normalize_request(payload, seed="s1").to_payload()

    def test_normalize_api_derives_seed_when_omitted(self, client):
        r1 = client.post("/v1/normalize", json={"wasteItems": []})
        r2 = client.post("/v1/normalize", json={"wasteItems": []})

        assert r1.status_code == 200
        assert r1.json() == r2.json()
        assert ITEMS_MISSING in r1.json()["warnings"]

    def test_normalize_api_empty_body(self, client):
        r = client.post("/v1/normalize")
        data = r.json()

        assert r.status_code == 200
        assert data["request"]["companyId"].startswith("ANON-")
        assert 1 <= len(data["request"]["wasteItems"]) <= 2

    def test_normalize_api_non_object_body(self, client):
        r = client.post("/v1/normalize", json=[1, 2, 3])

        assert r.status_code == 200
        assert r.json()["request"]["companySize"] == "SME"

    def test_normalize_api_nan_coordinates_are_replaced(self, client):
        body = (
            b'{"wasteItems": [{"material": "steel", "quantity": 1, "unit": "kg",'
            b' "location": {"lat": NaN, "lon": 20, "address": "X"}}]}'
        )

        r = client.post(
            "/v1/normalize",
            params={"seed": "n"},
            content=body,
            headers={"Content-Type": "application/json"},
        )
        location = r.json()["request"]["wasteItems"][0]["location"]

        assert r.status_code == 200
        assert location["lat"] in {lat for lat, _, _ in CATALOG_LOCATIONS}
        assert location["lon"] == 20

    def test_normalize_api_invalid_json_returns_422(self, client):
        r = client.post(
            "/v1/normalize",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert r.status_code == 422

    def test_v1_health(self, client):
        r = client.get("/v1/health")
        assert r.status_code == 200
        assert r.json() == {"status": "ok"}
