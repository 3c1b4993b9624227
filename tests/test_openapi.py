def test_openapi_json_serves(api):
    r = api.get("/openapi.json")
    assert r.status_code == 200
    data = r.json()
    assert data.get("openapi")
    assert "/api/mlDataset" in data["paths"]
    assert "/api/mlDataset/{dataset_id}" in data["paths"]
    assert "/api/healthz" in data["paths"]
