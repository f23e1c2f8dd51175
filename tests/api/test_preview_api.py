"""Preview API 테스트"""

import json

import pytest
from fastapi.testclient import TestClient

CHECK_CONFIG = {
    "actor_id": "spain",
    "influences": [
        {"key": "courage", "kind": "support", "die_sides": 6, "count_factor": 1.0},
        {
            "key": "empathy",
            "kind": "support",
            "die_sides": 8,
            "count_factor": 0.5,
            "weight": 1.2,
        },
        {"key": "fear", "kind": "resist", "die_sides": 6, "count_factor": 0.5},
    ],
    "base_required": 2,
    "resist_to_extra_required": 0.5,
    "success_threshold": 5,
}

ACTOR_ATTRS = {"courage": 7, "empathy": 4, "fear": 3}


class TestImpactPreview:
    def test_apply_impacts(self, client: TestClient):
        response = client.post(
            "/preview/impacts",
            json={
                "snapshot": {
                    "characters": {"hero": {"courage": 50}},
                    "relationships": [
                        {"from_id": "hero", "to_id": "mentor", "metrics": {"trust": 10}}
                    ],
                },
                "impacts": [
                    {
                        "type": "character_attribute",
                        "character_id": "hero",
                        "field": "courage",
                        "op": "scale",
                        "value": 150,
                    },
                    {
                        "type": "relationship",
                        "from_id": "mentor",
                        "to_id": "hero",
                        "field": "fear",
                        "op": "add",
                        "value": -300,
                    },
                    {
                        "type": "flag",
                        "character_id": "hero",
                        "path": ["quest", "act1", "done"],
                        "value": True,
                    },
                ],
            },
        )
        assert response.status_code == 200
        snapshot = response.json()["snapshot"]
        hero = snapshot["characters"]["hero"]
        assert hero["courage"] == 75
        assert hero["traits_flags"] == {"quest": {"act1": {"done": True}}}
        pairs = {(r["from_id"], r["to_id"]): r["metrics"] for r in snapshot["relationships"]}
        assert pairs[("hero", "mentor")]["trust"] == 10
        assert pairs[("mentor", "hero")]["fear"] == -100

    def test_empty_request(self, client: TestClient):
        response = client.post("/preview/impacts", json={})
        assert response.status_code == 200
        assert response.json()["snapshot"] == {"characters": {}, "relationships": []}

    def test_malformed_impact_returns_422(self, client: TestClient):
        response = client.post(
            "/preview/impacts",
            json={"impacts": [{"type": "teleport", "character_id": "hero"}]},
        )
        assert response.status_code == 422
        detail = response.json()["detail"]
        assert detail["payload"] == "impacts"
        assert detail["errors"]


class TestCheckPreview:
    def test_seeded_check_is_reproducible(self, client: TestClient):
        body = {"config": CHECK_CONFIG, "actor_attrs": ACTOR_ATTRS, "seed": 42}
        first = client.post("/preview/check", json=body).json()
        second = client.post("/preview/check", json=body).json()

        assert first == second
        assert first["required_successes"] == 3
        assert [r["key"] for r in first["rolls"]] == ["courage", "empathy", "fear"]
        assert len(first["rolls"][0]["rolled"]) == 7
        assert len(first["rolls"][1]["rolled"]) == 2
        assert first["rolls"][2]["rolled"] == []
        assert first["success"] == (first["successes"] >= 3)

    def test_no_influences(self, client: TestClient):
        config = dict(CHECK_CONFIG, influences=[], base_required=0)
        response = client.post("/preview/check", json={"config": config})
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "successes": 0,
            "required_successes": 0,
            "rolls": [],
        }

    def test_invalid_config_returns_422(self, client: TestClient):
        config = dict(CHECK_CONFIG, base_required=-3)
        response = client.post("/preview/check", json={"config": config})
        assert response.status_code == 422
        assert response.json()["detail"]["payload"] == "check config"

    @pytest.mark.parametrize("token", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_count_factor_returns_422(self, client: TestClient, token):
        config = json.loads(json.dumps(CHECK_CONFIG))
        config["influences"][0]["count_factor"] = "__BAD__"
        raw = json.dumps({"config": config, "actor_attrs": ACTOR_ATTRS})
        raw = raw.replace('"__BAD__"', token)

        response = client.post(
            "/preview/check",
            content=raw,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422
        assert response.json()["detail"]["payload"] == "check config"


class TestEventPreview:
    def test_event_preview(self, client: TestClient):
        response = client.post(
            "/preview/event",
            json={
                "config": CHECK_CONFIG,
                "actor_attrs": ACTOR_ATTRS,
                "update_rules": {
                    "courage": {"key": "courage", "base_scale": 0.4},
                    "empathy": {
                        "key": "empathy",
                        "base_scale": 0.3,
                        "failure_sign": -0.5,
                    },
                },
                "seed": 7,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["outcome_tier"] in {
            "great_success",
            "success",
            "mixed",
            "failure",
            "disaster",
        }
        assert [d["key"] for d in data["deltas"]] == ["courage", "empathy"]
        assert data["check"]["required_successes"] == 3

    def test_invalid_update_rules_returns_422(self, client: TestClient):
        response = client.post(
            "/preview/event",
            json={
                "config": CHECK_CONFIG,
                "update_rules": {"courage": {"key": "courage"}},
            },
        )
        assert response.status_code == 422
        assert response.json()["detail"]["payload"] == "update rules"

    def test_non_finite_base_scale_returns_422(self, client: TestClient):
        raw = json.dumps(
            {
                "config": CHECK_CONFIG,
                "actor_attrs": ACTOR_ATTRS,
                "update_rules": {"courage": {"key": "courage", "base_scale": "__BAD__"}},
            }
        ).replace('"__BAD__"', "Infinity")

        response = client.post(
            "/preview/event",
            content=raw,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422
        assert response.json()["detail"]["payload"] == "update rules"
