"""Partnership state machine and partner weight comparison."""

API = "/api/v1"


def _request(client, requester, recipient):
    return client.post(f"{API}/partners", json={"partner_id": recipient["id"]}, headers=requester["headers"])


def _overview(client, user):
    response = client.get(f"{API}/partners", headers=user["headers"])
    assert response.status_code == 200
    return response.json()


class TestRequest:
    def test_request_creates_pending(self, client, alice, bob):
        response = _request(client, alice, bob)
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "PENDING"
        assert data["user_id"] == alice["id"]
        assert data["partner_id"] == bob["id"]

        pending = _overview(client, bob)["pending_requests"]
        assert [p["id"] for p in pending] == [data["id"]]
        assert pending[0]["user"]["name"] == "Alice"
        # Requester does not see their own outgoing request as pending
        assert _overview(client, alice)["pending_requests"] == []

    def test_reverse_request_conflicts(self, client, alice, bob):
        assert _request(client, alice, bob).status_code == 200
        response = _request(client, bob, alice)
        assert response.status_code == 400
        assert response.json()["detail"] == "Partnership already exists"
        assert _request(client, alice, bob).status_code == 400

    def test_missing_partner_id(self, client, alice):
        response = client.post(f"{API}/partners", json={}, headers=alice["headers"])
        assert response.status_code == 400
        assert response.json()["detail"] == "Partner ID is required"

    def test_self_request(self, client, alice):
        assert _request(client, alice, alice).status_code == 400

    def test_unknown_partner(self, client, alice):
        ghost = {"id": "00000000-0000-0000-0000-000000000099"}
        assert _request(client, alice, ghost).status_code == 404


class TestAcceptRejectRemove:
    def test_requester_cannot_accept(self, client, alice, bob):
        partnership_id = _request(client, alice, bob).json()["id"]
        response = client.post(f"{API}/partners/{partnership_id}/accept", headers=alice["headers"])
        assert response.status_code == 404

    def test_accept_then_remove(self, client, alice, bob):
        partnership_id = _request(client, alice, bob).json()["id"]
        response = client.post(f"{API}/partners/{partnership_id}/accept", headers=bob["headers"])
        assert response.status_code == 200
        assert response.json()["status"] == "ACCEPTED"

        alice_partners = _overview(client, alice)["partners"]
        bob_partners = _overview(client, bob)["partners"]
        assert [(p["partner_id"], p["name"]) for p in alice_partners] == [(bob["id"], "Bob")]
        assert [(p["partner_id"], p["name"]) for p in bob_partners] == [(alice["id"], "Alice")]
        assert _overview(client, bob)["pending_requests"] == []

        # Accepting twice is no longer a pending request
        assert client.post(f"{API}/partners/{partnership_id}/accept", headers=bob["headers"]).status_code == 404

        response = client.delete(f"{API}/partners/{partnership_id}", headers=bob["headers"])
        assert response.status_code == 200
        assert _overview(client, alice)["partners"] == []
        assert _overview(client, bob)["partners"] == []

    def test_requester_can_remove_accepted(self, client, alice, bob):
        partnership_id = _request(client, alice, bob).json()["id"]
        client.post(f"{API}/partners/{partnership_id}/accept", headers=bob["headers"])
        assert client.delete(f"{API}/partners/{partnership_id}", headers=alice["headers"]).status_code == 200

    def test_remove_pending_is_not_found(self, client, alice, bob):
        partnership_id = _request(client, alice, bob).json()["id"]
        assert client.delete(f"{API}/partners/{partnership_id}", headers=alice["headers"]).status_code == 404

    def test_outsider_cannot_remove(self, client, make_user, alice, bob):
        carol = make_user("Carol")
        partnership_id = _request(client, alice, bob).json()["id"]
        client.post(f"{API}/partners/{partnership_id}/accept", headers=bob["headers"])
        assert client.delete(f"{API}/partners/{partnership_id}", headers=carol["headers"]).status_code == 404

    def test_put_accept(self, client, alice, bob):
        partnership_id = _request(client, alice, bob).json()["id"]
        response = client.put(
            f"{API}/partners/{partnership_id}", json={"status": "ACCEPTED"}, headers=bob["headers"]
        )
        assert response.status_code == 200
        assert response.json()["status"] == "ACCEPTED"

    def test_put_reject_deletes_request(self, client, alice, bob):
        partnership_id = _request(client, alice, bob).json()["id"]
        response = client.put(
            f"{API}/partners/{partnership_id}", json={"status": "REJECTED"}, headers=bob["headers"]
        )
        assert response.status_code == 200
        assert response.json() == {"message": "Partnership request rejected"}
        assert _overview(client, bob)["pending_requests"] == []
        # The pair is free again, in either direction
        assert _request(client, bob, alice).status_code == 200

    def test_put_invalid_status(self, client, alice, bob):
        partnership_id = _request(client, alice, bob).json()["id"]
        response = client.put(
            f"{API}/partners/{partnership_id}", json={"status": "MAYBE"}, headers=bob["headers"]
        )
        assert response.status_code == 400

    def test_requester_cannot_reject(self, client, alice, bob):
        partnership_id = _request(client, alice, bob).json()["id"]
        response = client.put(
            f"{API}/partners/{partnership_id}", json={"status": "REJECTED"}, headers=alice["headers"]
        )
        assert response.status_code == 404


class TestPartnerWeights:
    def test_only_accepted_partners_histories(self, client, make_user, alice, bob):
        carol = make_user("Carol")
        accepted = _request(client, alice, bob).json()["id"]
        client.post(f"{API}/partners/{accepted}/accept", headers=bob["headers"])
        _request(client, carol, alice)  # still pending

        for day, value in (("2024-05-01", 90), ("2024-05-02", 89.5)):
            client.post(f"{API}/weight", json={"value": value, "date": day}, headers=bob["headers"])
        client.post(f"{API}/weight", json={"value": 60, "date": "2024-05-01"}, headers=carol["headers"])
        client.post(f"{API}/weight", json={"value": 70, "date": "2024-05-01"}, headers=alice["headers"])

        response = client.get(f"{API}/partners/weights", headers=alice["headers"])
        assert response.status_code == 200
        histories = response.json()["partner_weights"]
        assert len(histories) == 1
        assert histories[0]["partner_id"] == bob["id"]
        assert histories[0]["partner_name"] == "Bob"
        assert histories[0]["weights"] == [
            {"date": "2024-05-02", "value": 89.5},
            {"date": "2024-05-01", "value": 90},
        ]

        # Symmetric: Bob sees Alice
        histories = client.get(f"{API}/partners/weights", headers=bob["headers"]).json()["partner_weights"]
        assert [(h["partner_id"], [w["value"] for w in h["weights"]]) for h in histories] == [
            (alice["id"], [70])
        ]

    def test_no_partners(self, client, alice):
        response = client.get(f"{API}/partners/weights", headers=alice["headers"])
        assert response.json() == {"partner_weights": []}


class TestPairConstraint:
    def test_reverse_request_rejected_by_store(self, client, alice, bob, monkeypatch):
        async def _missing(*args, **kwargs):
            return False

        monkeypatch.setattr("weighin.services.partnerships._pair_exists", _missing)
        assert _request(client, alice, bob).status_code == 200
        response = _request(client, bob, alice)
        assert response.status_code == 400
        assert response.json()["detail"] == "Partnership already exists"
        assert len(_overview(client, bob)["pending_requests"]) == 1
