from fastapi.testclient import TestClient


def _checkout_body(**overrides):
    body = {"bookingId": "b1", "bookingEmail": "a@x.com", "bookingName": "Wedding Stage", "cost": "150"}
    body.update(overrides)
    return body


def test_create_checkout_session_returns_url(client: TestClient, provider):
    res = client.post("/create-checkout-session", json=_checkout_body())
    assert res.status_code == 200
    assert res.json() == {"url": "https://checkout.stripe.test/pay/cs_test_1"}

    sent = provider.created[0]
    assert sent["line_items"][0]["price_data"]["unit_amount"] == 15000
    assert sent["line_items"][0]["quantity"] == 1
    assert sent["metadata"]["bookingId"] == "b1"
    assert sent["success_url"].endswith("session_id={CHECKOUT_SESSION_ID}")


def test_create_checkout_session_rejects_invalid_cost(client: TestClient, provider):
    res = client.post("/create-checkout-session", json=_checkout_body(cost="free"))
    assert res.status_code == 400
    assert res.json()["success"] is False
    assert "cost" in res.json()["message"]
    assert provider.created == []


def test_create_checkout_session_missing_field(client: TestClient):
    body = _checkout_body()
    body.pop("bookingId")
    res = client.post("/create-checkout-session", json=body)
    assert res.status_code == 400
    assert res.json()["success"] is False


def test_create_checkout_session_provider_failure(client: TestClient, provider):
    provider.fail_create = True
    res = client.post("/create-checkout-session", json=_checkout_body())
    assert res.status_code == 502
    assert res.json() == {"success": False, "message": "Stripe session creation failed"}


def test_checkout_then_confirm_round_trip(client: TestClient, db, provider):
    db.seed("bookings", {"id": "b1", "email": "a@x.com", "service_name": "Wedding Stage", "status": "pending"})
    client.post("/create-checkout-session", json=_checkout_body())
    provider.complete("cs_test_1", payment_intent="pi_123")

    res = client.patch("/payments-success", params={"session_id": "cs_test_1"})

    assert res.status_code == 200
    data = res.json()
    assert data["success"] is True
    assert data["transactionId"] == "pi_123"
    assert data["price"] == 150
    assert data["services"] == "Wedding Stage"
    assert data["trackingId"].startswith("TRK-")

    booking = db.tables["bookings"][0]
    assert booking["status"] == "Paid"
    assert booking["tracking_id"] == data["trackingId"]

    replay = client.patch("/payments-success", params={"session_id": "cs_test_1"})
    assert replay.status_code == 200
    assert replay.json()["trackingId"] == data["trackingId"]
    assert len(db.tables["payments"]) == 1


def test_confirm_unpaid_session(client: TestClient, db, provider):
    db.seed("bookings", {"id": "b1", "status": "pending"})
    client.post("/create-checkout-session", json=_checkout_body())

    res = client.patch("/payments-success", params={"session_id": "cs_test_1"})

    assert res.status_code == 400
    assert res.json() == {"success": False, "message": "Payment not completed"}
    assert db.tables["bookings"][0]["status"] == "pending"


def test_confirm_without_session_id(client: TestClient):
    res = client.patch("/payments-success")
    assert res.status_code == 400
    assert res.json()["message"] == "Session ID is required"


def test_confirm_unknown_session(client: TestClient):
    res = client.patch("/payments-success", params={"session_id": "cs_nope"})
    assert res.status_code == 502


def test_confirm_storage_failure(client: TestClient, db, provider):
    provider.add_session("cs_x", payment_status="paid", payment_intent="pi_9",
                         amount_total=5000, metadata={"bookingId": "b1", "bookingName": "Stage"})
    db.fail("payments", "upsert")
    res = client.patch("/payments-success", params={"session_id": "cs_x"})
    assert res.status_code == 500
    assert res.json() == {"success": False, "message": "Payment processing failed"}


def test_list_payments_by_email(client: TestClient, db):
    db.seed("payments",
            {"transaction_id": "pi_1", "customer_email": "a@x.com", "paid_at": "2024-01-01T00:00:00"},
            {"transaction_id": "pi_2", "customer_email": "a@x.com", "paid_at": "2024-02-01T00:00:00"},
            {"transaction_id": "pi_3", "customer_email": "b@x.com", "paid_at": "2024-03-01T00:00:00"})

    res = client.get("/payments", params={"email": "a@x.com"})
    assert res.status_code == 200
    assert [p["transaction_id"] for p in res.json()] == ["pi_2", "pi_1"]
    assert len(client.get("/payments").json()) == 3
