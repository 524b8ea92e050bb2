import pytest


def add_amy(client):
    response = client.post(
        "/therapists",
        json={"id": "amy", "name": "Amy", "employmentType": "employed", "hourlyRate": 12},
    )
    assert response.status_code == 201
    return response


def test_healthcheck(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_create_and_list_therapists(client):
    add_amy(client)
    client.post("/therapists", json={"id": "beth", "name": "Beth", "employmentType": "self-employed"})

    therapists = client.get("/therapists").json()

    assert [t["id"] for t in therapists] == ["amy", "beth"]
    assert therapists[0]["hourlyRate"] == 12.0


def test_duplicate_therapist_rejected(client):
    add_amy(client)
    response = client.post(
        "/therapists",
        json={"id": "amy", "name": "Amy", "employmentType": "employed", "hourlyRate": 12},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Therapist already exists"


def test_employed_therapist_without_rate_rejected(client):
    response = client.post("/therapists", json={"id": "cat", "name": "Cat", "employmentType": "employed"})

    assert response.status_code == 422


def test_add_hours_and_list_newest_first(client):
    add_amy(client)
    client.post("/hours", json={"therapistId": "amy", "date": "2024-02-01", "hours": 8})
    created = client.post("/hours", json={"therapistId": "amy", "date": "2024-02-03", "hours": 7.5})

    assert created.status_code == 201
    listed = client.get("/hours/amy").json()
    assert [(h["date"], h["hours"]) for h in listed] == [("2024-02-03", 7.5), ("2024-02-01", 8.0)]


@pytest.mark.parametrize("hours", [0, -1])
def test_add_hours_rejects_non_positive(client, hours):
    add_amy(client)

    response = client.post("/hours", json={"therapistId": "amy", "date": "2024-02-01", "hours": hours})

    assert response.status_code == 422


def test_add_hours_unknown_therapist(client):
    response = client.post("/hours", json={"therapistId": "ghost", "date": "2024-02-01", "hours": 8})

    assert response.status_code == 404


def test_inconsistent_transaction_rejected(client):
    response = client.post(
        "/transactions",
        json={
            "id": "tx-1",
            "therapistId": "amy",
            "date": "2024-02-20T15:00:00",
            "items": [{"name": "Facial", "price": 45}],
            "subtotal": 50,
            "total": 50,
            "paymentMethod": "cash",
        },
    )

    assert response.status_code == 422


def test_commission_for_month(client):
    add_amy(client)
    for day in range(1, 21):
        client.post("/hours", json={"therapistId": "amy", "date": f"2024-02-{day:02d}", "hours": 8})
    response = client.post(
        "/transactions",
        json={
            "id": "tx-1",
            "therapistId": "amy",
            "customerId": "c1",
            "customerName": "Cara",
            "date": "2024-02-20T15:00:00",
            "items": [{"name": "Bridal package", "price": 3000}],
            "subtotal": 3000,
            "total": 3000,
            "paymentMethod": "card",
        },
    )
    assert response.status_code == 201

    result = client.get("/commission/amy", params={"period": "month", "reference": "2024-02-15"}).json()

    assert result["hours"] == 160.0
    assert result["wage"] == 1920.0
    assert result["holidayPay"] == 230.4
    assert result["employerNIC"] == 264.96
    assert result["commission"] == 58.46
    assert result["therapistShare"] == 1978.46
    assert result["salonShare"] == 1021.54
    assert result["periodEnd"].startswith("2024-02-29T23:59:59.999")

    custom = client.get("/commission/amy", params={"start": "2024-02-01", "end": "2024-02-10"}).json()
    assert custom["hours"] == 80.0

    summary = client.get("/commission/summary", params={"reference": "2024-02-15"}).json()
    assert summary[0]["therapist_id"] == "amy"
    assert summary[0]["therapist_share"] == 1978.46

    report = client.get(
        "/reports/revenue", params={"group_by": "customer", "reference": "2024-02-15"}
    ).json()
    assert report == [
        {"group_by": "customer", "key": "c1", "label": "Cara", "revenue": 3000.0, "transactions": 1, "items": 1}
    ]


def test_commission_unknown_therapist(client):
    response = client.get("/commission/ghost", params={"reference": "2024-02-15"})

    assert response.status_code == 404


def test_commission_partial_range_rejected(client):
    add_amy(client)

    response = client.get("/commission/amy", params={"start": "2024-02-01"})

    assert response.status_code == 422


def test_duplicate_transaction_rejected(client):
    body = {
        "id": "tx-1",
        "therapistId": "amy",
        "date": "2024-02-20T15:00:00",
        "items": [{"name": "Facial", "price": 45}],
        "subtotal": 45,
        "total": 45,
        "paymentMethod": "card",
    }

    assert client.post("/transactions", json=body).status_code == 201
    response = client.post("/transactions", json=body)

    assert response.status_code == 400
    assert response.json()["detail"] == "Transaction already exists"
    assert client.get("/health").status_code == 200
