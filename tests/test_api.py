from decimal import Decimal

API = "/api/v1"

def create(client, spot_id, employee_id, start, end=None, indefinite=False):
    payload = {
        "spot_id": spot_id,
        "employee_id": employee_id,
        "start_date": start,
        "is_indefinite": indefinite,
    }
    if end:
        payload["end_date"] = end
    return client.post(f"{API}/bookings/", json=payload)

def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}

def test_create_and_fetch_indefinite_booking(client, make_spot, make_employee):
    spot = make_spot()
    employee = make_employee(plates=["XY9999"])

    response = create(client, spot.id, employee.id, "2025-02-01", indefinite=True)
    assert response.status_code == 201
    body = response.json()
    assert body["booking_end"] == "9999-12-31"
    assert body["status"] == "confirmed"
    assert body["license_plate_used"] == "XY9999"

    fetched = client.get(f"{API}/bookings/{body['id']}").json()
    assert fetched["booking_end"] == "9999-12-31"

def test_end_date_required_unless_indefinite(client, make_spot, make_employee):
    response = create(client, make_spot().id, make_employee().id, "2025-02-01")
    assert response.status_code == 422

def test_conflicts_map_to_http_errors(client, make_spot, make_employee):
    s1, s2 = make_spot(), make_spot()
    e1, e2 = make_employee(), make_employee()
    assert create(client, s1.id, e1.id, "2025-01-05", "2025-01-20").status_code == 201

    occupied = create(client, s1.id, e2.id, "2025-01-10", "2025-01-12")
    assert occupied.status_code == 409
    assert occupied.json()["detail"]["kind"] == "SpotOccupied"

    double = create(client, s2.id, e1.id, "2025-01-10", "2025-01-15")
    assert double.status_code == 409
    assert double.json()["detail"]["kind"] == "EmployeeAlreadyBooked"

    invalid = create(client, s2.id, e2.id, "2025-01-15", "2025-01-10")
    assert invalid.status_code == 400
    assert invalid.json()["detail"]["kind"] == "InvalidRange"

    missing = create(client, 999, e2.id, "2025-01-15", "2025-01-20")
    assert missing.status_code == 404
    assert missing.json()["detail"]["kind"] == "NotFound"

def test_amend_and_delete(client, make_spot, make_employee):
    spot = make_spot()
    first = create(client, spot.id, make_employee().id, "2025-01-01", "2025-01-10").json()
    create(client, spot.id, make_employee().id, "2025-01-15", "2025-01-31")

    rejected = client.put(
        f"{API}/bookings/{first['id']}",
        json={"start_date": "2025-01-01", "end_date": "2025-01-20"}
    )
    assert rejected.status_code == 409

    amended = client.put(
        f"{API}/bookings/{first['id']}",
        json={"start_date": "2025-01-01", "end_date": "2025-01-14"}
    )
    assert amended.status_code == 200
    assert amended.json()["booking_end"] == "2025-01-14"

    assert client.delete(f"{API}/bookings/{first['id']}").status_code == 204
    assert client.delete(f"{API}/bookings/{first['id']}").status_code == 404
    assert client.get(f"{API}/bookings/{first['id']}").json()["is_deleted"] is True

    listed = client.get(f"{API}/bookings/").json()
    assert first["id"] not in [item["id"] for item in listed]

def test_spot_status_and_board(client, make_spot, make_employee):
    s1 = make_spot(zone="Zone A")
    make_spot(zone="Zone B", spot_type="Reserved (Paid) Parking")
    employee = make_employee(full_name="Alice Chan")
    create(client, s1.id, employee.id, "2025-01-01", "2025-01-10")
    upcoming = create(client, s1.id, make_employee().id, "2025-02-01", indefinite=True).json()

    status = client.get(f"{API}/inventory/spots/{s1.id}/status", params={"on_date": "2025-01-05"}).json()
    assert status["status"] == "Occupied"
    assert status["active_booking"]["employee_id"] == employee.id
    assert status["next_booking"]["id"] == upcoming["id"]

    free = client.get(f"{API}/inventory/spots/{s1.id}/status", params={"on_date": "2025-01-20"}).json()
    assert free["status"] == "Available"
    assert free["active_booking"] is None

    assert client.get(f"{API}/inventory/spots/999/status").status_code == 404

    board = client.get(f"{API}/inventory/board", params={"on_date": "2025-01-05"}).json()
    assert board["total"] == 2
    assert board["occupied"] == 1
    assert board["zones"] == ["Zone A", "Zone B"]
    occupied = [item for item in board["spots"] if item["status"] == "Occupied"]
    assert occupied[0]["full_name"] == "Alice Chan"

    filtered = client.get(
        f"{API}/inventory/board",
        params={"on_date": "2025-01-05", "status": "Available"}
    ).json()
    assert [item["spot"]["zone"] for item in filtered["spots"]] == ["Zone B"]

def test_inventory_listings(client, make_spot, make_employee):
    make_spot()
    make_spot(is_active=False)
    make_employee(full_name="Holder", tier=2, plates=["AA1111"])

    spots = client.get(f"{API}/inventory/spots").json()
    assert len(spots) == 1

    employees = client.get(f"{API}/inventory/employees").json()
    assert employees[0]["privilege_tier"] == 2
    assert employees[0]["vehicles"] == ["AA1111"]

def test_monthly_report_endpoint(client, make_spot, make_employee):
    spot = make_spot(spot_type="Reserved (Paid) Parking", price=Decimal("3000"))
    create(client, spot.id, make_employee().id, "2025-02-01", indefinite=True)

    report = client.get(
        f"{API}/reports/monthly",
        params={"year": 2025, "month": 3, "today": "2025-03-15"}
    ).json()
    assert report["tenants"][0]["days_occupied"] == 15
    assert report["tenants"][0]["gross_fee"] == 1451
    assert report["financials"]["occupancy_rate"] == 100.0

    projected = client.get(
        f"{API}/reports/monthly",
        params={"year": 2025, "month": 3, "today": "2025-03-15", "mode": "projected"}
    ).json()
    assert projected["tenants"][0]["gross_fee"] == 3000

    assert client.get(f"{API}/reports/monthly", params={"year": 2025, "month": 13}).status_code == 422

def test_tenant_csv_endpoint(client, make_spot, make_employee):
    spot = make_spot()
    create(client, spot.id, make_employee().id, "2025-02-01", indefinite=True)

    response = client.get(
        f"{API}/reports/monthly/tenants.csv",
        params={"year": 2025, "month": 2, "today": "2025-03-01"}
    )
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "Tenant_Report_2025_2.csv" in response.headers["content-disposition"]
    assert len(response.text.strip().splitlines()) == 2
