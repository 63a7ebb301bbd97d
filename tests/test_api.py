"""
End to end API tests covering the contract to payment flow and error mapping.
"""

from uuid import uuid4

import pytest


async def create_client(test_client, email="billing@acme.test"):
    response = await test_client.post(
        "/api/v1/clients",
        json={"name": "Acme Corp", "email": email, "payment_terms": "net15"},
    )
    assert response.status_code == 201, response.text
    return response.json()


async def create_product(test_client, price="50.00", name="Hosting"):
    response = await test_client.post("/api/v1/products", json={"name": name, "price": price})
    assert response.status_code == 201, response.text
    return response.json()


async def create_contract(test_client, client_id, product_id):
    response = await test_client.post(
        "/api/v1/contracts",
        json={
            "client_id": client_id,
            "title": "Hosting",
            "start_date": "2024-01-01",
            "end_date": "2024-12-31",
            "status": "active",
            "payment_terms": "net15",
            "tax_rate": "0.10",
            "line_items": [{"product_id": product_id, "quantity": "2"}],
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_contract_to_paid_invoice_flow(test_client):
    client = await create_client(test_client)
    product = await create_product(test_client)
    contract = await create_contract(test_client, client["id"], product["id"])

    assert contract["contract_number"] == "CON-000001"
    assert contract["total_amount"] == "110.00"

    response = await test_client.post(
        f"/api/v1/invoices/from-contract/{contract['id']}",
        json={"issue_date": "2024-01-01"},
    )
    assert response.status_code == 201, response.text
    invoice = response.json()
    assert invoice["invoice_number"] == "INV-000001"
    assert invoice["status"] == "draft"
    assert invoice["due_date"] == "2024-01-16"
    assert invoice["total_amount"] == "110.00"

    response = await test_client.post(f"/api/v1/invoices/{invoice['id']}/send")
    assert response.status_code == 200
    assert response.json()["status"] == "sent"
    assert response.json()["payment_status"] == "Overdue"

    response = await test_client.post(
        f"/api/v1/invoices/{invoice['id']}/payments",
        json={"amount": "110.00", "method": "card", "payment_date": "2024-01-10"},
    )
    assert response.status_code == 201, response.text
    settled = response.json()["invoice"]
    assert settled["status"] == "paid"
    assert settled["payment_status"] == "Paid"

    response = await test_client.get(f"/api/v1/invoices/{invoice['id']}/balance")
    assert response.json()["balance_due"] == "0.00"

    response = await test_client.get("/api/v1/dashboard/stats")
    assert response.status_code == 200
    assert response.json()["total_revenue"] == "110.00"


@pytest.mark.asyncio
async def test_invoice_from_unknown_contract_is_404(test_client):
    response = await test_client.post(f"/api/v1/invoices/from-contract/{uuid4()}")

    assert response.status_code == 404
    assert "not found" in response.json()["error"]["message"].lower()


@pytest.mark.asyncio
async def test_invoice_from_deactivated_contract_is_409(test_client):
    client = await create_client(test_client)
    product = await create_product(test_client)
    contract = await create_contract(test_client, client["id"], product["id"])
    await test_client.post(f"/api/v1/contracts/{contract['id']}/deactivate")

    response = await test_client.post(f"/api/v1/invoices/from-contract/{contract['id']}")

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_invoice_with_deactivated_product_is_400(test_client):
    client = await create_client(test_client)
    product = await create_product(test_client)
    contract = await create_contract(test_client, client["id"], product["id"])
    await test_client.post(f"/api/v1/products/{product['id']}/deactivate")

    response = await test_client.post(f"/api/v1/invoices/from-contract/{contract['id']}")

    assert response.status_code == 400
    assert product["id"] in response.json()["error"]["message"]


@pytest.mark.asyncio
async def test_cancelled_invoice_cannot_be_marked_paid(test_client):
    client = await create_client(test_client)
    product = await create_product(test_client)
    contract = await create_contract(test_client, client["id"], product["id"])
    invoice = (await test_client.post(f"/api/v1/invoices/from-contract/{contract['id']}")).json()

    response = await test_client.post(f"/api/v1/invoices/{invoice['id']}/cancel")
    assert response.status_code == 200

    response = await test_client.post(
        f"/api/v1/invoices/{invoice['id']}/mark-paid",
        json={"payment_date": "2024-01-20"},
    )
    assert response.status_code == 409

    response = await test_client.get(f"/api/v1/invoices/{invoice['id']}")
    assert response.json()["status"] == "cancelled"
    assert response.json()["is_paid"] is False


@pytest.mark.asyncio
async def test_duplicate_client_email_is_409(test_client):
    await create_client(test_client)

    response = await test_client.post(
        "/api/v1/clients",
        json={"name": "Acme Again", "email": "billing@acme.test"},
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_contract_without_lines_is_422(test_client):
    client = await create_client(test_client)

    response = await test_client.post(
        "/api/v1/contracts",
        json={
            "client_id": client["id"],
            "title": "Empty",
            "start_date": "2024-01-01",
            "end_date": "2024-12-31",
            "line_items": [],
        },
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_unknown_invoice_is_404(test_client):
    response = await test_client.get(f"/api/v1/invoices/{uuid4()}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_discount_finer_than_cents_is_422(test_client):
    client = await create_client(test_client)
    product = await create_product(test_client)

    response = await test_client.post(
        "/api/v1/contracts",
        json={
            "client_id": client["id"],
            "title": "Hosting",
            "start_date": "2024-01-01",
            "end_date": "2024-12-31",
            "tax_rate": "0.12345",
            "line_items": [{"product_id": product["id"], "quantity": "3", "discount": "33.333"}],
        },
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_duplicate_product_sku_is_409(test_client):
    first = await test_client.post("/api/v1/products", json={"name": "Hosting", "price": "50.00", "sku": "X1"})
    second = await test_client.post("/api/v1/products", json={"name": "Hosting+", "price": "60.00", "sku": "X1"})

    assert first.status_code == 201
    assert second.status_code == 409


@pytest.mark.asyncio
async def test_revenue_analytics_endpoint(test_client):
    client = await create_client(test_client)
    product = await create_product(test_client)
    contract = await create_contract(test_client, client["id"], product["id"])
    invoice = (await test_client.post(f"/api/v1/invoices/from-contract/{contract['id']}")).json()
    await test_client.post(f"/api/v1/invoices/{invoice['id']}/mark-paid", json={"payment_date": "2024-08-14"})

    response = await test_client.get("/api/v1/dashboard/revenue", params={"period": "quarterly", "year": 2024})

    assert response.status_code == 200
    data = response.json()
    assert data["period"] == "quarterly"
    assert data["items"] == [
        {"year": 2024, "month": None, "quarter": 3, "revenue": "110.00", "invoice_count": 1}
    ]

    response = await test_client.get("/api/v1/dashboard/revenue", params={"period": "weekly"})
    assert response.status_code == 422
