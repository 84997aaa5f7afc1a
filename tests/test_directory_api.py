"""
tests.test_directory_api

Directory endpoints (customers, addresses, admins, super-admins) behind the role gate.
"""

from __future__ import annotations

import uuid

import pytest

from userdir.db.models import AdminRole


def _new_customer(**overrides) -> dict[str, str]:
    body = {
        "customerName": "Jane Roe",
        "email": "jane@example.com",
        "password": "jane-pass",
        "phoneNumber": "+15550111",
    }
    body.update(overrides)
    return body


# -- customers ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_register_customer_hides_password(client) -> None:
    r = await client.post("/customers", json=_new_customer())

    assert r.status_code == 201
    body = r.json()
    assert body["status"] is True
    assert body["message"] == "Customer created successfully"
    data = body["data"]
    assert data["customerName"] == "Jane Roe"
    assert data["email"] == "jane@example.com"
    assert data["addresses"] == []
    assert "password" not in data
    uuid.UUID(data["customerId"])
    assert data["createdAt"].endswith("Z")


@pytest.mark.asyncio
async def test_registered_customer_can_log_in(client) -> None:
    await client.post("/customers", json=_new_customer())

    r = await client.post(
        "/auth/customers/login", json={"email": "jane@example.com", "password": "jane-pass"}
    )
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_register_via_auth_route(client) -> None:
    r = await client.post("/auth/customers/register", json=_new_customer(email="reg@example.com"))

    assert r.status_code == 201
    assert r.json()["data"]["email"] == "reg@example.com"


@pytest.mark.asyncio
async def test_register_duplicate_email_is_400(client, seed_customer) -> None:
    await seed_customer(email="jane@example.com")

    r = await client.post("/customers", json=_new_customer())

    assert r.status_code == 400
    assert r.json() == {"status": False, "data": None, "message": "Email already registered"}


@pytest.mark.asyncio
async def test_register_missing_fields_is_400(client) -> None:
    r = await client.post("/customers", json={"email": "jane@example.com"})

    assert r.status_code == 400
    assert r.json()["message"] == "Missing required fields"


@pytest.mark.asyncio
async def test_list_customers_requires_admin(client, seed_customer, as_identity) -> None:
    customer = await seed_customer()

    r = await client.get(
        "/customers", headers=as_identity(user_id=str(customer.customer_id), role="Customer")
    )
    assert r.status_code == 403
    assert r.json()["message"] == "Not authorized to access this route"

    r = await client.get("/customers", headers=as_identity(user_id="a-1", role="Admin"))
    assert r.status_code == 200
    assert r.json()["message"] == "Customers retrieved successfully"
    assert [c["email"] for c in r.json()["data"]] == ["john@example.com"]


@pytest.mark.asyncio
async def test_list_customers_without_identity_is_403(client) -> None:
    r = await client.get("/customers")
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_customer_reads_only_own_record(client, seed_customer, as_identity) -> None:
    me = await seed_customer()
    other = await seed_customer(email="other@example.com")
    headers = as_identity(user_id=str(me.customer_id), role="Customer")

    r = await client.get(f"/customers/{me.customer_id}", headers=headers)
    assert r.status_code == 200
    assert r.json()["data"]["customerId"] == str(me.customer_id)

    r = await client.get(f"/customers/{other.customer_id}", headers=headers)
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_admin_reads_any_customer_and_unknown_is_404(
    client, seed_customer, as_identity
) -> None:
    customer = await seed_customer()
    headers = as_identity(user_id="sa-1", role="SuperAdmin")

    r = await client.get(f"/customers/{customer.customer_id}", headers=headers)
    assert r.status_code == 200

    r = await client.get(f"/customers/{uuid.uuid4()}", headers=headers)
    assert r.status_code == 404
    assert r.json()["message"] == "Customer not found"


@pytest.mark.asyncio
async def test_malformed_customer_id_is_400(client, as_identity) -> None:
    r = await client.get("/customers/not-a-uuid", headers=as_identity(user_id="a", role="Admin"))

    assert r.status_code == 400
    assert r.json()["message"] == "Invalid request parameters"


@pytest.mark.asyncio
async def test_customer_updates_own_profile(client, seed_customer, as_identity) -> None:
    me = await seed_customer()

    r = await client.patch(
        f"/customers/{me.customer_id}",
        json={"customerName": "Johnny Doe"},
        headers=as_identity(user_id=str(me.customer_id), role="Customer"),
    )

    assert r.status_code == 200
    assert r.json()["message"] == "Customer updated successfully"
    assert r.json()["data"]["customerName"] == "Johnny Doe"
    assert r.json()["data"]["email"] == "john@example.com"


# -- addresses ------------------------------------------------------------------


@pytest.mark.asyncio
async def test_addresses_create_and_list(client, seed_customer, as_identity) -> None:
    me = await seed_customer()
    headers = as_identity(user_id=str(me.customer_id), role="Customer")

    r = await client.post(
        f"/customers/{me.customer_id}/address",
        json={
            "addressNo": "12B",
            "addressLine1": "Main Street",
            "city": "Springfield",
            "zipCode": "12345",
        },
        headers=headers,
    )
    assert r.status_code == 201
    assert r.json()["message"] == "Address created successfully"
    assert r.json()["data"]["addressLine2"] is None

    r = await client.get(f"/customers/{me.customer_id}/address", headers=headers)
    assert r.status_code == 200
    assert [a["city"] for a in r.json()["data"]] == ["Springfield"]

    r = await client.get(f"/customers/{me.customer_id}", headers=headers)
    assert [a["addressNo"] for a in r.json()["data"]["addresses"]] == ["12B"]


@pytest.mark.asyncio
async def test_address_requires_fields_and_known_customer(client, as_identity) -> None:
    headers = as_identity(user_id="a-1", role="Admin")
    missing = uuid.uuid4()

    r = await client.post(f"/customers/{missing}/address", json={"city": "X"}, headers=headers)
    assert r.status_code == 400

    r = await client.get(f"/customers/{missing}/address", headers=headers)
    assert r.status_code == 404
    assert r.json()["message"] == "Customer not found"


# -- admins ---------------------------------------------------------------------


@pytest.mark.asyncio
async def test_super_admin_manages_admins(client, as_identity) -> None:
    root = as_identity(user_id="sa-1", role="SuperAdmin")

    r = await client.post(
        "/admin",
        json={"adminName": "Ada", "email": "ada@example.com", "password": "ada-pass"},
        headers=root,
    )
    assert r.status_code == 201
    assert r.json()["message"] == "Admin created successfully"
    created = r.json()["data"]
    assert created["adminRole"] == "Admin"
    assert "password" not in created

    r = await client.get("/admin", headers=root)
    assert r.status_code == 200
    assert r.json()["message"] == "Admins retrieved successfully"
    assert [a["email"] for a in r.json()["data"]] == ["ada@example.com"]

    r = await client.patch(
        f"/admin/{created['adminId']}", json={"adminName": "Ada L."}, headers=root
    )
    assert r.status_code == 200
    assert r.json()["data"]["adminName"] == "Ada L."

    r = await client.post(
        "/auth/admin/login", json={"email": "ada@example.com", "password": "ada-pass"}
    )
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_admin_cannot_create_admins(client, as_identity) -> None:
    r = await client.post(
        "/admin",
        json={"adminName": "Eve", "email": "eve@example.com", "password": "p"},
        headers=as_identity(user_id="a-1", role="Admin"),
    )
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_admin_reads_admin_but_not_super_admin(client, seed_admin, as_identity) -> None:
    admin = await seed_admin()
    root = await seed_admin(email="root@example.com", role=AdminRole.super_admin)
    headers = as_identity(user_id=str(admin.admin_id), role="Admin")

    r = await client.get(f"/admin/{admin.admin_id}", headers=headers)
    assert r.status_code == 200
    assert r.json()["message"] == "Admin retrieved successfully"

    r = await client.get(f"/super-admin/{root.admin_id}", headers=headers)
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_admin_routes_are_scoped_by_role(client, seed_admin, as_identity) -> None:
    admin = await seed_admin()
    root = await seed_admin(email="root@example.com", role=AdminRole.super_admin)
    headers = as_identity(user_id=str(root.admin_id), role="SuperAdmin")

    r = await client.get(f"/super-admin/{admin.admin_id}", headers=headers)
    assert r.status_code == 404
    assert r.json()["message"] == "Super Admin not found"

    r = await client.get("/super-admin", headers=headers)
    assert r.json()["message"] == "Super Admins retrieved successfully"
    assert [a["adminId"] for a in r.json()["data"]] == [str(root.admin_id)]
    assert r.json()["data"][0]["adminRole"] == "SuperAdmin"


@pytest.mark.asyncio
async def test_create_admin_duplicate_email(client, seed_admin, as_identity) -> None:
    await seed_admin()

    r = await client.post(
        "/super-admin",
        json={"adminName": "Dup", "email": "admin@example.com", "password": "p"},
        headers=as_identity(user_id="sa-1", role="SuperAdmin"),
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Email already registered"


@pytest.mark.asyncio
async def test_overlong_passwords_are_rejected_on_create(client, as_identity) -> None:
    long_password = "é" * 40  # 80 bytes in UTF-8

    r = await client.post("/customers", json=_new_customer(password=long_password))
    assert r.status_code == 400
    assert r.json()["message"] == "Password must be at most 72 bytes"

    r = await client.post(
        "/admin",
        json={"adminName": "Ada", "email": "ada@example.com", "password": long_password},
        headers=as_identity(user_id="sa-1", role="SuperAdmin"),
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Password must be at most 72 bytes"
