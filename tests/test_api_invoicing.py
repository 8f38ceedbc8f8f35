"""
Tests for the invoicing API endpoints.

Exercises the handlers end to end through the dispatcher with an
in-memory store. Validates request validation, response shapes and
error mapping.
"""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient


def create_client(client: TestClient, headers, name: str = "Acme d.o.o.", **fields) -> dict:
    response = client.post("/api/clients", headers=headers, json={"name": name, **fields})
    assert response.status_code == 201, response.text
    return response.json()


def create_product(client: TestClient, headers, name: str = "Widget", price: str = "9.99") -> dict:
    response = client.post(
        "/api/products", headers=headers, json={"name": name, "unit_price": price}
    )
    assert response.status_code == 201, response.text
    return response.json()


def create_invoice(client: TestClient, headers, client_id: int, items: list) -> dict:
    response = client.post(
        "/api/invoices", headers=headers, json={"client_id": client_id, "items": items}
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestAuthEndpoints:
    """Tests for /api/auth."""

    def test_register_returns_token_and_user(self, client: TestClient) -> None:
        """Registration signs the new user in with role "user"."""
        response = client.post(
            "/api/auth/register",
            json={"email": "New@Example.com", "name": "New", "password": "secret1"},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["token"]
        assert body["user"]["email"] == "new@example.com"
        assert body["user"]["role"] == "user"
        assert "password_hash" not in body["user"]

    def test_register_duplicate_email(self, client: TestClient, user) -> None:
        """Emails are unique regardless of case."""
        response = client.post(
            "/api/auth/register",
            json={"email": user.email.upper(), "name": "Copy", "password": "secret1"},
        )
        assert response.status_code == 409

    def test_register_validation(self, client: TestClient) -> None:
        """Bad email or short password is a 400 with details."""
        response = client.post(
            "/api/auth/register", json={"email": "not-an-email", "name": "", "password": "x"}
        )
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Invalid request body"
        assert {tuple(e["loc"]) for e in body["detail"]} == {("email",), ("name",), ("password",)}

    def test_register_rejects_malformed_json(self, client: TestClient) -> None:
        """A body that is not JSON is a 400."""
        response = client.post(
            "/api/auth/register",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400

    def test_login(self, client: TestClient, user) -> None:
        """Valid credentials return a token for the account."""
        response = client.post(
            "/api/auth/login", json={"email": "user@example.com", "password": "user-pass"}
        )
        assert response.status_code == 200
        token = response.json()["token"]
        profile = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
        assert profile.json()["id"] == user.id

    def test_login_wrong_password(self, client: TestClient, user) -> None:
        """A wrong password is a 401."""
        response = client.post(
            "/api/auth/login", json={"email": "user@example.com", "password": "wrong"}
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid email or password"}

    def test_login_unknown_email_looks_the_same(self, client: TestClient) -> None:
        """Unknown emails fail exactly like wrong passwords."""
        response = client.post(
            "/api/auth/login", json={"email": "ghost@example.com", "password": "whatever"}
        )
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid email or password"}

    def test_login_disabled_account(self, client: TestClient, admin_headers, user) -> None:
        """Deactivated accounts cannot sign in."""
        client.put(f"/api/auth/users/{user.id}/toggle-status", headers=admin_headers)
        response = client.post(
            "/api/auth/login", json={"email": "user@example.com", "password": "user-pass"}
        )
        assert response.status_code == 403
        assert response.json() == {"error": "Account is disabled"}

    def test_update_profile(self, client: TestClient, user_headers) -> None:
        """Users can change their own name and email."""
        response = client.put(
            "/api/auth/profile", headers=user_headers, json={"name": "Renamed"}
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Renamed"
        assert response.json()["email"] == "user@example.com"

    def test_update_profile_email_taken(self, client: TestClient, admin, user_headers) -> None:
        """Changing to another user's email is a 409."""
        response = client.put(
            "/api/auth/profile", headers=user_headers, json={"email": admin.email}
        )
        assert response.status_code == 409

    def test_change_password(self, client: TestClient, user_headers) -> None:
        """The new password works and the old one stops working."""
        wrong = client.put(
            "/api/auth/change-password",
            headers=user_headers,
            json={"current_password": "nope", "new_password": "brand-new"},
        )
        assert wrong.status_code == 400
        assert wrong.json() == {"error": "Current password is incorrect"}

        changed = client.put(
            "/api/auth/change-password",
            headers=user_headers,
            json={"current_password": "user-pass", "new_password": "brand-new"},
        )
        assert changed.status_code == 200

        login = client.post(
            "/api/auth/login", json={"email": "user@example.com", "password": "brand-new"}
        )
        assert login.status_code == 200

    def test_logout_is_audited(self, client: TestClient, user, user_headers, admin_headers) -> None:
        """Logout leaves an audit entry for the caller."""
        assert client.post("/api/auth/logout", headers=user_headers).status_code == 200
        logs = client.get(
            "/api/logs", headers=admin_headers, params={"user_id": user.id}
        ).json()
        assert logs["items"][0]["action"] == "logout"


class TestUserAdministration:
    """Tests for the admin-only /api/auth/users routes."""

    def test_create_user_with_role(self, client: TestClient, admin_headers) -> None:
        """Admins can create users with a chosen role."""
        response = client.post(
            "/api/auth/users",
            headers=admin_headers,
            json={
                "email": "clerk@example.com",
                "name": "Clerk",
                "password": "secret1",
                "role": "admin",
                "permissions": ["invoices:write"],
            },
        )
        assert response.status_code == 201
        assert response.json()["role"] == "admin"
        assert response.json()["permissions"] == ["invoices:write"]

    def test_update_permissions(self, client: TestClient, admin_headers, user) -> None:
        """Admins can change another user's role and permissions."""
        response = client.put(
            f"/api/auth/users/{user.id}/permissions",
            headers=admin_headers,
            json={"permissions": ["clients:read"]},
        )
        assert response.status_code == 200
        assert response.json()["permissions"] == ["clients:read"]
        assert response.json()["role"] == "user"

    def test_admin_cannot_demote_self(self, client: TestClient, admin, admin_headers) -> None:
        """An admin cannot change their own role."""
        response = client.put(
            f"/api/auth/users/{admin.id}/permissions",
            headers=admin_headers,
            json={"role": "user"},
        )
        assert response.status_code == 400

    def test_admin_cannot_delete_or_disable_self(
        self, client: TestClient, admin, admin_headers
    ) -> None:
        """An admin cannot delete or deactivate their own account."""
        assert client.delete(f"/api/auth/users/{admin.id}", headers=admin_headers).status_code == 400
        assert (
            client.put(f"/api/auth/users/{admin.id}/toggle-status", headers=admin_headers).status_code
            == 400
        )

    def test_toggle_twice_reactivates(self, client: TestClient, admin_headers, user) -> None:
        """Toggling status twice restores the account."""
        client.put(f"/api/auth/users/{user.id}/toggle-status", headers=admin_headers)
        response = client.put(f"/api/auth/users/{user.id}/toggle-status", headers=admin_headers)
        assert response.json()["is_active"] is True

    def test_delete_unknown_user(self, client: TestClient, admin_headers) -> None:
        """Deleting a missing user is a 404."""
        response = client.delete("/api/auth/users/999", headers=admin_headers)
        assert response.status_code == 404
        assert response.json() == {"error": "User not found"}


class TestClientEndpoints:
    """Tests for /api/clients."""

    def test_crud(self, client: TestClient, user_headers) -> None:
        """Create, read, partial update and delete a client."""
        created = create_client(client, user_headers, email="billing@acme.test")
        client_id = created["id"]

        fetched = client.get(f"/api/clients/{client_id}", headers=user_headers)
        assert fetched.json()["email"] == "billing@acme.test"

        updated = client.put(
            f"/api/clients/{client_id}", headers=user_headers, json={"phone": "+381 11 123"}
        )
        assert updated.json()["phone"] == "+381 11 123"
        assert updated.json()["name"] == "Acme d.o.o."

        deleted = client.delete(f"/api/clients/{client_id}", headers=user_headers)
        assert deleted.json() == {"message": "Client deleted successfully"}
        assert client.get(f"/api/clients/{client_id}", headers=user_headers).status_code == 404

    def test_list_and_search(self, client: TestClient, user_headers) -> None:
        """Search matches client names case-insensitively."""
        create_client(client, user_headers, name="Acme")
        create_client(client, user_headers, name="Globex", email="info@globex.test")

        everyone = client.get("/api/clients", headers=user_headers).json()
        assert everyone["total"] == 2

        found = client.get("/api/clients", headers=user_headers, params={"search": "GLOBEX"}).json()
        assert [c["name"] for c in found["items"]] == ["Globex"]

    def test_missing_name(self, client: TestClient, user_headers) -> None:
        """A client needs a name."""
        response = client.post("/api/clients", headers=user_headers, json={"email": "x@y.z"})
        assert response.status_code == 400

    def test_not_found(self, client: TestClient, user_headers) -> None:
        """Unknown clients are a 404 naming the entity."""
        response = client.get("/api/clients/404", headers=user_headers)
        assert response.status_code == 404
        assert response.json() == {"error": "Client not found"}

    @pytest.mark.parametrize("bad_id", ["abc", "0", "-1", "\u00b2", "\u0663"])
    def test_invalid_id(self, client: TestClient, user_headers, bad_id: str) -> None:
        """Ids must be positive ASCII decimal numbers."""
        response = client.get(f"/api/clients/{bad_id}", headers=user_headers)
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid id"}

    def test_statistics(self, client: TestClient, user_headers) -> None:
        """Statistics sum invoiced, paid and outstanding amounts."""
        acme = create_client(client, user_headers)
        first = create_invoice(
            client, user_headers, acme["id"], [{"description": "Work", "quantity": 2, "unit_price": "50.00"}]
        )
        create_invoice(
            client, user_headers, acme["id"], [{"description": "More", "quantity": 1, "unit_price": "30.00"}]
        )
        cancelled = create_invoice(
            client, user_headers, acme["id"], [{"description": "Void", "quantity": 1, "unit_price": "999"}]
        )
        client.patch(f"/api/invoices/{first['id']}/status", headers=user_headers, json={"status": "paid"})
        client.patch(
            f"/api/invoices/{cancelled['id']}/status", headers=user_headers, json={"status": "cancelled"}
        )

        stats = client.get(f"/api/clients/{acme['id']}/statistics", headers=user_headers).json()
        assert stats["invoice_count"] == 2
        assert Decimal(stats["total_invoiced"]) == Decimal("130")
        assert Decimal(stats["total_paid"]) == Decimal("100")
        assert Decimal(stats["outstanding"]) == Decimal("30")
        assert stats["delivery_count"] == 0

    def test_client_invoices_and_deliveries(self, client: TestClient, user_headers) -> None:
        """A client's invoices and deliveries are listed separately."""
        acme = create_client(client, user_headers)
        other = create_client(client, user_headers, name="Other")
        create_invoice(client, user_headers, acme["id"], [{"description": "A", "quantity": 1, "unit_price": "1"}])
        create_invoice(client, user_headers, other["id"], [{"description": "B", "quantity": 1, "unit_price": "1"}])
        client.post(
            "/api/deliveries", headers=user_headers, json={"client_id": acme["id"], "address": "Main St 1"}
        )

        invoices = client.get(f"/api/clients/{acme['id']}/invoices", headers=user_headers).json()
        deliveries = client.get(f"/api/clients/{acme['id']}/deliveries", headers=user_headers).json()
        assert invoices["total"] == 1
        assert deliveries["total"] == 1


class TestProductEndpoints:
    """Tests for /api/products and /api/product-groups."""

    def test_product_crud(self, client: TestClient, user_headers) -> None:
        """Create, read, update and delete a product."""
        product = create_product(client, user_headers)
        assert product["unit"] == "pcs"
        assert Decimal(product["unit_price"]) == Decimal("9.99")

        updated = client.put(
            f"/api/products/{product['id']}", headers=user_headers, json={"unit_price": "12.50"}
        )
        assert Decimal(updated.json()["unit_price"]) == Decimal("12.50")

        assert client.get("/api/products", headers=user_headers).json()["total"] == 1
        client.delete(f"/api/products/{product['id']}", headers=user_headers)
        assert client.get("/api/products", headers=user_headers).json()["total"] == 0

    def test_negative_price_rejected(self, client: TestClient, user_headers) -> None:
        """Prices cannot be negative."""
        response = client.post(
            "/api/products", headers=user_headers, json={"name": "Bad", "unit_price": "-1"}
        )
        assert response.status_code == 400

    def test_group_membership(self, client: TestClient, user_headers) -> None:
        """Products can be added to and removed from a group."""
        widget = create_product(client, user_headers)
        gadget = create_product(client, user_headers, name="Gadget", price="5")
        group = client.post(
            "/api/product-groups", headers=user_headers, json={"name": "Hardware"}
        ).json()
        members_url = f"/api/product-groups/{group['id']}/products"

        client.post(members_url, headers=user_headers, json={"product_id": widget["id"]})
        added = client.post(members_url, headers=user_headers, json={"product_id": gadget["id"]})
        assert added.json()["product_ids"] == [widget["id"], gadget["id"]]

        again = client.post(members_url, headers=user_headers, json={"product_id": gadget["id"]})
        assert again.json()["product_ids"] == [widget["id"], gadget["id"]]

        detail = client.get(f"/api/product-groups/{group['id']}", headers=user_headers).json()
        assert [p["name"] for p in detail["products"]] == ["Widget", "Gadget"]

        removed = client.delete(f"{members_url}/{widget['id']}", headers=user_headers)
        assert removed.json()["product_ids"] == [gadget["id"]]

    def test_add_unknown_product_to_group(self, client: TestClient, user_headers) -> None:
        """Only existing products can join a group."""
        group = client.post(
            "/api/product-groups", headers=user_headers, json={"name": "Empty"}
        ).json()
        response = client.post(
            f"/api/product-groups/{group['id']}/products",
            headers=user_headers,
            json={"product_id": 77},
        )
        assert response.status_code == 404
        assert response.json() == {"error": "Product not found"}

    def test_remove_non_member(self, client: TestClient, user_headers) -> None:
        """Removing a product that is not in the group is a 400."""
        widget = create_product(client, user_headers)
        group = client.post(
            "/api/product-groups", headers=user_headers, json={"name": "Empty"}
        ).json()
        response = client.delete(
            f"/api/product-groups/{group['id']}/products/{widget['id']}", headers=user_headers
        )
        assert response.status_code == 400

    def test_deleting_product_leaves_groups(self, client: TestClient, user_headers) -> None:
        """A deleted product disappears from its groups."""
        widget = create_product(client, user_headers)
        group = client.post(
            "/api/product-groups", headers=user_headers, json={"name": "Hardware"}
        ).json()
        client.post(
            f"/api/product-groups/{group['id']}/products",
            headers=user_headers,
            json={"product_id": widget["id"]},
        )
        client.delete(f"/api/products/{widget['id']}", headers=user_headers)

        detail = client.get(f"/api/product-groups/{group['id']}", headers=user_headers).json()
        assert detail["product_ids"] == []


class TestInvoiceEndpoints:
    """Tests for /api/invoices."""

    def test_create_with_product_defaults(self, client: TestClient, user, user_headers) -> None:
        """Lines fall back to the product's name and price."""
        acme = create_client(client, user_headers)
        widget = create_product(client, user_headers, price="9.99")
        invoice = create_invoice(
            client,
            user_headers,
            acme["id"],
            [
                {"product_id": widget["id"], "quantity": 3},
                {"description": "Shipping", "quantity": 1, "unit_price": "4.50"},
            ],
        )
        assert invoice["number"] == "INV-000001"
        assert invoice["status"] == "draft"
        assert invoice["created_by"] == user.id
        assert invoice["items"][0]["description"] == "Widget"
        assert Decimal(invoice["items"][0]["total"]) == Decimal("29.97")
        assert Decimal(invoice["total"]) == Decimal("34.47")

    def test_numbers_are_sequential(self, client: TestClient, user_headers) -> None:
        """Invoice numbers count up from INV-000001."""
        acme = create_client(client, user_headers)
        line = [{"description": "x", "quantity": 1, "unit_price": "1"}]
        numbers = [create_invoice(client, user_headers, acme["id"], line)["number"] for _ in range(3)]
        assert numbers == ["INV-000001", "INV-000002", "INV-000003"]

    def test_unknown_client(self, client: TestClient, user_headers) -> None:
        """Invoices need an existing client."""
        response = client.post(
            "/api/invoices",
            headers=user_headers,
            json={"client_id": 5, "items": [{"description": "x", "quantity": 1, "unit_price": "1"}]},
        )
        assert response.status_code == 404
        assert response.json() == {"error": "Client not found"}

    def test_unknown_product(self, client: TestClient, user_headers) -> None:
        """Lines referencing a missing product are a 404."""
        acme = create_client(client, user_headers)
        response = client.post(
            "/api/invoices",
            headers=user_headers,
            json={"client_id": acme["id"], "items": [{"product_id": 8, "quantity": 1}]},
        )
        assert response.status_code == 404

    def test_items_required(self, client: TestClient, user_headers) -> None:
        """An invoice needs at least one line."""
        acme = create_client(client, user_headers)
        response = client.post(
            "/api/invoices", headers=user_headers, json={"client_id": acme["id"], "items": []}
        )
        assert response.status_code == 400

    def test_status_and_filters(self, client: TestClient, user_headers) -> None:
        """Status changes show up in the status and client filters."""
        acme = create_client(client, user_headers)
        other = create_client(client, user_headers, name="Other")
        line = [{"description": "x", "quantity": 1, "unit_price": "1"}]
        sent = create_invoice(client, user_headers, acme["id"], line)
        create_invoice(client, user_headers, acme["id"], line)
        create_invoice(client, user_headers, other["id"], line)

        response = client.patch(
            f"/api/invoices/{sent['id']}/status", headers=user_headers, json={"status": "sent"}
        )
        assert response.json()["status"] == "sent"

        by_status = client.get("/api/invoices", headers=user_headers, params={"status": "sent"}).json()
        assert [i["id"] for i in by_status["items"]] == [sent["id"]]

        by_client = client.get(
            "/api/invoices", headers=user_headers, params={"client_id": other["id"]}
        ).json()
        assert by_client["total"] == 1

    @pytest.mark.parametrize("bad_value", ["abc", "\u00b2", "\u0663"])
    def test_invalid_client_filter(self, client: TestClient, user_headers, bad_value: str) -> None:
        """client_id must be an ASCII decimal number."""
        response = client.get("/api/invoices", headers=user_headers, params={"client_id": bad_value})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid client_id"}

    def test_invalid_status(self, client: TestClient, user_headers) -> None:
        """Unknown statuses are a 400 in filters and updates."""
        assert (
            client.get("/api/invoices", headers=user_headers, params={"status": "lost"}).status_code
            == 400
        )
        acme = create_client(client, user_headers)
        invoice = create_invoice(
            client, user_headers, acme["id"], [{"description": "x", "quantity": 1, "unit_price": "1"}]
        )
        response = client.patch(
            f"/api/invoices/{invoice['id']}/status", headers=user_headers, json={"status": "lost"}
        )
        assert response.status_code == 400

    def test_tracking(self, client: TestClient, user_headers) -> None:
        """Tracking number and carrier can be set."""
        acme = create_client(client, user_headers)
        invoice = create_invoice(
            client, user_headers, acme["id"], [{"description": "x", "quantity": 1, "unit_price": "1"}]
        )
        response = client.patch(
            f"/api/invoices/{invoice['id']}/tracking",
            headers=user_headers,
            json={"tracking_number": "RS123", "carrier": "Post Express"},
        )
        assert response.json()["tracking_number"] == "RS123"
        assert response.json()["carrier"] == "Post Express"

    def test_delete(self, client: TestClient, user_headers) -> None:
        """Deleted invoices are gone."""
        acme = create_client(client, user_headers)
        invoice = create_invoice(
            client, user_headers, acme["id"], [{"description": "x", "quantity": 1, "unit_price": "1"}]
        )
        assert client.delete(f"/api/invoices/{invoice['id']}", headers=user_headers).status_code == 200
        assert client.get(f"/api/invoices/{invoice['id']}", headers=user_headers).status_code == 404

    def test_put_is_not_routed(self, client: TestClient, user_headers) -> None:
        """Invoices have no PUT route."""
        response = client.put("/api/invoices/1", headers=user_headers, json={})
        assert response.status_code == 404
        assert response.json() == {"error": "Route not found"}


class TestDeliveryEndpoints:
    """Tests for /api/deliveries."""

    def test_lifecycle(self, client: TestClient, user_headers) -> None:
        """A delivery goes from pending to delivered and can be filtered and deleted."""
        acme = create_client(client, user_headers)
        created = client.post(
            "/api/deliveries",
            headers=user_headers,
            json={"client_id": acme["id"], "address": "Main St 1", "scheduled_date": "2026-11-02"},
        )
        assert created.status_code == 201
        delivery = created.json()
        assert delivery["status"] == "pending"
        assert delivery["delivered_at"] is None

        delivered = client.put(
            f"/api/deliveries/{delivery['id']}", headers=user_headers, json={"status": "delivered"}
        ).json()
        assert delivered["status"] == "delivered"
        assert delivered["delivered_at"] is not None
        assert delivered["scheduled_date"] == "2026-11-02"

        filtered = client.get(
            "/api/deliveries", headers=user_headers, params={"status": "delivered"}
        ).json()
        assert filtered["total"] == 1

        client.delete(f"/api/deliveries/{delivery['id']}", headers=user_headers)
        assert client.get("/api/deliveries", headers=user_headers).json()["total"] == 0

    def test_unknown_client(self, client: TestClient, user_headers) -> None:
        """Deliveries need an existing client."""
        response = client.post(
            "/api/deliveries", headers=user_headers, json={"client_id": 3, "address": "Nowhere"}
        )
        assert response.status_code == 404

    def test_unknown_invoice(self, client: TestClient, user_headers) -> None:
        """A linked invoice must exist."""
        acme = create_client(client, user_headers)
        response = client.post(
            "/api/deliveries",
            headers=user_headers,
            json={"client_id": acme["id"], "address": "Main St 1", "invoice_id": 99},
        )
        assert response.status_code == 404
        assert response.json() == {"error": "Invoice not found"}


class TestExportEndpoints:
    """Tests for /api/export."""

    def test_invoice_csv(self, client: TestClient, user_headers) -> None:
        """Invoices export as a CSV attachment."""
        acme = create_client(client, user_headers)
        create_invoice(
            client, user_headers, acme["id"], [{"description": "x", "quantity": 2, "unit_price": "3.50"}]
        )
        response = client.get("/api/export/invoices", headers=user_headers)
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert response.headers["content-disposition"].startswith('attachment; filename="invoices_')

        lines = response.content.decode("utf-8-sig").splitlines()
        assert lines[0].startswith("id,number,client_id,client_name,status")
        assert lines[1].startswith("1,INV-000001,1,Acme d.o.o.,draft")
        assert ",7.00," in lines[1]

    def test_client_csv(self, client: TestClient, user_headers) -> None:
        """Clients export as a CSV attachment."""
        create_client(client, user_headers, email="a@b.c")
        response = client.get("/api/export/clients", headers=user_headers)
        lines = response.content.decode("utf-8-sig").splitlines()
        assert lines[0] == "id,name,email,phone,address,tax_id,created_at"
        assert lines[1].startswith("1,Acme d.o.o.,a@b.c,,,,")

    def test_requires_authentication(self, client: TestClient) -> None:
        """Exports need a token."""
        assert client.get("/api/export/clients").status_code == 401


class TestLogEndpoints:
    """Tests for /api/logs."""

    def test_newest_first_with_filters(self, client: TestClient, user, user_headers) -> None:
        """Logs are newest first and filter by user."""
        acme = create_client(client, user_headers)
        client.put(f"/api/clients/{acme['id']}", headers=user_headers, json={"phone": "1"})
        create_product(client, user_headers)

        logs = client.get(
            "/api/logs", headers=user_headers, params={"entity_type": "client"}
        ).json()
        assert [entry["action"] for entry in logs["items"]] == ["update", "create"]
        assert all(entry["user_id"] == user.id for entry in logs["items"])

    def test_limit(self, client: TestClient, user_headers) -> None:
        """limit caps the number of entries."""
        for index in range(5):
            create_client(client, user_headers, name=f"Client {index}")
        logs = client.get("/api/logs", headers=user_headers, params={"limit": 2}).json()
        assert logs["total"] == 2

    def test_invalid_limit(self, client: TestClient, user_headers) -> None:
        """A non-numeric limit is a 400."""
        response = client.get("/api/logs", headers=user_headers, params={"limit": "many"})
        assert response.status_code == 400
