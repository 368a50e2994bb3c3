from pathlib import Path

import pytest

from vendor_kyc import __version__

PDF = ("gst.pdf", b"%PDF-1.4 sample", "application/pdf")


@pytest.fixture
def vendor_headers(auth_header):
    return auth_header("user-a", "a@x.com", "vendor")


async def _register(client, payload) -> dict:
    response = await client.post("/api/v1/vendors/register", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def _register_and_claim(client, registration_payload, headers) -> dict:
    await _register(client, registration_payload("a@x.com"))
    response = await client.post("/api/v1/vendors/claim", headers=headers)
    assert response.status_code == 200, response.text
    return response.json()["data"]


async def _upload(client, vendor_id, headers, document_type="GST", file=PDF):
    return await client.post(
        f"/api/v1/vendors/{vendor_id}/documents",
        headers=headers,
        data={"documentType": document_type},
        files={"file": file},
    )


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["version"] == __version__


class TestRegistration:
    async def test_register(self, client, registration_payload):
        data = await _register(client, registration_payload("a@x.com"))

        assert data["vendorId"] == "VEN-00001"
        assert data["status"] == "Pending"
        assert data["ownerUserId"] is None
        assert data["address"]["postalCode"] == "560001"
        assert data["documents"] == []
        assert len(data["statusHistory"]) == 1
        assert data["statusHistory"][0]["systemGenerated"] is True

    async def test_duplicate_email(self, client, registration_payload):
        await _register(client, registration_payload("a@x.com"))

        response = await client.post(
            "/api/v1/vendors/register", json=registration_payload("A@x.com")
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "DUPLICATE_EMAIL"
        assert response.json()["error"]["retryable"] is False

    async def test_unknown_category(self, client, registration_payload):
        payload = registration_payload()
        payload["businessCategory"] = "Mining"

        response = await client.post("/api/v1/vendors/register", json=payload)

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    async def test_protected_fields_are_refused(self, client, registration_payload):
        payload = registration_payload()
        payload["status"] = "Approved"
        payload["vendorId"] = "VEN-99999"

        response = await client.post("/api/v1/vendors/register", json=payload)

        assert response.status_code == 422

    async def test_invalid_email(self, client, registration_payload):
        response = await client.post(
            "/api/v1/vendors/register", json=registration_payload("not-an-email")
        )

        assert response.status_code == 422


class TestVendorSelfService:
    async def test_requires_token(self, client):
        response = await client.get("/api/v1/vendors/me")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    async def test_claim_and_profile(self, client, registration_payload, vendor_headers):
        claimed = await _register_and_claim(client, registration_payload, vendor_headers)
        assert claimed["ownerUserId"] == "user-a"

        response = await client.get("/api/v1/vendors/me", headers=vendor_headers)
        assert response.status_code == 200
        assert response.json()["data"]["vendorId"] == "VEN-00001"

    async def test_update_profile(self, client, registration_payload, vendor_headers):
        await _register_and_claim(client, registration_payload, vendor_headers)

        response = await client.put(
            "/api/v1/vendors/VEN-00001",
            headers=vendor_headers,
            json={"contactPerson": "Ravi Kumar", "phone": "+91-9111111111"},
        )

        assert response.status_code == 200
        assert response.json()["data"]["contactPerson"] == "Ravi Kumar"

    async def test_update_profile_cannot_touch_status(self, client, registration_payload, vendor_headers):
        await _register_and_claim(client, registration_payload, vendor_headers)

        response = await client.put(
            "/api/v1/vendors/VEN-00001",
            headers=vendor_headers,
            json={"status": "Approved", "statusHistory": []},
        )

        assert response.status_code == 422

    async def test_upload_and_delete_document(
        self, client, registration_payload, vendor_headers, storage
    ):
        await _register_and_claim(client, registration_payload, vendor_headers)

        response = await _upload(client, "VEN-00001", vendor_headers, "PAN")
        assert response.status_code == 201, response.text
        [document] = response.json()["data"]["documents"]
        assert document["documentType"] == "PAN"
        assert document["fileName"] == "gst.pdf"
        stored_name = Path(document["fileUrl"]).name
        assert (storage.root / stored_name).exists()

        response = await client.delete(
            f"/api/v1/vendors/VEN-00001/documents/{document['id']}", headers=vendor_headers
        )
        assert response.status_code == 204

        response = await client.get("/api/v1/vendors/me", headers=vendor_headers)
        assert response.json()["data"]["documents"] == []

    async def test_upload_rejects_unsupported_file(self, client, registration_payload, vendor_headers):
        await _register_and_claim(client, registration_payload, vendor_headers)

        response = await _upload(
            client, "VEN-00001", vendor_headers, file=("notes.txt", b"hello", "text/plain")
        )

        assert response.status_code == 415

    async def test_upload_rejects_empty_file(self, client, registration_payload, vendor_headers):
        await _register_and_claim(client, registration_payload, vendor_headers)

        response = await _upload(
            client, "VEN-00001", vendor_headers, file=("empty.pdf", b"", "application/pdf")
        )

        assert response.status_code == 422

    async def test_upload_to_someone_elses_application(
        self, client, registration_payload, vendor_headers, auth_header, storage
    ):
        await _register_and_claim(client, registration_payload, vendor_headers)
        await _register(client, registration_payload("b@x.com", "Beta Services"))
        intruder = auth_header("user-b", "b@x.com", "vendor")

        response = await _upload(client, "VEN-00001", intruder)

        assert response.status_code == 403
        # The stored file is discarded when the record write is refused
        assert list(storage.root.iterdir()) == []

    async def test_vendor_cannot_reach_admin_console(self, client, vendor_headers):
        response = await client.get("/api/v1/admin/vendors", headers=vendor_headers)

        assert response.status_code == 403


class TestReviewerConsole:
    async def test_full_review_cycle(
        self, client, registration_payload, vendor_headers, admin_headers
    ):
        await _register_and_claim(client, registration_payload, vendor_headers)
        second = await _register(client, registration_payload("b@x.com", "Beta Services"))
        assert second["vendorId"] == "VEN-00002"

        response = await client.put(
            "/api/v1/admin/vendors/VEN-00001/status",
            headers=admin_headers,
            json={"status": "Rejected", "rejectionReason": "Missing tax ID"},
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "Rejected"
        assert data["rejectionReason"] == "Missing tax ID"
        assert len(data["statusHistory"]) == 2

        response = await _upload(client, "VEN-00001", vendor_headers)
        data = response.json()["data"]
        assert data["status"] == "Pending"
        assert data["rejectionReason"] is None
        assert data["reviewedAt"] is None
        assert len(data["statusHistory"]) == 3

        response = await client.put(
            "/api/v1/admin/vendors/VEN-00001/status",
            headers=admin_headers,
            json={"status": "Approved"},
        )
        data = response.json()["data"]
        assert data["status"] == "Approved"
        assert data["reviewedAt"] is not None
        assert data["reviewedBy"] == "admin-1"
        assert [e["status"] for e in data["statusHistory"]] == [
            "Pending", "Rejected", "Pending", "Approved",
        ]

    async def test_reject_without_reason(self, client, registration_payload, admin_headers):
        await _register(client, registration_payload())

        response = await client.put(
            "/api/v1/admin/vendors/VEN-00001/status",
            headers=admin_headers,
            json={"status": "Rejected"},
        )

        assert response.status_code == 422
        detail = await client.get("/api/v1/admin/vendors/VEN-00001", headers=admin_headers)
        assert detail.json()["data"]["status"] == "Pending"
        assert len(detail.json()["data"]["statusHistory"]) == 1

    async def test_unknown_vendor(self, client, admin_headers):
        response = await client.get("/api/v1/admin/vendors/VEN-04242", headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    async def test_list_search_and_stats(self, client, registration_payload, admin_headers):
        await _register(client, registration_payload("a@x.com", "Acme Traders"))
        await _register(client, registration_payload("b@x.com", "Beta Services"))
        await client.put(
            "/api/v1/admin/vendors/VEN-00002/status",
            headers=admin_headers,
            json={"status": "Approved"},
        )

        response = await client.get(
            "/api/v1/admin/vendors", headers=admin_headers, params={"status": "Pending"}
        )
        body = response.json()
        assert body["meta"]["total"] == 1
        assert body["data"][0]["vendorId"] == "VEN-00001"

        response = await client.get(
            "/api/v1/admin/vendors", headers=admin_headers, params={"search": "beta"}
        )
        assert [v["vendorId"] for v in response.json()["data"]] == ["VEN-00002"]

        response = await client.get("/api/v1/admin/stats", headers=admin_headers)
        stats = response.json()["data"]
        assert stats["totalApplications"] == 2
        assert stats["pendingCount"] == 1
        assert stats["approvedCount"] == 1
        assert stats["rejectedCount"] == 0
        assert len(stats["recentVendors"]) == 2

    async def test_status_filter_all_and_unknown(self, client, registration_payload, admin_headers):
        await _register(client, registration_payload("a@x.com", "Acme Traders"))
        await _register(client, registration_payload("b@x.com", "Beta Services"))

        response = await client.get(
            "/api/v1/admin/vendors", headers=admin_headers, params={"status": "All"}
        )
        assert response.status_code == 200
        assert response.json()["meta"]["total"] == 2

        response = await client.get(
            "/api/v1/admin/vendors", headers=admin_headers, params={"status": "Suspended"}
        )
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    async def test_sort_by_camel_case_key(self, client, registration_payload, admin_headers):
        await _register(client, registration_payload("a@x.com", "Zeta Traders"))
        await _register(client, registration_payload("b@x.com", "Alpha Services"))

        response = await client.get(
            "/api/v1/admin/vendors",
            headers=admin_headers,
            params={"sort": "businessName", "order": "asc", "limit": 1},
        )
        body = response.json()
        assert [v["businessName"] for v in body["data"]] == ["Alpha Services"]
        assert body["meta"] == {"total": 2, "page": 1, "limit": 1, "pages": 2}

        response = await client.get(
            "/api/v1/admin/vendors", headers=admin_headers, params={"sort": "passwordHash"}
        )
        assert response.status_code == 422
