"""
API Tests
End-to-end HTTP tests against the FastAPI app with a mock database
"""

import pytest

API = "/api/v1"


def service_payload(**overrides) -> dict:
    data = {
        "user_id": "user_test123",
        "image_url": "https://media.test/window.png",
        "service_name": "Window Washing",
        "type_of_service": "Cleaning",
        "description": "Inside and outside window cleaning",
        "duration": 2,
        "price": 900,
        "path": "/providers/user_test123/services",
    }
    data.update(overrides)
    return data


def profile_form(**overrides) -> dict:
    data = {
        "company_name": "Sparkle Home Cleaning",
        "type_of_provider": "Cleaning",
        "phone_number": "+63 917 555 0101",
        "experience_years": "5",
        "hourly_rate": "450",
        "bio": "Family-run cleaning business.",
        "operating_days": ["Monday", "Wednesday"],
        "start_time": "08:00",
        "end_time": "17:00",
        "path": "/profile",
    }
    data.update(overrides)
    return data


class TestHealth:
    """Tests for health endpoints"""

    @pytest.mark.asyncio
    async def test_health_check(self, api_client):
        response = await api_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert "X-Process-Time" in response.headers


class TestServiceEndpoints:
    """Tests for /services"""

    @pytest.mark.asyncio
    async def test_create_service(self, api_client, seeded_db, revalidator):
        """Test create returns 201 and links the provider"""
        response = await api_client.post(f"{API}/services", json=service_payload())

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        service_id = body["data"]["service_id"]
        provider = await seeded_db.providers.find_one({"user_id": "user_test123"})
        assert provider["services_offered"] == [service_id]
        assert revalidator.last_revalidated("/providers/user_test123/services") is not None

    @pytest.mark.asyncio
    async def test_create_service_unknown_provider(self, api_client, seeded_db):
        """Test missing provider is a 404 and nothing is stored"""
        response = await api_client.post(
            f"{API}/services", json=service_payload(user_id="user_nobody")
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "PROVIDER_NOT_FOUND"
        assert await seeded_db.services.count_documents() == 0

    @pytest.mark.asyncio
    async def test_create_duplicate_service(self, seeded_db_with_service, api_client):
        """Test duplicate name is a 409"""
        response = await api_client.post(
            f"{API}/services", json=service_payload(service_name="Deep Cleaning")
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "SERVICE_EXISTS"

    @pytest.mark.asyncio
    async def test_create_service_invalid(self, api_client):
        """Test body validation errors use the standard envelope"""
        response = await api_client.post(
            f"{API}/services", json=service_payload(duration=0)
        )

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["details"]["errors"][0]["field"] == "duration"

    @pytest.mark.asyncio
    async def test_get_service(self, seeded_db_with_service, api_client):
        """Test service is returned with its provider"""
        response = await api_client.get(f"{API}/services/svc_test123")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["service_name"] == "Deep Cleaning"
        assert data["provider"]["company_name"] == "Sparkle Home Cleaning"

    @pytest.mark.asyncio
    async def test_get_missing_service(self, api_client):
        """Test unknown service is a 404"""
        response = await api_client.get(f"{API}/services/svc_missing")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "SERVICE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_update_service(self, seeded_db_with_service, api_client):
        """Test update without an image keeps the stored image"""
        response = await api_client.put(
            f"{API}/services/svc_test123",
            json={
                "service_name": "Deep Cleaning Plus",
                "type_of_service": "Cleaning",
                "description": "Deep cleaning with carpet shampoo",
                "duration": 6,
                "price": 3200,
                "path": "/services/svc_test123",
            }
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["service_name"] == "Deep Cleaning Plus"
        assert data["image_url"] == "https://media.test/deep-clean.png"

    @pytest.mark.asyncio
    async def test_update_missing_service(self, api_client):
        """Test updating an unknown service is a 404"""
        response = await api_client.put(
            f"{API}/services/svc_missing",
            json={
                "service_name": "Anything",
                "type_of_service": "Cleaning",
                "description": "Nothing here",
                "duration": 1,
                "price": 100,
            }
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "SERVICE_NOT_FOUND"


class TestProviderEndpoints:
    """Tests for /providers"""

    @pytest.mark.asyncio
    async def test_get_provider(self, api_client):
        response = await api_client.get(f"{API}/providers/user_test123")

        assert response.status_code == 200
        assert response.json()["data"]["provider_id"] == "prv_test123"

    @pytest.mark.asyncio
    async def test_get_missing_provider(self, api_client):
        response = await api_client.get(f"{API}/providers/user_nobody")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "PROVIDER_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_list_provider_services(self, seeded_db_with_service, api_client):
        """Test the provider's services are listed"""
        response = await api_client.get(f"{API}/providers/user_test123/services")

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 1
        assert body["data"][0]["service_id"] == "svc_test123"

    @pytest.mark.asyncio
    async def test_list_services_unknown_provider(self, api_client):
        """Test listing for an unknown provider is a 404 lookup error"""
        response = await api_client.get(f"{API}/providers/user_nobody/services")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "LOOKUP_ERROR"

    @pytest.mark.asyncio
    async def test_update_profile(self, api_client, seeded_db):
        """Test JSON profile update"""
        form = profile_form(hourly_rate=700)
        response = await api_client.put(f"{API}/providers/user_test123/profile", json=form)

        assert response.status_code == 200
        assert response.json()["data"]["hourly_rate"] == 700
        stored = await seeded_db.providers.find_one({"user_id": "user_test123"})
        assert stored["image_url"] == "https://media.test/original.png"

    @pytest.mark.asyncio
    async def test_update_profile_company_conflict(self, api_client):
        """Test another provider's company name is a 409"""
        response = await api_client.put(
            f"{API}/providers/user_test123/profile",
            json=profile_form(company_name="FixIt Plumbing Co")
        )

        assert response.status_code == 409
        error = response.json()["error"]
        assert error["code"] == "COMPANY_EXISTS"
        assert error["message"] == "Company already exists"

    @pytest.mark.asyncio
    async def test_update_profile_bad_rate(self, api_client):
        """Test a malformed rate is a validation error"""
        response = await api_client.put(
            f"{API}/providers/user_test123/profile",
            json=profile_form(hourly_rate="abc")
        )

        assert response.status_code == 422
        fields = [e["field"] for e in response.json()["error"]["details"]["errors"]]
        assert "hourly_rate" in fields


class TestProfileFormEndpoints:
    """Tests for the multipart profile form"""

    @pytest.mark.asyncio
    async def test_form_defaults(self, api_client):
        """Test the form is seeded from the stored profile"""
        response = await api_client.get(f"{API}/providers/user_test123/profile/form")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["company_name"] == "Sparkle Home Cleaning"
        assert data["operating_days"] == ["Monday"]

    @pytest.mark.asyncio
    async def test_submit_form(self, api_client, seeded_db, uploader):
        """Test submitting days without an image"""
        response = await api_client.post(
            f"{API}/providers/user_test123/profile/form", data=profile_form()
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["notification"]["title"] == "Profile Updated!"
        assert uploader.calls == []
        stored = await seeded_db.providers.find_one({"user_id": "user_test123"})
        assert stored["operating_days"] == ["Monday", "Wednesday"]

    @pytest.mark.asyncio
    async def test_submit_form_with_image(self, api_client, seeded_db, uploader):
        """Test the selected image is uploaded and saved"""
        response = await api_client.post(
            f"{API}/providers/user_test123/profile/form",
            data=profile_form(),
            files={"image": ("avatar.png", b"\x89PNGdata", "image/png")}
        )

        assert response.json()["success"] is True
        assert len(uploader.calls) == 1
        stored = await seeded_db.providers.find_one({"user_id": "user_test123"})
        assert stored["image_url"] == "https://media.test/0-avatar.png"

    @pytest.mark.asyncio
    async def test_submit_form_ignores_non_image(self, api_client, seeded_db, uploader):
        """Test a non-image attachment is dropped"""
        response = await api_client.post(
            f"{API}/providers/user_test123/profile/form",
            data=profile_form(),
            files={"image": ("notes.txt", b"hello", "text/plain")}
        )

        assert response.json()["success"] is True
        assert uploader.calls == []
        stored = await seeded_db.providers.find_one({"user_id": "user_test123"})
        assert stored["image_url"] == "https://media.test/original.png"

    @pytest.mark.asyncio
    async def test_submit_form_invalid_rate(self, api_client, seeded_db, uploader):
        """Test field errors come back without writing"""
        response = await api_client.post(
            f"{API}/providers/user_test123/profile/form",
            data=profile_form(hourly_rate="abc"),
            files={"image": ("avatar.png", b"\x89PNGdata", "image/png")}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is False
        assert "hourly_rate" in body["errors"]
        assert uploader.calls == []
        stored = await seeded_db.providers.find_one({"user_id": "user_test123"})
        assert stored["hourly_rate"] == 450

    @pytest.mark.asyncio
    async def test_submit_form_duplicate_company(self, api_client):
        """Test a duplicate company is reported in the notification"""
        response = await api_client.post(
            f"{API}/providers/user_test123/profile/form",
            data=profile_form(company_name="FixIt Plumbing Co")
        )

        body = response.json()
        assert body["success"] is False
        assert body["notification"]["description"] == "Company already exists"
        assert body["notification"]["variant"] == "destructive"

    @pytest.mark.asyncio
    async def test_image_preview(self, api_client):
        """Test images get a data URL preview"""
        response = await api_client.post(
            f"{API}/providers/user_test123/profile/image-preview",
            files={"image": ("avatar.png", b"\x89PNGdata", "image/png")}
        )

        assert response.status_code == 200
        assert response.json()["preview"].startswith("data:image/png;base64,")

    @pytest.mark.asyncio
    async def test_image_preview_non_image(self, api_client):
        """Test non-image files get no preview"""
        response = await api_client.post(
            f"{API}/providers/user_test123/profile/image-preview",
            files={"image": ("notes.txt", b"hello", "text/plain")}
        )

        assert response.json()["preview"] is None


class TestCacheEndpoints:
    """Tests for /cache"""

    @pytest.mark.asyncio
    async def test_revalidated_after_write(self, api_client):
        """Test a successful write marks its path"""
        before = await api_client.get(f"{API}/cache/revalidated", params={"path": "/profile"})
        assert before.json()["data"]["revalidated_at"] is None

        await api_client.put(f"{API}/providers/user_test123/profile", json=profile_form())

        after = await api_client.get(f"{API}/cache/revalidated", params={"path": "/profile/"})
        data = after.json()["data"]
        assert data["path"] == "/profile"
        assert data["revalidated_at"] is not None
