"""
Test configuration and fixtures
"""

import copy
import re
import pytest
import pytest_asyncio
from datetime import datetime, timezone
from unittest.mock import MagicMock

from httpx import AsyncClient, ASGITransport

from app.services.media_service import PendingImage, UploadedFile
from app.services.revalidation_service import RevalidationService
from app.utils.exceptions import UploadError


# Mock database
class MockCollection:
    """Mock MongoDB collection"""

    def __init__(self):
        self.data = {}
        self.counter = 0

    async def find_one(self, query: dict, *args, **kwargs):
        for doc in self.data.values():
            if self._match(doc, query):
                return copy.deepcopy(doc)
        return None

    def find(self, query: dict = None, *args, **kwargs):
        results = []
        for doc in self.data.values():
            if query is None or self._match(doc, query):
                results.append(copy.deepcopy(doc))
        return MockCursor(results)

    async def insert_one(self, doc: dict):
        self.counter += 1
        doc_id = doc.get("_id") or f"mock_id_{self.counter}"
        stored = copy.deepcopy(doc)
        stored["_id"] = doc_id
        self.data[doc_id] = stored
        return MagicMock(inserted_id=doc_id)

    async def insert_many(self, docs: list):
        ids = []
        for doc in docs:
            result = await self.insert_one(doc)
            ids.append(result.inserted_id)
        return MagicMock(inserted_ids=ids)

    async def update_one(self, query: dict, update: dict, *args, **kwargs):
        for doc in self.data.values():
            if self._match(doc, query):
                self._apply(doc, update)
                return MagicMock(modified_count=1, matched_count=1)
        return MagicMock(modified_count=0, matched_count=0)

    async def find_one_and_update(self, query: dict, update: dict, *args, return_document=False, **kwargs):
        for doc in self.data.values():
            if self._match(doc, query):
                before = copy.deepcopy(doc)
                self._apply(doc, update)
                return copy.deepcopy(doc) if return_document else before
        return None

    async def delete_one(self, query: dict):
        for doc_id, doc in list(self.data.items()):
            if self._match(doc, query):
                del self.data[doc_id]
                return MagicMock(deleted_count=1)
        return MagicMock(deleted_count=0)

    async def delete_many(self, query: dict):
        removed = [doc_id for doc_id, doc in self.data.items() if self._match(doc, query)]
        for doc_id in removed:
            del self.data[doc_id]
        return MagicMock(deleted_count=len(removed))

    async def count_documents(self, query: dict = None):
        if query is None:
            return len(self.data)
        return sum(1 for doc in self.data.values() if self._match(doc, query))

    async def create_index(self, *args, **kwargs):
        return "mock_index"

    def _apply(self, doc: dict, update: dict) -> None:
        if "$set" in update:
            doc.update(copy.deepcopy(update["$set"]))
        if "$push" in update:
            for field, value in update["$push"].items():
                doc.setdefault(field, []).append(value)

    def _match(self, doc: dict, query: dict) -> bool:
        for key, value in query.items():
            if key.startswith("$"):
                continue
            if key not in doc:
                if isinstance(value, dict) and "$ne" in value:
                    continue
                return False
            if isinstance(value, dict):
                # Handle operators
                for op, op_val in value.items():
                    if op == "$ne" and doc[key] == op_val:
                        return False
                    elif op == "$eq" and doc[key] != op_val:
                        return False
                    elif op == "$in" and doc[key] not in op_val:
                        return False
                    elif op == "$regex":
                        flags = re.IGNORECASE if "i" in value.get("$options", "") else 0
                        if not re.search(op_val, str(doc[key]), flags):
                            return False
            elif doc[key] != value:
                return False
        return True


class MockCursor:
    """Mock MongoDB cursor"""

    def __init__(self, data: list):
        self._data = data
        self._skip = 0
        self._limit = None

    def skip(self, n: int):
        self._skip = n
        return self

    def limit(self, n: int):
        self._limit = n
        return self

    def sort(self, *args, **kwargs):
        return self

    async def to_list(self, length: int = None):
        data = self._data[self._skip:]
        if self._limit:
            data = data[:self._limit]
        if length:
            data = data[:length]
        return data


class MockDatabase:
    """Mock MongoDB database"""

    def __init__(self):
        self._collections = {}

    def __getattr__(self, name: str):
        if name.startswith("_"):
            return super().__getattribute__(name)
        if name not in self._collections:
            self._collections[name] = MockCollection()
        return self._collections[name]

    def __getitem__(self, name: str):
        return getattr(self, name)


class FakeUploader:
    """Records uploads instead of storing files"""

    def __init__(self):
        self.calls = []
        self.error = None

    async def start_upload(self, files: list[PendingImage]) -> list[UploadedFile]:
        self.calls.append(files)
        if self.error:
            raise self.error
        return [
            UploadedFile(
                url=f"https://media.test/{i}-{file.filename}",
                key=f"{i}-{file.filename}",
                name=file.filename,
                size=file.size
            )
            for i, file in enumerate(files)
        ]


@pytest.fixture
def mock_db():
    """Create a mock database"""
    return MockDatabase()


@pytest.fixture
def revalidator():
    """In-memory revalidation service with no webhook"""
    return RevalidationService()


@pytest.fixture
def uploader():
    """Fake media uploader"""
    return FakeUploader()


@pytest.fixture
def failing_uploader():
    """Fake media uploader that always fails"""
    fake = FakeUploader()
    fake.error = UploadError("Media host unavailable")
    return fake


@pytest.fixture
def png_image():
    """A small PNG selection"""
    return PendingImage(
        filename="avatar.png",
        content_type="image/png",
        data=b"\x89PNG\r\n\x1a\nfake-image-bytes"
    )


@pytest.fixture
def text_file():
    """A non-image selection"""
    return PendingImage(filename="notes.txt", content_type="text/plain", data=b"hello")


@pytest.fixture
def sample_provider():
    """Sample provider data"""
    return {
        "provider_id": "prv_test123",
        "user_id": "user_test123",
        "image_url": "https://media.test/original.png",
        "company_name": "Sparkle Home Cleaning",
        "type_of_provider": "Cleaning",
        "phone_number": "+63 917 555 0101",
        "experience_years": 5,
        "hourly_rate": 450,
        "bio": "Family-run cleaning business.",
        "operating_days": ["Monday"],
        "start_time": "08:00",
        "end_time": "17:00",
        "services_offered": [],
        "created_at": datetime.now(timezone.utc),
        "updated_at": datetime.now(timezone.utc),
    }


@pytest.fixture
def other_provider():
    """A second provider with its own company name"""
    return {
        "provider_id": "prv_other456",
        "user_id": "user_other456",
        "image_url": None,
        "company_name": "FixIt Plumbing Co",
        "type_of_provider": "Plumbing",
        "phone_number": "+63 917 555 0202",
        "experience_years": 10,
        "hourly_rate": 600,
        "bio": "Plumbing repairs.",
        "operating_days": ["Tuesday", "Thursday"],
        "start_time": "9:00 AM",
        "end_time": "6:00 PM",
        "services_offered": [],
        "created_at": datetime.now(timezone.utc),
        "updated_at": datetime.now(timezone.utc),
    }


@pytest.fixture
def sample_service():
    """Sample service data owned by sample_provider"""
    return {
        "service_id": "svc_test123",
        "provider_id": "prv_test123",
        "image_url": "https://media.test/deep-clean.png",
        "service_name": "Deep Cleaning",
        "type_of_service": "Cleaning",
        "description": "Top to bottom cleaning including appliances",
        "duration": 5,
        "price": 2500,
        "created_at": datetime.now(timezone.utc),
        "updated_at": datetime.now(timezone.utc),
    }


@pytest.fixture
def seeded_db(mock_db, sample_provider, other_provider):
    """Mock database holding two providers"""
    mock_db.providers.data["1"] = copy.deepcopy(sample_provider)
    mock_db.providers.data["2"] = copy.deepcopy(other_provider)
    return mock_db


@pytest.fixture
def seeded_db_with_service(seeded_db, sample_service):
    """Mock database where sample_provider offers sample_service"""
    seeded_db.services.data["1"] = copy.deepcopy(sample_service)
    seeded_db.providers.data["1"]["services_offered"] = [sample_service["service_id"]]
    return seeded_db


@pytest_asyncio.fixture
async def api_client(seeded_db, revalidator, uploader):
    """HTTP client bound to the app with mocked dependencies"""
    from app.main import app
    from app.database import get_database
    from app.services.media_service import get_media_service
    from app.services.revalidation_service import get_revalidation_service

    app.dependency_overrides[get_database] = lambda: seeded_db
    app.dependency_overrides[get_revalidation_service] = lambda: revalidator
    app.dependency_overrides[get_media_service] = lambda: uploader

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
