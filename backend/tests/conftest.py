import mongomock
import pytest
from fastapi.testclient import TestClient
from app.main import app
from app.core.database import get_db
from app.storage.image_host import ImageHost, get_image_host


class FakeImageHost(ImageHost):
    """Records uploads and hands back a predictable URL"""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.uploads = []

    def host_image(self, image_base64: str) -> str:
        self.uploads.append(image_base64)
        if self.fail:
            raise RuntimeError("image host unavailable")
        return f"https://i.ibb.co/fake/{len(self.uploads)}.png"


@pytest.fixture
def db():
    # In-memory MongoDB stand-in, fresh per test
    return mongomock.MongoClient()["onlineLearning"]


@pytest.fixture
def image_host():
    return FakeImageHost()


@pytest.fixture
def client(db, image_host):
    # TestClient is not used as a context manager, so the lifespan (which
    # pings a real MongoDB) never runs
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_image_host] = lambda: image_host
    yield TestClient(app)
    app.dependency_overrides.clear()
