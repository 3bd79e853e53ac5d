import logging
from abc import ABC, abstractmethod
import requests
from app.core.config import settings

logger = logging.getLogger(__name__)


class ImageHostError(Exception):
    """Raised when the image host rejects an upload or returns no URL"""


class ImageHost(ABC):
    """Hosts an image somewhere public and returns its URL."""

    @abstractmethod
    def host_image(self, image_base64: str) -> str:
        """Upload a base64-encoded image and return its public URL"""
        pass


class ImgbbImageHost(ImageHost):
    """
    ImgBB-backed image host.

    One synchronous POST per image, no retries. The request timeout comes from
    config so a stalled upload cannot hold a worker forever.
    """

    def __init__(self, api_key: str, upload_url: str, timeout: float):
        self.api_key = api_key
        self.upload_url = upload_url
        self.timeout = timeout

    def host_image(self, image_base64: str) -> str:
        response = requests.post(
            self.upload_url,
            data={"key": self.api_key, "image": image_base64},
            timeout=self.timeout,
        )
        if not response.ok:
            raise ImageHostError(
                f"Image upload failed with status {response.status_code}")

        url = response.json().get("data", {}).get("url")
        if not url:
            raise ImageHostError("Image upload response did not include a URL")

        logger.info(f"Image hosted at {url}")
        return url


image_host = ImgbbImageHost(
    api_key=settings.IMGBB_API_KEY,
    upload_url=settings.IMGBB_UPLOAD_URL,
    timeout=settings.IMAGE_UPLOAD_TIMEOUT_SECONDS,
)


def get_image_host() -> ImageHost:
    """Dependency for the image host; tests override it with a fake"""
    return image_host
