"""
Thin requests.Session wrapper bound to one upstream service.
"""

import logging
from urllib.parse import urljoin

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 3.0


class HttpClient:
    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT):
        # Trailing slash so urljoin keeps any path prefix of the base URL
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})

    def url_for(self, path: str) -> str:
        return urljoin(self.base_url, path.lstrip("/"))

    def request(self, method: str, path: str, timeout: float = None, **kwargs) -> requests.Response:
        url = self.url_for(path)
        logger.debug(f"{method} {url}")
        return self.session.request(method, url, timeout=timeout or self.timeout, **kwargs)

    def get(self, path: str, **kwargs) -> requests.Response:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs) -> requests.Response:
        return self.request("POST", path, **kwargs)

    def close(self):
        self.session.close()
