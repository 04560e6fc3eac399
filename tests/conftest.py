from urllib.parse import urlsplit

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from microservices import order_service, user_service
from microservices.http_client import HttpClient
from microservices.user_client import UserLookupClient

USER_SERVICE_URL = "http://user-service.test"


class FlaskAppAdapter(BaseAdapter):
    """Send requests.Session traffic into a Flask test client instead of the network."""

    def __init__(self, app):
        super().__init__()
        self.client = app.test_client()
        self.calls = []

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        parts = urlsplit(request.url)
        path = parts.path + (f"?{parts.query}" if parts.query else "")
        self.calls.append((request.method, path, timeout))
        flask_response = self.client.open(
            path, method=request.method, data=request.body, headers=dict(request.headers)
        )

        response = requests.Response()
        response.status_code = flask_response.status_code
        response._content = flask_response.get_data()
        response.headers = CaseInsensitiveDict(flask_response.headers)
        response.encoding = "utf-8"
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass


@pytest.fixture()
def user_app():
    app = user_service.create_app({"TESTING": True})
    return app


@pytest.fixture()
def user_client(user_app):
    """Flask test client for the user directory."""
    return user_app.test_client()


@pytest.fixture()
def directory_adapter(user_app):
    return FlaskAppAdapter(user_app)


@pytest.fixture()
def lookup_client(directory_adapter):
    """Lookup client wired to the in-process user directory."""
    http = HttpClient(USER_SERVICE_URL, timeout=2.0)
    http.session.mount(USER_SERVICE_URL, directory_adapter)
    return UserLookupClient(http)


@pytest.fixture()
def order_app(lookup_client):
    return order_service.create_app(
        {"TESTING": True, "USER_SERVICE_URL": USER_SERVICE_URL},
        lookup_client=lookup_client,
    )


@pytest.fixture()
def order_client(order_app):
    """Flask test client for the order ledger."""
    return order_app.test_client()


@pytest.fixture()
def order_store(order_app):
    return order_service.get_store(order_app)
