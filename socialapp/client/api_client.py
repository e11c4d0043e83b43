import json
import logging
import os
from pathlib import Path

import requests


logger = logging.getLogger(__name__)

DEFAULT_API_BASE = os.getenv("SOCIALAPP_API", "http://localhost:4000/api")
DEFAULT_TOKEN_FILE = Path.home() / ".socialapp" / "token.json"


class ApiError(Exception):
    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class Unauthenticated(ApiError):
    pass


class TokenStore:
    """Keeps the bearer token between CLI invocations, like browser localStorage."""

    def __init__(self, path=None):
        self.path = Path(path) if path else DEFAULT_TOKEN_FILE

    def load(self):
        try:
            with open(self.path, encoding="utf-8") as f:
                return json.load(f).get("token")
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning("ignoring unreadable token file %s: %s", self.path, e)
            return None

    def save(self, token):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"token": token}, f)

    def clear(self):
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass


class ApiClient:
    def __init__(self, base_url=DEFAULT_API_BASE, token_store=None, session=None, timeout=10):
        self.base_url = base_url.rstrip("/")
        self.token_store = token_store or TokenStore()
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def token(self):
        return self.token_store.load()

    @property
    def logged_in(self):
        return self.token is not None

    def _headers(self):
        headers = {"Content-Type": "application/json"}
        token = self.token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _send(self, method, path, payload=None, params=None, headers=None):
        try:
            response = self.session.request(
                method,
                self.base_url + path,
                headers=headers,
                json=payload,
                params=params,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise ApiError(f"request to {path} failed: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = {}
        return response, data

    def api(self, path, method="GET", payload=None, params=None):
        """Authenticated call; a 401 drops the stored token."""
        response, data = self._send(method, path, payload, params, self._headers())

        if response.status_code == 401:
            self.logout()
            raise Unauthenticated("unauthenticated", 401)
        if not response.ok:
            raise ApiError(data.get("error") or response.reason, response.status_code)
        return data

    def _authenticate(self, path, payload):
        response, data = self._send(
            "POST", path, payload, headers={"Content-Type": "application/json"}
        )
        if not response.ok:
            raise ApiError(data.get("error") or "request failed", response.status_code)

        self.token_store.save(data["token"])
        return data["user"]

    def register(self, username, password, display=None):
        return self._authenticate(
            "/register",
            {"username": username, "password": password, "display": display},
        )

    def login(self, username, password):
        return self._authenticate("/login", {"username": username, "password": password})

    def logout(self):
        logger.info("clearing stored token")
        self.token_store.clear()

    def me(self):
        return self.api("/me")

    def update_display(self, display):
        return self.api("/me", method="PUT", payload={"display": display})

    def users(self):
        return self.api("/users")["users"]

    def follow(self, username):
        return self.api(f"/users/{username}/follow", method="POST")["following"]

    def create_post(self, text="", image=""):
        return self.api("/posts", method="POST", payload={"text": text, "image": image})["id"]

    def posts(self, q="", trending=False):
        params = {}
        if q:
            params["q"] = q
        elif trending:
            params["trending"] = "1"
        return self.api("/posts", params=params or None)["posts"]

    def like(self, post_id):
        return self.api(f"/posts/{post_id}/like", method="POST")["liked"]

    def comment(self, post_id, text):
        return self.api(f"/posts/{post_id}/comment", method="POST", payload={"text": text})

    def send_message(self, to, text):
        return self.api("/messages", method="POST", payload={"to": to, "text": text})

    def threads(self):
        return self.api("/messages")["threads"]

    def notifications(self):
        return self.api("/notifications")["notifications"]
