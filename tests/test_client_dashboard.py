import contextlib
import io
import os
import re
import shutil
import tempfile
import unittest
from unittest.mock import patch
from urllib.parse import urlsplit


class FakeResponse:
    def __init__(self, response):
        self.status_code = response.status_code
        self.ok = response.status_code < 400
        self.reason = response.status.split(" ", 1)[-1]
        self._data = response.get_json(silent=True)

    def json(self):
        if self._data is None:
            raise ValueError("response body is not JSON")
        return self._data


class FlaskSession:
    """requests.Session look-alike that routes calls into a Flask test client."""

    def __init__(self, test_client):
        self.test_client = test_client
        self.calls = []

    def request(self, method, url, headers=None, json=None, params=None, timeout=None):
        path = urlsplit(url).path
        self.calls.append((method, path, params))
        response = self.test_client.open(
            path,
            method=method,
            headers=headers,
            json=json,
            query_string=params,
        )
        return FakeResponse(response)


class TestClientDashboard(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        db_fd, cls.db_path = tempfile.mkstemp(suffix=".db")
        os.close(db_fd)

        from socialapp import create_app
        from socialapp.db import db
        from socialapp.client.api_client import ApiClient, ApiError, TokenStore, Unauthenticated
        from socialapp.client.dashboard import Dashboard, format_panels, format_time

        cls.app = create_app(
            SQLALCHEMY_DATABASE_URI=f"sqlite:///{cls.db_path}",
            JWT_SECRET_KEY="test-secret",
            TESTING=True,
        )
        cls.db = db
        cls.ApiClient = ApiClient
        cls.ApiError = ApiError
        cls.TokenStore = TokenStore
        cls.Unauthenticated = Unauthenticated
        cls.Dashboard = Dashboard
        cls.format_panels = staticmethod(format_panels)
        cls.format_time = staticmethod(format_time)

    @classmethod
    def tearDownClass(cls):
        with cls.app.app_context():
            cls.db.engine.dispose()
        if os.path.exists(cls.db_path):
            os.remove(cls.db_path)

    def setUp(self):
        with self.app.app_context():
            self.db.drop_all()
            self.db.create_all()
        self.token_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.token_dir, ignore_errors=True)

    def _dashboard(self, name):
        store = self.TokenStore(os.path.join(self.token_dir, f"{name}.json"))
        client = self.ApiClient(
            base_url="http://localhost/api",
            token_store=store,
            session=FlaskSession(self.app.test_client()),
        )
        return self.Dashboard(client)

    @staticmethod
    def _panel(panels, title):
        return next(p for p in panels if p.title == title)

    def test_logged_out_render(self):
        dashboard = self._dashboard("anon")
        panels = dashboard.render_all()

        self.assertEqual(
            [p.title for p in panels],
            ["Account", "Profile", "Who to follow", "Trending", "Feed", "Messages", "Notifications"],
        )
        self.assertEqual(self._panel(panels, "Account").lines, ["Not logged in"])
        self.assertEqual(self._panel(panels, "Profile").lines[0], "Not signed in")
        self.assertEqual(self._panel(panels, "Feed").lines, ["No posts yet — be the first!"])
        self.assertEqual(self._panel(panels, "Messages").lines, ["Log in to use messages"])
        self.assertEqual(
            self._panel(panels, "Notifications").lines, ["Login to view notifications"]
        )
        self.assertEqual(self._panel(panels, "Who to follow").lines, [])

    def test_register_stores_token_and_renders_profile(self):
        dashboard = self._dashboard("alice")
        panels = dashboard.register("alice", "pw1", "Alice")

        self.assertIsNotNone(dashboard.client.token_store.load())
        self.assertEqual(self._panel(panels, "Account").lines, ["Alice (logged in)"])
        profile = self._panel(panels, "Profile").lines
        self.assertTrue(profile[0].startswith("Alice ["))
        self.assertEqual(profile[1], "@alice • 0 following • 0 followers")
        self.assertEqual(self._panel(panels, "Who to follow").lines, ["Alice @alice"])

        panels = dashboard.logout()
        self.assertIsNone(dashboard.client.token_store.load())
        self.assertEqual(self._panel(panels, "Account").lines, ["Not logged in"])

    def test_actions_validate_input_before_calling_api(self):
        dashboard = self._dashboard("alice")
        session = dashboard.client.session

        with self.assertRaises(ValueError):
            dashboard.register("", "pw")
        with self.assertRaises(ValueError):
            dashboard.login("alice", "")
        self.assertEqual(session.calls, [])

        dashboard.register("alice", "pw1")
        with self.assertRaises(ValueError):
            dashboard.create_post("  ", "")

        calls_before = len(session.calls)
        dashboard.comment(1, "   ")
        self.assertFalse(
            any(path.endswith("/comment") for _, path, _ in session.calls[calls_before:])
        )

    def test_login_failure_surfaces_server_error(self):
        self._dashboard("alice").register("alice", "pw1")
        dashboard = self._dashboard("other")

        with self.assertRaises(self.ApiError) as ctx:
            dashboard.login("alice", "wrong")
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(ctx.exception.message, "invalid credentials")
        self.assertIsNone(dashboard.client.token_store.load())

    def test_unauthorized_response_clears_token(self):
        dashboard = self._dashboard("stale")
        dashboard.client.token_store.save("not-a-real-token")

        with self.assertRaises(self.Unauthenticated):
            dashboard.client.me()
        self.assertIsNone(dashboard.client.token_store.load())

        dashboard.client.token_store.save("not-a-real-token")
        panels = dashboard.render_all()
        self.assertEqual(self._panel(panels, "Account").lines, ["Not logged in"])
        self.assertEqual(self._panel(panels, "Feed").lines, ["No posts yet — be the first!"])

    def test_social_flow_across_two_clients(self):
        alice = self._dashboard("alice")
        bob = self._dashboard("bob")
        alice.register("alice", "pw1", "Alice")
        bob.register("bob", "pw2", "Bob")

        alice.create_post("hello from alice", "https://example.com/a.png")
        post_id = alice.client.posts()[0]["id"]

        bob.follow("alice")
        bob.like(post_id)
        bob.comment(post_id, "nice one")
        panels = bob.send_message("alice", "hello alice")

        feed = self._panel(panels, "Feed").lines
        self.assertEqual(feed[0], f"#{post_id} Alice @alice")
        self.assertEqual(feed[1], "  hello from alice")
        self.assertEqual(feed[2], "  [image] https://example.com/a.png")
        self.assertEqual(feed[3], "  1 likes · 1 comments  [Unfollow]")
        self.assertTrue(feed[4].startswith("    bob: nice one ("))
        self.assertEqual(self._panel(panels, "Messages").lines, ["alice: hello alice"])

        panels = alice.render_all()
        self.assertEqual(
            self._panel(panels, "Profile").lines[1], "@alice • 0 following • 1 followers"
        )
        self.assertEqual(self._panel(panels, "Messages").lines, ["bob: hello alice"])
        notifications = [
            line.split(" • ")[0] for line in self._panel(panels, "Notifications").lines
        ]
        self.assertEqual(
            notifications,
            [
                "bob sent you a message",
                "bob commented: nice one",
                "bob liked your post",
                "bob followed you",
            ],
        )
        # The author sees no follow toggle on their own post.
        self.assertEqual(
            self._panel(panels, "Feed").lines[3], "  1 likes · 1 comments"
        )

    def test_trending_preview_and_search(self):
        dashboard = self._dashboard("alice")
        dashboard.register("alice", "pw1", "Alice")
        dashboard.create_post("a" * 60)
        panels = dashboard.create_post("short and sweet")

        trending = self._panel(panels, "Trending").lines
        self.assertIn("Alice: " + "a" * 50 + "…", trending)
        self.assertIn("Alice: short and sweet", trending)

        panels = dashboard.set_search("sweet")
        feed = self._panel(panels, "Feed").lines
        self.assertEqual(feed[1], "  short and sweet")
        self.assertFalse(any("aaaa" in line for line in feed))

        params = [p for _, path, p in dashboard.client.session.calls if path == "/api/posts"]
        self.assertIn({"q": "sweet"}, params)
        self.assertIn({"trending": "1"}, params)

    def test_edit_profile_updates_display(self):
        dashboard = self._dashboard("alice")
        dashboard.register("alice", "pw1")

        panels = dashboard.edit_profile("Alice Liddell")
        self.assertEqual(self._panel(panels, "Account").lines, ["Alice Liddell (logged in)"])

        panels = dashboard.edit_profile("")
        self.assertEqual(self._panel(panels, "Account").lines, ["Alice Liddell (logged in)"])

    def test_format_helpers(self):
        self.assertEqual(self.format_time(None), "")
        self.assertEqual(self.format_time("yesterday"), "yesterday")
        self.assertRegex(
            self.format_time("2024-03-01T12:30:00.000Z"), r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}$"
        )

        from socialapp.client.dashboard import Panel

        text = self.format_panels([Panel("Feed", ["one", "two"]), Panel("Messages", [])])
        self.assertTrue(text.startswith("Feed\n" + "-" * 20 + "\none\ntwo"))
        self.assertIn("\n\nMessages\n", text)


class TestCli(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        db_fd, cls.db_path = tempfile.mkstemp(suffix=".db")
        os.close(db_fd)

        from socialapp import create_app
        from socialapp.db import db

        cls.app = create_app(
            SQLALCHEMY_DATABASE_URI=f"sqlite:///{cls.db_path}",
            JWT_SECRET_KEY="test-secret",
            TESTING=True,
        )
        cls.db = db

    @classmethod
    def tearDownClass(cls):
        with cls.app.app_context():
            cls.db.engine.dispose()
        if os.path.exists(cls.db_path):
            os.remove(cls.db_path)

    def setUp(self):
        with self.app.app_context():
            self.db.drop_all()
            self.db.create_all()
        self.token_dir = tempfile.mkdtemp()
        self.token_file = os.path.join(self.token_dir, "token.json")

        session_patch = patch(
            "socialapp.client.api_client.requests.Session",
            side_effect=lambda: FlaskSession(self.app.test_client()),
        )
        session_patch.start()
        self.addCleanup(session_patch.stop)

    def tearDown(self):
        shutil.rmtree(self.token_dir, ignore_errors=True)

    def _run(self, *argv):
        from socialapp.cli import main

        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = main(["--api", "http://localhost/api", "--token-file", self.token_file, *argv])
        return code, out.getvalue(), err.getvalue()

    def test_register_post_and_show(self):
        code, out, _ = self._run("register", "alice", "--password", "pw1", "--display", "Alice")
        self.assertEqual(code, 0)
        self.assertIn("Alice (logged in)", out)
        self.assertTrue(os.path.exists(self.token_file))

        code, out, _ = self._run("post", "--text", "first post")
        self.assertEqual(code, 0)
        self.assertIn("  first post", out)

        code, out, _ = self._run("show", "--search", "nothing-matches")
        self.assertEqual(code, 0)
        self.assertIn("No posts yet — be the first!", out)

    def test_exit_codes(self):
        code, _, err = self._run("post", "--text", "")
        self.assertEqual(code, 2)
        self.assertIn("Enter text or image url", err)

        code, _, err = self._run("login", "ghost", "--password", "pw")
        self.assertEqual(code, 1)
        self.assertIn("user not found", err)

    def test_parser_requires_a_command(self):
        from socialapp.cli import build_parser

        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                build_parser().parse_args([])

        args = build_parser().parse_args(["like", "7"])
        self.assertEqual(args.post_id, 7)
        self.assertTrue(re.match(r"https?://", args.api))


if __name__ == "__main__":
    unittest.main()
