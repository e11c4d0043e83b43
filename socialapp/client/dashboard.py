import logging
from collections import namedtuple
from datetime import datetime

from socialapp.client.api_client import ApiError


logger = logging.getLogger(__name__)

Panel = namedtuple("Panel", ["title", "lines"])

SUGGESTION_LIMIT = 6
TRENDING_LIMIT = 5
TRENDING_PREVIEW = 50
THREAD_LIMIT = 6
NOTIFICATION_LIMIT = 10


def format_time(value):
    if not value:
        return ""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return parsed.astimezone().strftime("%Y-%m-%d %H:%M")


def format_panels(panels):
    blocks = []
    for panel in panels:
        rule = "-" * max(len(panel.title), 20)
        blocks.append("\n".join([panel.title, rule, *panel.lines]))
    return "\n\n".join(blocks)


class Dashboard:
    """Text rendition of the page: every region is rebuilt from the API each time.

    Render methods never raise for API failures; they fall back to the
    logged-out or empty text for their region. Action methods re-render all
    regions after the change, mirroring a full page redraw.
    """

    def __init__(self, client):
        self.client = client
        self.search = ""

    def _me(self):
        if not self.client.logged_in:
            return None
        try:
            return self.client.me()
        except ApiError as e:
            logger.debug("profile unavailable: %s", e)
            return None

    def render_auth(self):
        me = self._me()
        if me:
            return Panel("Account", [f"{me['display']} (logged in)"])
        return Panel("Account", ["Not logged in"])

    def render_profile_card(self):
        me = self._me()
        if not me:
            return Panel("Profile", [
                "Not signed in",
                "Log in or create an account to post and interact.",
            ])
        return Panel("Profile", [
            f"{me['display']} [{me.get('avatarColor') or '#c7d2fe'}]",
            f"@{me['username']} • {me.get('following_count') or 0} following"
            f" • {me.get('followers_count') or 0} followers",
        ])

    def render_suggestions(self):
        try:
            users = self.client.users()
        except ApiError as e:
            logger.debug("suggestions unavailable: %s", e)
            return Panel("Who to follow", [])
        return Panel("Who to follow", [
            f"{u['display']} @{u['username']}" for u in users[:SUGGESTION_LIMIT]
        ])

    def render_trending(self):
        try:
            posts = self.client.posts(trending=True)
        except ApiError as e:
            logger.debug("trending unavailable: %s", e)
            return Panel("Trending", ["—"])

        lines = []
        for post in posts[:TRENDING_LIMIT]:
            text = post["text"]
            preview = text[:TRENDING_PREVIEW] + ("…" if len(text) > TRENDING_PREVIEW else "")
            lines.append(f"{post['display']}: {preview}")
        return Panel("Trending", lines)

    def _render_post(self, post, me):
        lines = [f"#{post['id']} {post.get('display') or post['author']} @{post['author']}"]
        if post["text"]:
            lines.append(f"  {post['text']}")
        if post["image"]:
            lines.append(f"  [image] {post['image']}")

        status = f"  {post['likes_count']} likes · {post['comments_count']} comments"
        if me and me["username"] != post["author"]:
            status += "  [Unfollow]" if post.get("following") else "  [Follow]"
        lines.append(status)

        for comment in post.get("comments") or []:
            lines.append(f"    {comment['by']}: {comment['text']} ({format_time(comment['at'])})")
        return lines

    def render_feed(self, q=""):
        try:
            posts = self.client.posts(q=q)
        except ApiError as e:
            logger.warning("feed failed to load: %s", e)
            return Panel("Feed", ["Failed to load feed"])

        if not posts:
            return Panel("Feed", ["No posts yet — be the first!"])

        me = self._me()
        lines = []
        for post in posts:
            lines.extend(self._render_post(post, me))
        return Panel("Feed", lines)

    def render_dms(self):
        try:
            threads = self.client.threads()
        except ApiError as e:
            logger.debug("messages unavailable: %s", e)
            return Panel("Messages", ["Log in to use messages"])
        return Panel("Messages", [
            f"{t['with']}: {t.get('last_text') or '—'}" for t in threads[:THREAD_LIMIT]
        ])

    def render_notifications(self):
        try:
            notifications = self.client.notifications()
        except ApiError as e:
            logger.debug("notifications unavailable: %s", e)
            return Panel("Notifications", ["Login to view notifications"])
        return Panel("Notifications", [
            f"{n['text']} • {format_time(n['at'])}"
            for n in notifications[:NOTIFICATION_LIMIT]
        ])

    def render_all(self):
        return [
            self.render_auth(),
            self.render_profile_card(),
            self.render_suggestions(),
            self.render_trending(),
            self.render_feed(self.search),
            self.render_dms(),
            self.render_notifications(),
        ]

    # --- actions ---

    def register(self, username, password, display=None):
        if not username or not password:
            raise ValueError("username + password required")
        self.client.register(username, password, display or None)
        return self.render_all()

    def login(self, username, password):
        if not username or not password:
            raise ValueError("Enter username+password")
        self.client.login(username, password)
        return self.render_all()

    def logout(self):
        self.client.logout()
        return self.render_all()

    def create_post(self, text="", image=""):
        text, image = (text or "").strip(), (image or "").strip()
        if not text and not image:
            raise ValueError("Enter text or image url")
        self.client.create_post(text, image)
        return self.render_all()

    def like(self, post_id):
        self.client.like(post_id)
        return self.render_all()

    def comment(self, post_id, text):
        text = (text or "").strip()
        if not text:
            return self.render_all()
        self.client.comment(post_id, text)
        return self.render_all()

    def follow(self, username):
        self.client.follow(username)
        return self.render_all()

    def send_message(self, to, text):
        if text:
            self.client.send_message(to, text)
        return self.render_all()

    def edit_profile(self, display):
        if display:
            self.client.update_display(display)
        return self.render_all()

    def set_search(self, q):
        self.search = (q or "").strip()
        return self.render_all()
