"""Command line entry point: run the API server or drive it as a client."""
import argparse
import getpass
import logging
import sys

from socialapp.client.api_client import DEFAULT_API_BASE, ApiClient, ApiError, TokenStore
from socialapp.client.dashboard import Dashboard, format_panels
from socialapp.utils.logger import LOG_FORMAT


logger = logging.getLogger(__name__)


def cmd_serve(args):
    from socialapp import create_app

    app = create_app()
    host = args.host or app.config["HOST"]
    port = args.port or app.config["PORT"]
    logger.info("Server running on http://%s:%s", host, port)
    app.run(host=host, port=port, debug=args.debug)


def cmd_init_db(args):
    # create_app runs create_all, which is all the schema setup there is.
    from socialapp import create_app

    app = create_app()
    print(f"Database ready at {app.config['SQLALCHEMY_DATABASE_URI']}")


def _password(args):
    return args.password or getpass.getpass("password: ")


def cmd_register(dashboard, args):
    return dashboard.register(args.username, _password(args), args.display)


def cmd_login(dashboard, args):
    return dashboard.login(args.username, _password(args))


def cmd_logout(dashboard, args):
    return dashboard.logout()


def cmd_post(dashboard, args):
    return dashboard.create_post(args.text or "", args.image or "")


def cmd_like(dashboard, args):
    return dashboard.like(args.post_id)


def cmd_comment(dashboard, args):
    return dashboard.comment(args.post_id, args.text)


def cmd_follow(dashboard, args):
    return dashboard.follow(args.username)


def cmd_message(dashboard, args):
    return dashboard.send_message(args.to, args.text)


def cmd_profile(dashboard, args):
    return dashboard.edit_profile(args.display)


def cmd_show(dashboard, args):
    return dashboard.set_search(args.search)


def build_parser():
    parser = argparse.ArgumentParser(prog="socialapp", description="Minimal social network")
    parser.add_argument("--api", default=DEFAULT_API_BASE, help="API base URL")
    parser.add_argument("--token-file", default=None, help="Where the login token is kept")
    parser.add_argument("-v", "--verbose", action="store_true")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.add_argument("--debug", action="store_true")
    serve.set_defaults(server_func=cmd_serve)

    init_db = subparsers.add_parser("init-db", help="Create database tables")
    init_db.set_defaults(server_func=cmd_init_db)

    register = subparsers.add_parser("register", help="Create an account and log in")
    register.add_argument("username")
    register.add_argument("--display", default=None)
    register.add_argument("--password", default=None)
    register.set_defaults(func=cmd_register)

    login = subparsers.add_parser("login", help="Log in")
    login.add_argument("username")
    login.add_argument("--password", default=None)
    login.set_defaults(func=cmd_login)

    logout = subparsers.add_parser("logout", help="Forget the stored token")
    logout.set_defaults(func=cmd_logout)

    post = subparsers.add_parser("post", help="Publish a post")
    post.add_argument("--text", default="")
    post.add_argument("--image", default="", help="Image URL")
    post.set_defaults(func=cmd_post)

    like = subparsers.add_parser("like", help="Like or unlike a post")
    like.add_argument("post_id", type=int)
    like.set_defaults(func=cmd_like)

    comment = subparsers.add_parser("comment", help="Comment on a post")
    comment.add_argument("post_id", type=int)
    comment.add_argument("text")
    comment.set_defaults(func=cmd_comment)

    follow = subparsers.add_parser("follow", help="Follow or unfollow a user")
    follow.add_argument("username")
    follow.set_defaults(func=cmd_follow)

    message = subparsers.add_parser("message", help="Send a direct message")
    message.add_argument("to")
    message.add_argument("text")
    message.set_defaults(func=cmd_message)

    profile = subparsers.add_parser("profile", help="Change your display name")
    profile.add_argument("--display", required=True)
    profile.set_defaults(func=cmd_profile)

    show = subparsers.add_parser("show", help="Render every page region")
    show.add_argument("--search", default="")
    show.set_defaults(func=cmd_show)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if hasattr(args, "server_func"):
        args.server_func(args)
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
    )

    client = ApiClient(base_url=args.api, token_store=TokenStore(args.token_file))
    dashboard = Dashboard(client)

    try:
        panels = args.func(dashboard, args)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 2
    except ApiError as e:
        print(f"Action failed: {e.message}", file=sys.stderr)
        return 1

    print(format_panels(panels))
    return 0


if __name__ == "__main__":
    sys.exit(main())
