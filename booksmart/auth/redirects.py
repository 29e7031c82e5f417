"""Where to send the browser after the session state is known.

The decision depends only on whether the visitor is signed in, whether the
current location is one of the auth pages, and the ``redirect`` query
parameter carried through the login flow.
"""

from urllib.parse import parse_qs, urlencode, urlsplit

HOME_PATH = "/"
LOGIN_PATH = "/login"
SIGNUP_PATH = "/signup"
CALLBACK_PATH = "/callback"
ERROR_PATH = "/error"
AUTH_PATHS = (LOGIN_PATH, SIGNUP_PATH, CALLBACK_PATH, ERROR_PATH)


def is_auth_page(path: str) -> bool:
    return any(path == auth_path or path.startswith(f"{auth_path}/") for auth_path in AUTH_PATHS)


def safe_redirect_target(target: str | None) -> str | None:
    # Only same-site absolute paths; "//host" and backslash tricks would leave the site.
    if not target or not target.startswith("/") or target.startswith("//") or "\\" in target:
        return None
    return target


def with_redirect(path: str, target: str) -> str:
    return f"{path}?{urlencode({'redirect': target})}"


def error_location(message: str) -> str:
    return f"{ERROR_PATH}?{urlencode({'message': message})}"


def resolve_redirect(location: str | None, is_authenticated: bool) -> str:
    parsed = urlsplit(location or HOME_PATH)
    path = parsed.path or HOME_PATH
    current = f"{path}?{parsed.query}" if parsed.query else path
    redirect_target = safe_redirect_target(parse_qs(parsed.query).get("redirect", [None])[0])
    on_auth_page = is_auth_page(path)

    if is_authenticated:
        if redirect_target:
            return redirect_target
        return HOME_PATH if on_auth_page else current

    if on_auth_page:
        return current
    if path == HOME_PATH and not parsed.query:
        return LOGIN_PATH
    return with_redirect(LOGIN_PATH, current)
