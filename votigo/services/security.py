import hmac

from flask import Response, current_app
from flask_login import UserMixin


class AdminUser(UserMixin):
    def __init__(self, username):
        self.id = username


def check_admin_credentials(username, password):
    expected_username = current_app.config["ADMIN_USERNAME"]
    expected_password = current_app.config["ADMIN_PASSWORD"]
    if not expected_password or username is None or password is None:
        return False

    username_ok = hmac.compare_digest(username.encode(), expected_username.encode())
    password_ok = hmac.compare_digest(password.encode(), expected_password.encode())
    return username_ok and password_ok


def load_admin_from_request(request):
    auth = request.authorization
    if auth is None or auth.type != "basic":
        return None

    if check_admin_credentials(auth.username, auth.password):
        return AdminUser(auth.username)

    current_app.logger.warning("Rejected admin login for user %r", auth.username)
    return None


def unauthorized_response():
    return Response(
        "Unauthorized",
        401,
        {"WWW-Authenticate": 'Basic realm="Admin"'},
    )
