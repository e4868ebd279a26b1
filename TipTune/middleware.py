from django.conf import settings


class JWTAuthCookieMiddleware:
    """
    The web client keeps its access token in a cookie. Copy it into the
    Authorization header so SimpleJWT can authenticate the request.
    An explicit header always wins.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        token = request.COOKIES.get(settings.JWT_AUTH_COOKIE)
        if token and "HTTP_AUTHORIZATION" not in request.META:
            if not token.lower().startswith("bearer "):
                token = f"Bearer {token}"
            request.META["HTTP_AUTHORIZATION"] = token
        return self.get_response(request)
