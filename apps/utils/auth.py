import jwt
import logging

logger = logging.getLogger(__name__)


class JWTAuthenticator:
    """Resolve a request to the caller's id from its bearer token.

    Tokens are issued elsewhere; this only verifies the signature and
    expiry and reads the ``user_id`` claim. Any failure leaves the caller
    unresolved (``None``) so the view can answer 401.
    """

    def __init__(self, secret, algorithms=("HS256",), identity_claim="user_id"):
        self.secret = secret
        self.algorithms = list(algorithms)
        self.identity_claim = identity_claim

    def authenticate(self, request):
        auth_header = request.headers.get('Authorization', '')

        if not auth_header.startswith('Bearer '):
            return None

        token = auth_header.split(' ', 1)[1].strip()
        if not token:
            return None

        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=self.algorithms
            )
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired token")
            return None
        except jwt.InvalidTokenError as e:
            logger.warning(f"Authentication error: {str(e)}")
            return None

        user_id = payload.get(self.identity_claim)
        if not user_id:
            return None
        return str(user_id)
