"""Token Verification — turns a bearer token into the id of the user it was issued to.

Invariants:
    - Only verifies; tokens are issued by the auth service that owns credentials
    - Any decoding problem (bad signature, expired, missing sub, non-UUID sub)
      becomes UnauthorizedError with the same generic message

Design Decisions:
    - PyJWT with an explicit algorithms list: never trust the token header's alg
"""

import logging
from uuid import UUID

import jwt

from devcamper.core.domain_types import UserId
from devcamper.core.errors import UnauthorizedError

logger = logging.getLogger(__name__)


def decode_access_token(token: str, secret: str, algorithm: str = "HS256") -> UserId:
    """Return the user id in the token's `sub` claim."""
    try:
        claims = jwt.decode(
            token, secret, algorithms=[algorithm], options={"require": ["sub"]},
        )
        return UserId(UUID(str(claims["sub"])))
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired access token")
        raise UnauthorizedError()
    except (jwt.PyJWTError, ValueError) as e:
        logger.info(f"Rejected access token: {e}")
        raise UnauthorizedError()
