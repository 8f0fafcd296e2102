"""
Bearer token helpers.

Tokens are HS256 JWTs issued by tubely with the user id as subject.
"""

from datetime import datetime, timedelta, timezone

import jwt

from videos.errors import UnauthorizedError

TOKEN_ISSUER = 'tubely-access'


def get_bearer_token(headers):
    """
    Extract the bearer token from request headers.

    Args:
        headers: Mapping with case-insensitive lookup (e.g. request.headers)

    Returns:
        str: The raw token

    Raises:
        UnauthorizedError: If the Authorization header is missing or malformed
    """
    auth_header = headers.get('Authorization')
    if not auth_header:
        raise UnauthorizedError("Couldn't find JWT")

    scheme, _, token = auth_header.partition(' ')
    token = token.strip()
    if scheme.lower() != 'bearer' or not token:
        raise UnauthorizedError('Malformed authorization header')
    return token


def validate_jwt(token, secret):
    """
    Validate a token and return the user id it was issued for.

    Raises:
        UnauthorizedError: On bad signature, wrong issuer, expiry or missing subject
    """
    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=['HS256'],
            issuer=TOKEN_ISSUER,
            options={'require': ['sub', 'iss']},
        )
    except jwt.PyJWTError as e:
        raise UnauthorizedError('Invalid JWT') from e

    user_id = claims.get('sub')
    if not user_id:
        raise UnauthorizedError('Invalid JWT')
    return user_id


def make_jwt(user_id, secret, expires_in=timedelta(hours=1)):
    """Issue a token for user_id, used by tooling and tests."""
    now = datetime.now(timezone.utc)
    claims = {
        'iss': TOKEN_ISSUER,
        'sub': str(user_id),
        'iat': now,
        'exp': now + expires_in,
    }
    return jwt.encode(claims, secret, algorithm='HS256')
