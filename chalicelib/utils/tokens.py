from datetime import datetime, timedelta, timezone
from typing import Dict, Mapping

import jwt

from chalicelib.utils.exceptions import InvalidToken, ValidationException
from chalicelib.utils.logger import CustomJSONEncoder, logger

TOKEN_ALGORITHM = 'HS256'
TOKEN_LIFETIME = timedelta(hours=24)
# only the signature, exp and iat are checked, other registered claims are carried as issued
TOKEN_OPTIONS = {
    'require': ['exp', 'iat'],
    'verify_aud': False,
    'verify_iss': False,
    'verify_sub': False,
    'verify_jti': False,
    'verify_nbf': False
}


def issue_token(claims: Mapping, secret: str, issued_at: datetime = None) -> str:
    """
    Signs the claims with the server secret.
    `iat` and `exp` are always set by the server, expiry is 24 hours after issuing.
    """
    if not isinstance(claims, Mapping):
        raise ValidationException('token claims must be a JSON object')
    issued_at = issued_at or datetime.now(tz=timezone.utc)
    payload = {**claims, 'iat': issued_at, 'exp': issued_at + TOKEN_LIFETIME}
    token = jwt.encode(payload, secret, algorithm=TOKEN_ALGORITHM, json_encoder=CustomJSONEncoder)
    logger.info(f"issue_token ::: token issued for email={claims.get('email')}")
    return token


def verify_token(token: str, secret: str) -> Dict:
    try:
        return jwt.decode(token, secret, algorithms=[TOKEN_ALGORITHM], options=TOKEN_OPTIONS)
    except jwt.InvalidTokenError as error:
        raise InvalidToken(f'token verification failed: {error}') from error
