# Copyright: 2012-2025 MoinMoin:ThomasWaldmann
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - cryptographic and random functions.

Features:
- Generate magic link tokens
- Verify magic link tokens
- Generate random ids and keys
"""

import hashlib
import hmac
import secrets
import time

from uuid import uuid4

from pageshare import log

logging = log.getLogger(__name__)


def make_uuid():
    return str(uuid4().hex)


UUID_LEN = len(make_uuid())


def make_key():
    """a new random secret key (32 url-safe characters)"""
    return secrets.token_urlsafe(24)


# magic link token


def generate_token(key=None, stamp=None):
    """
    Generate a pair consisting of a secret key and a token.

    The token is sent to the recipient (e.g. inside a link in an email),
    the secret key is stored on the server side. When the recipient comes
    back with the token, call valid_token(key, token) to verify it.

    :param key: Recompute a specific token for verification using this key.
    :param stamp: Recompute a specific token for verification using this timestamp.
    :rtype: 2-tuple
    :returns: key, token (both strings)
    """
    if key is None:
        key = make_key()
    if stamp is None:
        stamp = int(time.time())
    key_encoded = key if isinstance(key, bytes) else key.encode()
    stamp_encoded = str(stamp).encode()
    h = hmac.new(key_encoded, stamp_encoded, digestmod=hashlib.sha256).hexdigest()
    token = f"{stamp}-{h}"
    return str(key), token


def valid_token(key, token, timeout=2 * 60 * 60):
    """
    Check whether a token is valid with respect to the secret key.
    The token must not be older than the timeout (in seconds).

    :param key: The secret key to verify the token.
    :param token: The token to verify.
    :param timeout: Timeout in seconds; set to None to ignore the timeout.
    :rtype: bool
    :returns: True if the token is valid and not timed out; otherwise False.
    """
    if not key or not token:
        return False
    parts = token.split("-")
    if len(parts) != 2:
        return False
    try:
        stamp = int(parts[0])
    except ValueError:
        return False
    if timeout and stamp + timeout < time.time():
        return False
    expected_token = generate_token(key, stamp)[1]
    return hmac.compare_digest(token, expected_token)
