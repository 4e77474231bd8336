# Copyright: 2011-2013 by MoinMoin:ThomasWaldmann
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - pageshare.utils.crypto Tests
"""


import time

from pageshare.utils import crypto


class TestRandom:
    """crypto: random tests"""

    def test_make_key(self):
        key1, key2 = crypto.make_key(), crypto.make_key()
        assert key1 != key2
        assert isinstance(key1, str)
        assert len(key1) == 32

    def test_make_uuid(self):
        assert len(crypto.make_uuid()) == crypto.UUID_LEN
        assert crypto.make_uuid() != crypto.make_uuid()


class TestToken:
    """tests for the generated tokens"""

    def test_validtoken(self):
        """validate the token"""
        test_key, test_token = crypto.generate_token(key="PageShare")  # having some key value
        result = crypto.valid_token(test_key, test_token)
        assert result

        test_key, test_token = crypto.generate_token()  # key value is none
        result = crypto.valid_token(test_key, test_token)
        assert result

        test_parts = test_token.split("-")
        test_parts[0] = "not_valid"
        # changed value of the first part, should not be string
        test_token_changed = "-".join(test_parts)
        result = crypto.valid_token(test_key, test_token_changed)
        assert not result

        test_key, test_token = "PageShare", "incorrect_token"
        result = crypto.valid_token(test_key, test_token)
        assert not result

    def test_wrong_key(self):
        test_key, test_token = crypto.generate_token(key="PageShare")
        assert not crypto.valid_token("OtherKey", test_token)
        assert not crypto.valid_token("", test_token)
        assert not crypto.valid_token(test_key, "")

    def test_timeout(self):
        stamp = int(time.time()) - 3 * 60 * 60
        test_key, test_token = crypto.generate_token(key="PageShare", stamp=stamp)
        assert not crypto.valid_token(test_key, test_token)
        assert crypto.valid_token(test_key, test_token, timeout=4 * 60 * 60)
        assert crypto.valid_token(test_key, test_token, timeout=None)


coverage_modules = ["pageshare.utils.crypto"]
