# Copyright: 2003-2004 by Nir Soffer <nirs AT freeshell DOT org>
# Copyright: 2007 by MoinMoin:ThomasWaldmann
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
    PageShare - pageshare.error Tests
"""


from pageshare import error
from pageshare.items import Page
from pageshare.storage.error import ConflictError, NoSuchPageError, StorageError


class TestEncoding:
    """errors do work with unicode transparently"""

    def testCreateWithUnicode(self):
        """error: create with unicode"""
        err = error.Error("טעות")
        assert str(err) == "טעות"

    def testCreateWithEncodedString(self):
        """error: create with encoded string"""
        err = error.Error("טעות".encode())
        assert str(err) == "טעות"

    def testAccessLikeDict(self):
        """error: access error like a dict"""
        err = error.Error("value")
        assert "%(message)s" % dict(message=err) == "value"
        assert err["message"] == "value"


class TestCompositeError:

    def test_inner_exception(self):
        try:
            try:
                raise KeyError("low level")
            except KeyError:
                raise StorageError("high level")
        except StorageError as err:
            exceptions = err.exceptions()
        assert isinstance(exceptions[0][1], KeyError)

    def test_persistence_failure_keeps_storage_error(self):
        try:
            try:
                raise ConflictError(1, 3)
            except StorageError:
                raise error.PersistenceFailure("could not save")
        except error.PersistenceFailure as err:
            assert isinstance(err.innerException[1], ConflictError)
            assert str(err) == "could not save"


class TestRequestErrors:

    def test_permission_denied(self):
        err = error.PermissionDenied("share", Page("Denied", id=7))
        assert err.perm == "share"
        assert err.page.id == 7
        assert str(err) == "permission denied: share on page 7"
        assert str(error.PermissionDenied("create")) == "permission denied: create"

    def test_invalid_mode(self):
        err = error.InvalidMode("shout")
        assert err.mode == "shout"
        assert isinstance(err, error.FatalError)

    def test_storage_errors(self):
        assert NoSuchPageError(5).page_id == 5
        err = ConflictError(5, 2)
        assert (err.page_id, err.expected_version) == (5, 2)
        assert "changed concurrently" in str(err)
