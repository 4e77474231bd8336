# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - storage errors
"""


from pageshare.error import CompositeError


class StorageError(CompositeError):
    """
    General class for exceptions on the storage layer.
    The low level exception (if any) is kept as inner exception.
    """


class NoSuchPageError(StorageError):
    """
    Raised if the requested page does not exist.
    """

    def __init__(self, page_id):
        self.page_id = page_id
        StorageError.__init__(self, f"no such page: {page_id!r}")


class ConflictError(StorageError):
    """
    Raised if a page was changed by somebody else since it was loaded.
    """

    def __init__(self, page_id, expected_version):
        self.page_id = page_id
        self.expected_version = expected_version
        StorageError.__init__(self, f"page {page_id!r} was changed concurrently (expected version {expected_version})")
