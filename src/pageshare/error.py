# Copyright: 2004-2005 Nir Soffer <nirs@freeshell.org>
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare errors / exception classes.
"""

import sys


class Error(Exception):
    """Base class for PageShare errors.

    Use this class when you raise errors or create subclasses that
    may be used to display translated error messages. The message may
    be a lazy string, it is only converted when the error gets rendered.
    """

    def __init__(self, message):
        """Initialize an error, decode if needed

        :param message: str, bytes or object that supports __str__.
        """
        if isinstance(message, bytes):
            message = message.decode()
        if not isinstance(message, str):
            message = str(message)
        self.message = message

    def __str__(self):
        """Return the error message as str."""
        return self.message

    def __getitem__(self, item):
        """Make it possible to access attributes like a dict"""
        return getattr(self, item)


class CompositeError(Error):
    """Base class for exceptions containing another exception.

    Do not use this class directly; use its more specific subclasses.

    Useful for hiding a low-level error inside a high-level user-facing error,
    while keeping the inner error information for debugging.
    """

    def __init__(self, message):
        """Save system exception info before this exception is raised."""
        Error.__init__(self, message)
        self.innerException = sys.exc_info()

    def exceptions(self):
        """Return a list of all inner exceptions"""
        all = [self.innerException]
        while True:
            lastException = all[-1][1]
            try:
                all.append(lastException.innerException)
            except AttributeError:
                break
        return all


class FatalError(CompositeError):
    """Base class for fatal errors we can't handle.

    Do not use this class directly; use its more specific subclasses.
    """


class ConfigurationError(FatalError):
    """Raised when a fatal misconfiguration is found."""


class InternalError(FatalError):
    """Raised when an internal fatal error is found."""


# request level errors of the sharing subsystem, any of these aborts the
# whole request (per-recipient problems are in pageshare.sharing.recipients)


class PermissionDenied(Error):
    """Raised when an actor lacks the access level needed for an action.

    Carries the requested permission and the page for audit / error messages.
    """

    def __init__(self, perm, page=None, message=None):
        self.perm = perm
        self.page = page
        if message is None:
            where = f" on page {page.id!r}" if page is not None else ""
            message = f"permission denied: {perm}{where}"
        Error.__init__(self, message)


class PersistenceFailure(CompositeError):
    """Raised when a page or participation could not be saved.

    The low level storage exception is kept as inner exception.
    """


class InvalidMode(InternalError):
    """Raised when a sharing workflow is invoked with an unknown mode."""

    def __init__(self, mode):
        self.mode = mode
        InternalError.__init__(self, f"bad mode: {mode!r}")
