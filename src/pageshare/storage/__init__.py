# Copyright: 2011 MoinMoin:RonnyPfannschmidt
# Copyright: 2011 MoinMoin:ThomasWaldmann
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - storage subsystem
=============================

We use a layered approach like this::

 MutableBackendBase                pages with their participations, name
 |                                 validation, optimistic version checks,
 |                                 per-page locking of changes
 v
 memory / sqla backend             simple stuff: store, get, delete and
                                   query rows of pages, participations,
                                   email access grants and notices

Every row operation is atomic on its own. Changes of one page can be
serialized with lock_page(page_id), reads never lock.
"""

BACKENDS_PACKAGE = "pageshare.storage.backends"


def backend_from_uri(uri):
    """
    create a backend instance for uri, e.g. "memory:" or "sqla:sqlite:///pages.db"
    """
    backend_name_uri = uri.split(":", 1)
    if len(backend_name_uri) != 2:
        raise ValueError(f"malformed backend uri: {uri}")
    backend_name, backend_uri = backend_name_uri
    module = __import__(BACKENDS_PACKAGE + "." + backend_name, globals(), locals(), ["MutableBackend"])
    return module.MutableBackend.from_uri(backend_uri)
