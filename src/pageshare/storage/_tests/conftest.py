# Copyright: 2011 MoinMoin:RonnyPfannschmidt
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - backend test magic
"""

import pytest

from pageshare.storage import backend_from_uri

BACKENDS = "memory sqla:memory sqla".split()


uris = {
    "memory": lambda tmpdir: "memory:",
    "sqla:memory": lambda tmpdir: "sqla:",
    "sqla": lambda tmpdir: "sqla:sqlite:///{!s}".format(tmpdir.join("pages.db")),
}


@pytest.fixture(params=BACKENDS)
def be(request, tmpdir):
    backend = backend_from_uri(uris[request.param](tmpdir))
    backend.create()
    backend.open()
    yield backend
    backend.close()
    # for debugging, you can disable the next line to see the stuff in the
    # database and examine it, but usually we want to clean up afterwards:
    backend.destroy()
