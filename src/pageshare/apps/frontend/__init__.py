# Copyright: 2010 MoinMoin:ThomasWaldmann
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare - Frontend views package

This package contains the views a typical user of the platform sees.
"""


from flask import Blueprint

frontend = Blueprint("frontend", __name__)
import pageshare.apps.frontend.views  # noqa
