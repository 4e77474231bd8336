# Copyright: 2005 MoinMoin:NirSoffer
# Copyright: 2007 MoinMoin:AlexanderSchremmer
# Copyright: 2008,2011 MoinMoin:ThomasWaldmann
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
PageShare Testing Framework
---------------------------

All test modules must be named test_modulename to be included in the
test suite. If you are testing a package, name the test module
test_package_module.

Tests that require a certain configuration, like ensure_page_owner = False,
must override the cfg fixture with a Config class defining it.
"""

import os

import pytest

import pageshare.log
from pageshare.app import create_app_ext, destroy_app, before_wiki, teardown_wiki
from pageshare._tests import testconfig


# Logging for tests to avoid useless output on stderr on test failures
config_file = os.path.join(os.path.dirname(pageshare.__file__), "_tests", "test_logging.conf")
pageshare.log.load_config(config_file)


@pytest.fixture
def cfg():
    return testconfig.Config


@pytest.fixture
def app_ctx(cfg):
    app = create_app_ext(flask_config_dict=dict(SECRET_KEY="foobarfoobar", TESTING=True), pageshare_config_class=cfg)
    ctx = app.test_request_context("/", base_url="http://localhost:8080/")
    ctx.push()
    before_wiki()

    yield app, ctx

    teardown_wiki("")
    ctx.pop()
    destroy_app(app)


@pytest.fixture(autouse=True)
def app(app_ctx):
    return app_ctx[0]
