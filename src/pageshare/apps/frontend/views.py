# Copyright: 2003-2013 MoinMoin:ThomasWaldmann
# Copyright: 2012 MoinMoin:CheerXiao
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
    PageShare - frontend views

    Pages, the share / notify dialogs and magic links. All views answer
    with json, rendering is done by the client.
"""


from flask import request, abort, jsonify
from flask import current_app as app
from flask import g as flaskg

from pageshare.apps.frontend import frontend
from pageshare.constants.keys import ACCESS, FAILURES, MESSAGE, MODE, NOTIFICATION, RECIPIENTS
from pageshare.constants.keys import SEND_EMAIL, SEND_MESSAGE, SEND_NOTICE
from pageshare.constants.misc import MODES, SHARE
from pageshare.error import InvalidMode
from pageshare.forms import AddRecipientForm, CreatePageForm
from pageshare.items import Page, PageOwnerError, PageValidationError
from pageshare.security import AccessLevel, magiclink
from pageshare.sharing import ShareRequest, ShareWorkflow, Tracker
from pageshare.signalling import page_created, page_displayed
from pageshare.storage.error import NoSuchPageError

from pageshare import log

logging = log.getLogger(__name__)


def mode_param():
    """the sharing mode of the request"""
    mode = request.values.get(MODE)
    if mode is None and request.is_json:
        mode = (request.get_json(silent=True) or {}).get(MODE)
    if mode not in MODES:
        raise InvalidMode(mode)
    return mode


def convert_checkbox_boolean(options):
    """convert {"checkbox": "1"} to {"checkbox": True}"""
    converted = {}
    for key, val in options.items():
        if val == "0":
            val = False
        elif val == "1":
            val = True
        converted[key] = val
    return converted


def form_errors(form):
    return {element.name: [str(err) for err in element.errors] for element in form.all_children if element.errors}


def get_page(page_id):
    """the page with page_id, 404 if the user may not even see it"""
    page = flaskg.storage.get_page(page_id)
    if not flaskg.policy.can_view(flaskg.user, page):
        # do not tell whether the page exists
        raise NoSuchPageError(page_id)
    return page


def share_workflow():
    return ShareWorkflow(
        flaskg.storage,
        flaskg.users,
        flaskg.groups,
        flaskg.resolver,
        flaskg.policy,
        flaskg.pester_policy,
        notifier=flaskg.notifier,
        tracker=Tracker(app._get_current_object()),
    )


def recipient_dict(recipient):
    return dict(kind=recipient.kind, id=recipient.id, name=recipient.name)


@frontend.route("/+page/<int:page_id>")
def show_page(page_id):
    page = get_page(page_id)
    page_displayed.send(app._get_current_object(), page=page, user=flaskg.user)
    data = page.to_dict()
    access = flaskg.resolver.effective_access(flaskg.user, page)
    data[ACCESS] = str(access) if access is not None else None
    return jsonify(data)


@frontend.route("/+create", methods=["POST"])
def create_page():
    """
    Create a page owned by the user or by the group named in the owner field.
    """
    form = CreatePageForm.from_flat(request.form)
    if not form.validate():
        return jsonify(dict(errors=form_errors(form))), 400
    user = flaskg.user
    owner_name = form["owner"].value or user.login
    group = flaskg.groups.find_group_by_name(owner_name)
    if not flaskg.policy.can_create(user, group):
        abort(403)
    if group is None and owner_name != user.login:
        # pages can be given to groups, not to other users
        abort(403)
    page = Page(
        form["title"].value,
        name=form["name"].value or None,
        created_by=user.login,
        public=bool(form["public"].value),
    )
    try:
        page.set_owner(
            owner_name, ensure_page_owner=app.cfg.ensure_page_owner, users=flaskg.users, groups=flaskg.groups
        )
        if group is not None and user.valid:
            # the creator can't lose access to the page just created
            page.add(user, AccessLevel.ADMIN)
        flaskg.storage.save_page(page)
    except PageOwnerError as err:
        return jsonify(dict(errors=dict(owner=[str(err)]))), 400
    except PageValidationError as err:
        return jsonify(dict(errors={err.field: [err.message]})), 400
    page_created.send(app._get_current_object(), page=page, user=user)
    return jsonify(page.to_dict()), 201


@frontend.route("/+share/<int:page_id>", methods=["GET"])
def show_share(page_id):
    """the current state of the share (mode=share) or notify (mode=notify) dialog"""
    page = get_page(page_id)
    mode = mode_param()
    share_workflow().authorize(flaskg.user, page, mode)
    return jsonify(
        dict(
            mode=mode,
            page=page.to_dict(),
            participations=[part.to_dict() for part in page.participations()],
            alter_access=mode == SHARE,
        )
    )


@frontend.route("/+share/<int:page_id>/+add", methods=["POST"])
def add_recipients(page_id):
    """
    Resolve the typed recipient names, so the dialog can list them.

    The page id 0 stands for a page just getting created.
    """
    mode = mode_param()
    user = flaskg.user
    if page_id == 0:
        page = None
        if not flaskg.policy.can_create(user):
            abort(403)
    else:
        page = get_page(page_id)
        share_workflow().authorize(user, page, mode)
    form = AddRecipientForm.from_flat(request.form)
    if not form.validate():
        return jsonify(dict(errors=form_errors(form))), 400
    access = form[ACCESS].value or None
    resolver = share_workflow().recipient_resolver(user, page)
    recipients, failures = resolver.resolve_all(form["recipient_name"].value, mode, access)
    return jsonify(
        {
            RECIPIENTS: [recipient_dict(recipient) for recipient in recipients],
            FAILURES: [failure.to_dict() for failure in failures],
            "alter_access": mode == SHARE,
        }
    )


@frontend.route("/+share/<int:page_id>", methods=["POST"])
def share_page(page_id):
    """
    Share the page (mode=share) or send a notice about it (mode=notify).

    The json body looks like::

        {"mode": "share",
         "recipients": {"aaron": {"access": "admin"}, "rainbow": {"access": "view"}},
         "notification": {"send_email": "1", "send_message": "0"},
         "message": "have a look"}
    """
    page = get_page(page_id)
    mode = mode_param()
    data = request.get_json(silent=True) or {}
    options = convert_checkbox_boolean(data.get(NOTIFICATION) or {})
    try:
        share_request = ShareRequest(
            flaskg.user,
            page,
            mode,
            data.get(RECIPIENTS),
            send_email=options.get(SEND_EMAIL, False),
            send_message=options.get(SEND_MESSAGE, False),
            send_notice=options.get(SEND_NOTICE),
            message=data.get(MESSAGE),
        )
    except ValueError as err:
        # unknown access level
        return jsonify({MESSAGE: str(err)}), 400
    result = share_workflow().run(share_request)
    return jsonify(result.to_dict())


@frontend.route("/+magic/<int:page_id>")
def magic_page(page_id):
    """
    View a page through the link sent to an email address.

    Missing pages, deleted pages and bad links all get the same answer.
    """
    page = flaskg.storage.get_page(page_id)
    email = request.args.get("email", "")
    token = request.args.get("token", "")
    record = magiclink.validate(flaskg.storage, page, email, token, timeout=app.cfg.magic_link_timeout)
    if (record is None and not page.public) or page.deleted:
        logging.debug(f"rejected magic link for page {page_id!r}")
        raise NoSuchPageError(page_id)
    page_displayed.send(app._get_current_object(), page=page, user=None)
    data = page.to_dict()
    data["email"] = record.email if record is not None else None
    return jsonify(data)
