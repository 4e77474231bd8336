# Copyright: 2012 MoinMoin:PavelSviderski
# Copyright: 2012 MoinMoin:CheerXiao
# Copyright: 2026 PageShare project
# License: GNU GPL v2 (or any later version), see LICENSE.txt for details.

"""
    PageShare - Flatland form elements
"""


from flatland import Form, String, Boolean, Enum
from flatland.validation import Present, IsEmail

from pageshare.constants.rights import ACCESS_LEVELS, VIEW
from pageshare.i18n import L_

Text = String

OptionalText = Text.using(optional=True)

RequiredText = Text.validated_by(Present())

Email = String.using(label=L_("E-Mail")).validated_by(IsEmail())

Checkbox = Boolean.using(optional=True, default=False)

Access = Enum.using(label=L_("Access"), default=VIEW).valued(*ACCESS_LEVELS)


def is_email(text):
    """is text a syntactically valid email address?"""
    return Email(text).validate()


class CreatePageForm(Form):
    title = RequiredText.using(label=L_("Title"))
    name = OptionalText.using(label=L_("Name"))
    owner = OptionalText.using(label=L_("Owner"))
    public = Checkbox.using(label=L_("Public"))
    submit_label = L_("Create")


class AddRecipientForm(Form):
    recipient_name = RequiredText.using(label=L_("Recipients"))
    access = Access.using(optional=True)
    submit_label = L_("Add")
