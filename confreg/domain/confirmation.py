"""
Confirmation message rendering.

Builds the subject and plain-text body of the confirmation mail from a
Registration. Pure and deterministic: the same registration and sender always
produce the same message.
"""

from dataclasses import dataclass

from .registration import Registration, Title

SUBJECT = "Registration confirmation: {full_name}"

BODY = """\
Dear {full_name},

thank you for registering. We have received the following details:

Name:              {display_name}
E-mail:            {email}
Institution:       {institution}
Project:           {project}
Country:           {country}
Course:            {course}
Price category:    {price_category}
Presentation:      {presentation}
Meal:              {meal}
Pay cash on site:  {pay_cash}
Conference dinner: {conference_dinner}

Additional information:
{more_info}

If any of these details are wrong, please reply to this e-mail.

Kind regards,
The organising committee
"""


@dataclass(frozen=True)
class ConfirmationMessage:
    sender: str
    recipient: str
    subject: str
    body: str


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"


def render_confirmation(registration: Registration, sender: str) -> ConfirmationMessage:
    """
    Render the confirmation mail for ``registration``.

    Args:
        registration: Persisted registration
        sender: Configured origin address (Configuration.email_from)
    """
    fields = {
        "full_name": registration.full_name,
        "display_name": _display_name(registration),
        "email": registration.email,
        "institution": registration.institution,
        "project": registration.project or "-",
        "country": registration.country or "-",
        "course": registration.course or "-",
        "price_category": registration.price_category.canonical,
        "presentation": registration.presentation.canonical,
        "meal": registration.meal.canonical,
        "pay_cash": _yes_no(registration.pay_cash),
        "conference_dinner": _yes_no(registration.conference_dinner),
        "more_info": registration.more_info or "-",
    }
    return ConfirmationMessage(
        sender=sender,
        recipient=registration.email,
        subject=SUBJECT.format(**fields),
        body=BODY.format(**fields),
    )


def _display_name(registration: Registration) -> str:
    if registration.title is Title.OTHER:
        return registration.full_name
    return f"{registration.title.canonical} {registration.full_name}"
