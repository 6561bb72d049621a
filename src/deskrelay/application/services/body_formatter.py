"""Outbound message body templating."""

import logging
from datetime import datetime

from jinja2 import TemplateError
from jinja2.sandbox import SandboxedEnvironment

from deskrelay.domain.entities.contact import Contact

logger = logging.getLogger(__name__)


def greeting_for(now: datetime) -> str:
    """Return a greeting matching the hour of day."""
    if now.hour < 12:
        return "Good morning"
    if now.hour < 18:
        return "Good afternoon"
    return "Good evening"


class BodyFormatter:
    """Renders contact placeholders in message bodies.

    Supported placeholders: {{ name }}, {{ first_name }}, {{ number }},
    {{ greeting }}, {{ time }}. Bodies come from agents, so rendering runs
    in a sandbox and an invalid template is sent as written.
    """

    def __init__(self) -> None:
        self._env = SandboxedEnvironment(autoescape=False, keep_trailing_newline=True)

    def format(self, body: str, contact: Contact, now: datetime | None = None) -> str:
        """Render a body for a contact.

        Args:
            body: Body text, possibly with placeholders.
            contact: Recipient.
            now: Render time. Defaults to local now.

        Returns:
            Rendered body.
        """
        if "{" not in body:
            return body

        now = now or datetime.now()
        name = contact.name or ""
        try:
            return self._env.from_string(body).render(
                name=name,
                first_name=name.split(" ")[0] if name else "",
                number=contact.number,
                greeting=greeting_for(now),
                time=now.strftime("%H:%M:%S"),
            )
        except TemplateError as e:
            logger.warning("Could not render message body, sending as is: %s", e)
            return body
