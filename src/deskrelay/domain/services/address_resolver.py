"""Transport address resolution.

Stored contacts carry addresses in several historical formats:

- linked-identity numbers ("5511999@lid"), some saved with a stray
  direct-message domain ("5511999@lid@s.whatsapp.net");
- a cached canonical address in remote_jid, which may be malformed;
- bare numbers that need a domain.

resolve_address picks exactly one signal in priority order and always
passes the result through normalize_jid.
"""

import logging

from deskrelay.domain.entities.address import (
    GROUP_DOMAIN,
    LEGACY_USER_DOMAIN,
    LID_DOMAIN,
    RECOGNIZED_DOMAINS,
    USER_DOMAIN,
    AddressSource,
    ResolvedAddress,
)
from deskrelay.domain.entities.contact import Contact

logger = logging.getLogger(__name__)

LID_MARKER = f"@{LID_DOMAIN}"
DOUBLED_LID_SUFFIX = f"{LID_MARKER}@{USER_DOMAIN}"


def normalize_jid(jid: str) -> str:
    """Trim an address and reduce it to exactly one recognized domain.

    The linked-identity domain wins over any other domain present.
    Otherwise the first recognized domain is kept; the legacy "c.us"
    domain maps to the direct-message domain. An address without a
    recognized domain gets the direct-message domain.

    Idempotent: normalize_jid(normalize_jid(x)) == normalize_jid(x).

    Args:
        jid: Address to normalize.

    Returns:
        "{user}@{domain}".
    """
    user, _, rest = jid.strip().partition("@")
    user = user.strip()
    domains = [d.strip() for d in rest.split("@") if d.strip()]

    domain = USER_DOMAIN
    if LID_DOMAIN in domains:
        domain = LID_DOMAIN
    else:
        for candidate in domains:
            if candidate == LEGACY_USER_DOMAIN:
                candidate = USER_DOMAIN
            if candidate in RECOGNIZED_DOMAINS:
                domain = candidate
                break

    return f"{user}@{domain}"


def resolve_address(contact: Contact, *, debug: bool = False) -> ResolvedAddress:
    """Derive the canonical transport address of a contact.

    Priority:
    1. Linked-identity marker in number (doubled suffix collapsed).
    2. Stored remote_jid without the doubled-suffix defect.
    3. "{number}@{domain}", with the group domain for groups.

    The doubled-suffix check is a plain substring match; it does not catch
    every malformed stored value. Normalization handles the rest.

    Args:
        contact: Contact to resolve.
        debug: Log resolution details at INFO instead of DEBUG.

    Returns:
        ResolvedAddress tagged with the signal it came from.
    """
    log_level = logging.INFO if debug else logging.DEBUG

    if LID_MARKER in contact.number:
        jid = contact.number.replace(DOUBLED_LID_SUFFIX, LID_MARKER)
        source = AddressSource.LINKED_IDENTITY
    elif contact.remote_jid and DOUBLED_LID_SUFFIX not in contact.remote_jid:
        jid = contact.remote_jid
        source = AddressSource.STORED_JID
    else:
        domain = GROUP_DOMAIN if contact.is_group else USER_DOMAIN
        jid = f"{contact.number}@{domain}"
        source = AddressSource.SYNTHESIZED

    resolved = ResolvedAddress(jid=normalize_jid(jid), source=source)
    logger.log(
        log_level,
        "Resolved address %s from %s (number=%s, remote_jid=%s, is_group=%s)",
        resolved.jid,
        source.value,
        contact.number,
        contact.remote_jid,
        contact.is_group,
    )
    return resolved
