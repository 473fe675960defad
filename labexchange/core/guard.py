"""Advisory ownership checks.

The guard only decides which affordances to show. The backend rejects
foreign writes on its own, so nothing may rely on the guard as the sole gate
for a mutating call.
"""

from dataclasses import dataclass

from labexchange.core.ports import Listing, Session


@dataclass(frozen=True)
class Capabilities:
    view: bool
    edit: bool
    delete: bool


def is_owner(session: Session | None, owner_id: int) -> bool:
    """True iff a session is present and its user owns the record."""
    return session is not None and session.user.id == owner_id


def capabilities(session: Session | None, listing: Listing) -> Capabilities:
    owner = is_owner(session, listing.owner_id)
    public = listing.availability_status.is_public()
    return Capabilities(view=public or owner, edit=owner, delete=owner)


def can_edit(session: Session | None, listing: Listing) -> bool:
    return capabilities(session, listing).edit


def can_delete(session: Session | None, listing: Listing) -> bool:
    return capabilities(session, listing).delete
