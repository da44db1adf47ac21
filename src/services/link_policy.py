"""
Ownership rules for links.

A link is visible to and editable by its owner only. There is no admin override
and no sharing. These are plain functions so they can be used and tested
without a request or database.
"""
from models.link import Link
from models.user import User


def is_owner(user: User, link: Link) -> bool:
    """Return True if `user` owns `link`."""
    return user.id is not None and link.user_id == user.id


def can_view(user: User, link: Link) -> bool:
    """Return True if `user` may see `link`."""
    return is_owner(user, link)


def can_edit(user: User, link: Link) -> bool:
    """Return True if `user` may load `link` for editing or update it."""
    return is_owner(user, link)


def can_delete(user: User, link: Link) -> bool:
    """Return True if `user` may delete `link`."""
    return is_owner(user, link)
