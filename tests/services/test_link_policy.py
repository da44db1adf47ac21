"""Tests for link ownership rules. No database needed: the rules are pure functions."""
import pytest

from models.link import Link
from models.user import User
from services import link_policy


CHECKS = [link_policy.can_view, link_policy.can_edit, link_policy.can_delete]


@pytest.mark.parametrize('check', CHECKS)
def test__owner_is_allowed(check) -> None:  # noqa: ANN001
    owner = User(id=1, auth0_id='auth0|owner')
    link = Link(id=10, user_id=1, url='https://example.com', title='Example')

    assert check(owner, link) is True


@pytest.mark.parametrize('check', CHECKS)
def test__other_user_is_denied(check) -> None:  # noqa: ANN001
    other = User(id=2, auth0_id='auth0|other')
    link = Link(id=10, user_id=1, url='https://example.com', title='Example')

    assert check(other, link) is False


def test__unsaved_user_never_owns_an_unowned_link() -> None:
    """A user without an ID does not match a link whose owner is also unset."""
    user = User(auth0_id='auth0|new')
    link = Link(url='https://example.com', title='Example')

    assert link_policy.is_owner(user, link) is False
