"""Test fixtures and factories."""

from tests.fixtures.factories import (
    AboutFactory,
    AdminUserFactory,
    HeroFactory,
    ProjectFactory,
    ProjectLocaleFactory,
    SkillFactory,
    StatFactory,
)
from tests.fixtures.sessions import FakeSessionResolver, make_token

__all__ = [
    "AdminUserFactory",
    "HeroFactory",
    "AboutFactory",
    "ProjectFactory",
    "ProjectLocaleFactory",
    "SkillFactory",
    "StatFactory",
    "FakeSessionResolver",
    "make_token",
]
