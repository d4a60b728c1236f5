# File: src/accessor_emulate/naming.py
"""
Naming policies: which public method names a field's accessors get.

A policy is a strategy object with two pure functions. It is bound onto a
class as the classmethods `accessor_name_for` and `mutator_name_for`, which is
where the synthesizer looks names up. Binding replaces any previous policy of
that class unconditionally; methods generated before the switch keep their
names. Subclasses inherit the policy of their base.
"""

from __future__ import annotations

from typing import Any, Protocol, final

from accessor_emulate.installer import InstallMode, install
from accessor_emulate.xlogging.logger_factory import create_logger


__all__ = [
    "BEST_PRACTICE",
    "IDENTITY",
    "BestPracticeNaming",
    "IdentityNaming",
    "NamingPolicy",
    "accessor_name_for",
    "apply_naming_policy",
    "follow_best_practice",
    "mutator_name_for",
    "naming_policy_of",
]

LOG = create_logger(__name__)

_POLICY_ATTR = "__naming_policy__"


class NamingPolicy(Protocol):
    def accessor_name_for(self, cls: type, field: str) -> str: ...
    def mutator_name_for(self, cls: type, field: str) -> str: ...


@final
class IdentityNaming:
    """Reader and writer are both named after the field."""

    def accessor_name_for(self, cls: type, field: str) -> str:
        return field

    def mutator_name_for(self, cls: type, field: str) -> str:
        return field

    def __repr__(self) -> str:
        return "IdentityNaming()"


@final
class BestPracticeNaming:
    """Readers are `get_<field>`, writers are `set_<field>`."""

    def accessor_name_for(self, cls: type, field: str) -> str:
        return "get_" + field

    def mutator_name_for(self, cls: type, field: str) -> str:
        return "set_" + field

    def __repr__(self) -> str:
        return "BestPracticeNaming()"


IDENTITY = IdentityNaming()
BEST_PRACTICE = BestPracticeNaming()


def naming_policy_of(cls: type) -> NamingPolicy:
    """Return the policy bound to `cls` or inherited from a base, else IDENTITY."""
    policy: Any = getattr(cls, _POLICY_ATTR, None)
    return policy if policy is not None else IDENTITY


def apply_naming_policy(cls: type, policy: NamingPolicy) -> None:
    """
    Bind `policy` to `cls`, replacing the class's name resolvers.

    The resolvers are installed FRESH: a policy switch always takes effect,
    unlike accessor installation which never overwrites.
    """

    def _accessor_name_for(klass: type, field: str) -> str:
        return policy.accessor_name_for(klass, field)

    def _mutator_name_for(klass: type, field: str) -> str:
        return policy.mutator_name_for(klass, field)

    setattr(cls, _POLICY_ATTR, policy)
    install(cls, "accessor_name_for", classmethod(_accessor_name_for), InstallMode.FRESH)
    install(cls, "mutator_name_for", classmethod(_mutator_name_for), InstallMode.FRESH)
    LOG.debug("%s now follows %r", cls.__qualname__, policy)


def follow_best_practice(cls: type) -> None:
    """Switch `cls` to `get_<field>` / `set_<field>` names."""
    apply_naming_policy(cls, BEST_PRACTICE)


def accessor_name_for(cls: type, field: str) -> str | None:
    """
    Resolve the reader name for `field` on `cls`.

    A class-level `accessor_name_for` classmethod (hand-written or bound by a
    policy) takes precedence over the class's policy object. Its result is
    returned as is; None or "" means the field gets no reader.
    """
    resolver = getattr(cls, "accessor_name_for", None)
    if callable(resolver):
        return resolver(field)
    return naming_policy_of(cls).accessor_name_for(cls, field)


def mutator_name_for(cls: type, field: str) -> str | None:
    """Resolve the writer name for `field` on `cls`; see accessor_name_for()."""
    resolver = getattr(cls, "mutator_name_for", None)
    if callable(resolver):
        return resolver(field)
    return naming_policy_of(cls).mutator_name_for(cls, field)


# End of file: src/accessor_emulate/naming.py
