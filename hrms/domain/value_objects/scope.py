"""Visibility scope: which entity owners an actor may observe or affect."""

from dataclasses import dataclass, field
from enum import Enum


class ScopeKind(str, Enum):
    ALL = "all"
    OWNED_ONLY = "owned_only"
    OWNER_SET = "owner_set"


@dataclass(frozen=True)
class Scope:
    """Resolved visibility of one actor for one request.

    ALL sees every owner. OWNED_ONLY and OWNER_SET see exactly owner_ids
    (a single id for OWNED_ONLY). Records without an owner are visible
    only under ALL.
    """

    kind: ScopeKind
    owner_ids: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def all(cls) -> "Scope":
        return cls(ScopeKind.ALL)

    @classmethod
    def owned_only(cls, owner_id: str) -> "Scope":
        return cls(ScopeKind.OWNED_ONLY, frozenset({owner_id}))

    @classmethod
    def owner_set(cls, owner_ids: set[str] | frozenset[str]) -> "Scope":
        return cls(ScopeKind.OWNER_SET, frozenset(owner_ids))

    @property
    def is_unrestricted(self) -> bool:
        return self.kind is ScopeKind.ALL

    def allows(self, candidate_owner_id: str | None) -> bool:
        match self.kind:
            case ScopeKind.ALL:
                return True
            case ScopeKind.OWNED_ONLY | ScopeKind.OWNER_SET:
                return candidate_owner_id is not None and candidate_owner_id in self.owner_ids

    def owner_filter(self) -> frozenset[str] | None:
        """Owner ids for a storage-level IN predicate; None means no predicate."""
        return None if self.is_unrestricted else self.owner_ids


def check_scope(scope: Scope, candidate_owner_id: str | None) -> bool:
    """Return True when candidate_owner_id is inside scope."""
    return scope.allows(candidate_owner_id)
