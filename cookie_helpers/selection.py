"""Selection rules: pick one winner among same-named cookies.

A rule is any callable ``(name, candidates) -> Cookie | None``. Candidates
arrive in jar order; every rule ignores empty values and is deterministic
for a given input order.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass

from .types import Cookie

SelectionRule = Callable[[str, Sequence[Cookie]], Cookie | None]


def _with_value(candidates: Iterable[Cookie]) -> list[Cookie]:
    return [c for c in candidates if c.value]


def _domain_matches(domain: str, needles: Sequence[str]) -> bool:
    d = (domain or "").lower()
    return any(n in d for n in needles)


def first_match(*domains: str) -> SelectionRule:
    """First non-empty candidate, optionally restricted to domains containing any of *domains*."""
    needles = tuple(d.lower() for d in domains)

    def rule(name: str, candidates: Sequence[Cookie]) -> Cookie | None:  # noqa: ARG001
        for c in _with_value(candidates):
            if not needles or _domain_matches(c.domain, needles):
                return c
        return None

    return rule


def prefer_path(path: str = "/") -> SelectionRule:
    """Candidate scoped to *path* if any, else the first one."""

    def rule(name: str, candidates: Sequence[Cookie]) -> Cookie | None:  # noqa: ARG001
        hits = _with_value(candidates)
        for c in hits:
            if c.path == path:
                return c
        return hits[0] if hits else None

    return rule


def value_prefix(prefix: str) -> SelectionRule:
    """First candidate whose value starts with *prefix*."""

    def rule(name: str, candidates: Sequence[Cookie]) -> Cookie | None:  # noqa: ARG001
        for c in _with_value(candidates):
            if c.value.startswith(prefix):
                return c
        return None

    return rule


def per_name(rules: Mapping[str, SelectionRule], default: SelectionRule | None = None) -> SelectionRule:
    """Dispatch to a rule by cookie name."""
    fallback = default or first_match()

    def rule(name: str, candidates: Sequence[Cookie]) -> Cookie | None:
        return rules.get(name, fallback)(name, candidates)

    return rule


@dataclass(frozen=True)
class DomainLadder:
    """Score candidates by how broadly they are scoped.

    The ladder, highest first: exact apex domain, any subdomain of the apex,
    each preferred host in order, then a small bonus for the root path.
    Ties keep jar order, so the same input always yields the same winner.
    """

    apex: str
    preferred_hosts: tuple[str, ...] = ()
    apex_score: int = 50
    suffix_score: int = 40
    host_scores: tuple[int, ...] = (30, 20, 10)
    root_path_score: int = 5

    def score(self, cookie: Cookie) -> int:
        d = (cookie.domain or "").lower()
        apex = self.apex.lower().lstrip(".")
        s = 0
        if d in (apex, "." + apex):
            s += self.apex_score
        if d.endswith("." + apex):
            s += self.suffix_score
        for i, host in enumerate(self.preferred_hosts):
            if host.lower() in d:
                s += self.host_scores[i] if i < len(self.host_scores) else 1
        if cookie.path == "/":
            s += self.root_path_score
        return s

    def __call__(self, name: str, candidates: Sequence[Cookie]) -> Cookie | None:  # noqa: ARG002
        hits = _with_value(candidates)
        if not hits:
            return None
        # sorted() is stable: equal scores keep their jar order.
        return sorted(hits, key=self.score, reverse=True)[0]


__all__ = [
    "DomainLadder",
    "SelectionRule",
    "first_match",
    "per_name",
    "prefer_path",
    "value_prefix",
]
