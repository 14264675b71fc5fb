"""Approximate name resolution: exact normalized match, then edit-distance fallback."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from resolution.distance import distance
from resolution.normalize import normalize


class ResolverConfig(BaseModel):
    """
    Per-call resolver settings.

    Invalid values raise pydantic.ValidationError (a ValueError) on
    construction, so a bad config never reaches the matching stages.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    threshold: int = Field(default=3, gt=0)
    """Maximum edit distance still accepted as a fuzzy match."""

    max_suggestions: int = Field(
        default=3,
        ge=0,
        validation_alias=AliasChoices("max_suggestions", "maxSuggestions"),
    )
    """Cap on suggestions returned when nothing matched."""


@dataclass(frozen=True)
class Candidate:
    """One pool entry: the caller's original label and its normalized form."""

    original: str
    normalized: str

    @classmethod
    def from_raw(cls, original: str) -> "Candidate":
        return cls(original=original, normalized=normalize(original))


@dataclass(frozen=True)
class MatchResult:
    """Outcome of one resolve() call."""

    match: str | None
    score: float
    suggestions: list[str] = field(default_factory=list)

    @property
    def matched(self) -> bool:
        return self.match is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured logs and CLI output."""
        return {
            "match": self.match,
            "score": round(self.score, 4),
            "suggestions": list(self.suggestions),
        }


def build_pool(candidates: Iterable[str]) -> list[Candidate]:
    """Pair every candidate with its normalized form, keeping pool order."""
    return [Candidate.from_raw(item) for item in candidates]


def _similarity(normalized_input: str, best: Candidate, edit_distance: int) -> float:
    longest = max(len(normalized_input), len(best.normalized))
    if longest == 0:
        return 1.0
    return 1.0 - edit_distance / longest


def resolve(
    text: str,
    candidates: Iterable[str],
    config: ResolverConfig | Mapping[str, Any] | None = None,
) -> MatchResult:
    """
    Decide which candidate the caller meant by ``text``.

    Stages, first satisfied one wins:
    1. Exact pass: first candidate whose normalized form equals the
       normalized input (score 1.0, no suggestions).
    2. Fuzzy pass: candidates stably sorted by edit distance; the head is
       accepted when within ``threshold``. Other in-threshold candidates
       become suggestions (uncapped).
    3. No match: score 0.0 and the ``max_suggestions`` closest candidates.

    ``config`` may also be a plain mapping (``threshold``, ``max_suggestions``
    or ``maxSuggestions``); it is validated like ResolverConfig.

    A fuzzy head within threshold is matched even when its similarity is 0
    (e.g. empty input against a short name).
    """
    if config is None:
        settings = ResolverConfig()
    elif isinstance(config, ResolverConfig):
        settings = config
    else:
        settings = ResolverConfig.model_validate(dict(config))

    pool = build_pool(candidates)
    if not pool:
        return MatchResult(match=None, score=0.0, suggestions=[])

    normalized_input = normalize(text)

    for candidate in pool:
        if candidate.normalized == normalized_input:
            return MatchResult(match=candidate.original, score=1.0, suggestions=[])

    # sorted() is stable: equal distances keep pool order.
    ranked = sorted(
        ((distance(normalized_input, candidate.normalized), candidate) for candidate in pool),
        key=lambda item: item[0],
    )

    best_distance, best = ranked[0]
    score = _similarity(normalized_input, best, best_distance)
    if best_distance <= settings.threshold:
        suggestions = [
            candidate.original
            for candidate_distance, candidate in ranked[1:]
            if candidate_distance <= settings.threshold and candidate.original != best.original
        ]
        return MatchResult(match=best.original, score=score, suggestions=suggestions)

    return MatchResult(
        match=None,
        score=0.0,
        suggestions=[candidate.original for _, candidate in ranked[: settings.max_suggestions]],
    )
