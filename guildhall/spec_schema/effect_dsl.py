"""
Effect DSL - Compiled card effects.

Card power and bonus texts are compiled once, when the catalog is loaded,
into an EffectProgram: an ordered tuple of clauses. Each clause is one of
four tagged variants:

- GainClause: unconditional resource deltas ("Gain 2 Gold")
- ConditionalClause: optional cost for a benefit ("Pay 1 Gold → Army")
- ChoiceClause: mutually exclusive benefits ("Gold or Knowledge")
- UnrecognizedClause: text that matched no keyword (dropped at play time)

Key design decisions:
- Clauses are immutable values, safe to share between game states
- Every clause keeps its source text so it can be shown and re-compiled
- Payability is NOT part of the AST; it depends on the player at play time
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union


class Resource(Enum):
    """Everything an effect can grant."""
    ARMY = "army"
    GOLD = "gold"
    KNOWLEDGE = "knowledge"
    VICTORY_POINTS = "victory_points"
    DRAW = "draw"
    TAKE = "take"
    DISCARD = "discard"
    EXILE = "exile"
    BURY = "bury"
    FIGHT = "fight"
    OUTPOST = "outpost"
    REVIVE = "revive"


class ClauseKind(Enum):
    """Tag of a compiled clause."""
    GAIN = "gain"
    CONDITIONAL = "conditional"
    CHOICE = "choice"
    UNRECOGNIZED = "unrecognized"


class CostType(Enum):
    """How the cost of a conditional clause is paid."""
    PAY = "pay"  # Spend a resource immediately
    DISCARD = "discard"  # Discard cards from hand, one action at a time


@dataclass(frozen=True)
class ResourceDelta:
    """A single resource change, e.g. +2 gold."""
    resource: Resource
    amount: int = 1

    def describe(self) -> str:
        return f"+{self.amount} {self.resource.value}"


@dataclass(frozen=True)
class Benefit:
    """
    What a clause grants.

    "Army and 1 Gold" compiles to one Benefit with two deltas; each
    sub-effect is applied independently.
    """
    text: str
    deltas: tuple[ResourceDelta, ...] = ()

    def matches(self, text: str) -> bool:
        """Case-insensitive comparison against player-submitted text."""
        return self.text.strip().lower() == text.strip().lower()


@dataclass(frozen=True)
class Cost:
    """The price of a conditional clause."""
    cost_type: CostType
    text: str
    amount: int = 1
    resource: Resource | None = None  # Only for PAY costs


@dataclass(frozen=True)
class GainClause:
    source_text: str
    deltas: tuple[ResourceDelta, ...]
    kind: ClassVar[ClauseKind] = ClauseKind.GAIN


@dataclass(frozen=True)
class ConditionalClause:
    """
    An optional paid action.

    When the benefit itself is an "or" list, nested_choices holds the
    alternatives and benefit holds the whole benefit text.
    """
    source_text: str
    cost: Cost
    benefit: Benefit
    nested_choices: tuple[Benefit, ...] = ()
    kind: ClassVar[ClauseKind] = ClauseKind.CONDITIONAL

    def find_choice(self, text: str) -> Benefit | None:
        for option in self.nested_choices:
            if option.matches(text):
                return option
        return None


@dataclass(frozen=True)
class ChoiceClause:
    source_text: str
    options: tuple[Benefit, ...]
    kind: ClassVar[ClauseKind] = ClauseKind.CHOICE

    def find_option(self, text: str) -> Benefit | None:
        for option in self.options:
            if option.matches(text):
                return option
        return None


@dataclass(frozen=True)
class UnrecognizedClause:
    source_text: str
    kind: ClassVar[ClauseKind] = ClauseKind.UNRECOGNIZED


Clause = Union[GainClause, ConditionalClause, ChoiceClause, UnrecognizedClause]


@dataclass(frozen=True)
class EffectProgram:
    """
    A compiled power or bonus text.

    Clauses keep the order they have in the source text.
    """
    source_text: str
    clauses: tuple[Clause, ...] = ()

    def clauses_of(self, kind: ClauseKind) -> tuple[Clause, ...]:
        return tuple(c for c in self.clauses if c.kind == kind)

    @property
    def unrecognized(self) -> tuple[UnrecognizedClause, ...]:
        return self.clauses_of(ClauseKind.UNRECOGNIZED)

    @property
    def is_empty(self) -> bool:
        return not self.clauses


EMPTY_PROGRAM = EffectProgram(source_text="")
