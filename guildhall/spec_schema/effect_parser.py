"""
Effect Parser - Tokenizes and compiles card text into an EffectProgram.

Card text is a sequence of clauses separated by periods:

    "Army. Pay 1 Gold → Army. Gain 1 Gold or Gain 1 Knowledge"

Each clause is compiled by these rules, in order:
1. A clause with an arrow (→ or ->) is a ConditionalClause: cost → benefit.
   A benefit containing "or" carries its alternatives as nested choices.
2. A clause containing the word "or" is a ChoiceClause. An alternative
   with no keyword is still offered and grants nothing when chosen.
3. Anything else is matched against the keyword vocabulary and becomes a
   GainClause, or an UnrecognizedClause when nothing matches.

Keyword matching is case-insensitive substring containment, so "Gain 1
Gold" and "Gold" compile identically.
The amount of a delta is the first integer in its text, 1 if none.

Compilation happens once, at catalog-load time.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import re

from .effect_dsl import (
    Benefit,
    ChoiceClause,
    Clause,
    ConditionalClause,
    Cost,
    CostType,
    EffectProgram,
    GainClause,
    Resource,
    ResourceDelta,
    UnrecognizedClause,
)


class TokenType(Enum):
    ARROW = "arrow"
    NUMBER = "number"
    WORD = "word"
    PERIOD = "period"
    COMMA = "comma"
    OTHER = "other"


@dataclass(frozen=True)
class Token:
    """A lexical token with its offsets in the source text."""
    token_type: TokenType
    text: str
    start: int
    end: int

    def is_word(self, word: str) -> bool:
        return self.token_type == TokenType.WORD and self.text.lower() == word


_TOKEN_RE = re.compile(
    r"""
    (?P<arrow>→|->)
    |(?P<number>\d+)
    |(?P<word>[A-Za-z]+(?:['-][A-Za-z]+)*)
    |(?P<period>\.)
    |(?P<comma>,)
    |(?P<space>\s+)
    |(?P<other>.)
    """,
    re.VERBOSE,
)

# Order matters: the first keyword contained in the text wins.
KEYWORDS: tuple[tuple[str, Resource], ...] = (
    ("army", Resource.ARMY),
    ("armies", Resource.ARMY),
    ("gold", Resource.GOLD),
    ("knowledge", Resource.KNOWLEDGE),
    ("victory point", Resource.VICTORY_POINTS),
    ("vp", Resource.VICTORY_POINTS),
    ("draw", Resource.DRAW),
    ("take", Resource.TAKE),
    ("discard", Resource.DISCARD),
    ("exile", Resource.EXILE),
    ("bury", Resource.BURY),
    ("fight", Resource.FIGHT),
    ("outpost", Resource.OUTPOST),
    ("revive", Resource.REVIVE),
)

# Resources a PAY cost can spend
PAYABLE_RESOURCES = frozenset({
    Resource.ARMY,
    Resource.GOLD,
    Resource.KNOWLEDGE,
    Resource.VICTORY_POINTS,
})

_PAY_WORDS = ("pay", "spend")


def tokenize(text: str) -> list[Token]:
    """Split text into tokens, dropping whitespace."""
    tokens = []
    for match in _TOKEN_RE.finditer(text):
        kind = match.lastgroup
        if kind == "space":
            continue
        tokens.append(Token(
            token_type=TokenType(kind),
            text=match.group(),
            start=match.start(),
            end=match.end(),
        ))
    return tokens


def match_keyword(text: str) -> Resource | None:
    """Return the first vocabulary resource contained in text."""
    lowered = text.lower()
    for keyword, resource in KEYWORDS:
        if keyword in lowered:
            return resource
    return None


def compile_effects(text: str) -> EffectProgram:
    """Compile a full power or bonus text."""
    clauses = tuple(
        _compile_tokens(text, tokens)
        for tokens in _split(tokenize(text), lambda t: t.token_type == TokenType.PERIOD)
        if tokens
    )
    return EffectProgram(source_text=text, clauses=clauses)


def compile_clause(text: str) -> Clause:
    """
    Compile a single clause.

    Used to rebuild pending intents from their stored source text.
    """
    tokens = [t for t in tokenize(text) if t.token_type != TokenType.PERIOD]
    if not tokens:
        return UnrecognizedClause(source_text=text.strip())
    return _compile_tokens(text, tokens)


def compile_benefit(text: str) -> Benefit:
    """Compile an "and"-joined benefit text."""
    tokens = tokenize(text)
    if not tokens:
        return Benefit(text=text.strip())
    return _compile_benefit(text, tokens)


def _compile_tokens(text: str, tokens: list[Token]) -> Clause:
    source = _span(text, tokens)

    arrow_at = next(
        (i for i, t in enumerate(tokens) if t.token_type == TokenType.ARROW),
        None,
    )
    if arrow_at is not None:
        return _compile_conditional(text, source, tokens[:arrow_at], tokens[arrow_at + 1:])

    alternatives = _split(tokens, lambda t: t.is_word("or"))
    if len(alternatives) > 1:
        return _compile_choice(text, source, alternatives)

    benefit = _compile_benefit(text, tokens)
    if not benefit.deltas:
        return UnrecognizedClause(source_text=source)
    return GainClause(source_text=source, deltas=benefit.deltas)


def _compile_conditional(
    text: str,
    source: str,
    cost_tokens: list[Token],
    benefit_tokens: list[Token],
) -> Clause:
    if not cost_tokens or not benefit_tokens:
        return UnrecognizedClause(source_text=source)

    cost = _compile_cost(_span(text, cost_tokens), cost_tokens)
    if cost is None:
        return UnrecognizedClause(source_text=source)

    benefit_text = _span(text, benefit_tokens)
    alternatives = _split(benefit_tokens, lambda t: t.is_word("or"))
    if len(alternatives) > 1:
        nested = tuple(_compile_benefit(text, alt) for alt in alternatives if alt)
        if not any(option.deltas for option in nested):
            return UnrecognizedClause(source_text=source)
        return ConditionalClause(
            source_text=source,
            cost=cost,
            benefit=Benefit(text=benefit_text),
            nested_choices=nested,
        )

    benefit = _compile_benefit(text, benefit_tokens)
    if not benefit.deltas:
        return UnrecognizedClause(source_text=source)
    return ConditionalClause(source_text=source, cost=cost, benefit=benefit)


def _compile_choice(text: str, source: str, alternatives: list[list[Token]]) -> Clause:
    options = tuple(_compile_benefit(text, alt) for alt in alternatives if alt)
    if len(options) < 2 or not any(option.deltas for option in options):
        return UnrecognizedClause(source_text=source)
    return ChoiceClause(source_text=source, options=options)


def _compile_cost(cost_text: str, tokens: list[Token]) -> Cost | None:
    amount = _amount(tokens)
    if any(t.is_word("discard") for t in tokens):
        return Cost(cost_type=CostType.DISCARD, text=cost_text, amount=amount)

    if any(t.is_word(word) for t in tokens for word in _PAY_WORDS):
        resource = match_keyword(cost_text)
        if resource in PAYABLE_RESOURCES:
            return Cost(
                cost_type=CostType.PAY,
                text=cost_text,
                amount=amount,
                resource=resource,
            )
    return None


def _compile_benefit(text: str, tokens: list[Token]) -> Benefit:
    deltas = []
    for part in _split(tokens, lambda t: t.is_word("and")):
        if not part:
            continue
        resource = match_keyword(_span(text, part))
        if resource is not None:
            deltas.append(ResourceDelta(resource=resource, amount=_amount(part)))
    return Benefit(text=_span(text, tokens), deltas=tuple(deltas))


def _amount(tokens: list[Token]) -> int:
    for token in tokens:
        if token.token_type == TokenType.NUMBER:
            return int(token.text)
    return 1


def _span(text: str, tokens: list[Token]) -> str:
    return text[tokens[0].start:tokens[-1].end].strip()


def _split(tokens: list[Token], is_separator) -> list[list[Token]]:
    groups: list[list[Token]] = [[]]
    for token in tokens:
        if is_separator(token):
            groups.append([])
        else:
            groups[-1].append(token)
    return groups
