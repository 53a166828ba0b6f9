"""Class-name token extraction from rendered CSS.

Local class names, id selectors, ``:export`` keys and ``@keyframes`` names are
collected; anything under ``:global`` is left alone.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

import tinycss2
from tinycss2.ast import (
    AtRule,
    FunctionBlock,
    HashToken,
    IdentToken,
    LiteralToken,
    QualifiedRule,
    WhitespaceToken,
)

_NESTED_AT_RULES = {"media", "supports", "document", "layer", "container"}
_KEYFRAMES = {"keyframes", "-webkit-keyframes", "-moz-keyframes", "-o-keyframes"}


def _is_export(prelude: List) -> bool:
    values = [token for token in prelude if not isinstance(token, WhitespaceToken)]
    return (
        len(values) == 2
        and isinstance(values[0], LiteralToken)
        and values[0].value == ":"
        and isinstance(values[1], IdentToken)
        and values[1].lower_value == "export"
    )


def _selector_classes(prelude: Iterable, found: Dict[str, None]) -> None:
    tokens = list(prelude)
    is_global = False
    index = 0
    while index < len(tokens):
        token = tokens[index]
        following = tokens[index + 1] if index + 1 < len(tokens) else None
        if isinstance(token, LiteralToken) and token.value == ",":
            is_global = False
        elif isinstance(token, LiteralToken) and token.value == ":" and isinstance(
            following, IdentToken
        ):
            # bare :global / :local switch the mode for the rest of the selector
            if following.lower_value == "global":
                is_global = True
            elif following.lower_value == "local":
                is_global = False
            index += 1
        elif isinstance(token, LiteralToken) and token.value == "." and isinstance(
            following, IdentToken
        ):
            if not is_global:
                found.setdefault(following.value, None)
            index += 1
        elif isinstance(token, HashToken) and token.is_identifier:
            if not is_global:
                found.setdefault(token.value, None)
        elif isinstance(token, FunctionBlock) and token.lower_name != "global":
            _selector_classes(token.arguments, found)
        index += 1


def _collect(rules: Iterable, found: Dict[str, None]) -> None:
    for rule in rules:
        if isinstance(rule, QualifiedRule):
            if _is_export(rule.prelude):
                declarations = tinycss2.parse_declaration_list(
                    rule.content, skip_comments=True, skip_whitespace=True
                )
                for declaration in declarations:
                    if declaration.type == "declaration":
                        found.setdefault(declaration.name, None)
            else:
                _selector_classes(rule.prelude, found)
        elif isinstance(rule, AtRule):
            if rule.lower_at_keyword in _KEYFRAMES:
                for token in rule.prelude:
                    if isinstance(token, IdentToken):
                        found.setdefault(token.value, None)
                        break
            elif rule.lower_at_keyword in _NESTED_AT_RULES and rule.content is not None:
                nested = tinycss2.parse_rule_list(
                    rule.content, skip_comments=True, skip_whitespace=True
                )
                _collect(nested, found)


def extract_tokens(css: str) -> List[str]:
    if not css:
        return []
    rules = tinycss2.parse_stylesheet(css, skip_comments=True, skip_whitespace=True)
    found: Dict[str, None] = {}
    _collect(rules, found)
    return list(found)
