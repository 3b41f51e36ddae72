"""Rewrite a small LaTeX subset into plain arithmetic the evaluator understands.

The rewrite is pattern based, not a parser. Fractions are expanded innermost
first and the expansion is repeated until nothing matches, so nested fractions
such as ``\\frac{\\frac{1}{2}}{4}`` resolve fully. A group that holds braces
other than an already expanded fraction is never matched and is left to the
final brace cleanup.
"""

from __future__ import annotations

import re

DEFAULT_MAX_PASSES = 64

_FRACTION_RE = re.compile(r"\\frac\{([^{}]+)\}\{([^{}]+)\}")
_SQRT_RE = re.compile(r"\\sqrt\{([^}]+)\}")

_LITERAL_REWRITES: tuple[tuple[str, str], ...] = (
    ("\\cdot", "*"),
    ("\\times", "*"),
    ("\\left(", "("),
    ("\\right)", ")"),
    ("\\pi", "pi"),
)


def expand_fractions(text: str, max_passes: int = DEFAULT_MAX_PASSES) -> str:
    for _ in range(max_passes):
        text, count = _FRACTION_RE.subn(r"((\1)/(\2))", text)
        if not count:
            break
    return text


def normalize(text: str, max_passes: int = DEFAULT_MAX_PASSES) -> str:
    expr = expand_fractions(text, max_passes)
    expr = _SQRT_RE.sub(r"sqrt(\1)", expr)
    for latex, plain in _LITERAL_REWRITES:
        expr = expr.replace(latex, plain)
    # Anything still in braces (exponents, stray groups) becomes a parenthesised group.
    return expr.replace("{", "(").replace("}", ")")
