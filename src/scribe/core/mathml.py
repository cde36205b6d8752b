"""LaTeX math to MathML.

Macros from the document header are expanded before conversion. Names may
be given with or without the leading backslash, and bodies may use ``#1``
to ``#9`` for arguments, as in KaTeX macro maps.
"""

import re
from collections.abc import Mapping

from latex2mathml.converter import convert

MAX_EXPANSIONS = 1000

_PARAM_RE = re.compile(r"#([1-9])")


def render_mathml(source: str, display: bool, macros: Mapping[str, str]) -> str:
    """Render LaTeX math source to MathML.

    Args:
        source: LaTeX math source without delimiters
        display: Render as block (display) math instead of inline math
        macros: Macro definitions to expand first

    Returns:
        ``<math>`` element markup

    Raises:
        ValueError: If macro expansion fails
        Exception: Whatever latex2mathml raises for invalid input
    """
    expanded = expand_macros(source, macros)
    return convert(expanded, display="block" if display else "inline")


def expand_macros(source: str, macros: Mapping[str, str]) -> str:
    """Expand macro invocations in LaTeX source.

    Expansions are rescanned, so macros may use other macros.

    Args:
        source: LaTeX source
        macros: Mapping of macro name to body

    Returns:
        Source with all known macros expanded

    Raises:
        ValueError: If an argument is missing or expansion does not terminate
    """
    if not macros:
        return source

    definitions = {_normalize_name(name): body for name, body in macros.items()}
    output: list[str] = []
    text = source
    pos = 0
    expansions = 0

    while pos < len(text):
        if text[pos] != "\\":
            output.append(text[pos])
            pos += 1
            continue

        name, end = _read_control_sequence(text, pos)
        body = definitions.get(name)
        if body is None:
            output.append(name)
            pos = end
            continue

        expansions += 1
        if expansions > MAX_EXPANSIONS:
            raise ValueError(f"too many macro expansions (limit {MAX_EXPANSIONS})")

        arity = max((int(n) for n in _PARAM_RE.findall(body)), default=0)
        args: list[str] = []
        for _ in range(arity):
            arg, end = _read_argument(text, end, name)
            args.append(arg)

        substituted = _PARAM_RE.sub(lambda m: args[int(m.group(1)) - 1], body)
        text = substituted + text[end:]
        pos = 0

    return "".join(output)


def _normalize_name(name: str) -> str:
    return name if name.startswith("\\") else f"\\{name}"


def _read_control_sequence(text: str, pos: int) -> tuple[str, int]:
    """Read ``\\name`` or ``\\<char>`` starting at the backslash."""
    end = pos + 1
    if end < len(text) and text[end].isalpha():
        while end < len(text) and text[end].isalpha():
            end += 1
    else:
        end = min(end + 1, len(text))
    return text[pos:end], end


def _read_argument(text: str, pos: int, name: str) -> tuple[str, int]:
    """Read one macro argument: a braced group, a control sequence or a char."""
    while pos < len(text) and text[pos].isspace():
        pos += 1
    if pos >= len(text):
        raise ValueError(f"missing argument for macro {name}")

    if text[pos] == "\\":
        return _read_control_sequence(text, pos)

    if text[pos] != "{":
        return text[pos], pos + 1

    depth = 0
    for index in range(pos, len(text)):
        char = text[index]
        if char == "{" and text[index - 1] != "\\":
            depth += 1
        elif char == "}" and text[index - 1] != "\\":
            depth -= 1
            if depth == 0:
                return text[pos + 1 : index], index + 1
    raise ValueError(f"unbalanced braces in argument for macro {name}")
