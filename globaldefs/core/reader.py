"""Shell-like reader that turns a configuration file into token lines.

Only the ``global_defs { ... }`` section and the root-level statements in
:data:`ROOT_DIRECTIVES` are produced. Every other top-level block is skipped
whole, and other top-level statements (``include``, ``vrrp_script`` names
and the like) are dropped. A ``{ ... }`` block that follows a directive
inside ``global_defs`` is attached to that directive's :class:`TokenLine` as
its value block.
"""

from __future__ import annotations

from dataclasses import replace
import shlex
from typing import Iterable, Iterator

from globaldefs.core.tokens import TokenLine


SECTION = "global_defs"
COMMENT_CHARS = "#!"
# Directives that keepalived accepts outside global_defs.
ROOT_DIRECTIVES = frozenset(
    {
        "net_namespace",
        "namespace_with_ipsets",
        "instance",
        "use_pid_dir",
        "linkbeat_use_polling",
        "child_wait_time",
    }
)


def tokenize(text: str) -> list[str]:
    lexer = shlex.shlex(text, posix=True)
    lexer.whitespace_split = True
    lexer.commenters = COMMENT_CHARS
    return list(lexer)


def _physical_lines(handle: Iterable[str], source: str | None) -> Iterator[tuple[int, list[str]]]:
    for lineno, text in enumerate(handle, start=1):
        try:
            tokens = tokenize(text)
        except ValueError as exc:
            raise ValueError(f"{source or '<input>'}:{lineno}: {exc}") from exc
        if tokens:
            yield lineno, tokens


def _release(line: TokenLine, top_level: bool) -> Iterator[TokenLine]:
    if not top_level or line.directive in ROOT_DIRECTIVES:
        yield line


def read_global_defs(handle: Iterable[str], source: str | None = None) -> Iterator[TokenLine]:
    in_section = False
    skip_depth = 0
    block: list[str] | None = None
    block_owner: TokenLine | None = None
    # A statement is held back for one line in case "{" opens its block there.
    held: TokenLine | None = None
    held_top = False

    for lineno, tokens in _physical_lines(handle, source):
        words: list[str] = []
        for token in tokens:
            if skip_depth:
                if token == "{":
                    skip_depth += 1
                elif token == "}":
                    skip_depth -= 1
                continue

            if block is not None and block_owner is not None:
                if token == "}":
                    yield replace(block_owner, block=tuple(block))
                    block = None
                    block_owner = None
                elif token != "{":
                    block.append(token)
                continue

            if token == "{":
                if words:
                    if held is not None:
                        yield from _release(held, held_top)
                        held = None
                    owner: TokenLine | None = TokenLine(tuple(words), lineno=lineno, source=source)
                    words = []
                else:
                    owner, held = held, None
                if in_section and owner is not None:
                    block_owner = owner
                    block = []
                elif not in_section and owner is not None and owner.directive == SECTION:
                    in_section = True
                else:
                    skip_depth = 1
                continue

            if token == "}":
                if held is not None:
                    yield from _release(held, held_top)
                    held = None
                if words:
                    yield from _release(TokenLine(tuple(words), lineno=lineno, source=source), not in_section)
                    words = []
                in_section = False
                continue

            if not words and held is not None:
                yield from _release(held, held_top)
                held = None
            words.append(token)

        if words:
            held = TokenLine(tuple(words), lineno=lineno, source=source)
            held_top = not in_section

    if held is not None:
        yield from _release(held, held_top)
