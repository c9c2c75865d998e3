"""Comment transcoding between on-disk YAML text and parser-safe YAML text.

PyYAML discards comments while parsing. To keep them across a
load → modify → save cycle, every comment line is rewritten into a synthetic
key/value entry before parsing (encode) and rewritten back into a comment
after serializing (decode):

    # Server settings            ->  myplugin_COMMENT_0: _SPACE_Server_SPACE_settings
    port: 8080                   ->  port: 8080

Because each comment becomes its own mapping entry, it keeps its position
relative to neighbouring keys as long as the mapping preserves insertion
order.

Usage:
    from albatross.core.transcoder import CommentTranscoder

    transcoder = CommentTranscoder("myplugin")
    parser_text = transcoder.encode(raw_text)
    ...
    raw_text = transcoder.decode(yaml.safe_dump(data, sort_keys=False))
"""

from __future__ import annotations

import logging
import re

import yaml

from albatross.core.constants import COMMENT_KEY_INFIX
from albatross.core.escaping import escape, unescape

logger = logging.getLogger(__name__)

# Opening line of a literal/folded block scalar ("key: |", "- >-", "key: |2  # note")
_BLOCK_SCALAR_RE = re.compile(r"(?:^|:\s|-\s)\s*[|>][-+1-9]*(?:\s+#.*)?\s*$")


def _indent_of(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def _is_sequence_entry(stripped: str) -> bool:
    return stripped == "-" or stripped.startswith("- ")


def _yaml_scalar(escaped: str) -> str:
    """Render an escaped comment body as a YAML scalar that loads back unchanged.

    Most bodies are emitted plain. Bodies YAML would resolve to something else
    (empty, ``yes``, ``123``, ``[x]``, ``*ref``) are single-quoted.
    """
    try:
        loaded = yaml.safe_load(escaped)
    except yaml.YAMLError:
        loaded = None
    if isinstance(loaded, str) and loaded == escaped:
        return escaped
    return "'" + escaped.replace("'", "''") + "'"


def _yaml_unquote(raw: str) -> str:
    """Undo quoting the YAML emitter may have applied to a comment value."""
    if not raw or raw[0] not in ("'", '"'):
        return raw
    try:
        value = yaml.safe_load(raw)
    except yaml.YAMLError:
        logger.debug("Could not unquote comment value %r, keeping it verbatim", raw)
        return raw
    return value if isinstance(value, str) else raw


class CommentTranscoder:
    """Two-way transform between commented YAML and comment-free YAML.

    The transcoder owns the comment counter used to number synthetic keys.
    The counter is reset at the start of every :meth:`encode` pass and keeps
    increasing through :meth:`allocate` afterwards, so keys are unique for the
    lifetime of one in-memory document.

    Thread Safety:
        Not thread-safe. One transcoder belongs to one ConfigurationStore.

    Attributes:
        namespace: Prefix distinguishing synthetic keys from real keys.

    """

    def __init__(self, namespace: str) -> None:
        """Initialize CommentTranscoder.

        Args:
            namespace: Identifier prefixed to synthetic comment keys.

        """
        self.namespace = namespace
        self._count = 0
        # Comment numbers that open a new comment block
        self._block_starts: set[int] = set()
        prefix = re.escape(f"{namespace}{COMMENT_KEY_INFIX}")
        self._key_re = re.compile(rf"{prefix}(\d+)")
        self._line_re = re.compile(rf"^(?P<indent> *){prefix}(?P<number>\d+): (?P<value>.*)$")

    @property
    def count(self) -> int:
        """Number of comments encoded or allocated since the last encode pass."""
        return self._count

    def snapshot(self) -> tuple[int, frozenset[int]]:
        """Capture the comment counter and block starts."""
        return self._count, frozenset(self._block_starts)

    def restore(self, state: tuple[int, frozenset[int]]) -> None:
        """Reinstate state captured by :meth:`snapshot`."""
        self._count, block_starts = state
        self._block_starts = set(block_starts)

    def comment_key(self, number: int) -> str:
        """Build the synthetic key for comment number ``number``."""
        return f"{self.namespace}{COMMENT_KEY_INFIX}{number}"

    def is_comment_key(self, key: object) -> bool:
        """Check whether a mapping key is a synthetic comment key of this namespace."""
        return isinstance(key, str) and self._key_re.fullmatch(key) is not None

    def allocate(self, comment: str, *, block_start: bool = False) -> tuple[str, str]:
        """Reserve the next synthetic entry for a comment added in memory.

        Args:
            comment: Comment text without the leading ``#``.
            block_start: Whether this comment opens a new comment block.

        Returns:
            Tuple of (synthetic key, escaped comment value).

        """
        number = self._count
        self._count += 1
        if block_start:
            self._block_starts.add(number)
        return self.comment_key(number), escape(comment)

    def encode(self, text: str) -> str:
        """Rewrite comment lines as synthetic key/value lines.

        Each line starting with ``#`` becomes
        ``<namespace>_COMMENT_<n>: <escaped body>``. The synthetic line takes
        the indentation of the next content line so that comments written
        inside a nested mapping stay inside it. Comments directly above a
        sequence entry, and ``#`` lines inside block scalars, are left
        untouched. All other lines pass through unchanged.

        Args:
            text: Raw file content.

        Returns:
            Text safe for ``yaml.safe_load``.

        """
        self._count = 0
        self._block_starts = set()
        lines = text.splitlines()
        out: list[str] = []
        previous_was_comment = False
        block_indent: int | None = None

        for index, line in enumerate(lines):
            stripped = line.strip()

            if block_indent is not None:
                if not stripped or _indent_of(line) > block_indent:
                    out.append(line)
                    continue
                block_indent = None

            if stripped.startswith("#"):
                indent = self._target_indent(lines, index)
                if indent is None:
                    logger.debug("Comment above a sequence entry cannot be kept: %s", line)
                    out.append(line)
                    previous_was_comment = False
                    continue
                if not previous_was_comment:
                    self._block_starts.add(self._count)
                body = _yaml_scalar(escape(stripped[1:]))
                out.append(f"{' ' * indent}{self.comment_key(self._count)}: {body}")
                self._count += 1
                previous_was_comment = True
                continue

            out.append(line)
            previous_was_comment = False
            if _BLOCK_SCALAR_RE.search(stripped):
                block_indent = _indent_of(line)

        logger.debug("Encoded %d comment(s) for namespace %s", self._count, self.namespace)
        return "\n".join(out) + "\n" if out else ""

    def _target_indent(self, lines: list[str], index: int) -> int | None:
        """Indentation for the synthetic entry replacing the comment at ``index``.

        Returns None when the next content line is a sequence entry, where a
        mapping entry would not be valid YAML.
        """
        for following in lines[index + 1 :]:
            stripped = following.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if _is_sequence_entry(stripped):
                return None
            return _indent_of(following)
        return 0

    def decode(self, text: str) -> str:
        """Rewrite synthetic comment entries back into comment lines.

        A blank line is emitted before a comment that follows a parameter, or
        that opens a new comment block, so parameters stay visually separated
        from the comment block describing the next one. Consecutive comments
        of one block are kept contiguous, and a comment directly under a
        ``section:`` line gets no separator.

        Args:
            text: Output of ``yaml.safe_dump`` for an encoded document.

        Returns:
            Commented YAML text for writing to disk.

        """
        out: list[str] = []
        previous_was_comment = False

        for line in text.splitlines():
            match = self._line_re.match(line)
            if match is None:
                out.append(line)
                previous_was_comment = False
                continue

            number = int(match.group("number"))
            indent = match.group("indent")
            comment = indent + "#" + unescape(_yaml_unquote(match.group("value")))
            # First entry under a "section:" line needs no separator
            opens_section = bool(out) and out[-1].endswith(":") and len(indent) > _indent_of(out[-1])
            if (not previous_was_comment or number in self._block_starts) and not opens_section:
                out.append("")
            out.append(comment)
            previous_was_comment = True

        return "\n".join(out) + "\n" if out else ""
