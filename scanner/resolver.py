"""Node identity resolution from pattern matches and file paths."""

import re
from pathlib import Path
from typing import Iterator, Optional

from .discovery import get_relative_path


# Identity used when a file's name yields nothing usable
UNKNOWN_NODE = "file_tgf_unknown"


class PatternError(ValueError):
    """Raised when a configured regular expression cannot be compiled."""


def compile_pattern(pattern: str, option: str) -> re.Pattern:
    """
    Compile a user-supplied regular expression.

    Args:
        pattern: The pattern string.
        option: Name of the option that supplied it, used in the error message.

    Returns:
        The compiled pattern.

    Raises:
        PatternError: If the pattern is not a valid regular expression.
    """
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternError(f"invalid {option} pattern {pattern!r}: {e}") from e


class ExtractionRule:
    """
    A pattern that turns text into node identifiers.

    Each match contributes its first capture group (or the whole match when
    the pattern has no groups). The captured text then has every ``#``
    stripped, unless ``strip_hashes`` is False, and finally every match of
    the optional replace pattern substituted with ``replacement``.

    Note: with ``strip_hashes`` disabled an identifier may contain ``#``,
    which TGF readers can mistake for the section separator.
    """

    def __init__(
        self,
        pattern: Optional[str],
        replace: Optional[str] = None,
        replacement: str = "",
        strip_hashes: bool = True,
        option: str = "extract",
    ):
        self.pattern = compile_pattern(pattern, option) if pattern is not None else None
        self.replace = compile_pattern(replace, f"{option} replace") if replace is not None else None
        self.replacement = replacement
        self.strip_hashes = strip_hashes

    def capture(self, match: re.Match) -> Optional[str]:
        """Return the captured text of a match, or None if the group did not participate."""
        if match.re.groups >= 1:
            return match.group(1)
        return match.group(0)

    def clean(self, text: str) -> str:
        """Apply hash stripping and the replace pattern to captured text."""
        if self.strip_hashes:
            text = text.replace("#", "")
        if self.replace is not None:
            # A callable keeps the replacement literal (no backslash escapes)
            text = self.replace.sub(lambda _: self.replacement, text)
        return text

    def iter_identifiers(self, text: str) -> Iterator[str]:
        """
        Yield an identifier for each successive match in the text.

        Empty identifiers are dropped, including the zero-width matches that
        patterns such as ``.*`` produce at the end of a line.
        """
        if self.pattern is None:
            return

        for match in self.pattern.finditer(text):
            captured = self.capture(match)
            if captured is None:
                continue
            identifier = self.clean(captured)
            if identifier:
                yield identifier

    def first_identifier(self, text: str) -> Optional[str]:
        """Return the first identifier found in the text, or None."""
        return next(self.iter_identifiers(text), None)

    def __repr__(self) -> str:
        pattern = self.pattern.pattern if self.pattern is not None else None
        replace = self.replace.pattern if self.replace is not None else None
        return f"ExtractionRule(pattern={pattern!r}, replace={replace!r})"


def _is_valid_name(text: str) -> bool:
    """Check that a file name decoded from the filesystem is real UTF-8 text."""
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        # Undecodable bytes come back as lone surrogates
        return False
    return True


def resolve_file_node(
    file_path: Path,
    root: Path,
    rule: Optional[ExtractionRule] = None,
) -> Optional[str]:
    """
    Determine the node identifier of a file.

    With a path pattern, the pattern is applied to the file's path relative
    to root (using ``/`` separators) and the first match is used. Without
    one, the file's stem is used, cleaned by the rule if one is given, or
    stripped of ``#`` when no rule is given.

    A path or stem that is not valid UTF-8 resolves to ``UNKNOWN_NODE``.

    Args:
        file_path: The file being scanned.
        root: The scan root directory.
        rule: Optional path rule.

    Returns:
        The node identifier, or None if the path pattern does not match.
    """
    if rule is not None and rule.pattern is not None:
        rel_path = get_relative_path(file_path, root).as_posix()
        if not _is_valid_name(rel_path):
            return UNKNOWN_NODE
        return rule.first_identifier(rel_path)

    identifier = file_path.stem
    if not _is_valid_name(identifier):
        return UNKNOWN_NODE

    if rule is not None:
        identifier = rule.clean(identifier)
    else:
        identifier = identifier.replace("#", "")

    return identifier or UNKNOWN_NODE
