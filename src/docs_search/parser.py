"""Plain-text extraction from MDX documentation sources."""

import re


class ContentExtractor:
    """Converts raw MDX documents into normalised text suitable for indexing."""

    CODE_FENCE_PATTERN = re.compile(r"```\w*\n(.*?)```", re.DOTALL)
    LINE_COMMENT_PATTERN = re.compile(r"//.*$", re.MULTILINE)
    INLINE_CODE_PATTERN = re.compile(r"`[^`]+`")
    HEADING_MARKER_PATTERN = re.compile(r"#{1,6}\s+")
    BOLD_PATTERN = re.compile(r"\*\*([^*]+)\*\*")
    ITALIC_PATTERN = re.compile(r"\*([^*]+)\*")
    LINK_PATTERN = re.compile(r"\[([^\]]+)\]\([^)]+\)")
    HTML_COMMENT_PATTERN = re.compile(r"<!--.*?-->", re.DOTALL)
    HEADING_LINE_PATTERN = re.compile(r"^#+\s+(.+)$", re.MULTILINE)

    def extract_text(self, raw: str) -> str:
        """Extract searchable text from an MDX document.

        Code fences are reduced to their ``//`` comments, markdown syntax is
        stripped and whitespace is collapsed to single spaces.

        Args:
            raw: Raw MDX source.

        Returns:
            Normalised plain text (possibly empty).
        """
        text = self.CODE_FENCE_PATTERN.sub(self._replace_code_block, raw)
        text = self._strip_markup(text)
        return self._collapse_whitespace(text)

    def extract_headings(self, raw: str) -> str:
        """Extract the text of every heading line in an MDX document.

        Args:
            raw: Raw MDX source.

        Returns:
            Heading texts joined with single spaces.
        """
        headings = [match.strip() for match in self.HEADING_LINE_PATTERN.findall(raw)]
        return " ".join(heading for heading in headings if heading)

    def _replace_code_block(self, match: re.Match[str]) -> str:
        """Replace a fenced code block with the text of its line comments.

        Args:
            match: Match over a fenced code block.

        Returns:
            Comment text padded with spaces, or a single space.
        """
        comments = self.LINE_COMMENT_PATTERN.findall(match.group(1))
        comment_text = " ".join(comments).replace("//", "").strip()
        return f" {comment_text} " if comment_text else " "

    def _strip_markup(self, text: str) -> str:
        """Remove inline markdown syntax while keeping the visible text.

        Comments go first, and the passes repeat until nothing changes, so
        removing one construct never leaves behind markup for a later run.

        Args:
            text: Text with code fences already removed.

        Returns:
            Text without inline code, heading, emphasis, link or comment syntax.
        """
        previous: str | None = None
        while text != previous:
            previous = text
            text = self.HTML_COMMENT_PATTERN.sub("", text)
            text = self.INLINE_CODE_PATTERN.sub("", text)
            text = self.HEADING_MARKER_PATTERN.sub("", text)
            text = self.BOLD_PATTERN.sub(r"\1", text)
            text = self.ITALIC_PATTERN.sub(r"\1", text)
            text = self.LINK_PATTERN.sub(r"\1", text)
        return text

    def _collapse_whitespace(self, text: str) -> str:
        """Collapse newlines and whitespace runs to single spaces.

        Args:
            text: Text to normalise.

        Returns:
            Single-spaced text without leading or trailing whitespace.
        """
        # Newlines first, then any remaining whitespace runs
        text = re.sub(r"\n+", " ", text)
        text = re.sub(r"\s+", " ", text)
        return text.strip()


_default_extractor = ContentExtractor()


def extract_text(raw: str) -> str:
    """Extract searchable text using a shared ContentExtractor.

    Args:
        raw: Raw MDX source.

    Returns:
        Normalised plain text.
    """
    return _default_extractor.extract_text(raw)
