"""Query scoring, ranking and excerpt generation over a SearchIndex."""

from collections.abc import Iterable, Sequence

from docs_search.models import IndexedItem, SearchResult

DEFAULT_LIMIT = 10
EXCERPT_LENGTH = 150
EXCERPT_LOOKBACK = 50
ELLIPSIS = "..."

TITLE_MATCH_SCORE = 15
TITLE_EXACT_SCORE = 25
TITLE_WORD_SCORE = 5
CONTENT_MATCH_SCORE = 2
CONTENT_WORD_SCORE = 4
EXAMPLE_BOOST_SCORE = 10

EXAMPLE_TERMS = ("example", "examples", "demo", "sample", "tutorial")
EXAMPLES_SECTION = "examples"


def tokenize(query: str) -> list[str]:
    """Split a query into lower-cased whitespace-delimited terms.

    Args:
        query: Free-text query.

    Returns:
        Non-empty search terms in query order.
    """
    return query.lower().split()


def _is_word_char(char: str) -> bool:
    """Return True for ASCII letters, digits and underscore.

    Args:
        char: Single character.

    Returns:
        Whether the character is an ASCII word character.
    """
    return char.isascii() and (char.isalnum() or char == "_")


def count_word_matches(text: str, term: str) -> int:
    """Count non-overlapping occurrences of ``term`` standing as a whole word.

    An occurrence counts when the characters on either side of it are not
    ASCII word characters (or are the ends of the text).

    Args:
        text: Text to scan.
        term: Literal term to look for.

    Returns:
        Number of whole-word occurrences.
    """
    if not term:
        return 0

    count = 0
    position = text.find(term)
    while position != -1:
        end = position + len(term)
        before_ok = position == 0 or not _is_word_char(text[position - 1])
        after_ok = end == len(text) or not _is_word_char(text[end])
        if before_ok and after_ok:
            count += 1
            position = text.find(term, end)
        else:
            position = text.find(term, position + 1)
    return count


def is_example_term(term: str) -> bool:
    """Return True if the term belongs to the example family of words."""
    return any(example in term or term in example for example in EXAMPLE_TERMS)


def score_item(item: IndexedItem, terms: Iterable[str]) -> int:
    """Score an indexed page against the query terms.

    Contributions are accumulated per term: title matches (with extra
    weight for an exact title or a partial title-word match), literal and
    whole-word content matches, and a boost for example pages when the
    term asks for examples.

    Args:
        item: Page to score.
        terms: Lower-cased query terms.

    Returns:
        Non-negative relevance score, 0 meaning no match.
    """
    title = item.title.lower()
    title_words = title.split()
    content = item.content.lower()
    score = 0

    for term in terms:
        if not term:
            continue
        if term in title:
            score += TITLE_MATCH_SCORE
            if title == term:
                score += TITLE_EXACT_SCORE
            if any(term in word or word in term for word in title_words):
                score += TITLE_WORD_SCORE

        score += CONTENT_MATCH_SCORE * content.count(term)
        score += CONTENT_WORD_SCORE * count_word_matches(content, term)

        if item.section == EXAMPLES_SECTION and is_example_term(term):
            score += EXAMPLE_BOOST_SCORE

    return score


def generate_excerpt(content: str, terms: Sequence[str], max_length: int = EXCERPT_LENGTH) -> str:
    """Cut a preview of ``content`` around the earliest matching term.

    Args:
        content: Original (not lower-cased) page content.
        terms: Lower-cased query terms.
        max_length: Nominal excerpt length.

    Returns:
        Excerpt with ``...`` marking truncated ends.
    """
    lower_content = content.lower()
    best_index = -1
    best_term = ""

    for term in terms:
        index = lower_content.find(term)
        if index != -1 and (best_index == -1 or index < best_index):
            best_index = index
            best_term = term

    if best_index == -1:
        excerpt = content[:max_length]
        return excerpt + ELLIPSIS if len(content) > max_length else excerpt

    start = max(0, best_index - EXCERPT_LOOKBACK)
    end = min(len(content), best_index + len(best_term) + max_length - EXCERPT_LOOKBACK)
    excerpt = content[start:end]

    if start > 0:
        excerpt = ELLIPSIS + excerpt
    if end < len(content):
        excerpt = excerpt + ELLIPSIS

    return excerpt.strip()


def search(
    query: str,
    index: Iterable[IndexedItem],
    limit: int = DEFAULT_LIMIT,
    excerpt_length: int = EXCERPT_LENGTH,
) -> list[SearchResult]:
    """Rank indexed pages against a free-text query.

    Args:
        query: Free-text query.
        index: Indexed pages, in index order.
        limit: Maximum number of results.
        excerpt_length: Nominal length of each result excerpt.

    Returns:
        Results ordered by descending score, ties kept in index order.
    """
    if not query.strip() or limit <= 0:
        return []

    terms = tokenize(query)
    if not terms:
        return []

    scored: list[tuple[int, IndexedItem]] = []
    for item in index:
        score = score_item(item, terms)
        if score > 0:
            scored.append((score, item))

    # sorted() is stable, so equal scores keep their index order
    ranked = sorted(scored, key=lambda pair: pair[0], reverse=True)[:limit]

    return [
        SearchResult(
            href=item.href,
            title=item.title,
            slug=item.slug,
            excerpt=generate_excerpt(item.content, terms, excerpt_length),
            score=score,
        )
        for score, item in ranked
    ]
