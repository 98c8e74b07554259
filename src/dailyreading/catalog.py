"""Static essay catalog and poet roster.

The catalog order is part of the selection contract: reordering entries
changes which essay a given day resolves to.
"""

from __future__ import annotations

from collections.abc import Sequence

from dailyreading.models import EssayMetadata


class CatalogError(RuntimeError):
    """Raised when the static catalog cannot support daily selection."""


ESSAY_CATALOG: tuple[EssayMetadata, ...] = (
    EssayMetadata(
        title="Self-Reliance",
        author="Ralph Waldo Emerson",
        document_id="Essays: First Series/Self-Reliance",
        citation_text="Essays: First Series (1841)",
        citation_url="https://www.gutenberg.org/ebooks/16643",
    ),
    EssayMetadata(
        title="The Over-Soul",
        author="Ralph Waldo Emerson",
        document_id="Essays: First Series/The Over-Soul",
        citation_text="Essays: First Series (1841)",
        citation_url="https://www.gutenberg.org/ebooks/16643",
    ),
    EssayMetadata(
        title="Where I Lived, and What I Lived For",
        author="Henry David Thoreau",
        document_id="Walden (1854)/Where I Lived, and What I Lived For",
        citation_text="Walden (1854)",
        citation_url="https://www.gutenberg.org/ebooks/205",
    ),
    EssayMetadata(
        title="Civil Disobedience",
        author="Henry David Thoreau",
        document_id="Resistance to Civil Government",
        citation_text="Resistance to Civil Government (1849)",
        citation_url="https://www.gutenberg.org/ebooks/71",
    ),
    EssayMetadata(
        title="Of Studies",
        author="Francis Bacon",
        document_id="Essays (Bacon)/Of Studies",
        citation_text="Essays (1625)",
        citation_url="https://www.gutenberg.org/ebooks/575",
    ),
    EssayMetadata(
        title="Of Truth",
        author="Francis Bacon",
        document_id="Essays (Bacon)/Of Truth",
        citation_text="Essays (1625)",
        citation_url="https://www.gutenberg.org/ebooks/575",
    ),
    EssayMetadata(
        title="Of Solitude",
        author="Michel de Montaigne",
        document_id="Essays of Michel de Montaigne/Book I/Chapter XXXVIII",
        citation_text="Essays, translated by Charles Cotton (1877)",
        citation_url="https://www.gutenberg.org/ebooks/3600",
    ),
    EssayMetadata(
        title="Of Experience",
        author="Michel de Montaigne",
        document_id="Essays of Michel de Montaigne/Book III/Chapter XIII",
        citation_text="Essays, translated by Charles Cotton (1877)",
        citation_url="https://www.gutenberg.org/ebooks/3600",
    ),
    EssayMetadata(
        title="The Soul of Man under Socialism",
        author="Oscar Wilde",
        document_id="The Soul of Man under Socialism",
        citation_text="The Fortnightly Review (1891)",
        citation_url="https://www.gutenberg.org/ebooks/1017",
    ),
    EssayMetadata(
        title="The Decay of Lying",
        author="Oscar Wilde",
        document_id="Intentions/The Decay of Lying",
        citation_text="Intentions (1891)",
        citation_url="https://www.gutenberg.org/ebooks/887",
    ),
    EssayMetadata(
        title="On the Pleasure of Hating",
        author="William Hazlitt",
        document_id="The Plain Speaker/On the Pleasure of Hating",
        citation_text="The Plain Speaker (1826)",
        citation_url="https://www.gutenberg.org/ebooks/6716",
    ),
    EssayMetadata(
        title="On Going a Journey",
        author="William Hazlitt",
        document_id="Table-Talk/On Going a Journey",
        citation_text="Table-Talk (1821)",
        citation_url="https://www.gutenberg.org/ebooks/3020",
    ),
    EssayMetadata(
        title="On Running After One's Hat",
        author="G. K. Chesterton",
        document_id="All Things Considered/On Running After One's Hat",
        citation_text="All Things Considered (1908)",
        citation_url="https://www.gutenberg.org/ebooks/11505",
    ),
    EssayMetadata(
        title="A Defence of Nonsense",
        author="G. K. Chesterton",
        document_id="The Defendant/A Defence of Nonsense",
        citation_text="The Defendant (1901)",
        citation_url="https://www.gutenberg.org/ebooks/12245",
    ),
    EssayMetadata(
        title="On the Decay of the Art of Lying",
        author="Mark Twain",
        document_id="On the Decay of the Art of Lying",
        citation_text="The Stolen White Elephant, Etc. (1882)",
        citation_url="https://www.gutenberg.org/ebooks/2572",
    ),
    EssayMetadata(
        title="Advice to Youth",
        author="Mark Twain",
        document_id="Advice to Youth",
        citation_text="Advice to Youth (1882)",
    ),
    EssayMetadata(
        title="The Way to Wealth",
        author="Benjamin Franklin",
        document_id="The Way to Wealth",
        citation_text="Poor Richard Improved (1758)",
        citation_url="https://www.gutenberg.org/ebooks/43855",
    ),
    EssayMetadata(
        title="A Dissertation upon Roast Pig",
        author="Charles Lamb",
        document_id="Essays of Elia/A Dissertation upon Roast Pig",
        citation_text="Essays of Elia (1823)",
        citation_url="https://www.gutenberg.org/ebooks/10343",
    ),
    EssayMetadata(
        title="Of Individuality, as One of the Elements of Well-Being",
        author="John Stuart Mill",
        document_id="On Liberty/Chapter 3",
        citation_text="On Liberty (1859)",
        citation_url="https://www.gutenberg.org/ebooks/34901",
    ),
    EssayMetadata(
        title="On the Sufferings of the World",
        author="Arthur Schopenhauer",
        document_id="Studies in Pessimism/On the Sufferings of the World",
        citation_text="Studies in Pessimism, translated by T. Bailey Saunders (1891)",
        citation_url="https://www.gutenberg.org/ebooks/10732",
    ),
)

POET_ROSTER: tuple[str, ...] = (
    "Emily Dickinson",
    "Robert Frost",
    "William Shakespeare",
    "Walt Whitman",
    "William Blake",
    "John Keats",
    "Percy Bysshe Shelley",
    "William Wordsworth",
    "Edgar Allan Poe",
    "Langston Hughes",
    "Maya Angelou",
    "Sylvia Plath",
    "W.B. Yeats",
    "T.S. Eliot",
    "Rumi",
)


def validate_catalog(entries: Sequence[EssayMetadata]) -> Sequence[EssayMetadata]:
    """Ensure the catalog is non-empty and keyed by unique document ids."""
    if not entries:
        raise CatalogError("Essay catalog is empty; daily selection needs at least one essay.")
    seen: set[str] = set()
    for entry in entries:
        if entry.document_id in seen:
            raise CatalogError(f"Duplicate document id in essay catalog: {entry.document_id!r}")
        seen.add(entry.document_id)
    return entries


validate_catalog(ESSAY_CATALOG)
