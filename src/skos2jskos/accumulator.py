"""Fold SPARQL result rows into JSKOS records.

A query that joins several multi-valued properties returns the cartesian
product of their values, so the same value shows up in many rows. All merge
operations therefore ignore values that are already present and give the same
result for any order of the rows (with the exception of the first-seen order of
list fields).
"""

import logging
import re

from skos2jskos.config import DEFAULT_LANGUAGE
from skos2jskos.models import JskosItem, JskosRef
from skos2jskos.sparql import shorten
from skos2jskos.terms import iri_value, resolve_literal

logger = logging.getLogger(__name__)


def trim_lines(value: str) -> str:
    """Remove leading and trailing whitespace of every line.

    Line breaks and blank lines between paragraphs are kept, blank lines at the
    start and end of the value are dropped.
    """
    return "\n".join(line.strip() for line in value.splitlines()).strip("\n")


def strip_wrapping_quotes(value: str) -> str:
    """Remove a pair of double quotes that encloses the whole value.

    Some SKOS exports escape notes this way.
    """
    # Only unwrap if there are no quotes inside, "a" and "b" is left as is.
    match = re.fullmatch(r'"([^"]*)"', value, flags=re.DOTALL)
    if match:
        return match.group(1)
    return value


NOTE_CLEANUPS = {
    "trim_lines": trim_lines,
    "strip_wrapping_quotes": strip_wrapping_quotes,
}


class EntityAccumulator:
    """Merge operations shared by the scheme builder and concept collector.

    Every operation does nothing if the term is None, which is the case
    for OPTIONAL query variables that were not bound.
    """

    def __init__(
        self,
        default_language: str = DEFAULT_LANGUAGE,
        note_cleanups=("trim_lines", "strip_wrapping_quotes"),
    ):
        self.default_language = default_language
        self.note_cleanups = [NOTE_CLEANUPS[name] for name in note_cleanups]

    @classmethod
    def from_config(cls, config):
        cleanups = ["trim_lines"]
        if config.unquote_notes:
            cleanups.append("strip_wrapping_quotes")
        return cls(default_language=config.language, note_cleanups=cleanups)

    def merge_label(self, entity: JskosItem, term, field: str = "prefLabel"):
        """Set the label for the language of term unless one is already set."""
        if term is None:
            return
        value, language = resolve_literal(term, self.default_language)
        labels = getattr(entity, field)
        existing = labels.get(language)
        if existing is None:
            labels[language] = value
        elif existing != value:
            logger.warning(
                'Conflicting %s@%s for %s: keeping "%s", ignoring "%s".',
                field,
                language,
                shorten(entity.uri),
                existing,
                value,
            )

    def merge_notation(self, entity: JskosItem, term):
        if term is None:
            return
        value = str(term)
        if value not in entity.notation:
            entity.notation.append(value)

    def merge_uri_ref(self, entity: JskosItem, field: str, term):
        """Add a reference {"uri": ...} to field if the URI is not yet listed."""
        if term is None:
            return
        uri = iri_value(term)
        if uri is None:
            return
        refs = getattr(entity, field)
        if not any(ref.uri == uri for ref in refs):
            refs.append(JskosRef(uri=uri))

    def clean_note(self, value: str) -> str:
        for cleanup in self.note_cleanups:
            value = cleanup(value)
        return value

    def merge_note(self, entity: JskosItem, field: str, term):
        if term is None:
            return
        value, language = resolve_literal(term, self.default_language)
        value = self.clean_note(value)
        notes = getattr(entity, field).setdefault(language, [])
        if value not in notes:
            notes.append(value)
