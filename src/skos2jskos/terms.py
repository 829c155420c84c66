"""Extract plain values from rdflib terms."""

import logging

from rdflib import BNode, Literal, URIRef

from skos2jskos.config import DEFAULT_LANGUAGE

logger = logging.getLogger(__name__)


def resolve_literal(
    term, default_language: str = DEFAULT_LANGUAGE
) -> tuple[str, str]:
    """
    Return value and language of a literal.

    Literals without a language tag get the default language and a warning.
    """
    if isinstance(term, Literal):
        if term.language:
            return str(term), term.language
        logger.warning(
            'Missing language tag for "%s", using "%s".', term, default_language
        )
        return str(term), default_language
    if isinstance(term, (URIRef, BNode)):
        # Not expected for label-like properties but usable as a value.
        logger.warning(
            'Expected a literal but got "%s", using "%s".', term, default_language
        )
        return str(term), default_language
    msg = f"Unsupported RDF term: {term!r}"
    raise TypeError(msg)


def iri_value(term) -> str | None:
    """Return the IRI of a URIRef, or None for any other kind of term."""
    if isinstance(term, URIRef):
        return str(term)
    if isinstance(term, BNode):
        logger.warning("Ignoring blank node _:%s where an IRI is required.", term)
        return None
    logger.warning('Ignoring literal "%s" where an IRI is required.', term)
    return None
