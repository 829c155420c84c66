"""Access to the RDF data: local files, a remote document or a SPARQL endpoint.

All queries run as ``SELECT * WHERE { ... }`` with a fixed set of prefixes.
Result rows are returned as dicts from variable name to rdflib term; unbound
(OPTIONAL) variables are left out of the dict.
"""

import logging
from pathlib import Path
from urllib.parse import urlsplit

from curies import Converter
from rdflib import Graph
from rdflib.plugins.stores.sparqlstore import SPARQLStore
from rdflib.term import Node
from rdflib.util import guess_format

from skos2jskos.errors import ConfigurationError

logger = logging.getLogger(__name__)

PREFIXES = {
    "dct": "http://purl.org/dc/terms/",
    "rdf": "http://www.w3.org/1999/02/22-rdf-syntax-ns#",
    "skos": "http://www.w3.org/2004/02/skos/core#",
    "vann": "http://purl.org/vocab/vann/",
}

# The same prefixes are used to print shortened IRIs in log messages.
curies_converter: Converter = Converter.from_prefix_map(PREFIXES)

RDF_FILE_ENDINGS = {
    ".ttl": "turtle",
    ".rdf": "xml",
    ".xml": "xml",
    ".owl": "xml",
    ".jsonld": "json-ld",
    ".json-ld": "json-ld",
    ".json": "json-ld",
    ".nt": "nt",
    ".n3": "n3",
    ".trig": "trig",
    ".nq": "nquads",
}


def shorten(iri) -> str:
    return curies_converter.compress(str(iri), passthrough=True)


def build_query(pattern: str) -> str:
    prologue = "\n".join(
        f"PREFIX {prefix}: <{uri}>" for prefix, uri in sorted(PREFIXES.items())
    )
    return f"{prologue}\nSELECT * WHERE {{\n{pattern.strip()}\n}}"


def guess_rdf_format(path: str) -> str | None:
    suffix = Path(path).suffix.lower()
    if suffix in RDF_FILE_ENDINGS:
        return RDF_FILE_ENDINGS[suffix]
    return guess_format(path)


class RdfSource:
    """An rdflib graph (in-memory or backed by a SPARQL endpoint) to query."""

    def __init__(self, graph: Graph, label: str = "graph", remote: bool = False):
        self.graph = graph
        self.label = label
        self.remote = remote

    def __len__(self):
        if self.remote:
            msg = "Number of triples is not available for a SPARQL endpoint."
            raise TypeError(msg)
        return len(self.graph)

    @classmethod
    def from_files(cls, paths, rdf_format: str | None = None):
        graph = Graph()
        for path in paths:
            path = Path(path)
            if not path.is_file():
                msg = "File not found: %s"
                logger.error(msg, path)
                raise ConfigurationError(msg % path)
            fmt = rdf_format or guess_rdf_format(str(path))
            logger.debug('Parsing "%s" (format: %s)', path, fmt)
            try:
                graph.parse(path.resolve().as_uri(), format=fmt)
            except Exception as exc:
                msg = f'Could not parse "{path}": {exc}'
                raise ConfigurationError(msg) from exc
        return cls(graph, label=", ".join(str(p) for p in paths))

    @classmethod
    def from_url(cls, url: str, rdf_format: str | None = None):
        graph = Graph()
        fmt = rdf_format or guess_rdf_format(urlsplit(url).path)
        logger.debug('Retrieving "%s" (format: %s)', url, fmt)
        try:
            graph.parse(url, format=fmt)
        except Exception as exc:
            msg = f'Could not retrieve RDF from "{url}": {exc}'
            raise ConfigurationError(msg) from exc
        return cls(graph, label=url)

    @classmethod
    def from_endpoint(cls, endpoint: str):
        store = SPARQLStore(query_endpoint=endpoint)
        return cls(Graph(store=store), label=endpoint, remote=True)

    @classmethod
    def from_config(cls, config):
        if config.source_files:
            return cls.from_files(config.source_files, config.rdf_format)
        if config.source_url is not None:
            return cls.from_url(config.source_url, config.rdf_format)
        return cls.from_endpoint(config.sparql_endpoint)

    def run_query(self, pattern: str) -> list[dict[str, Node]]:
        query = build_query(pattern)
        logger.debug("Running query on %s:\n%s", self.label, query)
        rows = []
        for result in self.graph.query(query):
            rows.append(
                {
                    str(var): term
                    for var, term in result.asdict().items()
                    if term is not None
                }
            )
        logger.debug("-> %i result rows", len(rows))
        return rows
