import logging
from pathlib import Path

from skos2jskos.accumulator import EntityAccumulator
from skos2jskos.concepts import collect_concepts
from skos2jskos.config import ConversionConfig
from skos2jskos.errors import ConfigurationError
from skos2jskos.export import export_concepts, export_scheme
from skos2jskos.scheme import build_scheme, find_concept_scheme
from skos2jskos.sparql import RdfSource

logger = logging.getLogger(__name__)


def check_outdir(outdir: Path) -> None:
    if outdir.is_file():
        msg = "Outdir must be a directory but it is a file: %s"
        logger.error(msg, outdir)
        raise ConfigurationError(msg % outdir)
    if not outdir.is_dir():
        msg = "Output directory not found: %s"
        logger.error(msg, outdir)
        raise ConfigurationError(msg % outdir)


def convert(config: ConversionConfig, source: RdfSource | None = None):
    """
    Convert the SKOS vocabulary in source to scheme.json and concepts.json.

    The source is created from config if not given. Returns the paths of the
    scheme file and the concepts file.
    """
    check_outdir(config.outdir)
    if source is None:
        source = RdfSource.from_config(config)
    if source.remote:
        logger.info("Querying SPARQL endpoint %s", source.label)
    else:
        logger.info("Loaded %i triples from %s", len(source), source.label)
    accumulator = EntityAccumulator.from_config(config)

    scheme_uri = config.scheme
    if scheme_uri is None:
        scheme_uri = find_concept_scheme(source)
    else:
        logger.debug("Using concept scheme %s from configuration.", scheme_uri)

    scheme = build_scheme(source, scheme_uri, accumulator)
    scheme_path = export_scheme(scheme, config)

    concepts = collect_concepts(source, scheme_uri, accumulator)
    concepts_path = export_concepts(concepts.values(), config)
    return scheme_path, concepts_path
