"""Exceptions for fatal conditions that abort a conversion run."""


class Skos2JskosError(Exception):
    pass


class ConfigurationError(Skos2JskosError):
    """Invalid options, missing files or a bad output directory."""


class SchemeNotFoundError(Skos2JskosError):
    """No usable skos:ConceptScheme could be found in the data."""


class AmbiguousSchemeError(Skos2JskosError):
    """More than one skos:ConceptScheme was found and none was selected."""

    def __init__(self, candidates):
        self.candidates = sorted(candidates)
        msg = (
            "Found %i concept schemes, select one with --scheme: %s"
            % (len(self.candidates), ", ".join(self.candidates))
        )
        super().__init__(msg)
