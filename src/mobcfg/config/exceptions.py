"""Exceptions raised while loading config files."""


class ConfigSyntaxError(ValueError):
    """A config file could not be parsed as YAML."""

    def __init__(self, file_name: str, parser_message: str):
        self.file_name = file_name
        self.parser_message = parser_message
        super().__init__(f"Unable to parse {file_name}: {parser_message}")
