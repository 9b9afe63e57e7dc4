from typing import NotRequired, Optional, TypedDict

from noxml.document import NoxDocument
from noxml.formatter import NoxFormatter
from noxml.lexer import BlockLexer, LexerConfig
from noxml.logger import Logger
from noxml.parser import NoxParser, ParserConfig
from noxml.utils import resolve_config


class CompilerConfig(TypedDict):
    indent: NotRequired[str]
    enable_logger: NotRequired[bool]


class CompilerConfigRequired(TypedDict):
    indent: str
    enable_logger: bool


DEFAULT_CONFIG: CompilerConfigRequired = {
    "indent": "\t",
    "enable_logger": False,
}


class NoxCompiler:
    """Runs source text through lexer, parser and formatter; fails on the first error."""

    def __init__(self, config: Optional[CompilerConfig] = None):
        self.config = resolve_config(config or {}, DEFAULT_CONFIG)
        self.logger = Logger("compiler", is_enabled=self.config["enable_logger"]).logger
        self.lexer_config: LexerConfig = {"enable_logger": self.config["enable_logger"]}
        self.parser_config: ParserConfig = {"enable_logger": self.config["enable_logger"]}
        self.formatter = NoxFormatter(indent=self.config["indent"])

    def parse(self, text: str) -> NoxDocument:
        root = BlockLexer(text, config=self.lexer_config).tokenize()
        return NoxParser(root, config=self.parser_config).parse_document()

    def compile(self, text: str) -> str:
        document = self.parse(text)
        output = self.formatter.format_document(document)
        self.logger.info(f"Compiled {len(document.nodes)} top-level node(s)")
        return output


def compile_source(text: str, config: Optional[CompilerConfig] = None) -> str:
    return NoxCompiler(config).compile(text)
