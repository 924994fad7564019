"""Citation tokenizer: reporter pattern compilation, prefiltering and token assembly."""

from citelex.editions import Edition, ReferenceDataset, Reporter
from citelex.errors import (
    AutomatonBuildError,
    PatternCompilationError,
    ShortFormDerivationError,
    TemplateCycleError,
    TokenizerBuildError,
    UnknownTemplateError,
)
from citelex.extractors import (
    ExtractorRegistry,
    TokenExtractor,
    build_extractor_registry,
    default_registry,
)
from citelex.prefilter import Prefilter
from citelex.tokenizer import (
    AhocorasickTokenizer,
    Tokenizer,
    default_tokenizer,
    extract_tokens,
    never_merge,
    tokenize,
)
from citelex.tokens import (
    CitationToken,
    IdToken,
    IndexedTokens,
    MatchToken,
    ParagraphToken,
    SectionToken,
    SpaceToken,
    StopWordToken,
    SupraToken,
    Token,
    TokenExtractorExtra,
    TokenKind,
    Tokens,
    WordToken,
)

__all__ = [
    "AhocorasickTokenizer",
    "AutomatonBuildError",
    "CitationToken",
    "Edition",
    "ExtractorRegistry",
    "IdToken",
    "IndexedTokens",
    "MatchToken",
    "ParagraphToken",
    "PatternCompilationError",
    "Prefilter",
    "ReferenceDataset",
    "Reporter",
    "SectionToken",
    "ShortFormDerivationError",
    "SpaceToken",
    "StopWordToken",
    "SupraToken",
    "TemplateCycleError",
    "Token",
    "TokenExtractor",
    "TokenExtractorExtra",
    "TokenKind",
    "Tokenizer",
    "TokenizerBuildError",
    "Tokens",
    "UnknownTemplateError",
    "WordToken",
    "build_extractor_registry",
    "default_registry",
    "default_tokenizer",
    "extract_tokens",
    "never_merge",
    "tokenize",
]
