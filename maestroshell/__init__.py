"""Shell parsing core: tokenizing, expansion, syntax checks, pipelines, here-documents and signal setup."""

__version__ = "0.1.0"
__all__ = ["env", "heredoc", "lexer", "models", "parser", "signals", "syntax"]