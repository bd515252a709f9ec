from stylecheck.lexer.lexer import tokenize

__all__ = ["tokenize"]
