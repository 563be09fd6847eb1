import logging
import re
from bisect import bisect_right
from collections.abc import Iterator
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, PrivateAttr
from tree_sitter import Node as TSNode
from tree_sitter import Parser

from splint.errors import TokenizeError
from splint.models.token import SourcePosition, Token, TokenKind
from splint.services.languages import (
    LITERAL_NODE_TYPES,
    SKIPPED_NODE_TYPES,
    STRAY_CHARACTERS,
    LanguageName,
    get_language,
)
from splint.utils.treesitter_helpers import find_missing_node, iter_leaves

logger = logging.getLogger(__name__)

OPEN_DELIMITERS: Final[dict[str, str]] = {"(": ")", "[": "]", "{": "}"}
CLOSE_DELIMITERS: Final[frozenset[str]] = frozenset(OPEN_DELIMITERS.values())

# Recovery may insert these as zero-width MISSING nodes.
LEXICAL_NODE_TYPES: Final[frozenset[str]] = frozenset(
    {*OPEN_DELIMITERS, *CLOSE_DELIMITERS, '"', "'", "*/"}
)

# Splits a non-literal leaf into identifiers, numbers and single-character
# punctuation, so that "::" or "->" become one Punct token per character.
_PIECE_RE: Final[re.Pattern[str]] = re.compile(
    r"(?P<ident>(?:r#)?[^\W\d]\w*)|(?P<number>\d\w*)|(?P<punct>[^\w\s])"
)


class _LineIndex:
    """Maps byte offsets of a UTF-8 document to (line, character column)."""

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.line_starts: list[int] = [0]
        self.line_starts.extend(m.end() for m in re.finditer(b"\n", data))

    def point(self, offset: int) -> tuple[int, int]:
        row = bisect_right(self.line_starts, offset) - 1
        line_start = self.line_starts[row]
        prefix = self.data[line_start:offset]
        column = len(prefix) if prefix.isascii() else len(prefix.decode("utf-8"))
        return row + 1, column

    def span(self, byte_start: int, byte_end: int) -> SourcePosition:
        start_line, start_column = self.point(byte_start)
        end_line, end_column = self.point(byte_end)
        return SourcePosition(
            start_line=start_line,
            start_column=start_column,
            end_line=end_line,
            end_column=end_column,
            byte_start=byte_start,
            byte_end=byte_end,
        )


class Tokenizer(BaseModel):
    """Flattens a tree-sitter parse into a sequence of tokens.

    Groups become an OpenDelim token, their flattened contents and a
    CloseDelim token. Comments are dropped and literals stay atomic. A parser
    is not thread-safe, so use one Tokenizer per worker.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    language: LanguageName = LanguageName.RUST

    __parser: Parser = PrivateAttr()

    def model_post_init(self, context: Any) -> None:
        self.__parser = Parser(get_language(self.language))
        return super().model_post_init(context)

    def tokenize(self, source: str) -> list[Token]:
        """Tokenize source text.

        Args:
            source: Full text of the file.

        Returns:
            Flattened tokens in document order.

        Raises:
            TokenizeError: If the text is lexically invalid: unbalanced
                delimiters or an unterminated literal. Grammar errors that
                tree-sitter recovers from are tolerated.
        """
        data: bytes = source.encode("utf-8")
        tree = self.__parser.parse(data)
        index = _LineIndex(data)

        missing = find_missing_node(tree.root_node, LEXICAL_NODE_TYPES)
        if missing is not None:
            line, column = index.point(missing.start_byte)
            raise TokenizeError(f"missing {missing.type!r} at {line}:{column + 1}")

        tokens: list[Token] = []
        expected_closers: list[str] = []
        leaves = iter_leaves(
            tree.root_node,
            atomic=LITERAL_NODE_TYPES[self.language],
            skipped=SKIPPED_NODE_TYPES[self.language],
        )
        for leaf in leaves:
            for token in self.__leaf_tokens(leaf, index):
                self.__check_token(token, expected_closers)
                tokens.append(token)

        if expected_closers:
            raise TokenizeError(f"unclosed delimiter, expected {expected_closers[-1]!r}")

        logger.debug("Tokenized %d bytes into %d tokens", len(data), len(tokens))
        return tokens

    def __leaf_tokens(self, leaf: TSNode, index: _LineIndex) -> Iterator[Token]:
        text: str = (leaf.text or b"").decode("utf-8")
        if leaf.type in LITERAL_NODE_TYPES[self.language]:
            yield Token(
                kind=TokenKind.LITERAL,
                text=text,
                span=index.span(leaf.start_byte, leaf.end_byte),
            )
            return

        for piece in _PIECE_RE.finditer(text):
            byte_start = leaf.start_byte + len(text[: piece.start()].encode("utf-8"))
            byte_end = byte_start + len(piece.group().encode("utf-8"))
            yield Token(
                kind=self.__piece_kind(piece),
                text=piece.group(),
                span=index.span(byte_start, byte_end),
            )

    def __piece_kind(self, piece: re.Match[str]) -> TokenKind:
        if piece.lastgroup == "ident":
            return TokenKind.IDENT
        if piece.lastgroup == "number":
            return TokenKind.LITERAL
        if piece.group() in OPEN_DELIMITERS:
            return TokenKind.OPEN_DELIM
        if piece.group() in CLOSE_DELIMITERS:
            return TokenKind.CLOSE_DELIM
        return TokenKind.PUNCT

    def __check_token(self, token: Token, expected_closers: list[str]) -> None:
        line, column = token.span.start
        if token.kind == TokenKind.OPEN_DELIM:
            expected_closers.append(OPEN_DELIMITERS[token.text])
        elif token.kind == TokenKind.CLOSE_DELIM:
            if not expected_closers or expected_closers.pop() != token.text:
                raise TokenizeError(
                    f"unbalanced delimiter {token.text!r} at {line}:{column + 1}"
                )
        elif token.kind == TokenKind.PUNCT and token.text in STRAY_CHARACTERS[self.language]:
            raise TokenizeError(f"unterminated literal at {line}:{column + 1}")


def tokenize(source: str, language: LanguageName = LanguageName.RUST) -> list[Token]:
    """Tokenize ``source`` with a fresh :class:`Tokenizer`."""
    return Tokenizer(language=language).tokenize(source)
