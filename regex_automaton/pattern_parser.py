from dataclasses import dataclass
from typing import Callable, Optional

from .regex_ast import (
    RegexNode, LiteralNode, WildcardNode, RepeatNode, EmptyNode, chain, join
)

SEQUENCE_CLOSE = ')'
CHARSET_CLOSE = ']'
ESCAPE_OPEN = '{'
ESCAPE_CLOSE = '}'


@dataclass(frozen=True)
class ParseContext:
    """
    Per-frame parsing state, fixed when the frame is opened.

    charset: polarity of the frame. Plain characters alternate under charset
        polarity and concatenate under sequence polarity.
    closing: delimiter that ends this frame, or None for the outermost frame
        which runs to the end of the input.
    """
    charset: bool = False
    closing: Optional[str] = None

    @property
    def bounded(self) -> bool:
        return self.closing is not None

    def combine(self, left: RegexNode, right: RegexNode) -> RegexNode:
        """Ambient-default combinator of the frame."""
        return join(left, right) if self.charset else chain(left, right)

    def combine_inverse(self, left: RegexNode, right: RegexNode) -> RegexNode:
        return chain(left, right) if self.charset else join(left, right)


class _Frame:
    """An open structural frame: its context, accumulator and how it merges into its parent."""

    def __init__(self, context: ParseContext,
                 merge: Optional[Callable[[RegexNode, RegexNode], RegexNode]] = None):
        self.context = context
        self.merge = merge
        self.current: RegexNode = EmptyNode()


class PatternParser:
    """
    Single-pass parser for the brace/bracket pattern syntax.

    The parser never rejects input: an unterminated group, class or escape
    block ends where the input ends.
    """

    def __init__(self, pattern: str):
        self.pattern = pattern
        self.pos = 0

    def peek(self) -> Optional[str]:
        """Look at current character without consuming."""
        return self.pattern[self.pos] if self.pos < len(self.pattern) else None

    def consume(self) -> Optional[str]:
        """Consume and return current character."""
        if self.pos < len(self.pattern):
            char = self.pattern[self.pos]
            self.pos += 1
            return char
        return None

    def parse(self) -> RegexNode:
        """Parse the whole pattern and return the AST root."""
        return self.parse_structural(ParseContext())

    def parse_structural(self, context: ParseContext) -> RegexNode:
        """
        Parse structural mode starting in `context` until its closing delimiter or end of input.

        Nested groups, classes and alternation right-hand sides are kept on an
        explicit stack of frames rather than Python calls, so deeply nested or
        long alternation patterns cannot exhaust the recursion limit. Each
        frame remembers how its result merges into the enclosing accumulator.
        """
        stack = [_Frame(context)]

        while True:
            frame = stack[-1]
            char = self.consume()

            if char is None or (frame.context.bounded and char == frame.context.closing):
                # At end of input every open frame closes in turn
                stack.pop()
                if not stack:
                    return frame.current
                parent = stack[-1]
                parent.current = frame.merge(parent.current, frame.current)
                continue

            frame_context = frame.context
            if char == '*':
                # Wraps everything accumulated in this frame, not just the last atom
                frame.current = RepeatNode(frame.current)
            elif char == '.':
                frame.current = frame_context.combine(frame.current, WildcardNode())
            elif char == '(':
                stack.append(_Frame(
                    ParseContext(frame_context.charset, SEQUENCE_CLOSE), frame_context.combine
                ))
            elif char == '[':
                stack.append(_Frame(
                    ParseContext(not frame_context.charset, CHARSET_CLOSE), frame_context.combine
                ))
            elif char == '|':
                # The right-hand side runs to this frame's own end
                stack.append(_Frame(frame_context, frame_context.combine_inverse))
            elif char == ESCAPE_OPEN:
                inner = self.parse_escape(frame_context)
                frame.current = frame_context.combine_inverse(frame.current, inner)
            else:
                frame.current = frame_context.combine(frame.current, LiteralNode(char))

    def parse_escape(self, context: ParseContext) -> RegexNode:
        """
        Parse a literal-escape block after its opening brace has been consumed.

        Every character up to the matching closing brace is literal. Nested
        balanced braces are kept as content; only the brace that brings the
        depth back to zero is dropped.
        """
        current = EmptyNode()
        depth = 1

        while True:
            char = self.consume()
            if char is None:
                break
            if char == ESCAPE_OPEN:
                depth += 1
            elif char == ESCAPE_CLOSE:
                depth -= 1
            if depth == 0:
                break
            current = context.combine(current, LiteralNode(char))

        return current


def parse(pattern: str) -> RegexNode:
    """
    Parse a pattern into a regex AST.

    Args:
        pattern (str): The pattern to parse. Supports:
            - Literal characters, concatenated by default: ab
            - Wildcard: .
            - Repetition of everything before it in the group: ab* == (ab)*
            - Grouping: (ab)
            - Character classes, alternated by default: [ab] == a|b
            - Alternation: a|b
            - Literal escape blocks: {(a|b)*} matches the text "(a|b)*"

    Returns:
        RegexNode: The root of the AST. Malformed patterns still produce an AST.
    """
    return PatternParser(pattern).parse()
