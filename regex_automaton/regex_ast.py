from abc import abstractmethod, ABC
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple


def _fold(root: 'RegexNode', combine: Callable[['RegexNode', List[Any]], Any]) -> Any:
    """
    Post-order fold over the tree with an explicit stack.

    `combine` receives a node and the already folded results of its children,
    left to right. Long patterns parse to trees thousands of levels deep, so
    renderings must not recurse.
    """
    results: List[Any] = []
    stack = [(root, False)]

    while stack:
        node, expanded = stack.pop()
        children = node.children()

        if children and not expanded:
            stack.append((node, True))
            for child in reversed(children):
                stack.append((child, False))
            continue

        parts = []
        if children:
            parts = results[-len(children):]
            del results[-len(children):]
        results.append(combine(node, parts))

    return results[0]


class RegexNode(ABC):
    """Base class for regex AST nodes."""

    def children(self) -> Tuple['RegexNode', ...]:
        return ()

    @abstractmethod
    def render_string(self, parts: List[str]) -> str:
        """Text form of this node given the text of its children."""
        pass

    @abstractmethod
    def render_dict(self, parts: List[Any]) -> Dict:
        """Dict form of this node given the rendered children."""
        pass

    def to_string(self) -> str:
        """Fully parenthesised text form of the node."""
        return _fold(self, lambda node, parts: node.render_string(parts))

    def to_dict(self) -> Dict:
        """Nested JSON-serialisable form of the node."""
        return _fold(self, lambda node, parts: node.render_dict(parts))

    def to_table(self) -> Dict:
        """
        Flat form of the tree: nodes listed in post-order, children referenced by index.

        Unlike to_dict, the result stays shallow however deep the tree is, so
        it can be passed to json.dumps for any pattern.

        Returns:
            Dict with 'root' (index of the root entry) and 'nodes'
        """
        nodes: List[Dict] = []

        def add(node: RegexNode, child_ids: List[int]) -> int:
            nodes.append(node.render_dict(child_ids))
            return len(nodes) - 1

        root = _fold(self, add)
        return {'root': root, 'nodes': nodes}

    def __str__(self) -> str:
        return self.to_string()


@dataclass(frozen=True)
class ConcatNode(RegexNode):
    """Concatenation node (RS)."""
    left: RegexNode
    right: RegexNode

    def children(self) -> Tuple[RegexNode, ...]:
        return self.left, self.right

    def render_string(self, parts: List[str]) -> str:
        return f"({parts[0]})({parts[1]})"

    def render_dict(self, parts: List[Any]) -> Dict:
        return {'type': 'concat', 'left': parts[0], 'right': parts[1]}


@dataclass(frozen=True)
class LiteralNode(RegexNode):
    """Single character node."""
    char: str

    def render_string(self, parts: List[str]) -> str:
        return self.char

    def render_dict(self, parts: List[Any]) -> Dict:
        return {'type': 'literal', 'char': self.char}


@dataclass(frozen=True)
class WildcardNode(RegexNode):
    """Any single character (.)."""

    def render_string(self, parts: List[str]) -> str:
        return '.'

    def render_dict(self, parts: List[Any]) -> Dict:
        return {'type': 'wildcard'}


@dataclass(frozen=True)
class AlternateNode(RegexNode):
    """Alternation node (R|S)."""
    left: RegexNode
    right: RegexNode

    def children(self) -> Tuple[RegexNode, ...]:
        return self.left, self.right

    def render_string(self, parts: List[str]) -> str:
        return f"({parts[0]}|{parts[1]})"

    def render_dict(self, parts: List[Any]) -> Dict:
        return {'type': 'alternate', 'left': parts[0], 'right': parts[1]}


@dataclass(frozen=True)
class RepeatNode(RegexNode):
    """Zero or more repetitions of the inner node (R*)."""
    inner: RegexNode

    def children(self) -> Tuple[RegexNode, ...]:
        return (self.inner,)

    def render_string(self, parts: List[str]) -> str:
        return f"({parts[0]}*)"

    def render_dict(self, parts: List[Any]) -> Dict:
        return {'type': 'repeat', 'inner': parts[0]}


@dataclass(frozen=True)
class EmptyNode(RegexNode):
    """Empty string node (ε)."""

    def render_string(self, parts: List[str]) -> str:
        return 'ε'

    def render_dict(self, parts: List[Any]) -> Dict:
        return {'type': 'empty'}


def is_empty(node: RegexNode) -> bool:
    return isinstance(node, EmptyNode)


def chain(left: RegexNode, right: RegexNode) -> RegexNode:
    """
    Concatenate two nodes, treating the empty node as identity.

    Args:
        left: Node matched first
        right: Node matched immediately after

    Returns:
        The non-empty operand if the other one is empty, otherwise ConcatNode(left, right)
    """
    if is_empty(left):
        return right
    if is_empty(right):
        return left
    return ConcatNode(left, right)


def join(left: RegexNode, right: RegexNode) -> RegexNode:
    """
    Alternate two nodes, treating the empty node as identity.

    Args:
        left: First alternative
        right: Second alternative

    Returns:
        The non-empty operand if the other one is empty, otherwise AlternateNode(left, right)
    """
    if is_empty(left):
        return right
    if is_empty(right):
        return left
    return AlternateNode(left, right)
