import logging
from dataclasses import dataclass
from typing import Iterable, List, Set, Tuple, Union

from .regex_ast import (
    RegexNode, ConcatNode, LiteralNode, WildcardNode, AlternateNode, RepeatNode, EmptyNode
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CharTransition:
    """Consumes exactly `char`."""
    char: str
    target: int


@dataclass(frozen=True)
class AnyTransition:
    """Consumes any single character."""
    target: int


@dataclass(frozen=True)
class EpsilonTransition:
    """Taken without consuming input."""
    target: int


Transition = Union[CharTransition, AnyTransition, EpsilonTransition]


class NFA:
    """
    NFA stored as an arena of states.

    States are plain integer indices into `states`; each entry is the ordered
    list of that state's outgoing transitions. State 0 is the start state and
    state 1 the accept state. States are only ever appended.
    """

    START = 0
    ACCEPT = 1

    def __init__(self):
        self.states: List[List[Transition]] = [[], []]

    def __len__(self) -> int:
        return len(self.states)

    def add_state(self) -> int:
        """Append a new state and return its index."""
        self.states.append([])
        return len(self.states) - 1

    def add_transition(self, source: int, transition: Transition):
        """Add a transition."""
        self.states[source].append(transition)

    def transitions(self, state: int) -> List[Transition]:
        return self.states[state]

    def iter_transitions(self) -> Iterable[Tuple[int, Transition]]:
        """Yield (source, transition) pairs in state order."""
        for source, transitions in enumerate(self.states):
            for transition in transitions:
                yield source, transition

    def step(self, active: Iterable[int], char: str) -> Set[int]:
        """
        Move every active state along one input character.

        Epsilon transitions are relaxed once: they contribute both their
        target and their source state. Chains of epsilon transitions are not
        followed; use nfa_simulation.epsilon_closure for that.

        Args:
            active: Indices of the currently active states
            char: Input character

        Returns:
            Set of state indices active after the step
        """
        next_states = set()

        for state in active:
            for transition in self.states[state]:
                if isinstance(transition, CharTransition):
                    if transition.char == char:
                        next_states.add(transition.target)
                elif isinstance(transition, AnyTransition):
                    next_states.add(transition.target)
                else:
                    next_states.add(transition.target)
                    next_states.add(state)

        return next_states


class NFABuilder:
    """Lays out a regex AST between the start and accept states of a new NFA."""

    def __init__(self):
        self.nfa = NFA()

    def build(self, ast: RegexNode) -> NFA:
        if not isinstance(ast, RegexNode):
            raise TypeError(f"Expected a RegexNode, got {type(ast).__name__}")

        self.nfa = NFA()
        self.wire(ast, NFA.START, NFA.ACCEPT)

        logger.debug(
            "Built NFA with %d states and %d transitions",
            len(self.nfa), sum(len(transitions) for transitions in self.nfa.states)
        )
        return self.nfa

    def wire(self, root: RegexNode, start: int, end: int):
        """
        Add the transitions for `root` between `start` and `end`.

        Uses an explicit stack so long patterns (which parse to deep
        left-nested trees) do not exhaust the interpreter's recursion limit.
        Work items are pushed in reverse so the result is identical to a
        left-to-right recursive traversal.
        """
        stack = [(root, start, end)]

        while stack:
            node, start, end = stack.pop()

            if isinstance(node, LiteralNode):
                self.nfa.add_transition(start, CharTransition(node.char, end))

            elif isinstance(node, WildcardNode):
                self.nfa.add_transition(start, AnyTransition(end))

            elif isinstance(node, AlternateNode):
                # Parallel paths between the same pair of states
                stack.append((node.right, start, end))
                stack.append((node.left, start, end))

            elif isinstance(node, ConcatNode):
                mid = self.nfa.add_state()
                stack.append((node.right, mid, end))
                stack.append((node.left, start, mid))

            elif isinstance(node, RepeatNode):
                # Loop on start; the bypass edge is added after the loop body
                if start != end:
                    stack.append((EmptyNode(), start, end))
                stack.append((node.inner, start, start))

            elif isinstance(node, EmptyNode):
                if start != end:
                    self.nfa.add_transition(start, EpsilonTransition(end))

            else:
                raise TypeError(f"Unknown AST node type: {type(node).__name__}")


def build(ast: RegexNode) -> NFA:
    """
    Convert a regex AST to an NFA using a Thompson-style construction.

    Concatenation shares one midpoint state between its operands, alternation
    wires both operands between the same pair of states and repetition loops
    its operand on the start state.

    Args:
        ast: Root of the AST, e.g. the result of pattern_parser.parse

    Returns:
        NFA: automaton with state 0 as start and state 1 as accept
    """
    return NFABuilder().build(ast)


def step(nfa: NFA, active: Iterable[int], char: str) -> Set[int]:
    """Single-step transition function; see NFA.step."""
    return nfa.step(active, char)
