from .regex_ast import (
    RegexNode, ConcatNode, LiteralNode, WildcardNode, AlternateNode, RepeatNode, EmptyNode,
    chain, join
)
from .pattern_parser import PatternParser, ParseContext, parse
from .nfa_builder import (
    NFA, NFABuilder, CharTransition, AnyTransition, EpsilonTransition, build, step
)
from .nfa_export import to_dot, nfa_to_dict, nfa_statistics
from .nfa_simulation import epsilon_closure, validate_active_states
