from typing import Dict, Iterable, Set

from .nfa_builder import NFA, EpsilonTransition


def epsilon_closure(nfa: NFA, states: Iterable[int]) -> Set[int]:
    """
    Compute epsilon closure of a set of states.

    NFA.step relaxes epsilon transitions only once, so a driver running the
    automaton over a string needs this around every step.

    Args:
        nfa: The NFA
        states: Set of states to compute closure for

    Returns:
        Set of states reachable via epsilon transitions, including `states` itself
    """
    closure = set(states)
    stack = list(closure)

    while stack:
        current = stack.pop()

        for transition in nfa.transitions(current):
            if isinstance(transition, EpsilonTransition) and transition.target not in closure:
                closure.add(transition.target)
                stack.append(transition.target)

    return closure


def validate_active_states(nfa: NFA, states) -> Dict:
    """
    Validates that `states` can be used as an active state set for the NFA.

    Args:
        nfa: The NFA the states belong to
        states: Candidate collection of state indices

    Returns:
        Dict: Validation result with 'valid' boolean and optional 'error' message
    """
    if not isinstance(states, (list, set, frozenset, tuple)):
        return {'valid': False, 'error': 'Active states must be a list of state indices'}

    for state in states:
        # JSON true/false arrive as bool, which isinstance(..., int) accepts
        if isinstance(state, bool) or not isinstance(state, int):
            return {'valid': False, 'error': f'State {state!r} is not an integer index'}
        if not 0 <= state < len(nfa):
            return {'valid': False, 'error': f'State {state} not in states list'}

    return {'valid': True}
