import json
from typing import Dict, List

from .nfa_builder import NFA, CharTransition, AnyTransition, EpsilonTransition, Transition

ANY_LABEL = 'any'
EPSILON_LABEL = 'ε'


def _edge_label(transition: Transition) -> str:
    if isinstance(transition, CharTransition):
        # json.dumps gives a double-quoted string with quotes, backslashes and control characters escaped
        return json.dumps(transition.char, ensure_ascii=False)
    if isinstance(transition, AnyTransition):
        return f'"{ANY_LABEL}"'
    return f'"{EPSILON_LABEL}"'


def to_dot(nfa: NFA) -> str:
    """
    Render the NFA as a Graphviz digraph for inspection.

    The start state is drawn bold, the accept state as a double circle and
    every other state as a plain circle. Each state and each transition is
    listed exactly once.

    Args:
        nfa: The NFA to render

    Returns:
        str: DOT source, e.g. for `dot -Tsvg`
    """
    lines = ['digraph nfa {', '\trankdir=LR;']

    for state in range(len(nfa)):
        if state == NFA.START:
            attributes = '[shape=circle, style=bold]'
        elif state == NFA.ACCEPT:
            attributes = '[shape=doublecircle]'
        else:
            attributes = '[shape=circle]'
        lines.append(f'\t{state} {attributes};')

    for source, transition in nfa.iter_transitions():
        lines.append(f'\t{source} -> {transition.target} [label={_edge_label(transition)}];')

    lines.append('}')
    return '\n'.join(lines)


def _transition_to_dict(transition: Transition) -> Dict:
    if isinstance(transition, CharTransition):
        return {'type': 'char', 'symbol': transition.char, 'target': transition.target}
    if isinstance(transition, AnyTransition):
        return {'type': 'any', 'target': transition.target}
    return {'type': 'epsilon', 'target': transition.target}


def nfa_to_dict(nfa: NFA) -> Dict:
    """
    Convert to a JSON-friendly dictionary.

    Returns:
        Dict with 'states', 'alphabet', 'transitions', 'startingState' and
        'acceptingStates'. Transition lists are keyed by the state index as a
        string so the result survives a JSON round trip unchanged.
    """
    alphabet = set()
    transitions: Dict[str, List[Dict]] = {}

    for state in range(len(nfa)):
        transitions[str(state)] = [_transition_to_dict(t) for t in nfa.transitions(state)]
        for transition in nfa.transitions(state):
            if isinstance(transition, CharTransition):
                alphabet.add(transition.char)

    return {
        'states': list(range(len(nfa))),
        'alphabet': sorted(alphabet),
        'transitions': transitions,
        'startingState': NFA.START,
        'acceptingStates': [NFA.ACCEPT]
    }


def nfa_statistics(nfa: NFA) -> Dict:
    """Collect simple counts about the NFA for summary display."""
    counts = {CharTransition: 0, AnyTransition: 0, EpsilonTransition: 0}
    alphabet = set()

    for _, transition in nfa.iter_transitions():
        counts[type(transition)] += 1
        if isinstance(transition, CharTransition):
            alphabet.add(transition.char)

    return {
        'states_count': len(nfa),
        'transitions_count': sum(counts.values()),
        'char_transitions_count': counts[CharTransition],
        'any_transitions_count': counts[AnyTransition],
        'epsilon_transitions_count': counts[EpsilonTransition],
        'alphabet_size': len(alphabet)
    }
