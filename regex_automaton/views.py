import json
import logging

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from .pattern_parser import parse
from .nfa_builder import build
from .nfa_export import to_dot, nfa_to_dict, nfa_statistics
from .nfa_simulation import epsilon_closure, validate_active_states

logger = logging.getLogger(__name__)


def _read_json_object(request) -> dict:
    data = json.loads(request.body)
    if not isinstance(data, dict):
        raise ValueError('Request body must be a JSON object')
    return data


def _pattern_error(pattern):
    """Return an error response for a missing or non-string pattern, or None."""
    if pattern is None:
        return JsonResponse({'error': 'Missing pattern parameter'}, status=400)
    if not isinstance(pattern, str):
        return JsonResponse({'error': 'pattern must be a string'}, status=400)
    return None


@csrf_exempt
@require_POST
def compile_regex(request):
    """
    Django view to handle **pattern → NFA** compilation requests.

    Expects a POST request with a JSON body containing:
    - pattern: The pattern to compile.

    Returns a JSON response with the parsed AST, the generated NFA, its DOT
    rendering and some statistics for summary display. Every pattern
    compiles; malformed ones simply produce a different AST.
    """
    try:
        data = _read_json_object(request)
        pattern = data.get('pattern')

        error = _pattern_error(pattern)
        if error:
            return error

        ast = parse(pattern)
        nfa = build(ast)

        return JsonResponse({
            'success': True,
            'pattern': pattern,
            'ast': ast.to_string(),
            'ast_tree': ast.to_table(),
            'nfa': nfa_to_dict(nfa),
            'statistics': nfa_statistics(nfa),
            'dot': to_dot(nfa),
            'message': 'Pattern compiled to NFA successfully'
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("Unexpected error compiling pattern")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def nfa_step(request):
    """
    Django view to move an active state set of a compiled pattern along one character.

    Expects a POST request with a JSON body containing:
    - pattern: The pattern to compile
    - active: List of active state indices
    - char: The single input character
    - closure (optional boolean): When true, the active set is epsilon-closed before
      the step and the result is epsilon-closed after it

    Returns a JSON response with the sorted list of next states.
    """
    try:
        data = _read_json_object(request)
        pattern = data.get('pattern')
        active = data.get('active')
        char = data.get('char')
        use_closure = data.get('closure', False)

        error = _pattern_error(pattern)
        if error:
            return error

        if active is None:
            return JsonResponse({'error': 'Missing active states'}, status=400)

        if not isinstance(char, str) or len(char) != 1:
            return JsonResponse({'error': 'char must be a single character'}, status=400)

        if not isinstance(use_closure, bool):
            return JsonResponse({'error': 'closure must be a boolean'}, status=400)

        nfa = build(parse(pattern))

        validation = validate_active_states(nfa, active)
        if not validation['valid']:
            return JsonResponse({'error': validation['error']}, status=400)

        current = set(active)
        if use_closure:
            current = epsilon_closure(nfa, current)

        next_states = nfa.step(current, char)
        if use_closure:
            next_states = epsilon_closure(nfa, next_states)

        return JsonResponse({
            'active': sorted(current),
            'char': char,
            'next_states': sorted(next_states),
            'closure': use_closure
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("Unexpected error stepping NFA")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def compute_epsilon_closure(request):
    """
    Django view to compute the epsilon closure of a set of states.

    Expects a POST request with a JSON body containing:
    - pattern: The pattern to compile
    - states: List of state indices

    Returns a JSON response with the sorted closure.
    """
    try:
        data = _read_json_object(request)
        pattern = data.get('pattern')
        states = data.get('states')

        error = _pattern_error(pattern)
        if error:
            return error

        if states is None:
            return JsonResponse({'error': 'Missing states parameter'}, status=400)

        nfa = build(parse(pattern))

        validation = validate_active_states(nfa, states)
        if not validation['valid']:
            return JsonResponse({'error': validation['error']}, status=400)

        return JsonResponse({
            'states': sorted(set(states)),
            'closure': sorted(epsilon_closure(nfa, states))
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception("Unexpected error computing epsilon closure")
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)
