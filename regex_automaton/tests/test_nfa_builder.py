from django.test import TestCase
from regex_automaton.nfa_builder import (
    NFA, NFABuilder, CharTransition, AnyTransition, EpsilonTransition, build, step
)
from regex_automaton.pattern_parser import parse
from regex_automaton.regex_ast import (
    ConcatNode, LiteralNode, AlternateNode, RepeatNode, EmptyNode
)


class TestNFA(TestCase):

    def test_new_nfa_has_start_and_accept(self):
        nfa = NFA()
        self.assertEqual(len(nfa), 2)
        self.assertEqual(NFA.START, 0)
        self.assertEqual(NFA.ACCEPT, 1)
        self.assertEqual(nfa.transitions(NFA.START), [])
        self.assertEqual(nfa.transitions(NFA.ACCEPT), [])

    def test_add_state_appends(self):
        nfa = NFA()
        self.assertEqual(nfa.add_state(), 2)
        self.assertEqual(nfa.add_state(), 3)
        self.assertEqual(len(nfa), 4)

    def test_add_transition_keeps_order(self):
        nfa = NFA()
        nfa.add_transition(0, CharTransition('a', 1))
        nfa.add_transition(0, AnyTransition(0))
        nfa.add_transition(0, EpsilonTransition(1))
        self.assertEqual(
            nfa.transitions(0),
            [CharTransition('a', 1), AnyTransition(0), EpsilonTransition(1)]
        )
        self.assertEqual(list(nfa.iter_transitions()), [
            (0, CharTransition('a', 1)), (0, AnyTransition(0)), (0, EpsilonTransition(1))
        ])


class TestBuild(TestCase):

    def test_single_literal(self):
        """A literal becomes exactly one character transition from start to accept"""
        nfa = build(parse('a'))
        self.assertEqual(len(nfa), 2)
        self.assertEqual(nfa.transitions(0), [CharTransition('a', 1)])
        self.assertEqual(nfa.transitions(1), [])

    def test_wildcard(self):
        nfa = build(parse('.'))
        self.assertEqual(nfa.transitions(0), [AnyTransition(1)])

    def test_empty(self):
        nfa = build(parse(''))
        self.assertEqual(len(nfa), 2)
        self.assertEqual(nfa.transitions(0), [EpsilonTransition(1)])

    def test_concatenation_shares_midpoint(self):
        """Concatenation adds one state and no epsilon transition"""
        nfa = build(parse('ab'))
        self.assertEqual(len(nfa), 3)
        self.assertEqual(nfa.transitions(0), [CharTransition('a', 2)])
        self.assertEqual(nfa.transitions(2), [CharTransition('b', 1)])
        self.assertEqual(nfa.transitions(1), [])

    def test_concatenation_state_numbering(self):
        """Outer midpoints are allocated before inner ones"""
        nfa = build(parse('abc'))
        # ((a)(b))(c): outer mid 2, inner mid 3
        self.assertEqual(len(nfa), 4)
        self.assertEqual(nfa.transitions(0), [CharTransition('a', 3)])
        self.assertEqual(nfa.transitions(3), [CharTransition('b', 2)])
        self.assertEqual(nfa.transitions(2), [CharTransition('c', 1)])

    def test_alternation_is_parallel(self):
        """Both alternatives run between the same pair of states"""
        nfa = build(parse('a|b'))
        self.assertEqual(len(nfa), 2)
        self.assertEqual(nfa.transitions(0), [CharTransition('a', 1), CharTransition('b', 1)])

    def test_character_class(self):
        nfa = build(parse('[abc]'))
        self.assertEqual(
            nfa.transitions(0),
            [CharTransition('a', 1), CharTransition('b', 1), CharTransition('c', 1)]
        )

    def test_repeat_loops_on_start(self):
        nfa = build(parse('a*'))
        self.assertEqual(len(nfa), 2)
        self.assertEqual(nfa.transitions(0), [CharTransition('a', 0), EpsilonTransition(1)])

    def test_repeat_of_sequence(self):
        nfa = build(parse('ab*'))
        self.assertEqual(len(nfa), 3)
        self.assertEqual(nfa.transitions(0), [CharTransition('a', 2), EpsilonTransition(1)])
        self.assertEqual(nfa.transitions(2), [CharTransition('b', 0)])

    def test_repeat_before_literal(self):
        nfa = build(parse('a*b'))
        self.assertEqual(nfa.transitions(0), [CharTransition('a', 0), EpsilonTransition(2)])
        self.assertEqual(nfa.transitions(2), [CharTransition('b', 1)])

    def test_nested_repeat_adds_single_bypass(self):
        """A repeat wired onto a single state adds no epsilon transition"""
        nfa = build(parse('a**'))
        self.assertEqual(nfa.transitions(0), [CharTransition('a', 0), EpsilonTransition(1)])

    def test_repeat_of_empty(self):
        nfa = build(RepeatNode(EmptyNode()))
        self.assertEqual(nfa.transitions(0), [EpsilonTransition(1)])

    def test_identical_subtrees_wired_independently(self):
        nfa = build(AlternateNode(
            ConcatNode(LiteralNode('a'), LiteralNode('b')),
            ConcatNode(LiteralNode('a'), LiteralNode('b'))
        ))
        self.assertEqual(len(nfa), 4)
        self.assertEqual(nfa.transitions(0), [CharTransition('a', 2), CharTransition('a', 3)])

    def test_accept_state_has_no_outgoing_transitions(self):
        for pattern in ['a', 'a*', 'ab*', '(a|b)*c', '[ab]*', '{a}|.', 'x(y*)z', '', '*', '((a*)*)*']:
            nfa = build(parse(pattern))
            self.assertEqual(nfa.transitions(NFA.ACCEPT), [], pattern)

    def test_long_pattern(self):
        """Deep ASTs are wired without recursion"""
        nfa = build(parse('a' * 5000))
        self.assertEqual(len(nfa), 5001)
        self.assertEqual(sum(len(t) for t in nfa.states), 5000)

    def test_builds_are_independent(self):
        builder = NFABuilder()
        first = builder.build(parse('ab'))
        second = builder.build(parse('a'))
        self.assertEqual(len(first), 3)
        self.assertEqual(len(second), 2)

    def test_rejects_non_nodes(self):
        with self.assertRaises(TypeError):
            build('a')
        with self.assertRaises(TypeError):
            build(ConcatNode(LiteralNode('a'), 'b'))


class TestStep(TestCase):

    def test_char_transition(self):
        nfa = build(parse('a'))
        self.assertEqual(step(nfa, {0}, 'a'), {1})
        self.assertEqual(step(nfa, {0}, 'b'), set())

    def test_any_transition(self):
        nfa = build(parse('.'))
        self.assertEqual(step(nfa, {0}, 'a'), {1})
        self.assertEqual(step(nfa, {0}, '\n'), {1})

    def test_empty_active_set(self):
        nfa = build(parse('a|b'))
        self.assertEqual(step(nfa, set(), 'a'), set())

    def test_alternation(self):
        nfa = build(parse('a|b'))
        self.assertEqual(step(nfa, {0}, 'a'), {1})
        self.assertEqual(step(nfa, {0}, 'b'), {1})
        self.assertEqual(step(nfa, {0}, 'c'), set())

    def test_repeat_self_loop(self):
        """Stepping a repeat keeps the start state active"""
        nfa = build(parse('a*'))
        result = step(nfa, {0}, 'a')
        self.assertIn(0, result)
        self.assertEqual(result, {0, 1})

        active = {0}
        for _ in range(5):
            active = step(nfa, active, 'a')
            self.assertIn(0, active)

    def test_epsilon_contributes_source_and_target(self):
        """Epsilon transitions are relaxed regardless of the input character"""
        nfa = build(parse('a*'))
        self.assertEqual(step(nfa, {0}, 'z'), {0, 1})

    def test_epsilon_not_followed_transitively(self):
        nfa = NFA()
        middle = nfa.add_state()
        nfa.add_transition(0, EpsilonTransition(middle))
        nfa.add_transition(middle, EpsilonTransition(1))
        self.assertEqual(step(nfa, {0}, 'x'), {0, middle})

    def test_accepts_any_iterable(self):
        nfa = build(parse('ab'))
        self.assertEqual(nfa.step([0, 0], 'a'), {2})
        self.assertEqual(nfa.step(frozenset({2}), 'b'), {1})

    def test_function_matches_method(self):
        nfa = build(parse('(a|b)*c'))
        for char in 'abcx':
            self.assertEqual(step(nfa, {0, 2}, char), nfa.step({0, 2}, char))
