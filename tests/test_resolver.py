from kg_frames.resolver import (
    args_by_role, first_arg_by_role, refs_by_prefix, resolve_complex_entities, resolve_entities,
    resolve_entity, resolve_event, resolve_sentence,
)

from tests.helpers import arg, complex_arg, entity, event, graph, sentence


def _graph():
    return graph(
        entities=[entity('e1', 'A'), entity('e2', 'B'), entity('e3', 'C')],
        events=[event('ev1', 'complex-assembly', [
            arg('theme', 'e1'), arg('site', 'e3'), arg('theme', 'missing'), arg('theme', 'e2'),
            arg('controlled', 'ev9', kind='event'),
        ], sentence_ref='s1')],
        sentences=[sentence('s1', 'A binds B.')],
    )


def test_args_by_role_keeps_declaration_order():
    ev = _graph().events['ev1']
    assert [a.ref for a in args_by_role(ev, 'theme')] == ['e1', 'missing', 'e2']
    assert first_arg_by_role(ev, 'site').ref == 'e3'
    assert first_arg_by_role(ev, 'destination') is None
    assert args_by_role(ev, 'destination') == []


def test_dangling_references_resolve_to_none():
    g = _graph()
    assert resolve_entity(g, 'missing') is None
    assert resolve_entity(g, None) is None
    assert resolve_event(g, 'ev9') is None
    assert resolve_sentence(g, 'nope') is None
    assert resolve_sentence(g, 's1') == 'A binds B.'


def test_resolve_entities_drops_unresolved_and_non_entity_args():
    g = _graph()
    ev = g.events['ev1']
    assert [e.text for e in resolve_entities(g, args_by_role(ev, 'theme'))] == ['A', 'B']
    assert resolve_entities(g, args_by_role(ev, 'controlled')) == []


def test_complex_argument_prefix_lookup():
    g = _graph()
    cpx = event('ev2', 'activation', [complex_arg('controller', {
        'theme1': 'e2', 'site': 'e3', 'theme2': 'missing', 'theme3': 'e1'})])
    ev = graph(events=[cpx]).events['ev2']
    controller = first_arg_by_role(ev, 'controller')
    assert refs_by_prefix(controller, 'theme') == ['e2', 'missing', 'e1']
    assert [e.text for e in resolve_complex_entities(g, controller, 'theme')] == ['B', 'A']
    assert refs_by_prefix(first_arg_by_role(g.events['ev1'], 'theme'), 'theme') == []
