import json

from kg_frames.discover import iter_documents
from kg_frames.pipeline import process_documents, summarize
from kg_frames.run import main

from tests.helpers import arg, entity, event, part, sentence


def _write_doc(directory, basename, entities, events, sentences):
    directory.mkdir(parents=True, exist_ok=True)
    for name, frames in (('entities', entities), ('events', events), ('sentences', sentences)):
        (directory / f'{basename}.uaz.{name}.json').write_text(json.dumps(part(frames)), encoding='utf-8')


def _sample(directory, basename='PMC42'):
    _write_doc(
        directory, basename,
        entities=[entity('e1', 'RAS'), entity('e2', 'MEK'), entity('e3', 'p53'), entity('e4', 'MDM2')],
        events=[
            event('ev1', 'activation', [arg('controller', 'e1'), arg('controlled', 'e2')], sentence_ref='s1'),
            event('ev2', 'complex-assembly', [arg('theme', 'e3'), arg('theme', 'e4')], sentence_ref='s2'),
        ],
        sentences=[sentence('s1', 'RAS activates MEK.'), sentence('s2', 'p53 binds MDM2.')],
    )


def test_cli_writes_one_document_per_triple(tmp_path):
    _sample(tmp_path / 'in')
    out_dir = tmp_path / 'out'
    assert main([str(tmp_path / 'in'), '-o', str(out_dir), '--no-progress']) == 0
    doc = json.loads((out_dir / 'PMC42.json').read_text(encoding='utf-8'))
    assert doc['docId'] == 'PMC42'
    assert [e['predicate']['type'] for e in doc['events']] == ['activation', 'binds', 'binds']
    assert doc['events'][0]['sentence'] == 'RAS activates MEK.'


def test_cli_rejects_missing_directory(tmp_path):
    assert main([str(tmp_path / 'nope'), '--no-progress']) == 1


def test_cli_reports_unreadable_map_file(tmp_path):
    _sample(tmp_path)
    assert main([str(tmp_path), '-m', '--map-file', str(tmp_path / 'absent.tsv.gz'), '--no-progress']) == 1


def test_broken_document_is_skipped(tmp_path):
    _sample(tmp_path / 'in', 'PMC1')
    _sample(tmp_path / 'in', 'PMC2')
    (tmp_path / 'in' / 'PMC2.uaz.events.json').write_text('{not json', encoding='utf-8')
    docs = list(iter_documents(tmp_path / 'in'))
    results = process_documents(docs, tmp_path / 'out', progress=False)
    stats = summarize(results)
    assert stats['processed'] == 1
    assert stats['failed'] == 1
    assert stats['relations'] == 3
    assert (tmp_path / 'out' / 'PMC1.json').exists()
    assert not (tmp_path / 'out' / 'PMC2.json').exists()


def test_worker_pool_matches_sequential(tmp_path):
    for name in ('PMC1', 'PMC2', 'PMC3'):
        _sample(tmp_path / 'in', name)
    docs = list(iter_documents(tmp_path / 'in'))
    seq = process_documents(docs, tmp_path / 'seq', workers=1, progress=False)
    par = process_documents(docs, tmp_path / 'par', workers=2, progress=False)
    assert [r['doc_id'] for r in par] == [r['doc_id'] for r in seq]
    for name in ('PMC1', 'PMC2', 'PMC3'):
        assert (tmp_path / 'seq' / f'{name}.json').read_text(encoding='utf-8') == \
            (tmp_path / 'par' / f'{name}.json').read_text(encoding='utf-8')


def test_malformed_frame_field_does_not_stop_batch(tmp_path):
    _sample(tmp_path / 'in', 'PMC1')
    _write_doc(
        tmp_path / 'in', 'PMC2',
        entities=[entity('e1', 'RAS'), {**entity('e2', 'MEK'), 'xrefs': 1}],
        events=[event('ev1', 'activation', [arg('controller', 'e1'), arg('controlled', 'e2')]),
                {**event('ev2', 'activation', []), 'arguments': 3}],
        sentences=[],
    )
    docs = list(iter_documents(tmp_path / 'in'))
    results = process_documents(docs, tmp_path / 'out', progress=False)
    assert [r['doc_id'] for r in results] == ['PMC1', 'PMC2']
    assert summarize(results)['failed'] == 0
    doc = json.loads((tmp_path / 'out' / 'PMC2.json').read_text(encoding='utf-8'))
    assert len(doc['events']) == 1
    assert 'participant_b' not in doc['events'][0]
