import json

import pytest

from karel.__main__ import main
from conftest import EXAMPLES


def test_cli_runs_program_against_world(capsys):
    main([
        '--world', str(EXAMPLES / 'program_4.world.json'),
        str(EXAMPLES / 'program_4.kl'),
    ])
    out = capsys.readouterr().out.strip()
    assert out == '. . . > .'


def test_cli_concatenates_sources_in_order(capsys):
    main([str(EXAMPLES / 'program_3_lib.kl'), str(EXAMPLES / 'program_3.kl')])
    lines = capsys.readouterr().out.strip().split('\n')
    assert len(lines) == 10
    assert lines[-4] == '. . . ^ . . . . . .'


def test_cli_reports_runtime_errors(tmp_path, capsys):
    program = tmp_path / 'broken.kl'
    program.write_text('def main\ncall nowhere\nenddef\n', encoding='utf-8')
    with pytest.raises(SystemExit) as excinfo:
        main([str(program)])
    assert excinfo.value.code == 1
    assert 'Runtime error: MethodNotDefined: nowhere' in capsys.readouterr().err


def test_cli_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / 'missing.kl')])
    assert excinfo.value.code == 1
    assert 'not found' in capsys.readouterr().err


def test_cli_check(capsys):
    main(['--check', str(EXAMPLES / 'program_2.kl')])
    assert capsys.readouterr().out.strip() == 'ok'


def test_cli_check_reports_structure_errors(tmp_path, capsys):
    program = tmp_path / 'bad.kl'
    program.write_text('def main\nrepeat 2\nmove\nendif\nenddef\n', encoding='utf-8')
    with pytest.raises(SystemExit):
        main(['--check', str(program)])
    assert 'WrongBlockEnd: endif' in capsys.readouterr().err


def test_cli_emit_outline(tmp_path, capsys):
    program = tmp_path / 'square.kl'
    program.write_text((EXAMPLES / 'program_1.kl').read_text(encoding='utf-8'), encoding='utf-8')
    main(['--emit-outline', str(program)])
    out_path = capsys.readouterr().out.strip()
    assert out_path == str(tmp_path / 'square.kl.outline.json')
    with open(out_path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    main_proc = data['procedures'][0]
    assert main_proc['name'] == 'main'
    assert main_proc['body'][0]['kind'] == 'repeat'
    assert main_proc['body'][0]['argument'] == '4'
