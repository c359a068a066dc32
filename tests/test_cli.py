'''
Calculator command line tests
'''

from calcbrain.cli import CLI


def run(capsys, *args):
    CLI().run(args=list(args))
    return capsys.readouterr().out.splitlines()


def test_expression(capsys):
    assert run(capsys, '-e', '3 4 +') == ['3.0 + 4.0 = 7.0']


def test_aliases(capsys):
    assert run(capsys, '-e', '5 3 -', '6 3 /') == [
        '5.0 − 3.0 = -2.0',
        '5.0 − 3.0, 6.0 ÷ 3.0 = 0.5',
    ]


def test_clear(capsys):
    assert run(capsys, '-e', '3 4 + c') == ['0']


def test_missing_operands(capsys):
    assert run(capsys, '-e', '+') == ['? + ? = 0']


def test_commands(capsys):
    assert run(capsys, '-e', '3 4 + f p') == [
        '3.0 + 4.0',
        '7.0',
        '3.0 + 4.0 = 7.0',
    ]


def test_commands_alone_print_nothing_else(capsys):
    assert run(capsys, '-e', '2', 'p') == ['2.0 = 2.0', '2.0']


def test_bad_input_aborts_line(capsys):
    assert run(capsys, '-e', '3 xyz 4', '5 +') == [
        '3.0 = 3.0',
        '3.0 + 5.0 = 8.0',
    ]


def test_dump(capsys):
    assert run(capsys, '-D', '-e', '3 pi') == [
        '[groups]\t<repr(lexeme)>\t<token>',
        "number\t'3'\t3.0",
        "space\t' '\tNone",
        "operator\t'pi'\tπ",
    ]


def test_raw_grammar(capsys):
    out = run(capsys, '-G', '-e')
    assert any('(?<number>' in line for line in out)
