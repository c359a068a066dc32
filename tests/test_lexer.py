'''
Calculator lexer tests
'''

import regex

from calcbrain.util import CalcError
from calcbrain.lexer import Lexer

from pytest import raises


def lexemes(line):
    l = Lexer()
    return [l.matchedgroups(m) for m in l.lex(line) if l.isfeedable(m)]


def test_numbers():
    assert lexemes('12 1_200 1.5 .5 3.') == [{'number': '12'},
                                             {'number': '1_200'},
                                             {'number': '1.5'},
                                             {'number': '.5'},
                                             {'number': '3.'}]


def test_longest_match():
    assert lexemes('cos c') == [{'operator': 'cos'}, {'command': 'c'}]
    assert lexemes('pi p') == [{'operator': 'π'}, {'command': 'p'}]


def test_symbols_and_aliases():
    assert lexemes('3 4+') == [{'number': '3'},
                               {'number': '4'},
                               {'operator': '+'}]
    assert lexemes('* / - sqrt _') == [{'operator': '×'},
                                       {'operator': '÷'},
                                       {'operator': '−'},
                                       {'operator': '√'},
                                       {'operator': 'ᐩ/-'}]
    assert lexemes('π ÷ sin ᐩ/-') == [{'operator': 'π'},
                                      {'operator': '÷'},
                                      {'operator': 'sin'},
                                      {'operator': 'ᐩ/-'}]


def test_space_not_feedable():
    l = Lexer()
    matches = list(l.lex('1 \n'))
    assert [l.isfeedable(m) for m in matches] == [True, False]


def test_unknown_lexeme():
    l = Lexer()
    with raises(CalcError, match=regex.escape("Couldn't lex xyz")):
        list(l.lex('3 xyz'))
