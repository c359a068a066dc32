from os import isatty
from sys import stdin, stdout, stderr, exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession

from .util import CalcError, wrap_user_errors
from .brain import Brain
from .lexer import Lexer


logger = logging.getLogger(__name__)


class InteractiveInput:
    def __init__(self, prompt):
        self.prompt = prompt

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    history=None,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Debatable. Interferes with X11 selection.
                                    mouse_support=True,
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


@wrap_user_errors('Cannot convert {0}')
def _iconvert(number):
    '''
    Convert a number lexeme to the brain's operand type.
    '''
    return float(number.replace('_', ''))


class CLI:
    '''
    Command line interface to the calculator brain.
    '''

    DEFAULT_PROMPT = '> '

    def dumper(self):
        '''
        Dump all lexeme matches and what they resolve to.
        '''
        brain = Brain()
        lexer = Lexer()
        print('[groups]\t<repr(lexeme)>\t<token>')
        for line in self.args.expressions:
            for match in lexer.lex(line):
                groups = lexer.matchedgroups(match)
                if 'operator' in groups:
                    token = brain.lookup(groups['operator'])
                elif 'number' in groups:
                    token = _iconvert(groups['number'])
                else:
                    token = None
                print(*groups.keys(),
                      repr(match.group(0)),
                      token,
                      sep='\t')

    def feed(self, brain, groups):
        '''
        Push or run one lexeme on the brain.

        Return True if the stack may have changed.
        '''
        if 'number' in groups:
            brain.push_operand(_iconvert(groups['number']))
            return True
        elif 'operator' in groups:
            brain.perform_operation(groups['operator'])
            return True
        elif 'command' in groups:
            command = groups['command']
            if command == 'c':
                brain.clear()
                return True
            elif command == 'p':
                print(self.display(brain))
            elif command == 'f':
                print(brain.description)
            elif command == 'h':
                self.printhelp()
        return False

    @staticmethod
    def display(brain):
        '''
        Text for the value display; 0 when there's no result.
        '''
        result = brain.evaluate()
        if result is None:
            return '0'
        return str(result)

    @staticmethod
    def history(brain):
        '''
        Text for the history display; empty when the stack is.
        '''
        if not brain.stack:
            return ''
        return brain.description + ' ='

    def printhelp(self):
        '''
        Print all known operators, aliases, and commands.
        '''
        print('operators:', *(op.symbol for op in Brain.OPERATIONS),
              file=stderr)
        print('aliases:', *('{}={}'.format(alias, symbol)
                            for alias, symbol
                            in sorted(Lexer.ALIASES.items())),
              file=stderr)
        for command, what in Lexer.COMMANDS.items():
            print(command, what, sep='\t', file=stderr)

    def executor(self):
        '''
        Run the calculator.
        '''
        brain = Brain()
        lexer = Lexer()
        for line in self.args.expressions:
            changed = False
            try:
                for match in lexer.lex(line):
                    if lexer.isfeedable(match):
                        changed |= self.feed(brain,
                                             lexer.matchedgroups(match))
            # Abort entire rest of line, makes sense anyway
            except CalcError as e:
                logger.debug('line %r aborted', line, exc_info=True)
                print(e.args[0], file=stderr)
            if changed:
                history = self.history(brain)
                if history:
                    print(history, self.display(brain))
                else:
                    print(self.display(brain))

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        lexer = Lexer()
        print(lexer.LEXEME)

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT)
        else:
            return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='RPN calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='log every evaluation')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(level=logging.DEBUG if self.args.verbose
                            else logging.WARNING)
        if self.args.expressions is stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)
