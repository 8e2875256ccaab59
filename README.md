# mshell

The front end of a small POSIX-style shell, written in pure Python. It has no
runtime dependencies.

## What it provides

- **Lexing**
  - `mshell.lexer.tokenize(text)` splits a command line into a list of `Token`s. The tokens are words, `|`, `<`, `>`, `>>`, `<<`, `&&`, `||`, `;`, `&`, `(` and `)`.
  - Inside a word, quoted sections are kept wrapped in internal marker characters. These are `SINGLE_QUOTE_MARK` and `DOUBLE_QUOTE_MARK`, so later stages can tell which parts were quoted.
  - A `$'...'` or `$"..."` section is kept as its bare contents.
  - An unterminated quote is dropped from the word.
- **Syntax checks**
  - `mshell.syntax.validate_syntax(tokens)` raises `ShellSyntaxError` at the first problem, for input such as `| ls`, `ls |`, `a && || b` or `ls >`.
  - The error's message reads ``syntax error near unexpected token `X'``. Its `token` attribute holds the offending token, or `newline`, and its `status` is 2.
- **Parsing**
  - `mshell.parser.parse(tokens, directory=None)` builds a tree of `Node`s. Node types are given by `NodeType`: commands, pipelines, redirections, `&&`, `||`, `;`, `&` and parenthesised subshells.
  - It returns `None` for an empty token list. It raises `ParseError` when the tokens do not form a complete command.
  - A redirection target with `*` is matched against `directory`. If it matches more than one entry, the result is an "ambiguous redirect" `ParseError`.
- **Expansion**
  - `mshell.expand.expand_variables(text, shell)` expands `$NAME`, `$?` and `$$` outside single-quoted parts.
  - `mshell.expand` also has helpers for runs of backslashes before `$` (`handle_backslash`, `process_backslashes`) and for `$`-quoted sections (`handle_dollar_quote`).
  - `mshell.arguments.expand_tilde(word, shell)` replaces a leading `~` or `~/` with `HOME`.
  - `mshell.wildcard.expand_wildcard(pattern, directory=None)` matches `*` patterns against directory entries:
    - Hidden entries only match patterns that start with a dot.
    - Results are sorted by byte value.
    - It returns `None` when nothing matches.
  - `mshell.arguments.expand_args(args, shell, directory=None)` runs tilde, variable and wildcard expansion on an argument list. It then drops empty arguments and strips the quote markers.
- **Environment**
  - `mshell.environment.Environment` is an ordered variable table. It is built from `KEY=VALUE` strings, and `OLDPWD` is always present, possibly without a value.
  - `ShellState` pairs an `Environment` with the last exit status.
- **Built-in helpers**
  - `mshell.commands` has the argument handling behind `export` (`process_export_arg`, `print_export_env`), `unset` (`process_unset_arg`) and `echo -n` (`is_valid_n_flag`).
  - `mshell.paths.find_command_path` resolves a command, searching `PATH` when it has no `/`. `check_file_access` returns the exit status `0`, `126` or `127` for running it.
- **Messages**
  - `mshell.diagnostics` has `is_valid_identifier`.
  - It also has the error printers (`print_error`, `handle_directory_error`, `handle_permission_error`, `handle_cd_error`). They write `minishell: ...` messages to standard error.

## Example

```python
from mshell.lexer import tokenize
from mshell.syntax import validate_syntax
from mshell.parser import parse

tokens = tokenize("cat < in.txt | grep foo && echo done")
validate_syntax(tokens)
tree = parse(tokens)
print(tree.type)        # NodeType.AND
print(tree.left.type)   # NodeType.PIPE
```

```python
from mshell.environment import Environment, ShellState
from mshell.arguments import expand_args
from mshell.lexer import tokenize

shell = ShellState(Environment(["HOME=/home/user", "NAME=world"]))
words = [t.value for t in tokenize("echo ~/x \"hi $NAME\" '$NAME'")]
print(expand_args(words, shell))  # ['echo', '/home/user/x', 'hi world', '$NAME']
```

## What it does not do

`mshell` reads, checks, parses and expands command lines. It does not run them:

- It has no interactive prompt or command to start.
- It does not execute commands, pipelines or subshells.
- It does not open redirection files or read here-documents.
- It does not implement the builtins themselves. Only the argument handling for `export`, `unset` and `echo -n` listed above is included.

## Installation

```
pip install .
```

## Running the tests

```
pip install .[test]
pytest
```