# odds

A smarter `cd`. You know where you want to go. Now your shell does too.

`odds` learns from the directories you visit. It ranks candidates by how
often and how recently you went there (frecency), by which directory you
usually go to next from where you are now (a Markov chain over your recent
path), by whether they are among your recently visited directories, and by
how well your typed words match the path.

When one directory from your history is clearly the best match, it jumps
straight there. Otherwise it searches breadth-first (up to five levels deep)
below the current directory, the enclosing git repository and your home
directory, and shows a numbered list of up to nine matches to pick from.

## Installation

```sh
pip install .
```

This installs the `odds` command.

## Shell setup

Add the shell function to your shell start-up file. Bash and zsh are
supported.

Bash (`~/.bashrc`):

```sh
eval "$(odds init bash)"
```

Zsh (`~/.zshrc`):

```sh
eval "$(odds init zsh)"
```

This defines a shell function `o` and a hook that records each directory you
change into, whether you use `o` or plain `cd`. The function calls
`odds query`, and the hook calls `odds register --pwd "$PWD"`; you do not
normally run these yourself.

## Usage

```sh
o proj          # jump to the best match for "proj"
o odds src      # several words, each matched against a part of the path
o -             # back to the previous directory, like cd -
o               # home, like cd
o ../some/dir   # an existing directory is entered directly
```

Matching ignores case. A word that equals a path part scores highest, then a
prefix, then a substring, then a fuzzy in-order match of its letters. Short
prefixes and substrings of long names count for less. With several words,
each is paired with a different part of the path, and words that match
nothing lower the score.

If no single candidate is clearly best, you are asked to choose on the
terminal:

```
Select a directory (1-3):
1) /home/user/Projects/odds
2) /home/user/Backup/odds
3) /home/user/odds-notes
Enter number:
```

Anything other than a number from the list selects nothing.

## Seeding from shell history

To give `odds` a head start, import the `cd` commands from your shell history:

```sh
odds seed
```

The history file is taken from `$HISTFILE`, or else `~/.zsh_history` or
`~/.bash_history`. Relative `cd` targets are followed from the previous one,
and only directories that still exist are recorded. Both visits and the
transitions between them are added.

## Data

Visits and transitions are kept in `~/.local/share/odds/history.json`. The
list of the ten most recently visited directories is kept in
`~/.local/share/odds/session.json` and starts afresh once it has not been
saved for twelve hours.

## Development

```sh
pip install -e ".[test]"
pytest
```