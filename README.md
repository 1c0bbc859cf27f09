# taskmgr

A small command-line task manager. Tasks are kept in `tasks.json` in the
current directory and can carry a priority, a due date and tags. The file
is read and rewritten on every operation.

## Installation

```
pip install .
```

## Usage

```
taskmgr add "Fix bug" --priority=high --due=2024-01-15 --tags=work,urgent
taskmgr add "Review PR" --priority=medium --due=tomorrow --tags=work,code-review
taskmgr add "Buy groceries" --tags=personal,shopping

taskmgr list
taskmgr list --priority=high --table
taskmgr list --tag=work
taskmgr list --overdue --no-color
taskmgr list --due-today
taskmgr list --due-within=7days --minimal

taskmgr done 0
taskmgr undodone 0
taskmgr remove 0
taskmgr tag 0 urgent
taskmgr untag 0 urgent
taskmgr tags
taskmgr stats
taskmgr find "Fix bug"
taskmgr findbydesc "some description"
taskmgr bulkadd "first,second,third"
taskmgr countdone
taskmgr markall
```

Running `taskmgr` with no command, or with an unknown one, prints the full
list of commands and exits with status 1. Commands that fail print an error
message and also exit with status 1.

`find` and `findbydesc` match the title or description exactly.
`taskmgr error` only writes a test error message to the log.

### Priorities

`low` (`l`), `medium` (`med`, `m`), `high` (`h`) and `critical` (`crit`, `c`),
in any letter case. Tasks created with `add` default to `medium`; tasks
created with `bulkadd` get `low`.

### Due dates

`YYYY-MM-DD`, `MM/DD/YYYY`, `today`, `tomorrow` or `next week`. Dates
written out in full are taken as midnight UTC; the relative forms are
measured from the current local time.

### List filters

Only one filter applies, checked in this order: `--priority`, `--tag`,
`--overdue`, `--due-today`, `--due-within=N` (also `Nday` or `Ndays`).
Tags are compared without regard to case.

### List options

| Option           | Effect                                                       |
|------------------|--------------------------------------------------------------|
| `--table`        | table layout                                                 |
| `--no-color`     | no ANSI colours                                              |
| `--no-icons`     | plain `[x]` / `[ ]` markers instead of emoji                 |
| `--minimal`      | plain markers and titles, without priority, tags or due date |

Colours are also turned off when `NO_COLOR` is set, when `TERM` is empty or
`dumb`, or when `CI` is set without `COLORTERM`. `stats` accepts
`--no-color` as well.

## Library use

```python
from taskmgr.store import FileStore
from taskmgr.tasks import Task, TaskManager, Priority

manager = TaskManager(FileStore("tasks.json"))
manager.add(Task(title="Write report", priority=Priority.HIGH, tags=["work"]))
manager.mark_done("0")
print(manager.count_done())
```

The `TaskManager` methods that take an index take it as text, as given on
the command line. A bad index, priority or due date raises
`taskmgr.tasks.TaskError`; `FileStore.update` and `FileStore.remove` raise
`IndexError` for an index out of range.

Output formatting lives in `taskmgr.formatter` (`TaskFormatter`,
`DisplayOptions`) and `taskmgr.progress` (`ProgressFormatter`,
`ProgressStats`); colours in `taskmgr.colors`.

## Tests

```
pip install .[test]
pytest
```