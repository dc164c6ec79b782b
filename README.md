# simfs

An interactive, in-memory simulated file system. Each directory keeps its
entries in a binary search tree ordered by name. When a file's content is set
with `echo`, it is also written to a simulated disk of 1000 blocks of 32 bytes
each. Every file gets one contiguous run of blocks, found first-fit.

## Installation

```
pip install .
```

## Usage

Start the interactive shell:

```
simfs
```

The prompt shows the current path, for example `/~$ ` or `/docs~$ `. Commands:

| Command                     | Effect                                              |
|-----------------------------|-----------------------------------------------------|
| `ls`                        | list entries in name order, directories with `/`    |
| `mkdir <dir>`               | create a directory                                  |
| `cd <dir>` / `cd ..`        | change directory                                    |
| `touch <file>`              | create a file (type taken from its extension)       |
| `rm <file>`                 | remove a file and free its blocks (not a directory) |
| `echo <file> <content>`     | replace a file's content                            |
| `cat <file>`                | show a file's content                               |
| `cp <file> <copy>`          | copy a file in the current directory                |
| `mv <file> <newname>`       | rename a file                                       |
| `mv <file> /<dir>`          | move a file into a directory directly under `/`     |
| `stat <file>`               | show a file's size, type, permissions and times     |
| `chmod <perms> <file>`      | change permissions, e.g. `644`, `755`, `000`        |
| `su owner\|group\|other`    | switch the current user class                       |
| `statBlocos`                | show disk block statistics                          |
| `clear`                     | clear the screen                                    |
| `help`                      | list the commands                                   |
| `exit` / `quit`             | leave                                               |

The session also ends at end of input.

File types come from the extension: `.txt` is text, `.exe` is an executable
(created with permissions 755), `.csv` is data, and anything else is unknown.
Other new files get 644 and new directories 755.

Permissions are three decimal digits for owner, group and other. A digit of
4 or more allows reading; 2, 3, 6 or 7 allows writing; an odd digit allows
executing. `777` allows everything and `000` allows nothing. `rm` and `echo`
need write permission, `cat` needs read permission.

## Use from Python

```python
import io
from simfs.shell import Shell

shell = Shell()
shell.execute("mkdir docs")
shell.execute("touch notes.txt")
shell.execute("echo notes.txt hello world")
shell.execute("cat notes.txt")
print(shell.current_path())

shell.run(io.StringIO("ls\nstatBlocos\n"))
```

`Shell` writes to standard output unless another stream is passed as `out`.
`Shell.execute` raises `ExitRequested` on `exit` or `quit`; `Shell.run`
catches it and returns 0.

The building blocks can be used on their own: `simfs.tree.Node` for directory
entries (`add_child`, `find`, `remove_child`, `iter_children`) and
`simfs.disk.Disk` for the block allocator (`allocate`, `release`,
`write_file`, `find_contiguous`, `stats_report`). `Disk.allocate` raises
`DiskFullError` when no run of free blocks is long enough.

## Limitations

- Everything lives in memory; nothing is saved between sessions.
- There is no command to remove a directory.
- Commands act only on names in the current directory; paths such as
  `docs/notes.txt` are not resolved. `mv` can only move into directories
  directly under `/`.
- `cp` copies a file's content and metadata but does not allocate disk
  blocks for the copy.
- File names are cut to 99 characters and contents to 1023 characters.

## Running the tests

```
pip install .[test]
pytest
```