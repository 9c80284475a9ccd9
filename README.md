# minxp

A small library with a standard-library flavoured API: Windows-style path
handling, environment access, files and directories, console output,
process exit and threads. It has no dependencies outside the Python
standard library.

## Installation

```
pip install minxp
```

To run the tests:

```
pip install "minxp[test]"
pytest
```

## Modules

### `minxp.path`

`Path` and `PathBuf` (an owned, changeable `Path`) interpret text with
Windows rules:

- both `\` and `/` separate parts; `MAIN_SEPARATOR` is `\`, and
  `is_separator(c)` tells whether a character is a separator;
- `C:\...` and `\\server\...` are absolute, `C:name` has a drive letter
  but is relative;
- a leading `\\?\` prefix is removed when a `Path` is built.

`Path` offers `iter()` (every part, empty ones and `.` included),
`components()` (empty parts and `.` skipped), `parent()`, `ancestors()`,
`file_name()`, `file_stem()`, `extension()`, `is_absolute()`,
`is_relative()`, `has_drive_letter()`, `has_root()`, `starts_with()`,
`ends_with()`, `strip_prefix()` (raises `StripPrefixError`), `join()`,
`with_file_name()`, `with_extension()`, `relative_to_root()`,
`remove_extraneous_suffixes()` and `encode_for_win32()` (NUL-terminated
UTF-16-LE bytes). It also has file system shortcuts: `metadata()`,
`symlink_metadata()`, `canonicalize()`, `read_dir()`, `exists()`,
`try_exists()`, `is_file()`, `is_dir()` and `is_symlink()`.

`PathBuf` adds `push()`, `pop()`, `set_file_name()`, `set_extension()`,
`truncate_extraneous_suffixes()`, `as_path()`, `into_os_string()` and
`clear()`.

```python
from minxp.path import Path

p = Path("C:\\Users\\Something.txt")
p.file_name()                 # 'Something.txt'
p.extension()                 # 'txt'
p.with_extension("jxl")       # PathBuf('C:\\Users\\Something.jxl')
Path("C:\\Users").join("me")  # PathBuf('C:\\Users\\me')
Path("C:\\Users").parent()    # Path('C:\\')
```

### `minxp.osstr`

`OsString`, a mutable string with `push()`, `truncate()`, `clear()`,
ASCII case helpers (`to_ascii_lowercase()`, `make_ascii_uppercase()`,
`eq_ignore_ascii_case()`, ...) and UTF-8 conversions
(`from_encoded_bytes()`, `as_encoded_bytes()`). Text pushed onto it is cut
at its first NUL character.

### `minxp.env`

- `current_dir()`, `set_current_dir()`, `current_exe()`, `home_dir()`
  (from `USERPROFILE`, else the user's home) and `temp_dir()`.
- `var()` / `var_os()` raise `VarError` when a variable is missing or
  empty; `set_var()` and `remove_var()` reject keys that are empty or
  contain `=` or NUL with `ValueError`; `vars()` and `vars_os()` yield a
  snapshot of the environment.
- `split_paths()` splits a `;`-separated list, where semicolons inside
  double quotes do not split; `join_paths()` joins with `;`, quoting paths
  that contain a semicolon, and raises `JoinPathsError` for a path with a
  double quote.
- `args()` and `args_os()` yield the command line, program name first.
- Constants: `ARCH`, `OS`, `FAMILY`, `DLL_PREFIX`, `DLL_SUFFIX`,
  `DLL_EXTENSION`, `EXE_SUFFIX`, `EXE_EXTENSION`.

### `minxp.io`

The `Error` exception (with a `reason`), `SeekFrom` (`start`, `end`,
`current`) and the `Read`, `Write` and `Seek` interfaces with their
default `read_to_end`, `read_exact`, `write_all`, `write_fmt`,
`seek_position` and `seek_relative`.

### `minxp.fs.metadata`, `minxp.fs.file`, `minxp.fs.directory`

- `metadata()`, `symlink_metadata()`, `exists()`, `canonicalize()` and
  `absolute()`; `Metadata` reports `file_type()`, `is_dir()`, `is_file()`,
  `is_symlink()`, `len()`, `permissions()` and `modified()`, `accessed()`,
  `created()` as UTC `datetime` values.
- `File` (`open`, `create`, `create_new`, `options`, usable with `with`)
  and the `OpenOptions` builder; `create`, `create_new` and `truncate`
  need write or append access. Whole-file helpers: `read()`, `write()`,
  `read_to_string()`, `copy()` and `remove_file()`.
- `create_dir()`, `create_dir_all()`, `read_dir()` (yields `DirEntry`
  objects with `path()`, `file_name()` and `metadata()`), `remove_dir()`
  and `remove_dir_all()`.

```python
from minxp.fs.file import read_to_string, write

write("notes.txt", "hello")
read_to_string("notes.txt")  # 'hello'
```

### `minxp.stdio`

`stdout()` and `stderr()` return handles whose writes never raise;
`lock()` gives a guard to hold a stream in a `with` block. `print`,
`println`, `eprint` and `eprintln` write text to them.

### `minxp.process`

`exit(code)` flushes the standard streams and ends the process at once;
`abort()` ends it at once with exit code 197.

### `minxp.thread`

`spawn()` and `Builder` (`name()`, `stack_size()`, `spawn()`) return a
`JoinHandle` whose `join()` returns the function's result or re-raises
its exception. Also `current()`, `park()`, `park_timeout()`,
`Thread.unpark()`, `sleep()`, `yield_now()` and
`available_parallelism()`. Durations are seconds or `timedelta` values.

```python
from minxp.thread import spawn

handle = spawn(lambda: 6 * 7)
handle.join()  # 42
```

Failures in file, directory, environment and thread start-up operations
are raised as `minxp.io.Error`.

## What it does not do

- There is no command-line tool; this is a library only.
- Windows path rules apply to `Path` methods. The file system functions
  hand path text to the host operating system as it is, so on other
  systems backslashes are not treated as separators there.
- Hard links, reading link targets and changing permissions are not
  offered.