# perfstream

`perfstream` holds building blocks for working with Linux `perf` profiles:

- `perfstream.datastream` reads the big-endian serialized values that make up
  a perf parser's output stream.
- `perfstream.parserjob` checks an input file, builds the parser's argument
  list and explains the parser's exit codes.
- `perfstream.recording` assembles `perf record` command lines and checks the
  paths and host settings a recording needs.

The package has no dependencies beyond the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Reading serialized values

`DataStreamReader(data, version)` reads values one after another from a byte
buffer:

```python
from perfstream.datastream import DataStreamReader, StreamError

reader = DataStreamReader(payload, version=17)
event_type = reader.read_int8()
pid = reader.read_uint32()
time = reader.read_uint64()
frames = reader.read_list(lambda r: r.read_int32())
done = reader.at_end()
```

- `read_int8`, `read_uint8`, `read_int32`, `read_uint32`, `read_int64`,
  `read_uint64` and `read_bool` read big-endian integers and flags.
- `read_float` reads a 4-byte float for stream versions below 12, and from
  version 12 on reads an 8-byte double and narrows it to single precision.
- `read_bytes` reads a 32-bit length followed by that many bytes; the length
  `0xFFFFFFFF` marks a null array and reads as `b""`.
- `read_string` reads a length-prefixed UTF-16 big-endian string; a null
  string reads as `""`.
- `read_list(read_item)` reads a 32-bit count and then calls `read_item` with
  the reader once per item.
- `position` is the number of bytes consumed; `at_end()` tells whether the
  buffer is used up.

Reading past the end of the buffer, or a string with an odd byte length,
raises `StreamError` (a `ValueError`).

## Preparing a parser run

```python
from perfstream.parserjob import check_input_file, parser_arguments, describe_exit_code

path = check_input_file("perf.data")          # raises InputFileError
args = parser_arguments(str(path), sysroot="/opt/sysroot", arch="x86_64")
# ["--input", "perf.data", "--max-frames", "1024",
#  "--sysroot", "/opt/sysroot", "--arch", "x86_64"]

message = describe_exit_code(3)
# "The hotspot-perfparser binary exited with code 3 (invalid perf data file)."
```

`check_input_file` raises `InputFileError` when the path does not exist, is not
a regular file or is not readable, and otherwise returns it as a `Path`.
`parser_arguments` leaves out every setting that is empty. `describe_exit_code`
returns `None` for exit code 0 and a message for every other code.

## Recording

`perfstream.recording` builds the arguments for `perf record`:

```python
from perfstream.recording import (
    application_record_options,
    off_cpu_profiling_options,
    record_command,
)

record_options = application_record_options("/usr/bin/true", [])
args = record_command("/tmp/perf.data", off_cpu_profiling_options(), record_options)
# ["record", "-o", "/tmp/perf.data", "--switch-events", "--event",
#  "sched:sched_switch", "/usr/bin/true"]
```

- `pid_record_options(perf_options, pids)` adds `--pid` with the pids joined
  by commas; an empty list of pids raises `RecordingError`.
- `system_record_options(perf_options)` adds `--all-cpus`.
- `application_record_options(exe_path, exe_options)` resolves the program
  with `resolve_executable` and puts its arguments after it.
- `resolve_executable(exe_path)` searches `PATH` when the name is not an
  existing path and returns the absolute path; it raises `RecordingError`
  when the program is missing, not a file or not executable.
- `check_output_folder(output_path)` raises `RecordingError` when the folder
  for the output file is missing, not a folder or not writable.
- `sudo_options(sudo_binary, active_window)` gives `--attach <window>` for
  `kdesudo` and `kdesu`, and `-t` as well for `kdesu`.
- `help_supports(help_text, option)` tells whether `perf record --help`
  output (text or bytes) mentions an option.
- `can_trace(path, tracing_root, paranoid_file)` tells whether a tracepoint
  folder is readable and the `perf_event_paranoid` level is `-1`.

## What this package does not do

`perfstream` does not run anything: it neither starts `perf` nor the stream
parser, and it does not ask for elevated privileges. It reads individual
values from a stream but does not decode whole events, and it does not build
timelines, call stacks or summaries from them. Those steps are left to the
code that uses it.