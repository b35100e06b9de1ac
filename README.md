# unifiedlogs

This package provides pure-Python parsers for several of the files that make up the macOS
Unified Log. It uses no Apple APIs and has no runtime dependencies, so it runs on any platform.
It can read files from a collected `.logarchive` directory or from a live macOS system.

## Installation

```
pip install unifiedlogs
```

To run the test suite:

```
pip install "unifiedlogs[test]"
pytest
```

## Modules

### `unifiedlogs.header`

- `parse_header(data)` decodes a tracev3 header chunk (tag `0x1000`).
  - It returns a tuple `(HeaderChunk, remaining_bytes)`.
  - The `HeaderChunk` holds the mach timebase, continuous time, timezone bias and DST flag, the build version, the hardware model, the boot UUID, the logd pid and exit status, and the timezone path.
- The text fields have trailing NUL bytes removed.
- A text field that is not valid UTF-8 is left empty, and a warning is logged.
- If `data` is shorter than the header, `ParseError` is raised.

### `unifiedlogs.timesync`

- `parse_timesync_data(data)` parses a whole `.timesync` file.
  - It returns a `dict` that maps a boot UUID to a `TimesyncBoot`.
  - Each `TimesyncBoot` holds a list of `Timesync` records.
  - Boots that share a UUID have their records joined in file order.
- `parse_timesync_boot(data)` and `parse_timesync(data)` each parse a single boot header or a single record. Each returns a tuple of the parsed object and the remaining bytes.
- A bad signature raises `ParseError`, and so does truncated data.
- `get_timestamp(timesync_data, boot_uuid, firehose_log_delta_time, firehose_preamble_time)` converts a mach continuous time into nanoseconds since the Unix epoch, as a `float`.
  - It anchors on the latest timesync record whose kernel time does not exceed the entry's time.
  - If the preamble time is zero, it anchors on the boot time instead.
  - It applies the Apple silicon timebase of 125/3.

### `unifiedlogs.sources`

- `SourceFile` is an abstract base class. It has a `source_path` property and a `read()` method that returns the file's bytes.
- `FileProvider` is an abstract base class. It declares four methods, each of which yields `SourceFile` objects:
  - `tracev3_files()`
  - `uuidtext_files()`
  - `dsc_files()`
  - `timesync_files()`

### `unifiedlogs.filesystem`

- `LogFileType.from_path(path)` classifies a path by its file name and its parent directory. The result is one of:
  - `TRACEV3`: a `*.tracev3` file inside `HighVolume`, `Special`, `Signpost` or `Persist`, or a file named `logdata.LiveData.tracev3`.
  - `UUIDTEXT`: a file with a 30 hex-character name inside a directory with a 2 hex-character name.
  - `DSC`: a file with a 32 hex-character name inside `dsc`.
  - `TIMESYNC`: a `*.timesync` file inside `timesync`.
  - `INVALID`: anything else, including AppleDouble `._*` files.
- `only_hex_chars(val)` checks whether a string contains only ASCII hex digits.
- `LocalFile(path)` is a `SourceFile` on local disk. It opens the file when it is created, so a file that cannot be read raises `OSError` at once.
- `LogarchiveProvider(path)` walks a logarchive directory.
- `LiveSystemProvider()` walks the standard locations on a live system:
  - `/private/var/db/diagnostics`
  - `/private/var/db/uuidtext`
  - `/private/var/db/uuidtext/dsc`
  - `/private/var/db/diagnostics/timesync`
- Both providers yield tracev3 and dsc files in order of file name. They skip files that cannot be opened.

### `unifiedlogs.printf`

This module renders one value for one printf conversion type. It provides:

- `format_alignment_left` and `format_alignment_right`, which pad with zeros.
- `format_alignment_left_space` and `format_alignment_right_space`, which pad with spaces.
- `format_left` and `format_right`, which render without a width.

Values arrive as decimal strings:

- `parse_int(message)` parses a signed 64-bit integer, or returns `0` if the string is not one.
- `parse_float(message)` decodes the raw IEEE-754 bit pattern carried in the string, or returns `0.0` if the string is not a signed 64-bit integer.

Hex and octal output is upper-case hex. With `#`, it carries a `0x` or `0o` prefix. `format_right` always prefixes octal with `0o`.

### `unifiedlogs.formatter`

- `FirehoseItemInfo` holds one message argument: `message_strings`, `item_type` and `item_size`.
- `parse_formatter(formatter, items, item_type, item_index)` applies one printf specification, such as `%+04d`, `%#4x`, `%.2@` or `%*s`, to `items[item_index]`. It handles:
  - the flags `-`, `+`, `#` and `0`;
  - a width;
  - a precision;
  - dynamic width and precision items (types `0x10` and `0x12`);
  - length modifiers;
  - `%c` applied to a number item.
- `%m` renders an errno value through `os.strerror`.
- If no conversion type can be found, `ParseError` is raised.

### `unifiedlogs.message`

- `format_firehose_log_message(format_string, items, message_re=MESSAGE_RE)` substitutes every argument into a complete format string.
  - `%%` becomes a literal `%`.
  - A specifier with no argument left becomes `<Missing message data>`.
  - A private item becomes `<private>`.
  - A specifier such as `%{public}` with no conversion type is kept as literal text.
- `parse_type_formatter` handles annotated specifiers such as `%{public}s`. Signpost metadata is appended in parentheses.
- `parse_signpost_format` extracts that signpost metadata.

### `unifiedlogs.errors`

- `ParseError` is a subclass of `ValueError`. It is raised for truncated or malformed binary data.

## Example

```python
from unifiedlogs.filesystem import LogarchiveProvider
from unifiedlogs.header import parse_header
from unifiedlogs.timesync import get_timestamp, parse_timesync_data

provider = LogarchiveProvider("system_logs.logarchive")

timesync = {}
for source in provider.timesync_files():
    for boot_uuid, boot in parse_timesync_data(source.read()).items():
        if boot_uuid in timesync:
            timesync[boot_uuid].timesync.extend(boot.timesync)
        else:
            timesync[boot_uuid] = boot

for source in provider.tracev3_files():
    header, _rest = parse_header(source.read())
    if header.chunk_tag == 0x1000:
        print(source.source_path, header.build_version_string, header.boot_uuid)
        print(get_timestamp(timesync, header.boot_uuid, header.continous_time, 1))
```

Formatting a message:

```python
from unifiedlogs.formatter import FirehoseItemInfo
from unifiedlogs.message import format_firehose_log_message

items = [FirehoseItemInfo(message_strings="796.100", item_type=34, item_size=0)]
print(format_firehose_log_message("opendirectoryd (build %{public}s) launched...", items))
# opendirectoryd (build 796.100) launched...
```

## What it does not do

The package reads headers, timesync files and format strings. It does not decode a whole tracev3 file into log entries:

- It does not walk chunks.
- It does not decode catalog, chunkset, firehose, statedump, simpledump or oversize data.
- It does not parse UUIDText or shared-cache (dsc) string files. The providers only locate these files.

It does not decode Apple object types in `%{...}` specifiers. It has no command-line tool.