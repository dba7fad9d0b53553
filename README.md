# geminiclient

Building blocks for a Python client of the openGemini time-series
database:

- **Columnar records** (`geminiclient.field`, `geminiclient.column`,
  `geminiclient.record`): describe fields, fill columns with values and
  nulls, validate a record and serialise it into a binary record format.
- **Sorting by time** (`geminiclient.sort`): reorder a record's rows by
  timestamp, merging rows that share a timestamp.
- **Binary encoding helpers** (`geminiclient.encoding`): big-endian,
  length-prefixed and zig-zag encodings used by the record format.
- **Decompression pools** (`geminiclient.pool`, `geminiclient.compression`):
  a bounded object cache and pooled gzip and zstd readers for response bodies.
- **Client configuration** (`geminiclient.config`): addresses,
  authentication, batching, retention-policy settings and validation.

## Installation

```
pip install geminiclient
```

Python 3.10 or newer is required. The only runtime dependency is
`zstandard`.

## Fields and columns

`FieldType` lists the column types (`INT`, `UINT`, `FLOAT`, `STRING`,
`BOOLEAN`, `TAG`, ...). A `Field` pairs a name with a type; `Schemas` is a
list of fields whose `str()` prints one `name + type name` per line.

A `ColVal` holds one column. Values are appended with `append_integer(s)`,
`append_float(s)`, `append_boolean(s)` and `append_string`; nulls with
`append_null` / `append_nulls`. Read them back with `integer_values()`,
`float_values()`, `boolean_values()` and `string_values()` (non-null values
only), and test a row with `is_nil(i)`.

## Building a record

```python
from geminiclient.field import Field, FieldType
from geminiclient.record import Record, check_record

schema = [
    Field(name="humidity", type=FieldType.INT),
    Field(name="temperature", type=FieldType.FLOAT),
    Field(name="time", type=FieldType.INT),
]
rec = Record(schema)
rec.column(0).append_integer(87)
rec.column(1).append_float(25.5)
rec.append_time(1_700_000_000_000_000_000)

check_record(rec)          # raises ValueError on a malformed record
payload = rec.marshal(bytearray())
```

The time column is always the last one. `check_record` requires at least
two fields with `time` last, no nulls in the time column, no repeated
adjacent field names, equal column lengths and value data of the right
size; when field names are out of order it sorts the columns by name,
keeping `time` last.

`row_nums()` gives the number of rows and `times()` the timestamps.

## Sorting rows by time

```python
from geminiclient.sort import ColumnSortHelper

sorted_rec = ColumnSortHelper().sort(rec)
print(sorted_rec.times())
```

Rows are ordered by timestamp (a stable sort). Rows that share a timestamp
are merged into one, with later non-null values replacing earlier ones.
The returned record may be a different object from the one passed in.

## Decompressing response bodies

```python
from geminiclient.compression import get_gzip_reader, put_gzip_reader

reader = get_gzip_reader(compressed_body)
data = reader.read()
put_gzip_reader(reader)
```

`get_zstd_decoder` and `put_zstd_decoder` work the same way for zstd; a
zstd decoder also offers `decode_all(data)` for a whole payload. Invalid
input raises `ValueError`. Readers come from a `CachePool`, which keeps at
most a fixed number of returned objects and creates new ones when empty.

## Configuration

```python
from geminiclient.config import Address, AuthConfig, AuthType, Config, validate_config

config = Config(
    addresses=[Address(host="127.0.0.1", port=8086)],
    auth_config=AuthConfig(auth_type=AuthType.TOKEN, token="token"),
)
validate_config(config)
```

`validate_config` raises `ConfigError` (a `ValueError`) when there is no
address, when token or password authentication lacks its credentials, or
when a batch configuration has a non-positive interval or size. It fills in
a 30 s timeout, a 10 s connect timeout and a default logger where none are
set.

`build_endpoints(addresses, tls_enabled)` turns addresses into base URLs,
using `https://` when TLS is enabled and bracketing IPv6 hosts.

## What this package does not do

There is no network client here: nothing connects to a server, sends
queries or writes points, or manages databases, retention policies or
measurements. The configuration classes describe such a client's settings
but nothing in the package uses them to open connections. There is no
snappy decompression, although `CompressMethod.SNAPPY` is listed.

## Running the tests

```
pip install -e .[test]
pytest
```