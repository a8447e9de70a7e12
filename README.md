# fastgo

fastgo is a small HTTP API server built on Flask. It does the following:

- answers `GET /healthz` with `{"Status":"ok"}`;
- returns a JSON 404 body, `{"reason":"NotFound","message":"Page not found"}`,
  for unknown paths and for methods a route does not allow;
- gives every response an `x-request-id` header. The ID is taken from the
  request if the request has one. If not, a new UUID is made;
- adds headers that turn off client caching (`Cache-Control`, `Expires`,
  `Last-Modified`);
- answers CORS preflight (`OPTIONS`) requests with status 200 and the
  `Access-Control-Allow-*` headers.

MySQL connection settings are read from a YAML file and from the
environment. They are checked before the server starts.

## Installing

```
pip install .
```

## Running

```
fg-apiserver
```

By default the server listens on `0.0.0.0:6666`. It shuts down cleanly on
`SIGINT` or `SIGTERM`, and gives up if shutting down takes more than ten
seconds. If an option is invalid, the command prints `Error: ...` and exits
with status 1.

Options:

- `-c`, `--config PATH`: the YAML configuration file. The default is
  `~/.fastgo/fg-apiserver.yaml`. An unreadable or missing file is treated as
  empty, so the built-in defaults are used.
- `--version`: print the version string and quit. `--version raw` prints a
  table with all build details. The values `true`, `false`, `1`, `0`, `t`
  and `f` are accepted as well.

## Configuration

```yaml
addr: 0.0.0.0:6666
mysql:
  addr: 127.0.0.1:3306
  username: onex
  password: password
  database: onex
  max-idle-connections: 100
  max-open-connections: 100
  max-connection-left-time: 10s   # durations such as 500ms, 1m30s, 2h
log:
  format: json     # json or text
  level: info      # debug, info, warn, error
  output: stdout   # stdout or a file path (appended to)
```

Keys are not case-sensitive. To set a key from the environment, put
`FASTGO_` in front of its name and write each `.` and `-` as `_`. For
example, `FASTGO_ADDR` sets `addr` and `FASTGO_LOG_LEVEL` sets `log.level`.
The `log.*` settings can come from the environment alone. The server and
MySQL options, however, are only overridden for keys that also appear in
the configuration file.

## Using it as a library

```python
from fastgo.options import ServerOptions

opts = ServerOptions.from_mapping({"addr": "127.0.0.1:8080"})
opts.validate()                       # raises ValueError on bad options
server = opts.config().new_server()
server.run()                          # blocks until SIGINT/SIGTERM
```

Other useful pieces:

- `fastgo.apiserver.create_app()` returns the Flask application on its own.
  You can use it with any WSGI server or with Flask's test client.
- `fastgo.errorsx.ErrorX` is the error type. Each error carries an HTTP
  status code, a reason and a message. Ready-made errors such as
  `ERR_NOT_FOUND`, `ERR_DB_READ` and `ERR_POST_NOT_FOUND` are provided.
  `from_error` turns any exception into an `ErrorX`.
- `fastgo.core.write_response(err, data)` builds the JSON response. It
  returns `{"reason": ..., "message": ...}` with the error's status code, or
  `data` with status 200.
- `fastgo.contextx.request_id()` gives the request ID of the request being
  handled.
- `fastgo.mysql_options.MySQLOptions` can validate itself (`validate()`) and
  describe the connection (`dsn()`). `new_db()` builds a pooled SQLAlchemy
  engine with the `mysql+pymysql` dialect. The PyMySQL driver must be
  installed separately to use it.
- `fastgo.rid.salt()` returns a 64-bit salt derived from the machine ID.
- `fastgo.version.get()` returns the build information.

## What it does not do

The server has no application endpoints beyond `/healthz`. It does not
store users or posts. It does not connect to MySQL when it starts: the
MySQL settings are validated, but nothing else uses them.