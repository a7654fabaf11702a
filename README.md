# modelhttp

A small HTTP/1.0 server for learning and experimenting. It serves files
from a document root, answers `GET` and `HEAD` requests, and runs CGI
scripts found under `/cgi-bin`. The package also holds the pieces of a
small typed scripting language (integers, reals, strings and booleans,
with `if`, `while`, `do ... while`, `for`, `read` and `write`): a lexer,
values, scopes and syntax-tree nodes that can be built and run from
Python.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running the server

```
modelhttp-server [-p PORT] [-r ROOT]
```

* `-p`, `--port`: the port to listen on (default 7999, on all interfaces).
* `-r`, `--root`: the document root (default: the current directory).

On start it prints `Server listening on port 7999` (or the chosen port).
Each connection is served in its own thread. The server stops when a
character, or end of file, is read from its standard input (pressing
Enter is enough), or on `SIGINT`, `SIGQUIT`, `SIGTERM` or `SIGUSR1`;
open client connections are closed on the way out.

The same can be done from Python with `modelhttp.server.run(port, root)`.

### What it answers

* The request path is appended to the document root. A file that cannot
  be opened gives `404 Not found`. Each request path is printed to
  standard output.
* `GET` returns the file's contents; `HEAD` returns the headers with an
  empty body.
* Responses carry `Content-Length` (the length of the body sent),
  `Last-Modified`, `Allow: GET,HEAD`, `Date`,
  `Server: Model HTTP Server/0.1` and a `Content-Type`: `text/html` for
  paths ending in `html`, `image/jpeg` for `jpg` and `jpeg`, and
  `text/plain` otherwise.
* Methods other than `GET` and `HEAD` give `501 Not implemented`;
  requests that cannot be handled otherwise give `400 Bad request`.
* Headers are written in sorted order. Dates look like
  `Mon, 01 Jan 2024 12:00:00 GMT` (see `modelhttp.session.http_date`).
* A connection stays open and is read for further requests until the
  client stops sending.

### CGI

A request whose path starts with `/cgi-bin` runs the executable at that
path under the document root, with the document root as its working
directory and no standard input. A missing script gives
`404 CGI script not found`. The script gets the server's environment
plus `SCRIPT_NAME`, `SCRIPT_FILENAME`, `DOCUMENT_ROOT`, `CONTENT_TYPE`,
`GATEWAY_INTERFACE`, `SERVER_PORT`, `SERVER_PROTOCOL`, `SERVER_SOFTWARE`,
`SERVER_NAME`, `HTTP_REFERER`, `HTTP_USER_AGENT`, `REMOTE_ADDR` and
`REMOTE_PORT`. Whatever it writes to standard output is sent to the
client unchanged, so it must write a full HTTP response including the
status line. A script that cannot be started gives `500`.

## Using it as a library

### HTTP messages

```python
from modelhttp.request import HttpRequest
from modelhttp.response import HttpResponse
from modelhttp.status import Status

request = HttpRequest("GET /search?q=cats&page=2 HTTP/1.0\nHost: localhost\n\n")
request.method            # Method.GET
request.uri               # "/search"
request.version           # "HTTP/1.0"
request.param("q")        # "cats"
request.param("missing")  # None
request["Host"]           # "localhost"

response = HttpResponse(Status.NOT_FOUND, "Not found")
response["Content-Type"] = "text/plain"
print(str(response))      # "HTTP/1.0 404 Not found\nContent-Type: text/plain\n\n"
```

`HttpResponse.raw(text)` makes a response whose text form is exactly
`text`. Unsupported methods raise `modelhttp.method.UnknownMethod`.
`modelhttp.sockets` has `Socket` and `ServerSocket`, thin wrappers that
raise `SocketError` when an operation fails.

### The scripting language

`modelhttp.lexer.Lexer` turns script text into tokens:

```python
from modelhttp.lexer import Lexer

for token in Lexer('write("Hello, ", $REMOTE_ADDR);'):
    print(token.type, token.value)
```

Programs are built from the nodes in `modelhttp.expressions` and
`modelhttp.statements` and run in a `modelhttp.scope.Scope`, whose
`output` callable receives everything `write` produces:

```python
from modelhttp.expressions import Assignment, BinaryOp, Identifier, IntegerLiteral, StringLiteral
from modelhttp.lexer import TokenType
from modelhttp.scope import Scope
from modelhttp.statements import (
    CompoundStatement, ExpressionStatement, Program, VariableDecl,
    WhileStatement, WriteStatement,
)
from modelhttp.value import Type

i = Identifier("i")
program = Program(
    declarations=[VariableDecl("i", Type.INT)],
    statements=[
        WhileStatement(
            BinaryOp(TokenType.LESS, i, IntegerLiteral(3)),
            CompoundStatement([
                WriteStatement([i, StringLiteral(" ")]),
                ExpressionStatement(
                    Assignment("i", BinaryOp(TokenType.PLUS, i, IntegerLiteral(1)))
                ),
            ]),
        )
    ],
)
out = []
program.execute(Scope(output=out.append))
"".join(out)  # "0 1 2 "
```

Some behaviour worth knowing:

* Integers are 64-bit and wrap on overflow; `%` truncates toward zero.
  Reals are written with six decimals (`1.500000`).
* `$NAME` (`EnvironmentVariable`) reads the process environment; an
  unset variable reads as the empty string.
* `ReadStatement` reads one line from standard input, or from the
  `stream` it is given, and converts it to the variable's current type.
* Conditions must be booleans, and `and`/`or` evaluate both sides.
* `/` raises `LangError` for every pair of operands: a zero integer
  divisor gives "Division by zero", anything else fails its zero check.
* Every error raised while running a script is
  `modelhttp.value.LangError`.

## What it does not do

* There is no parser for the scripting language: `Lexer` produces tokens,
  but turning script text into a `Program` is not provided, so programs
  must be built from the node classes as above.
* There is no command that runs script files, so scripts in this
  language cannot be used as CGI programs by themselves; CGI scripts must
  be ordinary executables.
* Only `GET` and `HEAD` are served; request bodies are not passed to CGI
  scripts.