# jobhttpd

A small, self-contained HTTP/1.0 server. It answers simple utility requests
straight away and runs heavier work as background jobs on two worker pools,
one for CPU-bound tasks and one for I/O-bound tasks. Every job's state is
written to a JSON Lines file, and jobs that were still queued or running are
queued again when the server starts.

## Starting the server

```
jobhttpd
```

The command takes no options besides `--help`. It reads its settings from
the environment; a `.env` file in the working directory is loaded first, if
there is one.

| Variable             | Default                          | Meaning                                         |
|----------------------|----------------------------------|-------------------------------------------------|
| `BIND_ADDRESS`       | `127.0.0.1:8080`                 | `HOST:PORT` to listen on (`*` or `0.0.0.0` for all interfaces, `localhost` allowed; IPv4 only) |
| `MAX_CONNECTIONS`    | `64`                             | Connections served at once; more get `503`      |
| `RATE_LIMIT_PER_SEC` | `200`                            | Connections accepted per second; more get `429` |
| `CPU_WORKERS`        | `4`                              | Threads in the CPU pool                         |
| `IO_WORKERS`         | `2`                              | Threads in the I/O pool                         |
| `CPU_TIMEOUT`        | `60`                             | Seconds after which a finished CPU job counts as timed out |
| `IO_TIMEOUT`         | `120`                            | Seconds after which a finished I/O job counts as timed out |
| `JOB_QUEUE_MAX`      | `100`                            | Queue capacity per pool                         |
| `JOB_PERSIST_PATH`   | `./data/persistent/state.jsonl`  | Where job state is kept                         |
| `FILE_STORAGE_PATH`  | `./data/` for `/createfile` and `/deletefile`, `./data/files` for file jobs | Directory for files the server reads and writes |

Only `HTTP/1.0` requests with the methods `GET`, `HEAD` and `POST` are
accepted, one request per connection; every response closes the
connection. Errors come back as JSON such as `{"error": "NotFound"}` or
`{"error": "BadRequest: Missing query parameter 'num'"}` with the matching
status code (400, 404, 409, 429, 500 or 503).

## Utility endpoints

All of these are `GET` requests and return JSON.

| Path                                             | Result                                   |
|--------------------------------------------------|------------------------------------------|
| `/fibonacci?num=N`                               | The N-th Fibonacci number (N ≤ 93)       |
| `/reverse?text=abcdef`                           | The text reversed                        |
| `/toupper?text=abcd`                             | The text with ASCII letters upper-cased  |
| `/hash?text=someinput`                           | SHA-256 of the text                      |
| `/random?count=n&min=a&max=b`                    | `count` random integers in `[min, max]` (defaults 5, 0, 100) |
| `/timestamp`                                     | Seconds since the Unix epoch             |
| `/createfile?name=filename&content=text&repeat=x`| Writes `content` on `repeat` lines (defaults `Hello`, 1) |
| `/deletefile?name=filename`                      | Removes the file if it exists            |
| `/sleep?seconds=s`                               | Waits, then answers                      |
| `/simulate?seconds=s&task=name`                  | Waits as a named task would (default name `demo`) |
| `/status`                                        | Server status and the current time       |
| `/help`                                          | The list of commands                     |

File names given to `/createfile` and `/deletefile` lose any directory
part, so they always stay inside the storage directory.

`HEAD /` answers with headers only. A `POST` to any path with a
`text/plain` body (or no `Content-Type`) is echoed back as
`You POSTed: <body>`; other content types get `400`.

## Jobs

Submit a job with `/jobs/submit?task=NAME&priority=low|normal|high&...`;
every other query parameter is handed to the task. The answer carries a
`job_id`.

CPU tasks:

- `isprime` — `n`, optional `method` (`trial`/`sqrt` or `miller-rabin`)
- `factor` — `n`
- `pi` — `digits`
- `matrixmul` — `size` (1–1000), optional `seed` (default 123)
- `mandelbrot` — `width`, `height`, optional `max_iter` (default 1000)

I/O tasks, working on files under `FILE_STORAGE_PATH`:

- `sortfile` — `name`, optional `algo` (`merge` or `quick`); writes `<name>_sorted_<algo>`
- `wordcount` — `name`
- `grep` — `name`, `pattern` (a regular expression; the first 10 matching lines are returned)
- `compress` — `name`, optional `codec` (`gzip` or `xz`); writes `<name>.gz` or `<name>.xz`
- `hashfile` — `name`, optional `algo` (only `sha256`)

Any other task name is accepted into a queue but ends in an error
(`Unknown task '...'`).

Follow a job with:

- `/jobs/status?id=ID` — `queued`, `running`, `done`, `error`, `canceled` or `timeout`, with a rough progress figure and ETA
- `/jobs/result?id=ID` — the task's JSON output once it is done, the error message (status 500) if it failed, otherwise its current state
- `/jobs/cancel?id=ID` — cancels a job that is still queued
- `/metrics` — queue sizes per priority, worker counts, job totals and timing statistics for both pools

High-priority jobs are taken before normal ones, and normal before low.
A job is not interrupted when its timeout passes; it is marked `timeout`
if it finishes later than that. When a pool's queue is full the submission
is answered with `503`, a `Retry-After` header and a body such as
`{"error":"queue_full","pool":"CPU","max":100,"retry_after_ms":1500}`.

## Example

A raw request and its answer:

```
GET /fibonacci?num=10 HTTP/1.0

HTTP/1.0 200 OK
Date: Epoch 1700000000
Server: jobhttpd/0.1
Connection: close
Content-Length: 28
Content-Type: application/json

{"num": 10, "fibonacci": 55}
```

## Using the pieces as a library

The computations behind the tasks can be called directly:

- `jobhttpd.cpu.primes.is_prime(n, method)` and `check(n)`, with `PrimeMethod.TRIAL` or `PrimeMethod.MILLER_RABIN`
- `jobhttpd.cpu.factor.factorize(n)` — sorted `(prime, exponent)` pairs
- `jobhttpd.cpu.pi.pi_number(digits)`
- `jobhttpd.cpu.matrixmul.matrixmul(size, seed)` — SHA-256 of the product and elapsed milliseconds
- `jobhttpd.cpu.mandelbrot.mandelbrot(width, height, max_iter, dump_filename)` — optionally writes a `.pgm` or `.ppm` image
- `jobhttpd.fileops` — `sort_file`, `word_count`, `grep_file`, `compress_file`, `hash_file`
- `jobhttpd.jobs.manager.JobManager` — the pools, submission and job table used by the server

To serve your own routes, build a dispatcher with
`jobhttpd.web.handler.Dispatcher.builder()`, add handlers with `.get(path, handler)`,
`.head(...)` or `.post(...)`, and pass `builder.build()` to
`jobhttpd.web.server.HttpServer` together with a `ServerConfig`.

## What it does not do

- The CPU and I/O tasks are reachable only as jobs through `/jobs/submit`;
  there are no paths such as `/isprime` or `/sortfile` that run them directly.
- `/help` lists `/loadtest`, but no such route is served; it answers `404`.
- `GET /` answers `404`, since every GET path is a registered route.
- No HTTP/1.1, keep-alive, chunked transfer, TLS or IPv6.