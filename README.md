# minisuite

Three small tools built on the standard library alone:

- **A key-value server and client** that speak the Redis serialization
  protocol (RESP) and support `PING`, `SET`, `GET`, `DEL` and `EXISTS`.
- **A search engine** that keeps an in-memory inverted index of documents
  and ranks matches by TF-IDF.
- **A web crawler** that fetches plain-HTTP pages on a pool of worker threads.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Command-line tools

### Key-value server

```
minisuite-server            # listen on port 6379
minisuite-server 6380       # listen on port 6380
```

The server listens on all interfaces. The port must be between 1 and 65535.
Interrupt the process with Ctrl-C or send it SIGTERM to shut it down; it
notices the request within about a second. A client that sends nothing for
30 seconds is disconnected.

### Key-value client

```
minisuite-client 127.0.0.1 6379                  # interactive mode
minisuite-client 127.0.0.1 6379 PING             # run one command and exit
minisuite-client 127.0.0.1 6379 SET greeting hi
minisuite-client 127.0.0.1 6379 GET greeting
```

The host must be an IPv4 address; host names are not resolved. In
interactive mode the prompt is `redis> ` and the client reads commands until
`QUIT` or end of input. The supported commands are:

| Command          | Effect                                  |
|------------------|-----------------------------------------|
| `PING`           | prints `PONG` if the server answers     |
| `SET key value`  | stores a value, prints `OK`             |
| `GET key`        | prints the quoted value, or `(nil)`     |
| `DEL key`        | prints `(integer) 1` or `(integer) 0`   |
| `EXISTS key`     | prints `(integer) 1` or `(integer) 0`   |
| `QUIT`           | leaves the client                       |

Command names are matched exactly (upper case). In single-command mode the
exit status is 1 if `PING` or `SET` fails, or for `QUIT`.

### Search engine

```
minisuite-search
```

Loads five sample documents and then reads queries from standard input,
printing up to five matches with their scores, titles and contents. Type
`quit` or end the input to leave.

### Web crawler

```
minisuite-crawl http://example.com http://example.org
```

Crawls the given URLs with four worker threads, up to 100 pages, and saves
each page that answers with status 200 under `crawled_pages/` in the current
directory. Each file is named after the first 20 hex digits of the SHA-256
of its URL, with an `.html` suffix. Only `http` URLs are fetched; failures
are logged and skipped.

## Library use

### Key-value store

```python
from minisuite.kv_store import KVStore

store = KVStore()
store.set("name", "minisuite")
store.get("name")        # "minisuite"
store.exists("name")     # True
"name" in store          # True
len(store)               # 1
store.delete("name")     # True
store.get("name")        # None
```

The store is safe to share between threads.

### Search engine

```python
from minisuite.document import Document
from minisuite.search_engine import SearchEngine

engine = SearchEngine()
engine.add_document(Document(1, "The quick brown fox", "Doc 1"))
engine.add_document(Document(2, "A quick brown dog", "Doc 2"))

for doc_id, score in engine.search("fox", 5):
    print(doc_id, score, engine.get_document(doc_id).title)
```

Text is lower-cased, split on whitespace and stripped of punctuation
(`minisuite.document.tokenize` does this on its own). `search` returns
`(document id, score)` pairs, highest score first, ten by default. A term
found in every document still scores, but only with a very small weight.
The lower-level pieces are `minisuite.indexer.Indexer` (term and document
frequencies) and `minisuite.query_processor.QueryProcessor`.

### Protocol

`minisuite.protocol` holds the RESP value types (`SimpleString`,
`ErrorReply`, `Integer`, `BulkString`, `Array`) together with `parse` and
`serialize`. `parse` reads the first value from bytes or a string;
malformed input raises `ProtocolError`. A `BulkString` whose value is `None`
and an `Array` with `is_null=True` encode as the null forms.

### Server and client in code

`minisuite.redis_server.RedisServer(port, num_threads, timeout)` serves
clients on a thread pool. `start()` blocks until `stop()` is called from
another thread and raises `OSError` if it cannot listen; `address()` gives
the bound host and port while it runs (pass port 0 to pick a free one);
`execute_command(array)` answers a single command without any network.

`minisuite.redis_client.RedisClient(timeout)` connects with
`connect(host, port)` and offers `ping`, `set`, `get`, `delete`, `exists`
and `send_command` for already encoded commands. It is a context manager
that disconnects on exit and raises `ClientError` when connecting, sending,
receiving or parsing a reply fails.

### Crawler pieces

- `minisuite.url_parser.parse_url` splits a URL into a `ParsedUrl` with
  protocol, host, port, path, query and fragment, filling in `http`, port 80
  (443 for `https`) and path `/` when they are missing; an unusable URL
  raises `UrlError`.
- `minisuite.http_client.HttpClient` sends a `GET` request and returns an
  `HttpResponse` with the status code, lower-cased headers and body bytes;
  failures raise `HttpError`. `parse_response` parses raw response bytes.
- `minisuite.crawler.Crawler(num_threads, max_pages, fetch)` takes URLs with
  `add_url`, crawls them with `start(callback)` — the callback receives each
  page's URL and body — and never visits the same URL twice. `fetch` can
  replace the default HTTP client with any function from a URL to an
  `HttpResponse`.
- `minisuite.thread_pool.ThreadPool` is the worker pool behind the crawler
  and the server; it can be used as a context manager.

## What it does not do

- The crawler only fetches the URLs it is given; it does not follow links
  found in pages, and it does not speak HTTPS.
- The key-value server keeps everything in memory: there is no persistence,
  no expiry and no commands beyond the five listed above.
- The search engine's index lives in memory only and is not saved or loaded
  from files.