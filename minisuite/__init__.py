"""A RESP key-value server and client, a TF-IDF search engine and a web crawler."""

__version__ = "0.1.0"