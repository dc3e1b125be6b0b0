"""An HTTP/1.0 server with utility endpoints and a background job system."""

__version__ = "0.1.0"