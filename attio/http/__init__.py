from attio.http.connection import ConnectionManager
from attio.http.request_builder import Request, RequestBuilder
from attio.http.response_parser import ResponseParser

__all__ = ["ConnectionManager", "Request", "RequestBuilder", "ResponseParser"]
