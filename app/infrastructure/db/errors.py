"""Traducción de excepciones de pymongo/bson a `StoreError` tipado."""
from contextlib import contextmanager
from typing import Iterator

from bson.errors import InvalidId
from pymongo.errors import ConnectionFailure, PyMongoError

from app.core.errors import ErrorKind, StoreError


@contextmanager
def translate_store_errors() -> Iterator[None]:
    try:
        yield
    except InvalidId as e:
        raise StoreError(ErrorKind.MALFORMED, str(e)) from e
    # ServerSelectionTimeoutError, AutoReconnect y NetworkTimeout heredan de ConnectionFailure
    except ConnectionFailure as e:
        raise StoreError(ErrorKind.TRANSPORT, str(e)) from e
    except PyMongoError as e:
        raise StoreError(ErrorKind.INTERNAL, str(e)) from e
