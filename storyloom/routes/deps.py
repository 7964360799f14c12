"""Request dependencies."""

from fastapi import Request

from storyloom.storage import Storage


def get_storage(request: Request) -> Storage:
    return request.app.state.storage
