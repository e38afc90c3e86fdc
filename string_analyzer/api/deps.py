from typing import Annotated
from fastapi import Depends, Request

from string_analyzer.crud.base import StringStore


def get_store(request: Request) -> StringStore:
    """Dependency to provide the record store created at startup."""
    return request.app.state.store


StoreDep = Annotated[StringStore, Depends(get_store)]
