from collections.abc import Generator
from typing import Annotated

from fastapi import Depends, Request
from sqlmodel import Session

from slowcinema.core.db import StoreGateway
from slowcinema.core.render_cache import RenderCache


def get_store(request: Request) -> StoreGateway:
    store: StoreGateway = request.app.state.store
    return store


def get_db(store: Annotated[StoreGateway, Depends(get_store)]) -> Generator[Session, None, None]:
    with store.session() as session:
        yield session


def get_render_cache(request: Request) -> RenderCache:
    cache: RenderCache = request.app.state.render_cache
    return cache


StoreDep = Annotated[StoreGateway, Depends(get_store)]
SessionDep = Annotated[Session, Depends(get_db)]
RenderCacheDep = Annotated[RenderCache, Depends(get_render_cache)]
