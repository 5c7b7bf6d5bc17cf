from collections.abc import Sequence
from typing import TypeVar
from uuid import UUID

from sqlalchemy import select
from strawberry.dataloader import DataLoader

from ..database.connection import get_async_session
from ..dbmodels import Diys, Users

Row = TypeVar("Row", Users, Diys)


async def _rows_by_id(model: type[Row], keys: Sequence[UUID]) -> list[Row | None]:
    """One SELECT for a whole batch; results follow ``keys`` order, None where missing."""
    async with get_async_session() as session:
        rows = (await session.execute(select(model).where(model.id.in_(keys)))).scalars()
        found = {row.id: row for row in rows}
    return [found.get(key) for key in keys]


async def load_users(keys: list[UUID]) -> list[Users | None]:
    return await _rows_by_id(Users, keys)


async def load_diys(keys: list[UUID]) -> list[Diys | None]:
    return await _rows_by_id(Diys, keys)


class Loaders:
    """Authors and parent DIYs of comments and likes, batched per GraphQL request."""

    def __init__(self):
        self.user_loader = DataLoader(load_fn=load_users)
        self.diy_loader = DataLoader(load_fn=load_diys)
