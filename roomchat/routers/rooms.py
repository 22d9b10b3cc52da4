from __future__ import annotations

from fastapi import APIRouter, Request

from ..room_index import active_rooms, members_of
from ..runtime import ChatRuntime
from ..schemas import RoomList, UserList

router = APIRouter(prefix="", tags=["rooms"])


def _runtime(request: Request) -> ChatRuntime:
    return request.app.state.runtime


@router.get("/rooms", response_model=RoomList)
async def list_rooms(request: Request):
    return RoomList(rooms=active_rooms(_runtime(request).registry))


@router.get("/rooms/{room}/users", response_model=UserList)
async def list_room_users(room: str, request: Request):
    # Unknown rooms are simply empty; rooms only exist while someone is in them.
    return UserList(users=members_of(_runtime(request).registry, room))
