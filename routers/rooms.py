# routers/rooms.py

from models.room import RoomCreate, RoomRead, RoomUpdate
from repositories.room_repo import RoomRepository
from routers.crud import property_scoped_router


router = property_scoped_router(
    prefix="/rooms",
    tag="Rooms",
    repo_cls=RoomRepository,
    create_model=RoomCreate,
    update_model=RoomUpdate,
    read_model=RoomRead,
)
