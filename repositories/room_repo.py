# repositories/room_repo.py

from repositories.base import SupabaseRepository


class RoomRepository(SupabaseRepository):
    table = "rooms"
    label = "Room"
    # Rooms list by their natural key
    order_column = "number"
    order_desc = False
