# app/api/v1/rooms.py
"""
Room availability and blocking endpoints.
"""

from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Query

from app.api import deps
from app.schemas.room import BlockRoomRequest, RoomAvailabilityResponse, RoomResponse
from app.services.booking import RoomAvailabilityService
from app.services.homestay import HomestayService
from app.utils.date_utils import validate_stay_range

router = APIRouter(tags=["Room Management"])


@router.get("/rooms/{room_id}/availability", response_model=RoomAvailabilityResponse)
def check_room_availability(
    room_id: str,
    check_in_date: date = Query(...),
    check_out_date: date = Query(...),
    service: RoomAvailabilityService = Depends(deps.get_availability_service),
):
    """Whether a room can be booked for [check_in_date, check_out_date)."""
    return deps.unwrap_result(service.check_room_availability(room_id, check_in_date, check_out_date))


@router.get("/homestays/{homestay_id}/available-rooms", response_model=List[RoomResponse])
def list_available_rooms(
    homestay_id: str,
    check_in_date: date = Query(...),
    check_out_date: date = Query(...),
    homestay_service: HomestayService = Depends(deps.get_homestay_service),
    availability_service: RoomAvailabilityService = Depends(deps.get_availability_service),
):
    validate_stay_range(check_in_date, check_out_date)
    homestay = homestay_service.find_homestay_by_id(homestay_id)
    rooms = availability_service.find_available_rooms(homestay.id, check_in_date, check_out_date)
    return [RoomResponse.model_validate(room) for room in rooms]


@router.post("/rooms/{room_id}/block", response_model=RoomResponse)
def block_room(
    room_id: str,
    payload: BlockRoomRequest,
    service: HomestayService = Depends(deps.get_homestay_service),
):
    return deps.unwrap_result(service.block_room(room_id, payload))


@router.post("/rooms/{room_id}/unblock", response_model=RoomResponse)
def unblock_room(
    room_id: str,
    service: HomestayService = Depends(deps.get_homestay_service),
):
    return deps.unwrap_result(service.unblock_room(room_id))
