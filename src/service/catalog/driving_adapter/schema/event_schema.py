from typing import List

from pydantic import BaseModel, ConfigDict, RootModel, StrictStr


class EventResponse(BaseModel):
    id: int
    name: str
    organization: str
    date: str
    price: float
    rating: str
    image_url: str
    created_at: str
    location: str

    class Config:
        json_schema_extra = {
            'example': {
                'id': 1,
                'name': 'Summer Rock Night',
                'organization': 'Live Nation',
                'date': '2025-07-12T20:00:00',
                'price': 120.0,
                'rating': 'L16',
                'image_url': 'https://images.example.com/summer-rock.png',
                'created_at': '2025-01-10T12:00:00',
                'location': 'Main Arena',
            }
        }


class SpotResponse(BaseModel):
    id: int
    name: str
    status: str
    event_id: int


class SpotReservationRequest(RootModel[List[StrictStr]]):
    """Request body: a JSON array with the names of the spots to reserve."""

    model_config = ConfigDict(json_schema_extra={'example': ['A1', 'A2', 'B4']})


class MessageResponse(BaseModel):
    message: str
