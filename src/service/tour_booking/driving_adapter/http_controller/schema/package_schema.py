from typing import List, Optional

from pydantic import BaseModel, Field


class TourPackageRequest(BaseModel):
    agency_id: str
    title: str
    price_per_person: int = Field(ge=0)
    destination: str = ''
    couple_price: Optional[int] = Field(default=None, ge=0)
    child_price: Optional[int] = Field(default=None, ge=0)
    boarding_points: List[str] = []
    dropping_points: List[str] = []

    class Config:
        json_schema_extra = {
            'example': {
                'agency_id': 'agency-1',
                'title': "Cox's Bazar 3 Days",
                'price_per_person': 5000,
                'destination': "Cox's Bazar",
                'couple_price': 9000,
                'boarding_points': ['Dhaka - Kallyanpur'],
                'dropping_points': ['Kolatoli'],
            }
        }


class TourPackageResponse(BaseModel):
    id: str
    agency_id: str
    title: str
    price_per_person: int
    destination: str
    couple_price: Optional[int] = None
    child_price: Optional[int] = None
    boarding_points: List[str]
    dropping_points: List[str]
