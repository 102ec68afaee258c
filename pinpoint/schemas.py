from typing import Optional

from pydantic import BaseModel, Field

from .models import DetectedFormat

# --- Shared ---

class GeoPointOut(BaseModel):
    lat: float
    lng: float

    model_config = {"from_attributes": True}


# --- Location resolution ---

class ResolveRequest(BaseModel):
    input: str = Field(min_length=1, max_length=200)
    w3w_api_key: Optional[str] = None


class DetectResponse(BaseModel):
    input: str
    format: DetectedFormat
    format_label: str


class ResolveResponse(DetectResponse):
    point: Optional[GeoPointOut] = None


class ResolveBatchRequest(BaseModel):
    inputs: list[str] = Field(min_length=1, max_length=1000)
    w3w_api_key: Optional[str] = None


class ResolveBatchResponse(BaseModel):
    results: list[ResolveResponse]
    resolved: int
    failed: int


# --- Postcodes ---

class BulkPostcodeRequest(BaseModel):
    postcodes: list[str] = Field(min_length=1, max_length=1000)


class BulkPostcodeResponse(BaseModel):
    results: dict[str, GeoPointOut]
    missing: list[str] = []


# --- Geodesy ---

class InverseResponse(BaseModel):
    bearing: float
    distance_m: float
