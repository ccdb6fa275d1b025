"""
Pydantic schemas for the analysis result record.

Field names serialize in camelCase (backgroundPosition, resizedImage, ...),
the interchange shape consumed by front ends.
"""
from typing import List, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from core.models import AnalysisResult


class CamelModel(BaseModel):
    """Base model with camelCase aliases."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CssImageResponse(CamelModel):
    """CSS background description."""
    background_position: str
    object_fit: str = "cover"
    background_size: str = "cover"


class CropRectResponse(CamelModel):
    """Source rectangle in image pixels."""
    left: int
    top: int
    width: int
    height: int


class ResizedImageResponse(CamelModel):
    """Destination size and source rectangle."""
    width: Union[int, float]
    height: Union[int, float]
    fit: str = "cover"
    position: CropRectResponse


class EntropyBlockResponse(CamelModel):
    """One high-entropy block."""
    x: int
    y: int
    entropy: float


class PointResponse(CamelModel):
    """Point in image pixels."""
    x: float
    y: float


class DimensionsResponse(CamelModel):
    """Width and height."""
    width: Union[int, float]
    height: Union[int, float]


class AnalysisResponse(CamelModel):
    """Response for a completed analysis."""
    css_image: CssImageResponse
    resized_image: ResizedImageResponse
    entropy_map: List[EntropyBlockResponse]
    entropy_center: PointResponse
    original_size: DimensionsResponse

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "AnalysisResponse":
        """Build the response from an AnalysisResult."""
        return cls.model_validate(result.to_dict())

    def to_json(self, indent: int = 2) -> str:
        """Serialize with camelCase field names."""
        return self.model_dump_json(by_alias=True, indent=indent)
