from typing import List, Optional, Union

from pydantic import BaseModel, Field


class BrandExtractRequest(BaseModel):
    url: Optional[str] = Field(None, description="Website to extract brand assets from")


class LeonardoGenerateRequest(BaseModel):
    """Request for a single ad-hoc image"""
    prompt: Optional[str] = None
    type: Optional[str] = Field(None, description="background | illustration | anything else for a plain image")
    brandColors: Optional[List[str]] = None
    style: Optional[str] = Field(None, description="Illustration style: flat | 3d | isometric | minimal")


class LeonardoGenerateResponse(BaseModel):
    imageUrl: str


class IconKitGenerateRequest(BaseModel):
    prompt: Optional[Union[str, List[str]]] = None
    style: Optional[str] = None
    color: Optional[str] = None
    type: Optional[str] = Field(None, description="set | theme | anything else for a single icon")

