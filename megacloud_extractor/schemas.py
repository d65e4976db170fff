from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, ConfigDict

Number = Union[int, float]


class GenericParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ExtractorURLParams(GenericParams):
    host: Literal["MegaCloud"] = Field(..., description="The host to extract the URL from.")
    destination: str = Field(..., description="The embed URL of the player page.", alias="d")
    referer: str = Field("", description="The page the player is embedded in. Sent as Referer for the embed fetch.")


# Provider payload, as returned by the MegaCloud getSources endpoint.


class MegaCloudSource(BaseModel):
    file: Optional[str] = None
    type: Optional[str] = None


class MegaCloudTrack(BaseModel):
    file: Optional[str] = None
    label: Optional[str] = None
    kind: Optional[str] = None
    default: Optional[bool] = None


class MegaCloudTimeskip(BaseModel):
    start: Optional[Number] = None
    end: Optional[Number] = None


class MegaCloudSourcesResponse(BaseModel):
    headers: Optional[Dict[str, str]] = None
    sources: Optional[List[MegaCloudSource]] = None
    tracks: Optional[List[MegaCloudTrack]] = None
    encrypted: Optional[bool] = None
    intro: Optional[MegaCloudTimeskip] = None
    outro: Optional[MegaCloudTimeskip] = None
    server: Optional[int] = None


# Normalized extraction result.


class Timeskip(BaseModel):
    start: Number = 0
    end: Number = 0


class Video(GenericParams):
    url: str = Field(..., description="Direct URL of the stream or manifest.")
    quality: str = Field("auto", description="Quality label reported by the provider.")
    is_m3u8: bool = Field(False, alias="isM3U8")
    is_dash: bool = Field(False, alias="isDASH")


class Subtitle(BaseModel):
    lang: str = "Unknown"
    url: str = ""
    kind: str = "captions"


class ExtractionResult(GenericParams):
    sources: List[Video] = Field(default_factory=list)
    subtitles: List[Subtitle] = Field(default_factory=list)
    intro: Timeskip = Field(default_factory=Timeskip)
    outro: Timeskip = Field(default_factory=Timeskip)
    headers: Dict[str, str] = Field(default_factory=dict)
    embed_url: Optional[str] = Field(None, alias="embedURL")
