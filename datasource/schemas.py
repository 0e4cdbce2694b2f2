from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, Field

Number = Union[int, float]
Target = Union[int, float, str]

# ten years; larger annotation steps are rejected at the boundary
MAX_STEP_HOURS = 24 * 366 * 10


class ErrorEnvelope(BaseModel):
    code: str
    message: str
    details: Optional[dict[str, Any]] = None
    requestId: Optional[str] = None


class Health(BaseModel):
    status: str = "ok"


class Hello(BaseModel):
    message: str = "Hello, World"


# === Requests ===


class RangeIn(BaseModel):
    from_: str = Field(alias="from")
    to: str


class TargetIn(BaseModel):
    target: Target


class QueryIn(BaseModel):
    range: RangeIn
    targets: list[TargetIn] = Field(min_length=1)


class AnnotationQueryIn(BaseModel):
    query: int = Field(ge=1, le=MAX_STEP_HOURS)


class AnnotationsIn(BaseModel):
    annotation: AnnotationQueryIn
    range: RangeIn


# === Responses ===


class SearchResult(BaseModel):
    text: str
    value: Number


class QueryOut(BaseModel):
    target: Target
    datapoints: list[tuple[Number, int]]


class AnnotationMeta(BaseModel):
    name: str
    enabled: bool = True
    datasource: str
    showLine: bool = True


class AnnotationOut(BaseModel):
    annotation: AnnotationMeta
    title: str
    time: int
    text: str
