"""
Goal: Pydantic models for the value types and the JSON shapes we hand back to launchers.
We keep them boring on purpose so they're stable contracts.
Wire keys are camelCase (the launcher side expects windowIndex/tabIndex), Python stays snake_case.
"""
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt
from pydantic.alias_generators import to_camel


class _Wire(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class BackendCapabilities(BaseModel):
    model_config = ConfigDict(frozen=True)

    supports_spaces: bool = False
    supports_url_addressing: bool = False
    supports_accessibility_raise: bool = False
    tab_index_is_one_based: bool = False
    # "windowIndex,url" identifiers survive tab reordering
    prefers_url_identifiers: bool = False


class TabRecord(BaseModel):
    """One tab as seen during a single enumeration. A snapshot, not a live handle."""

    model_config = ConfigDict(frozen=True)

    title: str
    url: str = ""
    window_index: NonNegativeInt
    tab_index: NonNegativeInt
    space_index: Optional[NonNegativeInt] = None


class ByIndex(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["index"] = "index"
    window_index: NonNegativeInt
    tab_index: NonNegativeInt
    space_index: Optional[NonNegativeInt] = None


class ByWindowAndUrlPrefix(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["url_prefix"] = "url_prefix"
    window_index: NonNegativeInt
    url_prefix: str = Field(min_length=1)


TabLocator = Union[ByIndex, ByWindowAndUrlPrefix]


class ListItem(_Wire):
    title: str
    subtitle: str = ""
    url: Optional[str] = None
    window_index: Optional[int] = None
    tab_index: Optional[int] = None
    space_index: Optional[int] = None
    arg: Optional[str] = None
    match: Optional[str] = None
    quicklookurl: Optional[str] = None
    valid: Optional[bool] = None


class ListResponse(_Wire):
    items: List[ListItem] = []


class ActivationResult(_Wire):
    status: Literal["success", "error"]
    browser: Optional[str] = None
    window_index: Optional[int] = None
    tab_index: Optional[int] = None
    space_index: Optional[int] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"


class LaunchResult(_Wire):
    status: Literal["success", "error"]
    browser: Optional[str] = None
    message: Optional[str] = None


class BrowserInfo(_Wire):
    name: str
    family: str


class FocusRequest(BaseModel):
    query: str
