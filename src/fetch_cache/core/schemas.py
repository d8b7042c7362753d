"""
Pydantic model for fetch() arguments.
Why: reject empty keys and non-callable callbacks before touching the store.
"""

from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field


class FetchRequest(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    key: str = Field(..., min_length=1)
    params: Any = None
    callback: Callable[[], Any]
    expires_in_seconds: Optional[float] = None
