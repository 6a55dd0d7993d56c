"""Schemas for the search endpoint."""

from pydantic import BaseModel, ConfigDict, Field


class SearchResult(BaseModel):
    """One normalized search hit, copied verbatim from the provider item."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field("", description="Result title.")
    link: str = Field("", description="Result URL; unique within a response.")
    snippet: str = Field("", description="Short excerpt from the page.")
    display_link: str | None = Field(
        None,
        alias="displayLink",
        description="Host shown under the title (e.g. www.example.com). Omitted when the provider has none.",
    )


class SearchResponse(BaseModel):
    """Response for GET /api/search."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "examples": [
                {
                    "results": [
                        {
                            "title": "Weather forecast",
                            "link": "https://weather.example.com/today",
                            "snippet": "Sunny with a high of 21.",
                            "displayLink": "weather.example.com",
                        }
                    ],
                    "summary": "Here is what I found for weather. Weather forecast. Sunny with a high of 21.",
                }
            ]
        },
    )

    results: list[SearchResult] = Field(default_factory=list, description="Results in provider relevance order.")
    summary: str = Field(..., min_length=1, description="Narration of the top results.")


class ErrorResponse(BaseModel):
    """Body of every non-200 response from the gateway."""

    error: str = Field(..., description="Human-readable failure message.")
