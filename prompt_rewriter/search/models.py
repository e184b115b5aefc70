"""Search result models."""

from pydantic import BaseModel, Field


class SearchResult(BaseModel):
    """Single organic search result. Providers may omit any field."""

    title: str = Field(default="", description="Page title")
    snippet: str = Field(default="", description="Page snippet/description")
    link: str = Field(default="", description="Page URL")


class SearchResponse(BaseModel):
    """Complete search response."""

    query: str = Field(..., description="Query sent to the provider")
    results: list[SearchResult] = Field(default_factory=list, description="Search results")
    total_results: int = Field(default=0, description="Total number of results returned")


class Augmentation(BaseModel):
    """Search snippets prepared for a prompt, plus the links they came from."""

    snippet_text: str = Field(default="", description="'title: snippet' pairs separated by blank lines")
    source_links: list[str] = Field(default_factory=list, description="Links of the used results")

    @property
    def used(self) -> bool:
        return bool(self.snippet_text)
