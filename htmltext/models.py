"""Pydantic option models for HTML minification and text rendering."""

from typing import Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

ParserName = Literal["html.parser", "lxml", "html5lib"]


class MinifyOptions(BaseModel):
    """Whitespace policy for the minifier."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    collapse_whitespace: bool = Field(
        True,
        alias="collapseWhitespace",
        description="Trim whitespace next to block boundaries inside text nodes.",
    )
    conservative_collapse: bool = Field(
        False,
        alias="conservativeCollapse",
        description="Always collapse whitespace to at least one space.",
    )
    collapse_inline_tag_whitespace: bool = Field(
        False,
        alias="collapseInlineTagWhitespace",
        description="Drop single spaces left between inline elements.",
    )
    minify_js: bool = Field(
        False,
        alias="minifyJs",
        description="Strip comments and line breaks from inline scripts.",
    )
    minify_css: bool = Field(
        False,
        alias="minifyCss",
        description="Strip comments and line breaks from inline stylesheets.",
    )


class RenderOptions(BaseModel):
    """Options for the plain-text renderer."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    format: bool = Field(
        True,
        description=(
            "Render headings, tables, code and quotes as structured text. "
            "When false only links, images and lists are rewritten."
        ),
    )


DEFAULT_ALLOWED_TAGS: Dict[str, List[str]] = {
    "h1": [],
    "h2": [],
    "h3": [],
    "h4": [],
    "h5": [],
    "h6": [],
    "p": [],
    "i": [],
    "em": [],
    "strong": [],
    "b": [],
    "del": [],
    "blockquote": ["cite"],
    "a": [],
    "ul": [],
    "li": [],
    "ol": [],
    "br": [],
    "code": [],
    "pre": [],
    "div": [],
    "span": [],
}


class SanitizeOptions(BaseModel):
    """Allow-list of tags, each mapped to the attributes it may keep."""

    model_config = ConfigDict(extra="forbid")

    tags: Dict[str, List[str]] = Field(
        default_factory=lambda: {name: list(attrs) for name, attrs in DEFAULT_ALLOWED_TAGS.items()},
        description="Allowed tag names mapped to their allowed attribute names.",
    )

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, value):
        # A plain list of names allows those tags without attributes.
        if isinstance(value, (list, tuple)):
            return {str(name): [] for name in value}
        return value


class FromTextOptions(BaseModel):
    """Options for converting plain text into paragraphs."""

    model_config = ConfigDict(extra="forbid")

    tag: str = Field("p", description="Element used to wrap each paragraph.")
    escape: bool = Field(True, description="Escape the text before wrapping it.")


class ConversionConfig(BaseModel):
    """Top-level configuration file layout."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    parser: ParserName = Field("lxml", description="BeautifulSoup tree builder.")
    minify: MinifyOptions = Field(default_factory=MinifyOptions)
    render: RenderOptions = Field(default_factory=RenderOptions)
    sanitize: SanitizeOptions = Field(default_factory=SanitizeOptions)
    from_text: FromTextOptions = Field(default_factory=FromTextOptions, alias="fromText")
