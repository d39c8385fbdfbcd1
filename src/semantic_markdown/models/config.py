"""Pydantic configuration model for semantic-markdown conversions."""

from pathlib import Path
from typing import Any, Callable, Literal, Optional, Union

from pydantic import BaseModel, Field

MetaDataMode = Union[Literal["basic", "extended"], Literal[False]]

# Fields that hold callables or parser objects and cannot be serialized
_RUNTIME_FIELDS = {
    "override_element_processing",
    "process_unhandled_element",
    "override_node_renderer",
    "render_custom_node",
    "parser",
}


class ConversionOptions(BaseModel):
    """
    Options for HTML to semantic Markdown conversion.

    Hooks receive ``(subject, options, indent_level)``:

    - ``override_element_processing(element, ...)``: return a node list to use
      instead of the default handling, ``False`` or ``[]`` to drop the
      element, or ``None`` to fall through.
    - ``process_unhandled_element(element, ...)``: called for tags without a
      handler; a falsy result means "recurse into the children".
    - ``override_node_renderer(node, ...)``: return a string to replace the
      node's rendering, or ``None``.
    - ``render_custom_node(node, ...)``: renders ``custom`` nodes.

    Example:
        options = ConversionOptions(
            extract_main_content=True,
            include_meta_data="extended",
            emit_front_matter=True,
        )

    YAML format:
        extract_main_content: true
        include_meta_data: extended
        exclude_tag_names:
          - form
    """

    # Extraction
    website_domain: Optional[str] = Field(
        None,
        description="Domain prefix stripped from href/src values (e.g. 'https://example.com')",
    )
    base_url: Optional[str] = Field(
        None,
        description="Base URL used to resolve relative href/src values",
    )
    include_meta_data: MetaDataMode = Field(
        False,
        description="Metadata extraction from <head>: 'basic', 'extended' or false",
    )
    exclude_tag_names: list[str] = Field(
        default_factory=list,
        description="Tag names skipped entirely, with their content",
    )
    exclude_invisible_elements: bool = Field(
        False,
        description="Skip elements hidden through the hidden attribute or inline styles",
    )
    enable_table_column_tracking: bool = Field(
        False,
        description="Annotate table cells with col-N identifiers",
    )
    override_element_processing: Optional[Callable[..., Any]] = Field(
        None,
        description="Hook replacing the default handling of an element",
    )
    process_unhandled_element: Optional[Callable[..., Any]] = Field(
        None,
        description="Hook for elements without a built-in handler",
    )

    # Rendering
    emit_front_matter: bool = Field(False, description="Emit metadata as YAML-style front matter")
    override_node_renderer: Optional[Callable[..., Any]] = Field(
        None,
        description="Hook replacing the rendering of a node",
    )
    render_custom_node: Optional[Callable[..., Any]] = Field(
        None,
        description="Renderer for custom nodes",
    )

    # URL references
    refify_urls: bool = Field(False, description="Replace long URLs with short refN tokens")
    url_map: Optional[dict[str, str]] = Field(
        None,
        description="URL or prefix to reference token map, filled when refify_urls is on",
    )

    # Document entry point
    extract_main_content: bool = Field(
        False,
        description="Convert only the detected main content of the page",
    )
    parser: Optional[Any] = Field(
        None,
        description="DocumentParser used instead of the built-in BeautifulSoup parser",
    )
    parser_features: str = Field(
        "html.parser",
        description="BeautifulSoup tree builder (html.parser, lxml, html5lib)",
    )

    model_config = {"extra": "forbid", "arbitrary_types_allowed": True}

    @property
    def excluded_tags(self) -> set[str]:
        return {name.lower() for name in self.exclude_tag_names}

    def to_yaml(self) -> str:
        """Serialize the serializable options to a YAML string."""
        import yaml

        data = self.model_dump(mode="json", exclude=_RUNTIME_FIELDS, exclude_none=True)
        return yaml.dump(data, default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ConversionOptions":
        """Load options from a YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "ConversionOptions":
        """Load options from a YAML file."""
        return cls.from_yaml(path.read_text())
