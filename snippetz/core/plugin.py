"""
Base plugin interface for all snippet targets.

Defines the contract every (target, client) plugin must satisfy and the
shared rendering helpers native plugins build on.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, List, Optional, Protocol, runtime_checkable

from ..logging_config import get_logger
from .config import GenerationOptions
from .prepare import PreparedRequest, prepare
from .request import CanonicalRequest, Pairs
from .templates import TemplateEngine

logger = get_logger(__name__)

MERGED_HEADERS_NOTE = "Duplicate headers were merged into one comma-separated value"
DIGEST_NOTE = "Digest authentication is not supported by this client and was omitted"
BINARY_NOTE = "Binary body cannot be inlined; reading it from body.bin"
BINARY_PLACEHOLDER = "body.bin"


@runtime_checkable
class GeneratorPlugin(Protocol):
    """The interface the registry checks every plugin against."""

    target: str
    client: str

    def generate(
        self, request: CanonicalRequest, options: Optional[GenerationOptions] = None
    ) -> str: ...


class RenderNotes:
    """Limitations noticed while rendering one snippet, in order, deduplicated."""

    def __init__(self):
        self._items: List[str] = []

    def add(self, message: str):
        if message not in self._items:
            self._items.append(message)

    def extend(self, messages):
        for message in messages:
            self.add(message)

    def __iter__(self):
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)


class SnippetPlugin(ABC):
    """Abstract base class for natively implemented plugins."""

    target: ClassVar[str] = ""
    client: ClassVar[str] = ""
    title: ClassVar[str] = ""
    link: ClassVar[str] = ""

    # Line comment marker of the target language; None if it has none
    comment_prefix: ClassVar[Optional[str]] = "#"
    default_indent: ClassVar[int] = 2

    # Whether limitations are noted inline unless options say otherwise
    degradation_comments: ClassVar[bool] = True

    template_engine: ClassVar[Optional[TemplateEngine]] = None

    def generate(
        self, request: CanonicalRequest, options: Optional[GenerationOptions] = None
    ) -> str:
        """
        Render a snippet for the request.

        Args:
            request: Request to render (never modified)
            options: Rendering preferences

        Returns:
            Snippet text
        """
        options = options or GenerationOptions()
        prepared = prepare(request, options)
        notes = RenderNotes()

        code = self.render(prepared, options, notes)

        if notes:
            logger.debug(
                "%s/%s degraded: %s", self.target, self.client, "; ".join(notes)
            )
            if self.wants_degradation_comments(options):
                code = "\n".join(self.comment(note) for note in notes) + "\n" + code

        return self.format_code(code, options)

    @abstractmethod
    def render(
        self, prepared: PreparedRequest, options: GenerationOptions, notes: RenderNotes
    ) -> str:
        """
        Produce the snippet body.

        Args:
            prepared: Normalized request view
            options: Rendering preferences
            notes: Collector for unsupported-feature notes

        Returns:
            Snippet text
        """
        pass

    # Rendering helpers

    def indent(self, options: GenerationOptions) -> str:
        """One indentation level for this plugin."""
        return options.indent_unit(self.default_indent)

    def comment(self, text: str) -> str:
        return f"{self.comment_prefix} {text}"

    def header_map(self, prepared: PreparedRequest, notes: RenderNotes, **include) -> Pairs:
        """Headers for clients whose header API is a mapping; repeats are merged."""
        merged, changed = prepared.merge_duplicates(prepared.all_headers(**include))
        if changed:
            notes.add(MERGED_HEADERS_NOTE)
        return merged

    def drop_digest(self, prepared: PreparedRequest, notes: RenderNotes):
        if prepared.has_digest:
            notes.add(DIGEST_NOTE)

    def wants_degradation_comments(self, options: GenerationOptions) -> bool:
        if self.comment_prefix is None or not options.include_comments:
            return False
        if options.degradation_comments is not None:
            return options.degradation_comments
        return self.degradation_comments

    def format_code(self, code: str, options: GenerationOptions) -> str:
        """
        Normalize whitespace of generated code.

        Trailing whitespace is stripped, runs of blank lines collapse to one
        and leading/trailing blank lines are removed.
        """
        lines = []
        blank = False
        for line in code.split("\n"):
            stripped = line.rstrip()
            if not stripped:
                if lines and not blank:
                    lines.append("")
                blank = True
            else:
                blank = False
                lines.append(stripped)

        while lines and not lines[-1]:
            lines.pop()

        return options.line_ending.join(lines)

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        if self.template_engine is None:
            raise RuntimeError(f"{type(self).__name__} has no template engine")
        return self.template_engine.render_template(template_name, context)

    def describe(self) -> Dict[str, Any]:
        """Metadata shown when listing plugins."""
        return {
            "target": self.target,
            "client": self.client,
            "title": self.title or f"{self.target}/{self.client}",
            "link": self.link,
            "class": type(self).__name__,
            "module": type(self).__module__,
            "adapted": False,
        }

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.target}/{self.client}>"
