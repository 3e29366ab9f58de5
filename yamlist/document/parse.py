"""YAML source to ``Document`` conversion built on PyYAML's composer.

Plain scalars are typed with YAML 1.2 core-schema rules (so ``yes``/``no``
stay strings). Aliases are followed; a recursive alias becomes an ``(alias)``
string scalar. Map entries report the line of their key.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

import yaml

from ..errors import DocumentLoadError, DocumentParseError
from .document import Document
from .node import Node, NodeKind, ScalarType

logger = logging.getLogger(__name__)

ALIAS_PLACEHOLDER = "(alias)"
COMPLEX_KEY_PLACEHOLDER = "(complex key)"
NESTING_TOO_DEEP = "failed to parse YAML: document nests too deeply"

_TAG_PREFIX = "tag:yaml.org,2002:"
_SCALAR_TYPES_BY_TAG: dict[str, ScalarType] = {
    _TAG_PREFIX + "str": ScalarType.STRING,
    _TAG_PREFIX + "int": ScalarType.INT,
    _TAG_PREFIX + "float": ScalarType.FLOAT,
    _TAG_PREFIX + "bool": ScalarType.BOOL,
    _TAG_PREFIX + "null": ScalarType.NULL,
    _TAG_PREFIX + "timestamp": ScalarType.TIMESTAMP,
}

_CORE_SCHEMA_RESOLVERS: tuple[tuple[str, re.Pattern[str], list[str]], ...] = (
    (
        _TAG_PREFIX + "null",
        re.compile(r"^(?:~|null|Null|NULL|)$"),
        ["~", "n", "N", ""],
    ),
    (
        _TAG_PREFIX + "bool",
        re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
        list("tTfF"),
    ),
    (
        _TAG_PREFIX + "int",
        re.compile(r"^(?:[-+]?[0-9]+|0o[0-7]+|0x[0-9a-fA-F]+)$"),
        list("-+0123456789"),
    ),
    (
        _TAG_PREFIX + "float",
        re.compile(
            r"^(?:[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?"
            r"|[-+]?\.(?:inf|Inf|INF)"
            r"|\.(?:nan|NaN|NAN))$"
        ),
        list("-+.0123456789"),
    ),
    (
        _TAG_PREFIX + "timestamp",
        re.compile(
            r"""^(?:[0-9][0-9][0-9][0-9]-[0-9][0-9]-[0-9][0-9]
            |[0-9][0-9][0-9][0-9]-[0-9][0-9]?-[0-9][0-9]?
            (?:[Tt]|[ \t]+)[0-9][0-9]?
            :[0-9][0-9]:[0-9][0-9](?:\.[0-9]*)?
            (?:[ \t]*(?:Z|[-+][0-9][0-9]?(?::[0-9][0-9])?))?)$""",
            re.X,
        ),
        list("0123456789"),
    ),
)


class CoreSchemaLoader(yaml.SafeLoader):
    """SafeLoader whose implicit scalar resolution follows the YAML 1.2 core schema."""

    yaml_implicit_resolvers: dict = {}


for _tag, _pattern, _first in _CORE_SCHEMA_RESOLVERS:
    CoreSchemaLoader.add_implicit_resolver(_tag, _pattern, _first)


def _start_line(yaml_node: yaml.Node) -> int:
    return yaml_node.start_mark.line + 1 if yaml_node.start_mark is not None else 0


def _end_line(yaml_node: yaml.Node) -> int:
    """Return the last 1-based line covered by ``yaml_node``.

    Block collections end at column 0 of the following line, which is not part
    of the node.
    """
    mark = yaml_node.end_mark
    if mark is None:
        return 0
    if mark.column == 0 and mark.line > 0:
        return mark.line
    return mark.line + 1


def scalar_type_for(yaml_node: yaml.ScalarNode) -> ScalarType:
    """Classify a composed scalar by its resolved tag (unknown tags are strings)."""
    return _SCALAR_TYPES_BY_TAG.get(yaml_node.tag, ScalarType.STRING)


def _kind_for(yaml_node: yaml.Node) -> NodeKind:
    if isinstance(yaml_node, yaml.MappingNode):
        return NodeKind.MAP
    if isinstance(yaml_node, yaml.SequenceNode):
        return NodeKind.LIST
    return NodeKind.SCALAR


def _populate(node: Node, yaml_node: yaml.Node, active: set[int]) -> None:
    """Fill ``node``'s children from ``yaml_node``; ``active`` holds ids on the current branch."""
    node.end_line_number = _end_line(yaml_node)
    if node.kind is NodeKind.SCALAR:
        return

    active.add(id(yaml_node))
    try:
        if node.kind is NodeKind.MAP:
            for key_node, value_node in yaml_node.value:
                key = str(key_node.value) if isinstance(key_node, yaml.ScalarNode) else COMPLEX_KEY_PLACEHOLDER
                _add_converted_child(node, value_node, active, key=key, line_number=_start_line(key_node))
        else:
            for position, item_node in enumerate(yaml_node.value):
                _add_converted_child(node, item_node, active, index=position, line_number=_start_line(item_node))
    finally:
        active.discard(id(yaml_node))


def _add_converted_child(
    parent: Node,
    yaml_node: yaml.Node,
    active: set[int],
    *,
    key: str | None = None,
    index: int = -1,
    line_number: int,
) -> None:
    if id(yaml_node) in active:
        logger.debug("recursive alias under %s replaced by placeholder", parent.path)
        parent.add_child(
            NodeKind.SCALAR,
            key=key,
            index=index,
            scalar_value=ALIAS_PLACEHOLDER,
            scalar_type=ScalarType.STRING,
            line_number=line_number,
        )
        return

    kind = _kind_for(yaml_node)
    child = parent.add_child(
        kind,
        key=key,
        index=index,
        scalar_value=str(yaml_node.value) if kind is NodeKind.SCALAR else "",
        scalar_type=scalar_type_for(yaml_node) if kind is NodeKind.SCALAR else ScalarType.STRING,
        line_number=line_number,
    )
    _populate(child, yaml_node, active)


def _is_empty_root(yaml_node: yaml.Node | None) -> bool:
    if yaml_node is None:
        return True
    return (
        isinstance(yaml_node, yaml.ScalarNode)
        and yaml_node.value == ""
        and scalar_type_for(yaml_node) is ScalarType.NULL
    )


def convert_root(yaml_node: yaml.Node | None) -> Node:
    """Convert a composed root node; empty input becomes an empty map."""
    if _is_empty_root(yaml_node):
        return Node.root(NodeKind.MAP)

    kind = _kind_for(yaml_node)
    root = Node.root(kind, line_number=_start_line(yaml_node))
    if kind is NodeKind.SCALAR:
        root.scalar_value = str(yaml_node.value)
        root.scalar_type = scalar_type_for(yaml_node)
    _populate(root, yaml_node, set())
    return root


def _first_document_node(text: str) -> yaml.Node | None:
    documents = yaml.compose_all(text, Loader=CoreSchemaLoader)
    return next(documents, None)


def parse_text(text: str, file_path: Path | None = None) -> Document:
    """Parse YAML text into a ``Document``; only the first document of a stream is used.

    Raises ``DocumentParseError`` for malformed input; no partial tree escapes.
    """
    try:
        yaml_root = _first_document_node(text)
    except yaml.MarkedYAMLError as exc:
        mark = exc.problem_mark or exc.context_mark
        line = mark.line + 1 if mark is not None else None
        column = mark.column + 1 if mark is not None else None
        problem = exc.problem or exc.context or "invalid YAML"
        raise DocumentParseError(f"failed to parse YAML: {problem}", line, column) from exc
    except yaml.YAMLError as exc:
        raise DocumentParseError(f"failed to parse YAML: {exc}") from exc
    except RecursionError as exc:
        raise DocumentParseError(NESTING_TOO_DEEP) from exc

    try:
        root = convert_root(yaml_root)
    except RecursionError as exc:
        raise DocumentParseError(NESTING_TOO_DEEP) from exc
    document = Document.from_root(root, file_path=file_path, source_lines=text.splitlines())
    logger.debug("parsed %s: %d nodes", file_path or "<string>", document.node_count())
    return document


def read_text(path: Path) -> str:
    """Read file text, trying utf-8 variants before falling back to latin-1."""
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise DocumentLoadError(f"failed to read {path}: {exc.strerror or exc}") from exc
    for encoding in ("utf-8-sig", "utf-8"):
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError:
            continue
    return raw.decode("latin-1")


def parse_file(path: Path) -> Document:
    return parse_text(read_text(path), file_path=path)
